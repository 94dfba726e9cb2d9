"""Tests for batch grouping and bulk batch operations."""

from datetime import datetime, timezone

from conftest import auth_header
from laundry_service.models.order import Order
from laundry_service.services.batch_service import batch_status_of, group_batches


class TestBatchStatusMode:
    def test_most_common_status_wins(self):
        assert batch_status_of(["pending", "completed", "completed"]) == "completed"

    def test_tie_resolves_to_first_encountered(self):
        assert batch_status_of(["processing", "completed", "completed", "processing"]) == "processing"
        assert batch_status_of(["completed", "processing"]) == "completed"

    def test_missing_status_counts_as_pending(self):
        assert batch_status_of([None, None, "completed"]) == "pending"

    def test_empty_batch_is_pending(self):
        assert batch_status_of([]) == "pending"


class TestGroupBatches:
    def test_groups_by_day_then_gender_then_number(self, db_session, make_order):
        monday = datetime(2026, 10, 12, 5, 0, tzinfo=timezone.utc)
        tuesday = datetime(2026, 10, 13, 5, 0, tzinfo=timezone.utc)
        rows = [
            (make_order(batch_number=2, created_at=tuesday), "female"),
            (make_order(batch_number=1, created_at=monday), "male"),
            (make_order(batch_number=1, created_at=monday, batch_status="completed"), "male"),
            (make_order(batch_number=1, created_at=monday, batch_status="completed"), "male"),
            (make_order(batch_number=None, created_at=monday), None),
        ]

        view = group_batches(rows)

        assert view.total_orders == 5
        assert view.total_batches == 3
        assert [d.date.isoformat() for d in view.days] == ["2026-10-13", "2026-10-12"]
        monday_groups = {g.gender: g for g in view.days[1].groups}
        assert set(monday_groups) == {"male", "unspecified"}
        male_batch = monday_groups["male"].batches[0]
        assert male_batch.batch_number == 1
        assert male_batch.total_orders == 3
        assert male_batch.batch_status == "completed"
        assert male_batch.total_amount == 150.0
        assert monday_groups["unspecified"].batches[0].batch_number == 0

    def test_search_keeps_matching_batches(self, make_order):
        rows = [
            (make_order(batch_number=1, customer_name="Asha Verma"), "female"),
            (make_order(batch_number=2, customer_name="Ravi"), "male"),
        ]
        view = group_batches(rows, search="asha")
        assert view.total_batches == 1
        assert view.days[0].groups[0].batches[0].batch_number == 1

        by_phone = group_batches(rows, search="98765")
        assert by_phone.total_batches == 2


class TestMarkBatchComplete:
    def test_batch_becomes_ready(self, client, admin, db_session, make_order):
        first = make_order(batch_number=5)
        second = make_order(batch_number=5, delivery_qr_code=None)
        other = make_order(batch_number=6)

        response = client.post("/admin/batches/5/complete", headers=auth_header(admin[1]))

        assert response.status_code == 200, response.text
        data = response.json()
        assert data["updated"] == 2
        assert data["failed"] == 0
        assert data["notified"] is True

        db_session.expire_all()
        for order in db_session.query(Order).filter(Order.batch_number == 5):
            assert order.status == "ready"
            assert order.batch_status == "completed"
            assert order.ready_at is not None
            assert order.delivery_qr_code
            assert order.pickup_token.startswith("PKP-")
            assert order.sms_sent is True
        untouched = db_session.get(Order, other.id)
        assert untouched.status == "pending"
        assert untouched.batch_status == "pending"

    def test_unknown_batch(self, client, admin):
        response = client.post("/admin/batches/99/complete", headers=auth_header(admin[1]))
        assert response.status_code == 404
        assert "error" in response.json()

    def test_notification_failure_does_not_undo_sweep(self, client, admin, db_session, make_order, monkeypatch):
        from laundry_service.config import settings

        make_order(batch_number=7)
        monkeypatch.setattr(settings, "NOTIFICATION_CHANNEL", "webhook")
        monkeypatch.setattr(settings, "NOTIFICATION_WEBHOOK_URL", None)

        response = client.post("/admin/batches/7/complete", headers=auth_header(admin[1]))

        assert response.status_code == 200
        assert response.json()["notified"] is False
        db_session.expire_all()
        order = db_session.query(Order).filter(Order.batch_number == 7).one()
        assert order.status == "ready"
        assert order.sms_sent is False

    def test_requires_admin(self, client, customer, make_order):
        make_order(batch_number=5)
        response = client.post("/admin/batches/5/complete", headers=auth_header(customer[1]))
        assert response.status_code == 403

    def test_finished_orders_keep_their_status(self, client, admin, db_session, make_order):
        waiting = make_order(batch_number=9)
        cancelled = make_order(batch_number=9, status="cancelled")
        delivered = make_order(batch_number=9, status="delivered", pickup_token="PKP-used")

        response = client.post("/admin/batches/9/complete", headers=auth_header(admin[1]))

        assert response.status_code == 200
        assert response.json()["updated"] == 3
        db_session.expire_all()
        assert db_session.get(Order, waiting.id).status == "ready"
        stored_cancelled = db_session.get(Order, cancelled.id)
        assert stored_cancelled.status == "cancelled"
        assert stored_cancelled.batch_status == "completed"
        assert stored_cancelled.ready_at is None
        assert stored_cancelled.pickup_token is None
        assert stored_cancelled.sms_sent is False
        stored_delivered = db_session.get(Order, delivered.id)
        assert stored_delivered.status == "delivered"
        assert stored_delivered.pickup_token == "PKP-used"

    def test_repeat_completion_cannot_reopen_redeemed_token(self, client, admin, db_session, make_order):
        order = make_order(batch_number=9)
        client.post("/admin/batches/9/complete", headers=auth_header(admin[1]))
        db_session.expire_all()
        token = db_session.get(Order, order.id).pickup_token
        redeem = {"token": token}
        first = client.post("/functions/v1/redeem-pickup-token", json=redeem, headers=auth_header(admin[1]))
        assert first.status_code == 200

        again = client.post("/admin/batches/9/complete", headers=auth_header(admin[1]))
        second = client.post("/functions/v1/redeem-pickup-token", json=redeem, headers=auth_header(admin[1]))

        assert again.status_code == 200
        assert again.json()["updated"] == 0
        assert second.status_code == 409
        db_session.expire_all()
        stored = db_session.get(Order, order.id)
        assert stored.status == "delivered"
        assert stored.ready_at is not None


class TestUnmarkBatch:
    def test_rolls_back_to_pending(self, client, admin, db_session, make_order):
        make_order(batch_number=3)
        delivered = make_order(batch_number=3)
        client.post("/admin/batches/3/complete", headers=auth_header(admin[1]))
        client.patch(
            f"/admin/orders/{delivered.id}/status",
            json={"status": "delivered"},
            headers=auth_header(admin[1]),
        )

        response = client.post("/admin/batches/3/unmark", headers=auth_header(admin[1]))

        assert response.status_code == 200
        assert response.json()["updated"] == 2
        db_session.expire_all()
        statuses = {o.id: o for o in db_session.query(Order).filter(Order.batch_number == 3)}
        assert all(o.batch_status == "pending" for o in statuses.values())
        assert statuses[delivered.id].status == "delivered"
        reverted = [o for o in statuses.values() if o.id != delivered.id][0]
        assert reverted.status == "processing"
        assert reverted.pickup_token is None
        assert reverted.ready_at is None


class TestBatchView:
    def test_admin_lists_batches(self, client, admin, make_order):
        make_order(batch_number=1)
        make_order(batch_number=1)
        response = client.get("/admin/batches", headers=auth_header(admin[1]))
        assert response.status_code == 200
        data = response.json()
        assert data["total_orders"] == 2
        assert data["days"][0]["groups"][0]["gender"] == "male"
        assert data["days"][0]["groups"][0]["batches"][0]["total_orders"] == 2


class TestNotifyBatchComplete:
    def test_returns_notifications(self, client, admin, make_order):
        make_order(batch_number=4, status="ready", delivery_qr_code="DLV-ABC")
        make_order(batch_number=4, status="cancelled")
        response = client.post(
            "/functions/v1/notify-batch-complete",
            json={"batchNumber": 4},
            headers=auth_header(admin[1]),
        )
        assert response.status_code == 200
        notifications = response.json()["data"]["notifications"]
        assert len(notifications) == 1
        assert "DLV-ABC" in notifications[0]["message"]
        assert "Batch 4" in notifications[0]["message"]

    def test_empty_batch_not_found(self, client, admin):
        response = client.post(
            "/functions/v1/notify-batch-complete",
            json={"batchNumber": 42},
            headers=auth_header(admin[1]),
        )
        assert response.status_code == 404
