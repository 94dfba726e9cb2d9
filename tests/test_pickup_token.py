"""Tests for pickup-token redemption."""

from conftest import auth_header
from laundry_service.models.order import Order

REDEEM_URL = "/functions/v1/redeem-pickup-token"


def _redeem(client, token, session_token):
    return client.post(REDEEM_URL, json={"token": token}, headers=auth_header(session_token))


class TestRedeemPickupToken:
    def test_ready_order_is_delivered(self, client, admin, db_session, make_order):
        order = make_order(status="ready", pickup_token="PKP-token-1", customer_name="Asha")

        response = _redeem(client, "PKP-token-1", admin[1])

        assert response.status_code == 200, response.text
        body = response.json()
        assert body["success"] is True
        assert body["data"]["order"] == {"order_number": order.order_number, "customer_name": "Asha"}

        db_session.expire_all()
        stored = db_session.get(Order, order.id)
        assert stored.status == "delivered"
        assert stored.delivered_at is not None
        assert stored.picked_up_at is not None
        assert stored.scanned_by == admin[0]

    def test_second_redeem_conflicts(self, client, admin, db_session, make_order):
        order = make_order(status="ready", pickup_token="PKP-token-2")
        assert _redeem(client, "PKP-token-2", admin[1]).status_code == 200
        db_session.expire_all()
        delivered_at = db_session.get(Order, order.id).delivered_at

        response = _redeem(client, "PKP-token-2", admin[1])

        assert response.status_code == 409
        assert "delivered" in response.json()["error"]
        db_session.expire_all()
        stored = db_session.get(Order, order.id)
        assert stored.status == "delivered"
        assert stored.delivered_at == delivered_at

    def test_order_not_ready(self, client, admin, db_session, make_order):
        order = make_order(status="processing", pickup_token="PKP-token-3")

        response = _redeem(client, "PKP-token-3", admin[1])

        assert response.status_code == 409
        assert response.json()["error"] == "Order is not ready for pickup. Current status: processing"
        db_session.expire_all()
        stored = db_session.get(Order, order.id)
        assert stored.status == "processing"
        assert stored.delivered_at is None

    def test_customer_cannot_redeem(self, client, customer, db_session, make_order):
        order = make_order(status="ready", pickup_token="PKP-token-4")

        response = _redeem(client, "PKP-token-4", customer[1])

        assert response.status_code == 403
        db_session.expire_all()
        assert db_session.get(Order, order.id).status == "ready"

    def test_unknown_token(self, client, admin):
        response = _redeem(client, "PKP-nope", admin[1])
        assert response.status_code == 404
        assert response.json() == {"error": "Invalid pickup token"}

    def test_empty_token(self, client, admin):
        assert _redeem(client, "", admin[1]).status_code == 400
        assert _redeem(client, None, admin[1]).status_code == 400

    def test_requires_session(self, client):
        response = client.post(REDEEM_URL, json={"token": "PKP-x"})
        assert response.status_code == 401


class TestScanRedeem:
    def test_pickup_scan_redeems(self, client, admin, db_session, make_order):
        order = make_order(status="ready", pickup_token="PKP-scan")

        response = client.post("/admin/scan/receive", json={"code": "PKP-scan"}, headers=auth_header(admin[1]))

        assert response.status_code == 200
        assert response.json()["action"] == "redeemed"
        db_session.expire_all()
        assert db_session.get(Order, order.id).status == "delivered"
