"""Tests for admin messaging and the notification consumer."""

import json

import httpx
import pytest

from conftest import auth_header
from laundry_service.api.deps import get_event_publisher, get_notification_service
from laundry_service.consumers import notification_consumer
from laundry_service.consumers.notification_consumer import callback, handle_event
from laundry_service.main import app
from laundry_service.publishers.event_publisher import BATCH_COMPLETED, ORDER_STATUS_CHANGED, EventPublisher
from laundry_service.services.notification_service import NotificationService

MESSAGE_URL = "/functions/v1/send-admin-message"


@pytest.fixture
def resend(monkeypatch):
    """Send admin email through a mocked Resend API."""
    from laundry_service.config import settings

    monkeypatch.setattr(settings, "EMAIL_SERVICE", "resend")
    monkeypatch.setattr(settings, "RESEND_API_KEY", "re_test")
    monkeypatch.setattr(settings, "ADMIN_EMAIL", "office@campus.edu")
    sent = []
    state = {"status": 200}

    def handler(request):
        sent.append({"auth": request.headers["Authorization"], "body": json.loads(request.content)})
        return httpx.Response(state["status"], json={"id": "email-1"})

    service = NotificationService(email_transport=httpx.MockTransport(handler))
    app.dependency_overrides[get_notification_service] = lambda: service
    return sent, state


class TestSendAdminMessage:
    def test_user_input_is_escaped(self, client, customer, resend):
        sent, _ = resend
        body = {"userName": "<b>Ravi</b>", "userEmail": "ravi@campus.edu", "message": "<script>alert(1)</script>"}

        response = client.post(MESSAGE_URL, json=body, headers=auth_header(customer[1]))

        assert response.status_code == 200, response.text
        assert response.json()["success"] is True
        assert len(sent) == 1
        email = sent[0]["body"]
        assert sent[0]["auth"] == "Bearer re_test"
        assert email["to"] == ["office@campus.edu"]
        assert email["subject"] == "Message from &lt;b&gt;Ravi&lt;/b&gt;"
        assert "<script>" not in email["html"]
        assert "&lt;script&gt;alert(1)&lt;/script&gt;" in email["html"]

    def test_provider_failure_is_bad_gateway(self, client, customer, resend):
        _, state = resend
        state["status"] = 422

        response = client.post(MESSAGE_URL, json={"message": "hi"}, headers=auth_header(customer[1]))

        assert response.status_code == 502

    def test_console_mode(self, client, customer):
        response = client.post(MESSAGE_URL, json={"userName": "Ravi", "message": "hi"}, headers=auth_header(customer[1]))
        assert response.status_code == 200

    def test_empty_message_rejected(self, client, customer):
        response = client.post(MESSAGE_URL, json={"message": ""}, headers=auth_header(customer[1]))
        assert response.status_code == 422


class TestWebhookChannel:
    def test_batch_notifications_relayed(self, client, admin, make_order, monkeypatch):
        from laundry_service.config import settings
        from laundry_service.services.webhook_client import WebhookClient

        monkeypatch.setattr(settings, "NOTIFICATION_CHANNEL", "webhook")
        monkeypatch.setattr(settings, "NOTIFICATION_WEBHOOK_URL", "http://hooks.test/notify")
        relayed = []

        def handler(request):
            relayed.append(json.loads(request.content))
            return httpx.Response(200, json={})

        service = NotificationService(webhook_client=WebhookClient(transport=httpx.MockTransport(handler)))
        app.dependency_overrides[get_notification_service] = lambda: service
        make_order(batch_number=8)
        make_order(batch_number=8)

        response = client.post("/admin/batches/8/complete", headers=auth_header(admin[1]))

        assert response.json()["notified"] is True
        assert len(relayed) == 1
        assert relayed[0]["batch"] == 8
        assert len(relayed[0]["notifications"]) == 2


class FakeChannel:
    def __init__(self):
        self.acked = []
        self.nacked = []

    def basic_ack(self, delivery_tag):
        self.acked.append(delivery_tag)

    def basic_nack(self, delivery_tag, requeue):
        self.nacked.append((delivery_tag, requeue))


class FakeMethod:
    delivery_tag = 7


class TestConsumer:
    def test_status_change_event(self):
        event = EventPublisher().build_event(ORDER_STATUS_CHANGED, {
            "order_number": "LND00000001",
            "new_status": "ready",
            "customer_phone": "9876543210",
            "delivery_qr_code": "DLV-1",
        })
        assert handle_event(event, NotificationService()) is True

    def test_status_change_without_order_number(self):
        event = {"event_type": ORDER_STATUS_CHANGED, "data": {"new_status": "ready"}}
        assert handle_event(event, NotificationService()) is False

    def test_published_batch_event_is_acknowledged(self, client, admin, make_order):
        published = []

        class RecordingPublisher(EventPublisher):
            def publish(self, event_type, data):
                published.append(self.build_event(event_type, data))
                return True

        app.dependency_overrides[get_event_publisher] = RecordingPublisher
        make_order(batch_number=3)

        client.post("/admin/batches/3/complete", headers=auth_header(admin[1]))

        event = next(e for e in published if e["event_type"] == BATCH_COMPLETED)
        assert event["data"] == {"batch_number": 3, "orders": 1, "notified": True}
        assert handle_event(event, NotificationService()) is True

    def test_unknown_event(self):
        assert handle_event({"event_type": "Nope"}, NotificationService()) is False

    def test_callback_acks_handled_event(self):
        channel = FakeChannel()
        body = json.dumps({"event_id": "e1", "event_type": BATCH_COMPLETED, "data": {"batch_number": 1}})

        callback(channel, FakeMethod(), None, body)

        assert channel.acked == [7]
        assert channel.nacked == []

    def test_callback_nacks_bad_json(self):
        channel = FakeChannel()
        callback(channel, FakeMethod(), None, b"{not json")
        assert channel.nacked == [(7, False)]

    def test_callback_nacks_on_error(self, monkeypatch):
        def boom(event, service):
            raise RuntimeError("broken")

        monkeypatch.setattr(notification_consumer, "handle_event", boom)
        channel = FakeChannel()

        callback(channel, FakeMethod(), None, json.dumps({"event_type": ORDER_STATUS_CHANGED}))

        assert channel.nacked == [(7, False)]


class TestEventPublisher:
    def test_disabled_publisher_skips(self):
        assert EventPublisher().publish_order_status_changed({"order_number": "LND00000001"}) is False

    def test_event_envelope(self):
        event = EventPublisher().build_event(BATCH_COMPLETED, {"batch_number": 2})
        assert event["event_type"] == BATCH_COMPLETED
        assert event["data"] == {"batch_number": 2}
        assert event["event_id"]
