"""
Notification Service - customer and admin messaging
"""
import html
import logging
from datetime import datetime, timezone
from typing import Dict, Iterable, List, Optional

import httpx

from laundry_service.config import settings
from laundry_service.exceptions import DownstreamError
from laundry_service.services.webhook_client import WebhookClient, WebhookError

logger = logging.getLogger(__name__)

RESEND_API_URL = "https://api.resend.com/emails"


class NotificationService:
    """Service for sending notifications"""

    def __init__(
        self,
        webhook_client: Optional[WebhookClient] = None,
        email_transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.channel = settings.NOTIFICATION_CHANNEL
        self.email_service = settings.EMAIL_SERVICE
        self.webhook_client = webhook_client or WebhookClient()
        self.email_transport = email_transport

    @staticmethod
    def build_batch_notifications(orders: Iterable, batch_number: int) -> List[Dict]:
        """
        Build the "ready for pickup" message for every order in a batch

        Args:
            orders: Orders in the batch
            batch_number: Batch number

        Returns:
            One notification dict per order
        """
        return [
            {
                "customer": order.customer_name,
                "email": order.customer_email,
                "phone": order.customer_phone,
                "orderNumber": order.order_number,
                "qrCode": order.delivery_qr_code,
                "message": (
                    f"Your laundry is ready for pickup! Order: {order.order_number}. "
                    f"Show your QR code ({order.delivery_qr_code}) when collecting. - Batch {batch_number}"
                ),
            }
            for order in orders
        ]

    async def dispatch_batch_notifications(self, batch_number: int, notifications: List[Dict]) -> bool:
        """
        Send batch notifications over the configured channel

        Returns:
            True if notifications were handed off

        Raises:
            DownstreamError: If the notification webhook fails
        """
        if self.channel == "console":
            for notification in notifications:
                self._send_console_notification(
                    notification.get("phone") or notification.get("email"),
                    f"Batch {batch_number} ready",
                    notification["message"],
                )
            return True
        elif self.channel == "webhook":
            if not settings.NOTIFICATION_WEBHOOK_URL:
                raise DownstreamError("Notification webhook is not configured")
            try:
                await self.webhook_client.post_json(
                    settings.NOTIFICATION_WEBHOOK_URL,
                    {"batch": batch_number, "notifications": notifications},
                )
            except WebhookError as e:
                raise DownstreamError(f"Failed to deliver notifications: {e}")
            logger.info("Relayed %d notifications for batch %s", len(notifications), batch_number)
            return True
        else:
            logger.warning("Unknown notification channel: %s", self.channel)
            return False

    def send_order_status_changed_notification(self, order_data: Dict) -> bool:
        """
        Send notification for OrderStatusChanged event

        Args:
            order_data: Order status change data

        Returns:
            True if notification sent successfully
        """
        order_number = order_data.get("order_number")
        new_status = order_data.get("new_status")
        recipient = order_data.get("customer_phone") or order_data.get("customer_email")
        if not order_number or not new_status:
            logger.warning("Status change event without order number or status")
            return False

        body = f"Your laundry order {order_number} is now {new_status}."
        if new_status == "ready" and order_data.get("delivery_qr_code"):
            body += f" Show your QR code ({order_data['delivery_qr_code']}) when collecting."

        return self._send_console_notification(recipient, f"Order {order_number} Status Updated", body)

    async def send_admin_message(self, user_name: str, user_email: str, message: str) -> bool:
        """
        Email a customer's free-text message to the admin mailbox

        All user input is HTML-escaped before it is embedded.

        Raises:
            DownstreamError: If the email backend rejects the message
        """
        safe_name = html.escape(user_name or "", quote=True)
        safe_email = html.escape(user_email or "", quote=True)
        safe_message = html.escape(message or "", quote=True)

        subject = f"Message from {safe_name}"
        body = (
            "<h2>New message from customer</h2>"
            f"<p><strong>From:</strong> {safe_name}</p>"
            f"<p><strong>Email:</strong> {safe_email}</p>"
            "<p><strong>Message:</strong></p>"
            f"<p>{safe_message}</p>"
        )

        if self.email_service == "console":
            return self._send_console_notification(settings.ADMIN_EMAIL, subject, body)
        elif self.email_service == "resend":
            return await self._send_resend_email(settings.ADMIN_EMAIL, subject, body)
        else:
            raise DownstreamError(f"Unknown email service: {self.email_service}")

    async def _send_resend_email(self, to: str, subject: str, html_body: str) -> bool:
        """Send email through the Resend HTTP API"""
        if not settings.RESEND_API_KEY:
            raise DownstreamError("Email service is not configured")

        try:
            async with httpx.AsyncClient(timeout=settings.WEBHOOK_TIMEOUT, transport=self.email_transport) as client:
                response = await client.post(
                    RESEND_API_URL,
                    headers={"Authorization": f"Bearer {settings.RESEND_API_KEY}"},
                    json={
                        "from": settings.EMAIL_FROM,
                        "to": [to],
                        "subject": subject,
                        "html": html_body,
                    },
                )
        except httpx.HTTPError as e:
            logger.error("Error sending email: %s", e)
            raise DownstreamError(f"Failed to send email: {e}")

        if not response.is_success:
            logger.error("Email API returned %s: %s", response.status_code, response.text)
            raise DownstreamError(f"Email API returned {response.status_code}")

        logger.info("Email sent to %s", to)
        return True

    def _send_console_notification(self, to: Optional[str], subject: str, body: str) -> bool:
        """
        Log the notification instead of delivering it

        This is for development/testing purposes
        """
        logger.info(
            "📧 NOTIFICATION (console) to=%s subject=%s at=%s\n%s",
            to or "unknown", subject, datetime.now(timezone.utc).isoformat(), body
        )
        return True
