"""
Submission Service - re-validates a placed order before relaying it to the
workflow-automation webhook
"""
import logging
from typing import Any, Dict

from sqlalchemy.orm import Session

from laundry_service.config import settings
from laundry_service.exceptions import DownstreamError, NotFound, PermissionDenied, ValidationFailed
from laundry_service.models.user import User
from laundry_service.repositories.order_repository import OrderRepository
from laundry_service.schemas.functions import SubmitOrderRequest
from laundry_service.services.codes import ORDER_NUMBER_PATTERN
from laundry_service.services.webhook_client import WebhookClient, WebhookError

logger = logging.getLogger(__name__)


class SubmissionService:
    """Service relaying checked orders downstream"""

    def __init__(self, db: Session, webhook_client: WebhookClient):
        self.repository = OrderRepository(db)
        self.webhook_client = webhook_client

    def validate(self, user: User, data: SubmitOrderRequest) -> None:
        """
        Check a submission against the stored order

        Raises:
            ValidationFailed: Bad order number, empty items or total mismatch
            NotFound: Unknown order
            PermissionDenied: Order belongs to someone else
        """
        if not ORDER_NUMBER_PATTERN.match(data.order_number):
            raise ValidationFailed("Invalid order number format")
        if not data.items:
            raise ValidationFailed("Order must contain at least one item")

        order = self.repository.get_by_id(data.order_id)
        if not order:
            raise NotFound(f"Order with id={data.order_id} not found")
        if order.user_id != user.id:
            raise PermissionDenied("Order belongs to another customer")
        if order.order_number != data.order_number:
            raise ValidationFailed("Order number does not match order")

        items_total = sum(item.price * item.quantity for item in data.items)
        tolerance = settings.TOTAL_TOLERANCE
        if abs(items_total - data.total) > tolerance:
            raise ValidationFailed("Order total does not match items")
        if abs(data.total - float(order.total_amount or 0)) > tolerance:
            raise ValidationFailed("Order total does not match stored order")

    async def submit_order(self, user: User, data: SubmitOrderRequest) -> Dict[str, Any]:
        """
        Validate and relay an order

        Nothing is relayed unless every check passes.

        Raises:
            DownstreamError: If the webhook call fails
        """
        self.validate(user, data)

        payload = data.model_dump(by_alias=True)
        payload["userId"] = user.id
        try:
            result = await self.webhook_client.post_json(settings.ORDER_WEBHOOK_URL, payload)
        except WebhookError as e:
            logger.error("Error relaying order %s: %s", data.order_number, e)
            raise DownstreamError(str(e))

        logger.info("Order %s relayed to workflow webhook", data.order_number)
        return result
