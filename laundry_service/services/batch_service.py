"""
Batch Service - read-time batch grouping and bulk batch operations

Batches are never stored. Orders are grouped by the local date they were
created, then by the gender recorded on the order, then by batch number,
and each batch's status is recomputed from its members on every read.
"""
import logging
from collections import Counter, OrderedDict
from typing import Iterable, List, Optional, Tuple

from fastapi.concurrency import run_in_threadpool
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from laundry_service.exceptions import LaundryError, NotFound
from laundry_service.publishers.event_publisher import EventPublisher
from laundry_service.repositories.order_repository import OrderRepository
from laundry_service.schemas.batch import (
    BatchResponse, GenderGroup, DayGroup, BatchListResponse, BatchCompleteResponse
)
from laundry_service.schemas.order import OrderResponse
from laundry_service.services import codes, lifecycle, schedule
from laundry_service.services.notification_service import NotificationService

logger = logging.getLogger(__name__)

DEFAULT_BATCH_STATUS = "pending"
UNSPECIFIED_GENDER = "unspecified"


def batch_status_of(statuses: Iterable[Optional[str]]) -> str:
    """
    Most common batch status among member orders

    Missing values count as pending; ties go to the value seen first.
    """
    counts = Counter(status or DEFAULT_BATCH_STATUS for status in statuses)
    if not counts:
        return DEFAULT_BATCH_STATUS
    # most_common keeps first-encountered order among equal counts
    return counts.most_common(1)[0][0]


def _matches(order, query: str) -> bool:
    needle = query.lower()
    return (
        needle in (order.order_number or "").lower()
        or needle in (order.customer_name or "").lower()
        or query in (order.customer_phone or "")
    )


def group_batches(rows: Iterable[tuple], search: Optional[str] = None) -> BatchListResponse:
    """
    Build the grouped batch view

    Args:
        rows: (order, gender) pairs in display order
        search: Keep only batches with a member matching order number,
            customer name or phone

    Returns:
        Days, each split by gender into numbered batches
    """
    days: "OrderedDict" = OrderedDict()
    total_orders = 0
    for order, gender in rows:
        total_orders += 1
        day = schedule.local_date(order.created_at)
        by_gender = days.setdefault(day, OrderedDict())
        by_batch = by_gender.setdefault(gender or UNSPECIFIED_GENDER, OrderedDict())
        by_batch.setdefault(order.batch_number or 0, []).append(order)

    search = (search or "").strip()
    day_groups: List[DayGroup] = []
    total_batches = 0
    for day, by_gender in days.items():
        gender_groups = []
        for gender, by_batch in by_gender.items():
            batches = []
            for batch_number, orders in by_batch.items():
                if search and not any(_matches(o, search) for o in orders):
                    continue
                batches.append(BatchResponse(
                    batch_number=batch_number,
                    batch_status=batch_status_of(o.batch_status for o in orders),
                    total_orders=len(orders),
                    total_amount=round(sum(float(o.total_amount or 0) for o in orders), 2),
                    orders=[OrderResponse.model_validate(o) for o in orders],
                ))
            if batches:
                total_batches += len(batches)
                gender_groups.append(GenderGroup(gender=gender, batches=batches))
        if gender_groups:
            day_groups.append(DayGroup(date=day, groups=gender_groups))

    return BatchListResponse(days=day_groups, total_orders=total_orders, total_batches=total_batches)


class BatchService:
    """Service layer for batch processing"""

    def __init__(
        self,
        db: Session,
        notification_service: Optional[NotificationService] = None,
        event_publisher: Optional[EventPublisher] = None,
    ):
        self.db = db
        self.repository = OrderRepository(db)
        self.notification_service = notification_service or NotificationService()
        self.event_publisher = event_publisher or EventPublisher()

    def list_batches(self, search: Optional[str] = None) -> BatchListResponse:
        """Grouped view of every order"""
        return group_batches(self.repository.get_all_with_gender(), search)

    async def mark_batch_complete(self, batch_number: int) -> BatchCompleteResponse:
        """
        Mark every order in a batch washed and ready for collection

        Each row is updated and committed on its own; a failing row is logged
        and skipped. Delivered, completed and cancelled rows only have their
        batch flagged, so their status and pickup token stay as they are. The
        customer notification afterwards is best effort and never undoes the
        sweep.

        Raises:
            NotFound: If the batch has no orders
        """
        updated, failed = await run_in_threadpool(self._complete_rows, batch_number)

        notified = False
        try:
            await self.notify_batch_complete(batch_number)
            notified = True
        except LaundryError as e:
            logger.warning("Batch %s completed but notifications failed: %s", batch_number, e.message)

        await run_in_threadpool(self.event_publisher.publish_batch_completed, {
            'batch_number': batch_number,
            'orders': updated,
            'notified': notified,
        })
        logger.info("Batch %s marked complete (%d updated, %d failed)", batch_number, updated, failed)
        return BatchCompleteResponse(batch_number=batch_number, updated=updated, failed=failed, notified=notified)

    def _complete_rows(self, batch_number: int) -> Tuple[int, int]:
        orders = self.repository.get_by_batch(batch_number)
        if not orders:
            raise NotFound(f"No orders found in batch {batch_number}")

        now = schedule.utcnow()
        updated = failed = 0
        for order in orders:
            if lifecycle.is_terminal(order.status):
                if order.batch_status == 'completed':
                    continue
                fields = {'batch_status': 'completed'}
            else:
                fields = {
                    'batch_status': 'completed',
                    'status': 'ready',
                    'ready_at': now,
                }
                if not order.delivery_qr_code:
                    fields['delivery_qr_code'] = codes.generate_delivery_qr_code()
                if not order.pickup_token:
                    fields['pickup_token'] = codes.generate_pickup_token()
            try:
                self.repository.update(order, **fields)
                updated += 1
            except SQLAlchemyError as e:
                failed += 1
                logger.error("Failed to complete order %s in batch %s: %s", order.id, batch_number, e)
        return updated, failed

    def unmark_batch(self, batch_number: int) -> BatchCompleteResponse:
        """
        Roll a completed batch back to pending

        Orders still waiting for collection go back to processing and lose
        their pickup token; handed-back and cancelled orders keep their status.
        """
        orders = self.repository.get_by_batch(batch_number)
        if not orders:
            raise NotFound(f"No orders found in batch {batch_number}")

        updated = failed = 0
        for order in orders:
            if order.batch_status != 'completed':
                continue
            fields = {'batch_status': 'pending'}
            if order.status == 'ready':
                fields.update({'status': 'processing', 'ready_at': None, 'pickup_token': None})
            try:
                self.repository.update(order, **fields)
                updated += 1
            except SQLAlchemyError as e:
                failed += 1
                logger.error("Failed to unmark order %s in batch %s: %s", order.id, batch_number, e)

        logger.info("Batch %s unmarked (%d updated)", batch_number, updated)
        return BatchCompleteResponse(batch_number=batch_number, updated=updated, failed=failed, notified=False)

    async def notify_batch_complete(self, batch_number: int) -> List[dict]:
        """
        Tell every customer in a batch whose order is ready for collection

        Returns:
            The notifications that were sent

        Raises:
            NotFound: If the batch has no orders
            DownstreamError: If the notification channel fails
        """
        orders = await run_in_threadpool(self.repository.get_by_batch, batch_number)
        if not orders:
            raise NotFound("No orders found in batch")

        ready = [order for order in orders if order.status == 'ready']
        logger.info("Found %d orders in batch %s", len(orders), batch_number)
        notifications = self.notification_service.build_batch_notifications(ready, batch_number)
        sent = await self.notification_service.dispatch_batch_notifications(batch_number, notifications)

        if sent:
            await run_in_threadpool(self._flag_notified, ready)
        return notifications

    def _flag_notified(self, orders: List) -> None:
        for order in orders:
            if not order.sms_sent:
                try:
                    self.repository.update(order, sms_sent=True)
                except SQLAlchemyError as e:
                    logger.error("Failed to flag order %s as notified: %s", order.id, e)
