"""
Order Service - Business Logic Layer
"""
import logging
from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from laundry_service.config import settings
from laundry_service.exceptions import NotFound, PermissionDenied, StateConflict, ValidationFailed
from laundry_service.models.order import Order
from laundry_service.models.user import Profile, User
from laundry_service.publishers.event_publisher import EventPublisher
from laundry_service.repositories.catalog_repository import CatalogRepository
from laundry_service.repositories.order_repository import OrderRepository
from laundry_service.repositories.user_repository import ProfileRepository, RoleRepository
from laundry_service.schemas.batch import ScanResponse
from laundry_service.schemas.order import OrderCreate, OrderResponse, OrderListResponse, OrderStats
from laundry_service.services import codes, lifecycle, schedule

logger = logging.getLogger(__name__)


class OrderService:
    """Service layer for order business logic"""

    def __init__(self, db: Session, event_publisher: Optional[EventPublisher] = None):
        self.repository = OrderRepository(db)
        self.catalog = CatalogRepository(db)
        self.profiles = ProfileRepository(db)
        self.roles = RoleRepository(db)
        self.event_publisher = event_publisher or EventPublisher()

    # Reads

    def get_all_orders(self, skip: int = 0, limit: int = 100) -> OrderListResponse:
        """Get all orders with pagination"""
        orders = self.repository.get_all(skip=skip, limit=limit)
        total = self.repository.count()

        return OrderListResponse(
            orders=[OrderResponse.model_validate(o) for o in orders],
            total=total
        )

    def get_stats(self) -> OrderStats:
        """Dashboard counters"""
        return OrderStats(
            total=self.repository.count(),
            pending=self.repository.count_by_status('pending'),
            processing=self.repository.count_by_status('processing'),
            ready=self.repository.count_by_status('ready'),
            revenue=self.repository.revenue(),
        )

    def get_orders_for_user(self, user_id: str) -> List[OrderResponse]:
        """Get a customer's own orders, newest first"""
        return [OrderResponse.model_validate(o) for o in self.repository.get_by_user(user_id)]

    def get_order_for_user(self, order_id: str, user_id: str) -> OrderResponse:
        """Get one of a customer's own orders"""
        order = self.repository.get_by_id(order_id)
        if not order:
            raise NotFound(f"Order with id={order_id} not found")
        if order.user_id != user_id:
            raise PermissionDenied("Order belongs to another customer")
        return OrderResponse.model_validate(order)

    # Intake

    def place_order(self, user: User, order_data: OrderCreate, now: Optional[datetime] = None) -> OrderResponse:
        """
        Place a new order

        Steps:
        1. Check the collection calendar for the customer's gender
        2. Price every line from the catalog
        3. Generate order number and delivery QR code
        4. Assign the day's batch for the customer's gender
        5. Save order header and lines in one transaction

        Args:
            user: Authenticated customer
            order_data: Validated checkout form and cart
            now: Order time (defaults to the current time)

        Returns:
            Created order

        Raises:
            ValidationFailed: Closed day, missing profile or unpriced item
        """
        now = now or schedule.utcnow()
        profile = self.profiles.get_by_user_id(user.id)
        if not profile:
            raise ValidationFailed("Please complete your profile before ordering")

        if settings.ENFORCE_COLLECTION_SCHEDULE:
            schedule.check_collection_day(profile.gender, schedule.local_date(now))

        lines = []
        for line in order_data.items:
            item = self.catalog.get_item(line.item_id)
            service_type = self.catalog.get_service_type(line.service_type_id)
            price = self.catalog.get_price(line.item_id, line.service_type_id)
            if not item or not service_type or not price:
                raise ValidationFailed(
                    f"Item {line.item_id} is not offered for service {line.service_type_id}"
                )
            lines.append({
                'item_id': item.id,
                'service_type_id': service_type.id,
                'item_name': item.name,
                'service_name': service_type.name,
                'quantity': line.quantity,
                'unit_price': price.price,
                'total_price': round(price.price * line.quantity, 2),
            })

        customer = order_data.customer
        order_dict = {
            'order_number': self._unique_order_number(now),
            'user_id': user.id,
            'customer_name': customer.student_name,
            'customer_phone': customer.mobile_no,
            'customer_email': profile.email or user.email,
            'student_id': customer.student_id or profile.student_id,
            'room_number': profile.room_number,
            'customer_gender': profile.gender,
            'notes': order_data.notes,
            'total_amount': round(sum(line['total_price'] for line in lines), 2),
            'payment_method': order_data.payment_method,
            'payment_status': 'pending',
            'status': 'pending',
            'batch_number': self.assign_batch(profile.gender, now),
            'batch_status': 'pending',
            'delivery_qr_code': codes.generate_delivery_qr_code(),
            'created_at': now,
        }

        order = self.repository.create(order_dict, lines)
        logger.info("Order %s placed by %s in batch %s", order.order_number, user.id, order.batch_number)
        return OrderResponse.model_validate(order)

    def assign_batch(self, gender: Optional[str], now: datetime) -> int:
        """
        Pick the batch number for a new order

        Orders from the same gender on the same local day share the day's open
        batch; otherwise the next global batch number is issued, so each day
        runs up to two parallel batches.
        """
        start, end = schedule.day_bounds(schedule.local_date(now))
        open_batch = self.repository.find_open_batch(gender, start, end)
        if open_batch is not None:
            return open_batch
        return self.repository.max_batch_number() + 1

    def _unique_order_number(self, now: datetime) -> str:
        order_number = codes.generate_order_number(now)
        attempts = 0
        while self.repository.order_number_exists(order_number):
            attempts += 1
            if attempts > 10:
                raise StateConflict("Could not allocate an order number, please retry")
            order_number = codes.random_order_number()
        return order_number

    # Status transitions

    def update_order_status(self, order_id: str, new_status: str, admin_id: Optional[str] = None) -> OrderResponse:
        """
        Move an order forward along its lifecycle

        Args:
            order_id: Order ID
            new_status: Target status
            admin_id: Admin performing the change

        Returns:
            Updated order

        Raises:
            NotFound: If the order does not exist
            StateConflict: If the move is backwards or out of a terminal state
        """
        order = self.repository.get_by_id(order_id)
        if not order:
            raise NotFound(f"Order with id={order_id} not found")

        old_status = order.status
        lifecycle.check_transition(old_status, new_status)

        now = schedule.utcnow()
        fields = lifecycle.transition_fields(new_status, now)
        if new_status == 'ready':
            fields.update(self._ready_fields(order))
        if admin_id:
            fields['scanned_by'] = admin_id

        order = self.repository.update(order, **fields)
        self._publish_status_change(order, old_status)
        return OrderResponse.model_validate(order)

    @staticmethod
    def _ready_fields(order: Order) -> dict:
        """Codes an order needs once it can be collected"""
        fields = {}
        if not order.pickup_token:
            fields['pickup_token'] = codes.generate_pickup_token()
        if not order.delivery_qr_code:
            fields['delivery_qr_code'] = codes.generate_delivery_qr_code()
        return fields

    def redeem_pickup_token(self, token: Optional[str], admin_id: str) -> dict:
        """
        Redeem a pickup token, marking its order delivered

        Steps:
        1. Verify the caller is an admin
        2. Look up the order by token
        3. Reject unless the order is ready
        4. Conditionally update the row while it is still ready

        Returns:
            Order number and customer name of the delivered order

        Raises:
            PermissionDenied: Caller is not an admin
            ValidationFailed: Empty token
            NotFound: Unknown token
            StateConflict: Order is not ready (including already redeemed)
        """
        if not self.roles.is_admin(admin_id):
            raise PermissionDenied("Admin access required")
        if not token or not token.strip():
            raise ValidationFailed("Token is required")

        order = self.repository.get_by_pickup_token(token.strip())
        if not order:
            raise NotFound("Invalid pickup token")

        if order.status != 'ready':
            raise StateConflict(f"Order is not ready for pickup. Current status: {order.status}")

        now = schedule.utcnow()
        updated = self.repository.complete_if_ready(order.id, {
            'status': 'delivered',
            'delivered_at': now,
            'picked_up_at': now,
            'scanned_by': admin_id,
        })
        if updated == 0:
            raise StateConflict("Order is not ready for pickup. Current status: delivered")

        logger.info("Redeemed pickup token for order %s", order.order_number)
        self.event_publisher.publish_order_status_changed({
            'order_id': order.id,
            'order_number': order.order_number,
            'old_status': 'ready',
            'new_status': 'delivered',
            'customer_phone': order.customer_phone,
            'customer_email': order.customer_email,
        })
        return {
            'order_number': order.order_number,
            'customer_name': order.customer_name,
        }

    # Scanning

    def lookup(self, code: str) -> OrderResponse:
        """Find an order by order number or delivery QR code"""
        order = self.repository.get_by_code(code.strip())
        if not order:
            raise NotFound("No order matches this QR code")
        return OrderResponse.model_validate(order)

    def receive_scan(self, code: str, admin_id: str) -> ScanResponse:
        """
        Handle a counter scan

        A customer drop-off payload (ORD-...) creates a placeholder order that
        is already received; a pickup token (PKP-...) is redeemed.
        """
        code = code.strip()
        if code.startswith(codes.INTAKE_PREFIX):
            order = self._receive_drop_off(code, admin_id)
            return ScanResponse(
                action="received",
                message=f"Laundry received from {order.customer_name}. Order: {order.order_number}",
                order=order,
            )
        if code.startswith(codes.PICKUP_PREFIX):
            result = self.redeem_pickup_token(code, admin_id)
            return ScanResponse(
                action="redeemed",
                message=f"Order {result['order_number']} completed. Customer: {result['customer_name']}",
            )
        raise ValidationFailed("Invalid QR code. Please scan a valid order or pickup QR code.")

    def _receive_drop_off(self, code: str, admin_id: str) -> OrderResponse:
        user_id = codes.parse_intake_code(code)
        if not user_id:
            raise ValidationFailed("Invalid QR code format. Please generate a new QR code from checkout.")

        profile: Optional[Profile] = self.profiles.get_by_user_id(user_id)
        if not profile:
            raise NotFound(f"Customer not found for ID: {user_id[:8]}...")
        if self.repository.get_by_delivery_qr(code):
            raise StateConflict("This drop-off code has already been received")

        now = schedule.utcnow()
        order = self.repository.create({
            'order_number': self._unique_order_number(now),
            'user_id': user_id,
            'customer_name': profile.student_name or "Unknown",
            'customer_phone': profile.mobile_no or "",
            'customer_email': profile.email,
            'student_id': profile.student_id,
            'room_number': profile.room_number,
            'customer_gender': profile.gender,
            'total_amount': 0.0,
            'status': 'processing',
            'payment_method': 'cash',
            'payment_status': 'pending',
            'batch_number': self.assign_batch(profile.gender, now),
            'batch_status': 'pending',
            'delivery_qr_code': code,
            'received_at': now,
            'scanned_by': admin_id,
            'created_at': now,
        }, [])
        logger.info("Drop-off received for %s as order %s", user_id, order.order_number)
        return OrderResponse.model_validate(order)

    def scan_return(self, code: str) -> OrderResponse:
        """Check a delivery QR code presented when laundry is handed back"""
        code = code.strip()
        if code.startswith(codes.INTAKE_PREFIX):
            raise ValidationFailed(
                "This is an order submission QR. Please use the receive scanner to accept from students."
            )
        order = self.repository.get_by_delivery_qr(code)
        if not order:
            raise NotFound("Invalid delivery QR code")
        if order.status != 'ready':
            raise StateConflict(f"Order status is {order.status}, not ready for delivery")
        return OrderResponse.model_validate(order)

    def confirm_return(self, order_id: str, admin_id: str) -> OrderResponse:
        """Hand a ready order back to its customer"""
        order = self.repository.get_by_id(order_id)
        if not order:
            raise NotFound(f"Order with id={order_id} not found")
        if order.status != 'ready':
            raise StateConflict(f"Order status is {order.status}, not ready for delivery")
        return self.update_order_status(order_id, 'delivered', admin_id)

    def _publish_status_change(self, order: Order, old_status: str) -> None:
        event_data = {
            'order_id': order.id,
            'order_number': order.order_number,
            'old_status': old_status,
            'new_status': order.status,
            'customer_phone': order.customer_phone,
            'customer_email': order.customer_email,
            'delivery_qr_code': order.delivery_qr_code,
            'updated_at': order.updated_at.isoformat() if order.updated_at else None,
        }
        # Publishing failures never fail the status change
        self.event_publisher.publish_order_status_changed(event_data)
