"""
Order Repository - Data Access Layer
"""
from datetime import datetime
from typing import List, Optional
from sqlalchemy.orm import Session, selectinload
from sqlalchemy import desc, func, or_

from laundry_service.models.order import Order, OrderItem


class OrderRepository:
    """Repository for Order CRUD operations"""
    
    def __init__(self, db: Session):
        self.db = db
    
    def _query(self):
        return self.db.query(Order).options(selectinload(Order.items))
    
    def get_all(self, skip: int = 0, limit: int = 100) -> List[Order]:
        """Get all orders, newest batch first"""
        return self._query().order_by(
            desc(Order.batch_number), desc(Order.created_at)
        ).offset(skip).limit(limit).all()
    
    def get_all_with_gender(self) -> List[tuple]:
        """Get every order paired with the gender recorded when it was placed"""
        return self.db.query(Order, Order.customer_gender).options(selectinload(Order.items)).order_by(
            desc(Order.batch_number), desc(Order.created_at)
        ).all()
    
    def get_by_id(self, order_id: str) -> Optional[Order]:
        """Get order by ID"""
        return self._query().filter(Order.id == order_id).first()
    
    def get_by_code(self, code: str) -> Optional[Order]:
        """Get order by order number or delivery QR code"""
        return self._query().filter(
            or_(Order.order_number == code, Order.delivery_qr_code == code)
        ).first()
    
    def get_by_delivery_qr(self, code: str) -> Optional[Order]:
        """Get order by delivery QR code"""
        return self._query().filter(Order.delivery_qr_code == code).first()
    
    def get_by_pickup_token(self, token: str) -> Optional[Order]:
        """Get order by pickup token"""
        return self.db.query(Order).filter(Order.pickup_token == token).first()
    
    def get_by_user(self, user_id: str) -> List[Order]:
        """Get orders placed by a user"""
        return self._query().filter(
            Order.user_id == user_id
        ).order_by(desc(Order.created_at)).all()
    
    def get_by_batch(self, batch_number: int) -> List[Order]:
        """Get orders in a batch"""
        return self.db.query(Order).filter(
            Order.batch_number == batch_number
        ).order_by(Order.created_at).all()
    
    def find_open_batch(self, gender: Optional[str], start: datetime, end: datetime) -> Optional[int]:
        """
        Find the batch still collecting orders for a gender in a time window
        
        Args:
            gender: Gender recorded on the orders
            start: Window start (inclusive, UTC)
            end: Window end (exclusive, UTC)
        
        Returns:
            Batch number or None if no open batch exists
        """
        query = self.db.query(Order.batch_number).filter(
            Order.batch_number.isnot(None),
            Order.created_at >= start,
            Order.created_at < end,
            or_(Order.batch_status.is_(None), Order.batch_status != 'completed'),
        )
        if gender is None:
            query = query.filter(Order.customer_gender.is_(None))
        else:
            query = query.filter(Order.customer_gender == gender)
        row = query.order_by(desc(Order.batch_number)).first()
        return row[0] if row else None
    
    def max_batch_number(self) -> int:
        """Get the highest batch number issued so far"""
        return self.db.query(func.max(Order.batch_number)).scalar() or 0
    
    def order_number_exists(self, order_number: str) -> bool:
        return self.db.query(Order.id).filter(Order.order_number == order_number).first() is not None
    
    def create(self, order_data: dict, items: List[dict]) -> Order:
        """
        Create an order and its lines in one transaction
        
        Args:
            order_data: Dictionary with order fields
            items: Dictionaries with order item fields
        
        Returns:
            Created order
        """
        order = Order(**order_data)
        order.items = [OrderItem(**item) for item in items]
        self.db.add(order)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(order)
        return order
    
    def update(self, order: Order, **fields) -> Order:
        """Write the given fields to an order"""
        for field, value in fields.items():
            setattr(order, field, value)
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(order)
        return order
    
    def complete_if_ready(self, order_id: str, fields: dict) -> int:
        """
        Update an order only while it is still ready
        
        Returns:
            Number of rows updated (0 or 1)
        """
        updated = self.db.query(Order).filter(
            Order.id == order_id,
            Order.status == 'ready'
        ).update(fields, synchronize_session=False)
        self.db.commit()
        return updated
    
    def count(self) -> int:
        """Get total count of orders"""
        return self.db.query(Order).count()
    
    def count_by_status(self, status: str) -> int:
        """Get count of orders by status"""
        return self.db.query(Order).filter(Order.status == status).count()
    
    def revenue(self) -> float:
        """Sum of all order totals"""
        return float(self.db.query(func.coalesce(func.sum(Order.total_amount), 0.0)).scalar())
