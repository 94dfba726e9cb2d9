"""
SQLAlchemy Order and OrderItem models
"""
import uuid

from sqlalchemy import (
    Boolean, Column, Integer, String, Float, DateTime, Text, ForeignKey, CheckConstraint
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from laundry_service.database import Base


ORDER_STATUSES = ('pending', 'processing', 'ready', 'delivered', 'completed', 'cancelled')
BATCH_STATUSES = ('pending', 'processing', 'completed')


def _uuid() -> str:
    return str(uuid.uuid4())


class Order(Base):
    """Order database model"""
    
    __tablename__ = "orders"
    
    id = Column(String(36), primary_key=True, default=_uuid)
    order_number = Column(String(20), nullable=False, unique=True, index=True)
    user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    
    # Customer snapshot at order time
    customer_name = Column(String(100), nullable=False)
    customer_phone = Column(String(20), nullable=False)
    customer_email = Column(String(255), nullable=True)
    student_id = Column(String(50), nullable=True)
    room_number = Column(String(20), nullable=True)
    customer_gender = Column(String(10), nullable=True, index=True)
    notes = Column(Text, nullable=True)
    
    total_amount = Column(Float, nullable=False, default=0.0)
    payment_method = Column(String(20), nullable=True, default='cash')
    payment_status = Column(String(20), nullable=True, default='pending')
    status = Column(String(20), nullable=False, default='pending', index=True)
    
    batch_number = Column(Integer, nullable=True, index=True)
    batch_status = Column(String(20), nullable=True, default='pending')
    
    delivery_qr_code = Column(String(100), nullable=True, unique=True, index=True)
    pickup_token = Column(String(100), nullable=True, unique=True, index=True)
    scanned_by = Column(String(36), nullable=True)
    sms_sent = Column(Boolean, nullable=False, default=False)
    
    received_at = Column(DateTime(timezone=True), nullable=True)
    ready_at = Column(DateTime(timezone=True), nullable=True)
    delivered_at = Column(DateTime(timezone=True), nullable=True)
    picked_up_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    
    items = relationship("OrderItem", back_populates="order", cascade="all, delete-orphan")
    
    # Constraints
    __table_args__ = (
        CheckConstraint('total_amount >= 0', name='check_total_non_negative'),
        CheckConstraint(
            "status IN ('pending', 'processing', 'ready', 'delivered', 'completed', 'cancelled')",
            name='check_status_valid'
        ),
        CheckConstraint(
            "customer_gender IS NULL OR customer_gender IN ('male', 'female')",
            name='check_customer_gender_valid'
        ),
    )
    
    def __repr__(self):
        return f"<Order(id={self.id}, order_number='{self.order_number}', status='{self.status}', batch={self.batch_number})>"


class OrderItem(Base):
    """Order line, a price snapshot independent of later catalog changes"""
    
    __tablename__ = "order_items"
    
    id = Column(String(36), primary_key=True, default=_uuid)
    order_id = Column(String(36), ForeignKey("orders.id", ondelete="CASCADE"), nullable=False, index=True)
    item_id = Column(String(36), ForeignKey("items.id"), nullable=True)
    service_type_id = Column(String(36), ForeignKey("service_types.id"), nullable=True)
    item_name = Column(String(100), nullable=False)  # Denormalized for history
    service_name = Column(String(100), nullable=False)
    quantity = Column(Integer, nullable=False, default=1)
    unit_price = Column(Float, nullable=False)
    total_price = Column(Float, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    
    order = relationship("Order", back_populates="items")
    
    __table_args__ = (
        CheckConstraint('quantity > 0', name='check_quantity_positive'),
    )
    
    def __repr__(self):
        return f"<OrderItem(item_name='{self.item_name}', quantity={self.quantity}, total_price={self.total_price})>"
