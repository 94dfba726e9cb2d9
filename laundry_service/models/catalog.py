"""
SQLAlchemy catalog models: categories, items, service types and prices
"""
import uuid

from sqlalchemy import Column, Integer, String, Float, DateTime, Text, ForeignKey, CheckConstraint, UniqueConstraint
from sqlalchemy.sql import func
from laundry_service.database import Base


def _uuid() -> str:
    return str(uuid.uuid4())


class Category(Base):
    """Garment category (men, women, household...)"""
    
    __tablename__ = "categories"
    
    id = Column(String(36), primary_key=True, default=_uuid)
    name = Column(String(100), nullable=False)
    slug = Column(String(100), nullable=False, unique=True, index=True)
    description = Column(Text, nullable=True)
    emoji = Column(String(16), nullable=True)
    display_order = Column(Integer, nullable=True, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    
    def __repr__(self):
        return f"<Category(slug='{self.slug}')>"


class Item(Base):
    """Launderable item"""
    
    __tablename__ = "items"
    
    id = Column(String(36), primary_key=True, default=_uuid)
    category_id = Column(String(36), ForeignKey("categories.id"), nullable=True, index=True)
    name = Column(String(100), nullable=False)
    emoji = Column(String(16), nullable=False, default="👕")
    item_type = Column(String(50), nullable=True)
    notes = Column(Text, nullable=True)
    display_order = Column(Integer, nullable=True, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    
    def __repr__(self):
        return f"<Item(name='{self.name}')>"


class ServiceType(Base):
    """Wash service (regular wash, dry clean, iron...)"""
    
    __tablename__ = "service_types"
    
    id = Column(String(36), primary_key=True, default=_uuid)
    name = Column(String(100), nullable=False)
    description = Column(Text, nullable=True)
    emoji = Column(String(16), nullable=True)
    display_order = Column(Integer, nullable=True, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    
    def __repr__(self):
        return f"<ServiceType(name='{self.name}')>"


class ItemPrice(Base):
    """Price of one item under one service type"""
    
    __tablename__ = "item_prices"
    
    id = Column(String(36), primary_key=True, default=_uuid)
    item_id = Column(String(36), ForeignKey("items.id"), nullable=True, index=True)
    service_type_id = Column(String(36), ForeignKey("service_types.id"), nullable=True, index=True)
    price = Column(Float, nullable=False, default=0.0)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    
    __table_args__ = (
        CheckConstraint('price >= 0', name='check_price_non_negative'),
        UniqueConstraint('item_id', 'service_type_id', name='uq_item_service_price'),
    )
    
    def __repr__(self):
        return f"<ItemPrice(item_id={self.item_id}, service_type_id={self.service_type_id}, price={self.price})>"
