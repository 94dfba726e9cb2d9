"""
Models package
"""
from laundry_service.models.catalog import Category, Item, ServiceType, ItemPrice
from laundry_service.models.order import Order, OrderItem
from laundry_service.models.user import User, AuthSession, Profile, UserRole

__all__ = [
    "Category",
    "Item",
    "ServiceType",
    "ItemPrice",
    "Order",
    "OrderItem",
    "User",
    "AuthSession",
    "Profile",
    "UserRole",
]
