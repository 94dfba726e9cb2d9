"""
Schemas package
"""
from laundry_service.schemas.order import (
    CustomerDetails,
    OrderLineCreate,
    OrderCreate,
    OrderStatusUpdate,
    OrderItemResponse,
    OrderResponse,
    OrderListResponse,
    OrderStats,
)
from laundry_service.schemas.batch import BatchResponse, BatchListResponse, BatchCompleteResponse

__all__ = [
    "CustomerDetails",
    "OrderLineCreate",
    "OrderCreate",
    "OrderStatusUpdate",
    "OrderItemResponse",
    "OrderResponse",
    "OrderListResponse",
    "OrderStats",
    "BatchResponse",
    "BatchListResponse",
    "BatchCompleteResponse",
]
