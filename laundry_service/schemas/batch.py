"""
Pydantic schemas for the batch view and admin scanning
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import date

from laundry_service.schemas.order import OrderResponse


class BatchResponse(BaseModel):
    """A derived batch: same day, same gender, same batch number"""
    batch_number: int
    batch_status: str
    total_orders: int
    total_amount: float
    orders: List[OrderResponse]


class GenderGroup(BaseModel):
    gender: str
    batches: List[BatchResponse]


class DayGroup(BaseModel):
    date: date
    groups: List[GenderGroup]


class BatchListResponse(BaseModel):
    """Grouped batch view"""
    days: List[DayGroup]
    total_orders: int
    total_batches: int


class BatchCompleteResponse(BaseModel):
    """Result of a bulk batch sweep"""
    batch_number: int
    updated: int
    failed: int
    notified: bool


class ScanRequest(BaseModel):
    """Decoded QR text"""
    code: str = Field(..., min_length=1, max_length=200)


class ScanResponse(BaseModel):
    """Outcome of a scan"""
    action: str
    message: str
    order: Optional[OrderResponse] = None
