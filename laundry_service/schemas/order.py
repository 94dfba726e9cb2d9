"""
Pydantic schemas for request/response validation
"""
from pydantic import BaseModel, Field, ConfigDict, field_validator
from typing import Optional, Literal, List
from datetime import datetime

from laundry_service.schemas.validators import normalize_phone, strip_text


OrderStatus = Literal['pending', 'processing', 'ready', 'delivered', 'completed', 'cancelled']
PaymentMethod = Literal['cash', 'upi', 'card']


class CustomerDetails(BaseModel):
    """Contact details entered at checkout"""
    student_name: str = Field(..., min_length=2, max_length=100, description="Customer name")
    student_id: Optional[str] = Field(None, max_length=50, description="Student ID")
    mobile_no: str = Field(..., description="10 digits or +91 followed by 10 digits")
    
    @field_validator('student_name', 'student_id', mode='before')
    @classmethod
    def strip_fields(cls, value):
        return strip_text(value)
    
    @field_validator('mobile_no')
    @classmethod
    def check_mobile_no(cls, value):
        return normalize_phone(value)


class OrderLineCreate(BaseModel):
    """One cart line; the price comes from the catalog"""
    item_id: str = Field(..., description="Catalog item ID")
    service_type_id: str = Field(..., description="Service type ID")
    quantity: int = Field(..., gt=0, description="Number of pieces")


class OrderCreate(BaseModel):
    """Schema for placing a new order"""
    customer: CustomerDetails
    items: List[OrderLineCreate] = Field(..., min_length=1)
    payment_method: PaymentMethod = 'cash'
    notes: Optional[str] = Field(None, max_length=500)


class OrderStatusUpdate(BaseModel):
    """Schema for updating order status"""
    status: OrderStatus = Field(..., description="Order status")


class OrderItemResponse(BaseModel):
    """Schema for order line response"""
    id: str
    item_id: Optional[str]
    service_type_id: Optional[str]
    item_name: str
    service_name: str
    quantity: int
    unit_price: float
    total_price: float
    
    model_config = ConfigDict(from_attributes=True)


class OrderResponse(BaseModel):
    """Schema for order response"""
    id: str
    order_number: str
    user_id: str
    customer_name: str
    customer_phone: str
    customer_email: Optional[str]
    student_id: Optional[str]
    room_number: Optional[str]
    customer_gender: Optional[str] = None
    notes: Optional[str]
    total_amount: float
    payment_method: Optional[str]
    payment_status: Optional[str]
    status: str
    batch_number: Optional[int]
    batch_status: Optional[str]
    delivery_qr_code: Optional[str]
    pickup_token: Optional[str]
    sms_sent: bool
    received_at: Optional[datetime]
    ready_at: Optional[datetime]
    delivered_at: Optional[datetime]
    picked_up_at: Optional[datetime]
    created_at: datetime
    updated_at: datetime
    items: List[OrderItemResponse] = []
    
    model_config = ConfigDict(from_attributes=True)


class OrderListResponse(BaseModel):
    """Schema for list of orders response"""
    orders: List[OrderResponse]
    total: int


class OrderStats(BaseModel):
    """Admin dashboard counters"""
    total: int
    pending: int
    processing: int
    ready: int
    revenue: float
