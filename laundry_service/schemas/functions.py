"""
Pydantic schemas for the RPC-style function endpoints (camelCase bodies)
"""
from pydantic import BaseModel, Field, ConfigDict
from typing import List, Optional, Any


class FunctionRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


class GrantAdminRequest(FunctionRequest):
    user_id: str = Field(..., alias="userId", min_length=1)
    admin_password: str = Field(..., alias="adminPassword")


class NotifyBatchRequest(FunctionRequest):
    batch_number: int = Field(..., alias="batchNumber")


class RedeemTokenRequest(FunctionRequest):
    token: Optional[str] = None


class SubmittedItem(FunctionRequest):
    name: str = Field(..., min_length=1)
    quantity: int = Field(..., gt=0)
    price: float = Field(..., ge=0)
    service_type: Optional[str] = Field(None, alias="serviceType")


class SubmitOrderRequest(FunctionRequest):
    order_id: str = Field(..., alias="orderId")
    order_number: str = Field(..., alias="orderNumber")
    items: List[SubmittedItem]
    total: float = Field(..., ge=0)
    payment_method: str = Field(..., alias="paymentMethod")


class AdminMessageRequest(FunctionRequest):
    user_name: str = Field("", alias="userName", max_length=100)
    user_email: str = Field("", alias="userEmail", max_length=255)
    message: str = Field(..., min_length=1, max_length=2000)


class FunctionResponse(BaseModel):
    """Generic success payload"""
    success: bool = True
    message: Optional[str] = None
    data: Optional[Any] = None
