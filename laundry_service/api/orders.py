"""
Customer order endpoints
"""
from typing import List

from fastapi import APIRouter, Depends, status

from laundry_service.api.deps import get_current_user, get_order_service
from laundry_service.models.user import User
from laundry_service.schemas.order import OrderCreate, OrderResponse
from laundry_service.services.order_service import OrderService

router = APIRouter(prefix="/orders", tags=["orders"])


@router.post("", response_model=OrderResponse, status_code=status.HTTP_201_CREATED, summary="Place order")
def create_order(
    order_data: OrderCreate,
    user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service)
):
    """
    Place a new laundry order
    
    Process:
    1. Check today is a collection day for the customer's gender
    2. Price each line from the catalog
    3. Assign the day's batch
    4. Save order and lines
    
    - **customer**: name, student ID and 10-digit mobile number
    - **items**: item ID, service type ID and quantity per line
    - **payment_method**: cash, upi or card
    """
    return service.place_order(user, order_data)


@router.get("", response_model=List[OrderResponse], summary="Get own orders")
def get_my_orders(
    user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service)
):
    """Orders placed by the caller, newest first"""
    return service.get_orders_for_user(user.id)


@router.get("/{order_id}", response_model=OrderResponse, summary="Get own order by ID")
def get_my_order(
    order_id: str,
    user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service)
):
    return service.get_order_for_user(order_id, user.id)
