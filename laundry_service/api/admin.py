"""
Admin endpoints: dashboard, batches, status changes, scanning and prices
"""
from typing import Optional

from fastapi import APIRouter, Depends, Query

from laundry_service.api.deps import require_admin, get_order_service, get_batch_service
from laundry_service.api.catalog import get_catalog_service
from laundry_service.models.user import User
from laundry_service.schemas.batch import BatchListResponse, BatchCompleteResponse, ScanRequest, ScanResponse
from laundry_service.schemas.catalog import ItemPriceResponse, PriceUpdate
from laundry_service.schemas.order import OrderListResponse, OrderResponse, OrderStats, OrderStatusUpdate
from laundry_service.services.batch_service import BatchService
from laundry_service.services.catalog_service import CatalogService
from laundry_service.services.order_service import OrderService

router = APIRouter(prefix="/admin", tags=["admin"])


@router.get("/orders", response_model=OrderListResponse, summary="Get all orders")
def get_orders(
    skip: int = Query(0, ge=0, description="Number of orders to skip"),
    limit: int = Query(100, ge=1, le=1000, description="Maximum number of orders to return"),
    admin: User = Depends(require_admin),
    service: OrderService = Depends(get_order_service)
):
    """
    Retrieve all orders, newest batch first
    
    - **skip**: Number of orders to skip (default: 0)
    - **limit**: Maximum number of orders to return (default: 100, max: 1000)
    """
    return service.get_all_orders(skip=skip, limit=limit)


@router.get("/stats", response_model=OrderStats, summary="Dashboard counters")
def get_stats(admin: User = Depends(require_admin), service: OrderService = Depends(get_order_service)):
    return service.get_stats()


@router.patch("/orders/{order_id}/status", response_model=OrderResponse, summary="Update order status")
def update_order_status(
    order_id: str,
    status_data: OrderStatusUpdate,
    admin: User = Depends(require_admin),
    service: OrderService = Depends(get_order_service)
):
    """
    Move an order forward
    
    - **status**: processing, ready, delivered, completed or cancelled
    """
    return service.update_order_status(order_id, status_data.status, admin.id)


@router.get("/batches", response_model=BatchListResponse, summary="Grouped batch view")
def get_batches(
    q: Optional[str] = Query(None, description="Search by order number, name or phone"),
    admin: User = Depends(require_admin),
    service: BatchService = Depends(get_batch_service)
):
    return service.list_batches(q)


@router.post("/batches/{batch_number}/complete", response_model=BatchCompleteResponse, summary="Mark batch complete")
async def complete_batch(
    batch_number: int,
    admin: User = Depends(require_admin),
    service: BatchService = Depends(get_batch_service)
):
    """Mark every order in the batch ready and notify its customers"""
    return await service.mark_batch_complete(batch_number)


@router.post("/batches/{batch_number}/unmark", response_model=BatchCompleteResponse, summary="Unmark batch")
def unmark_batch(
    batch_number: int,
    admin: User = Depends(require_admin),
    service: BatchService = Depends(get_batch_service)
):
    return service.unmark_batch(batch_number)


@router.post("/scan/lookup", response_model=OrderResponse, summary="Find order by QR")
def scan_lookup(
    scan: ScanRequest,
    admin: User = Depends(require_admin),
    service: OrderService = Depends(get_order_service)
):
    return service.lookup(scan.code)


@router.post("/scan/receive", response_model=ScanResponse, summary="Receive laundry or redeem pickup")
def scan_receive(
    scan: ScanRequest,
    admin: User = Depends(require_admin),
    service: OrderService = Depends(get_order_service)
):
    """
    Counter scanner
    
    - **ORD-...**: customer drop-off code, creates a received order
    - **PKP-...**: pickup token, marks the order delivered
    """
    return service.receive_scan(scan.code, admin.id)


@router.post("/scan/return", response_model=OrderResponse, summary="Check delivery QR")
def scan_return(
    scan: ScanRequest,
    admin: User = Depends(require_admin),
    service: OrderService = Depends(get_order_service)
):
    return service.scan_return(scan.code)


@router.post("/orders/{order_id}/confirm-return", response_model=OrderResponse, summary="Confirm hand-back")
def confirm_return(
    order_id: str,
    admin: User = Depends(require_admin),
    service: OrderService = Depends(get_order_service)
):
    return service.confirm_return(order_id, admin.id)


@router.put("/prices/{price_id}", response_model=ItemPriceResponse, summary="Update catalog price")
def update_price(
    price_id: str,
    data: PriceUpdate,
    admin: User = Depends(require_admin),
    service: CatalogService = Depends(get_catalog_service)
):
    return service.update_price(price_id, data.price)
