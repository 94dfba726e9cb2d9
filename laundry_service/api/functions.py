"""
RPC-style function endpoints

Bodies use camelCase keys and every call needs a bearer session.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from laundry_service.api.deps import (
    get_current_user, require_admin, get_order_service, get_batch_service,
    get_webhook_client, get_notification_service
)
from laundry_service.database import get_db
from laundry_service.models.user import User
from laundry_service.schemas.functions import (
    GrantAdminRequest, NotifyBatchRequest, RedeemTokenRequest,
    SubmitOrderRequest, AdminMessageRequest, FunctionResponse
)
from laundry_service.services.admin_access_service import AdminAccessService
from laundry_service.services.batch_service import BatchService
from laundry_service.services.notification_service import NotificationService
from laundry_service.services.order_service import OrderService
from laundry_service.services.submission_service import SubmissionService
from laundry_service.services.webhook_client import WebhookClient

router = APIRouter(prefix="/functions/v1", tags=["functions"])


@router.post("/grant-admin-access", response_model=FunctionResponse)
def grant_admin_access(
    data: GrantAdminRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
):
    """Grant the admin role to a user who supplies the admin passphrase"""
    message = AdminAccessService(db).grant_admin_access(data.user_id, data.admin_password)
    return FunctionResponse(message=message)


@router.post("/notify-batch-complete", response_model=FunctionResponse)
async def notify_batch_complete(
    data: NotifyBatchRequest,
    admin: User = Depends(require_admin),
    service: BatchService = Depends(get_batch_service)
):
    notifications = await service.notify_batch_complete(data.batch_number)
    return FunctionResponse(
        message=f"Notifications sent to {len(notifications)} customers",
        data={"batch": data.batch_number, "notifications": notifications},
    )


@router.post("/redeem-pickup-token", response_model=FunctionResponse)
def redeem_pickup_token(
    data: RedeemTokenRequest,
    user: User = Depends(get_current_user),
    service: OrderService = Depends(get_order_service)
):
    """Mark a ready order delivered by its pickup token (admins only)"""
    order = service.redeem_pickup_token(data.token, user.id)
    return FunctionResponse(message="Order marked as delivered", data={"order": order})


@router.post("/submit-order", response_model=FunctionResponse)
async def submit_order(
    data: SubmitOrderRequest,
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db),
    webhook_client: WebhookClient = Depends(get_webhook_client)
):
    """Re-check an order against storage and relay it to the workflow webhook"""
    result = await SubmissionService(db, webhook_client).submit_order(user, data)
    return FunctionResponse(data=result)


@router.post("/send-admin-message", response_model=FunctionResponse)
async def send_admin_message(
    data: AdminMessageRequest,
    user: User = Depends(get_current_user),
    notification_service: NotificationService = Depends(get_notification_service)
):
    await notification_service.send_admin_message(data.user_name, data.user_email, data.message)
    return FunctionResponse()
