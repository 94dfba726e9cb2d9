"""
Shared FastAPI dependencies
"""
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from laundry_service.database import get_db
from laundry_service.exceptions import AuthenticationRequired, PermissionDenied
from laundry_service.models.user import User
from laundry_service.publishers.event_publisher import EventPublisher
from laundry_service.repositories.user_repository import RoleRepository
from laundry_service.services.auth_service import AuthService
from laundry_service.services.batch_service import BatchService
from laundry_service.services.notification_service import NotificationService
from laundry_service.services.order_service import OrderService
from laundry_service.services.webhook_client import WebhookClient

bearer_scheme = HTTPBearer(auto_error=False)


def get_event_publisher() -> EventPublisher:
    return EventPublisher()


def get_webhook_client() -> WebhookClient:
    return WebhookClient()


def get_notification_service(
    webhook_client: WebhookClient = Depends(get_webhook_client)
) -> NotificationService:
    return NotificationService(webhook_client=webhook_client)


def get_order_service(
    db: Session = Depends(get_db),
    publisher: EventPublisher = Depends(get_event_publisher)
) -> OrderService:
    """Dependency to get OrderService instance"""
    return OrderService(db, event_publisher=publisher)


def get_batch_service(
    db: Session = Depends(get_db),
    notification_service: NotificationService = Depends(get_notification_service),
    publisher: EventPublisher = Depends(get_event_publisher)
) -> BatchService:
    """Dependency to get BatchService instance"""
    return BatchService(db, notification_service=notification_service, event_publisher=publisher)


def get_bearer_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme)
) -> str:
    if not credentials or not credentials.credentials:
        raise AuthenticationRequired("Missing bearer token")
    return credentials.credentials


def get_current_user(
    token: str = Depends(get_bearer_token),
    db: Session = Depends(get_db)
) -> User:
    """Resolve the bearer token to a user"""
    return AuthService(db).resolve_session(token)


def require_admin(
    user: User = Depends(get_current_user),
    db: Session = Depends(get_db)
) -> User:
    """Allow only users holding the admin role"""
    if not RoleRepository(db).is_admin(user.id):
        raise PermissionDenied("Admin access required")
    return user
