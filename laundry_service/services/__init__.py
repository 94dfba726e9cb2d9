"""
Services package
"""
from laundry_service.services.order_service import OrderService
from laundry_service.services.batch_service import BatchService
from laundry_service.services.auth_service import AuthService
from laundry_service.services.admin_access_service import AdminAccessService
from laundry_service.services.submission_service import SubmissionService
from laundry_service.services.catalog_service import CatalogService
from laundry_service.services.notification_service import NotificationService
from laundry_service.services.webhook_client import WebhookClient

__all__ = [
    "OrderService",
    "BatchService",
    "AuthService",
    "AdminAccessService",
    "SubmissionService",
    "CatalogService",
    "NotificationService",
    "WebhookClient",
]
