"""
Admin Access Service - passphrase-gated admin role grant
"""
import hmac
import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from laundry_service.config import settings
from laundry_service.exceptions import DownstreamError, NotFound, PermissionDenied
from laundry_service.repositories.user_repository import UserRepository, RoleRepository

logger = logging.getLogger(__name__)


class AdminAccessService:
    """Grants the admin role to a user who knows the admin passphrase"""

    def __init__(self, db: Session):
        self.users = UserRepository(db)
        self.roles = RoleRepository(db)

    def grant_admin_access(self, user_id: str, admin_password: str) -> str:
        """
        Grant the admin role

        Idempotent: a user who is already admin is left untouched.

        Returns:
            Result message

        Raises:
            PermissionDenied: Wrong passphrase
            NotFound: Unknown user
            DownstreamError: Role rows could not be written
        """
        logger.info("Processing admin access request for user: %s", user_id)

        if not hmac.compare_digest(admin_password.encode(), settings.ADMIN_PASSWORD.encode()):
            raise PermissionDenied("Invalid admin password")

        if not self.users.get_by_id(user_id):
            raise NotFound(f"User {user_id} not found")

        if self.roles.get_role(user_id) == 'admin':
            return "User already has admin role"

        try:
            self.roles.replace_role(user_id, 'admin')
        except SQLAlchemyError as e:
            logger.error("Error granting admin role: %s", e)
            raise DownstreamError("Failed to grant admin role")

        logger.info("Admin role granted successfully to user: %s", user_id)
        return "Admin access granted successfully"
