"""
Auth Service - accounts, sessions and profiles
"""
import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

import bcrypt
from sqlalchemy.orm import Session

from laundry_service.config import settings
from laundry_service.exceptions import AuthenticationRequired, NotFound, StateConflict
from laundry_service.models.user import User
from laundry_service.repositories.user_repository import UserRepository, ProfileRepository, RoleRepository
from laundry_service.schemas.auth import (
    SignupRequest, LoginRequest, SessionResponse, ProfileUpdate, ProfileResponse, MeResponse
)
from laundry_service.services import codes, schedule

logger = logging.getLogger(__name__)


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode(), bcrypt.gensalt()).decode()


def check_password(password: str, password_hash: str) -> bool:
    return bcrypt.checkpw(password.encode(), password_hash.encode())


class AuthService:
    """Service layer for accounts and profiles"""
    
    def __init__(self, db: Session):
        self.users = UserRepository(db)
        self.profiles = ProfileRepository(db)
        self.roles = RoleRepository(db)
    
    def signup(self, data: SignupRequest) -> SessionResponse:
        """
        Create an account with its profile and log it in
        
        Raises:
            StateConflict: If the email is already registered
        """
        email = data.email.lower()
        if self.users.get_by_email(email):
            raise StateConflict("An account with this email already exists")
        
        user = self.users.create_with_profile(
            {'email': email, 'password_hash': hash_password(data.password)},
            {
                'student_name': data.student_name or None,
                'student_id': data.student_id or None,
                'mobile_no': data.mobile_no or None,
                'room_number': data.room_number or None,
                'gender': data.gender or None,
                'email': email,
            },
        )
        logger.info("Account created for %s", user.id)
        return self._issue_session(user)
    
    def login(self, data: LoginRequest) -> SessionResponse:
        user = self.users.get_by_email(data.email)
        if not user or not check_password(data.password, user.password_hash):
            raise AuthenticationRequired("Invalid email or password")
        return self._issue_session(user)
    
    def logout(self, token: str) -> None:
        self.users.delete_session(token)
    
    def _issue_session(self, user: User) -> SessionResponse:
        token = secrets.token_urlsafe(32)
        expires_at = datetime.now(timezone.utc) + timedelta(hours=settings.SESSION_TTL_HOURS)
        self.users.create_session(token, user.id, expires_at)
        return SessionResponse(access_token=token, user_id=user.id, expires_at=expires_at)
    
    def resolve_session(self, token: str) -> User:
        """
        Get the user a bearer token belongs to
        
        Raises:
            AuthenticationRequired: Unknown or expired token
        """
        session = self.users.get_session(token)
        if not session:
            raise AuthenticationRequired("Invalid or expired session")
        expires_at = session.expires_at
        if expires_at.tzinfo is None:
            expires_at = expires_at.replace(tzinfo=timezone.utc)
        if expires_at <= datetime.now(timezone.utc):
            self.users.delete_session(token)
            raise AuthenticationRequired("Invalid or expired session")
        user = self.users.get_by_id(session.user_id)
        if not user:
            raise AuthenticationRequired("Invalid or expired session")
        return user
    
    def me(self, user: User) -> MeResponse:
        profile = self.profiles.get_by_user_id(user.id)
        return MeResponse(
            user_id=user.id,
            email=user.email,
            role=self.roles.get_role(user.id) or 'customer',
            profile=ProfileResponse.model_validate(profile) if profile else None,
        )
    
    def get_profile(self, user: User) -> ProfileResponse:
        profile = self.profiles.get_by_user_id(user.id)
        if not profile:
            raise NotFound("Profile not found")
        return ProfileResponse.model_validate(profile)
    
    def update_profile(self, user: User, data: ProfileUpdate) -> ProfileResponse:
        profile = self.profiles.get_by_user_id(user.id)
        if not profile:
            raise NotFound("Profile not found")
        update_data = data.model_dump()
        update_data['gender'] = update_data['gender'] or None
        return ProfileResponse.model_validate(self.profiles.update(profile, update_data))
    
    @staticmethod
    def intake_code(user: User) -> str:
        """Drop-off QR payload for the counter scanner"""
        return codes.build_intake_code(user.id, schedule.utcnow())
