"""
Account Repositories - Data Access Layer
"""
from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Session

from laundry_service.models.user import User, AuthSession, Profile, UserRole


class UserRepository:
    """Repository for users and their sessions"""
    
    def __init__(self, db: Session):
        self.db = db
    
    def get_by_id(self, user_id: str) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()
    
    def get_by_email(self, email: str) -> Optional[User]:
        return self.db.query(User).filter(User.email == email.lower()).first()
    
    def create_with_profile(self, user_data: dict, profile_data: dict) -> User:
        """Create a user and its profile in one transaction"""
        user = User(**user_data)
        self.db.add(user)
        self.db.flush()
        self.db.add(Profile(user_id=user.id, **profile_data))
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(user)
        return user
    
    def create_session(self, token: str, user_id: str, expires_at: datetime) -> AuthSession:
        session = AuthSession(token=token, user_id=user_id, expires_at=expires_at)
        self.db.add(session)
        self.db.commit()
        self.db.refresh(session)
        return session
    
    def get_session(self, token: str) -> Optional[AuthSession]:
        return self.db.query(AuthSession).filter(AuthSession.token == token).first()
    
    def delete_session(self, token: str) -> bool:
        deleted = self.db.query(AuthSession).filter(AuthSession.token == token).delete()
        self.db.commit()
        return deleted > 0


class ProfileRepository:
    """Repository for Profile CRUD operations"""
    
    def __init__(self, db: Session):
        self.db = db
    
    def get_by_user_id(self, user_id: str) -> Optional[Profile]:
        return self.db.query(Profile).filter(Profile.user_id == user_id).first()
    
    def update(self, profile: Profile, update_data: dict) -> Profile:
        for field, value in update_data.items():
            setattr(profile, field, value)
        self.db.commit()
        self.db.refresh(profile)
        return profile


class RoleRepository:
    """Repository for role grants"""
    
    def __init__(self, db: Session):
        self.db = db
    
    def get_role(self, user_id: str) -> Optional[str]:
        """Get the granted role, or None for an implicit customer"""
        row = self.db.query(UserRole.role).filter(UserRole.user_id == user_id).first()
        return row[0] if row else None
    
    def is_admin(self, user_id: str) -> bool:
        return self.get_role(user_id) == 'admin'
    
    def count_roles(self, user_id: str) -> int:
        return self.db.query(UserRole).filter(UserRole.user_id == user_id).count()
    
    def replace_role(self, user_id: str, role: str) -> UserRole:
        """Delete any existing role rows and insert the new one in one transaction"""
        try:
            self.db.query(UserRole).filter(UserRole.user_id == user_id).delete()
            user_role = UserRole(user_id=user_id, role=role)
            self.db.add(user_role)
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
        self.db.refresh(user_role)
        return user_role
