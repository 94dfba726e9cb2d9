"""
SQLAlchemy account models: users, sessions, profiles and roles
"""
import uuid

from sqlalchemy import Column, String, DateTime, ForeignKey, CheckConstraint
from sqlalchemy.sql import func
from laundry_service.database import Base


def _uuid() -> str:
    return str(uuid.uuid4())


class User(Base):
    """Login identity"""
    
    __tablename__ = "users"
    
    id = Column(String(36), primary_key=True, default=_uuid)
    email = Column(String(255), nullable=False, unique=True, index=True)
    password_hash = Column(String(255), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    
    def __repr__(self):
        return f"<User(id={self.id}, email='{self.email}')>"


class AuthSession(Base):
    """Opaque bearer token issued at login"""
    
    __tablename__ = "auth_sessions"
    
    token = Column(String(100), primary_key=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)


class Profile(Base):
    """Student contact details; gender routes orders into batches"""
    
    __tablename__ = "profiles"
    
    id = Column(String(36), primary_key=True, default=_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, unique=True, index=True)
    student_name = Column(String(100), nullable=True)
    student_id = Column(String(50), nullable=True)
    mobile_no = Column(String(20), nullable=True)
    email = Column(String(255), nullable=True)
    room_number = Column(String(20), nullable=True)
    gender = Column(String(10), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)
    
    __table_args__ = (
        CheckConstraint("gender IS NULL OR gender IN ('male', 'female')", name='check_gender_valid'),
    )
    
    def __repr__(self):
        return f"<Profile(user_id={self.user_id}, student_name='{self.student_name}', gender={self.gender})>"


class UserRole(Base):
    """Role grant; a user without a row is a customer"""
    
    __tablename__ = "user_roles"
    
    id = Column(String(36), primary_key=True, default=_uuid)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True)
    role = Column(String(20), nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    
    __table_args__ = (
        CheckConstraint("role IN ('admin', 'customer')", name='check_role_valid'),
    )
    
    def __repr__(self):
        return f"<UserRole(user_id={self.user_id}, role='{self.role}')>"
