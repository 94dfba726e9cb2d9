"""
Pydantic schemas for accounts and profiles
"""
from pydantic import BaseModel, Field, EmailStr, ConfigDict, field_validator
from typing import Optional, Literal
from datetime import datetime

from laundry_service.schemas.validators import normalize_phone, normalize_optional_phone, strip_text


class SignupRequest(BaseModel):
    """Schema for creating an account"""
    email: EmailStr = Field(..., description="Login email address")
    password: str = Field(..., min_length=8, max_length=100, description="Password (8-100 characters)")
    student_name: Optional[str] = Field(None, max_length=100)
    student_id: Optional[str] = Field(None, max_length=50)
    mobile_no: Optional[str] = Field(None, description="10 digits or +91 followed by 10 digits")
    room_number: Optional[str] = Field(None, max_length=20)
    gender: Optional[Literal['male', 'female', '']] = None
    
    @field_validator('email', mode='before')
    @classmethod
    def check_email_length(cls, value):
        value = strip_text(value)
        if isinstance(value, str) and len(value) > 255:
            raise ValueError("Email must be less than 255 characters")
        return value
    
    @field_validator('student_name', 'student_id', 'room_number', mode='before')
    @classmethod
    def strip_fields(cls, value):
        return strip_text(value)
    
    @field_validator('student_name')
    @classmethod
    def check_student_name(cls, value):
        if value and len(value) < 2:
            raise ValueError("Name must be at least 2 characters")
        return value
    
    @field_validator('mobile_no')
    @classmethod
    def check_mobile_no(cls, value):
        return normalize_optional_phone(value)


class LoginRequest(BaseModel):
    """Schema for logging in"""
    email: EmailStr
    password: str = Field(..., min_length=1)


class SessionResponse(BaseModel):
    """Bearer token issued to a logged-in user"""
    access_token: str
    token_type: str = "bearer"
    user_id: str
    expires_at: datetime


class ProfileUpdate(BaseModel):
    """Schema for updating the caller's profile"""
    student_name: str = Field(..., min_length=2, max_length=100)
    mobile_no: str
    student_id: str = Field(..., max_length=50)
    room_number: str = Field(..., max_length=20)
    gender: Literal['male', 'female', '']
    
    @field_validator('student_name', 'student_id', 'room_number', mode='before')
    @classmethod
    def strip_fields(cls, value):
        return strip_text(value)
    
    @field_validator('mobile_no')
    @classmethod
    def check_mobile_no(cls, value):
        return normalize_phone(value)


class ProfileResponse(BaseModel):
    """Schema for profile response"""
    user_id: str
    student_name: Optional[str]
    student_id: Optional[str]
    mobile_no: Optional[str]
    email: Optional[str]
    room_number: Optional[str]
    gender: Optional[str]
    
    model_config = ConfigDict(from_attributes=True)


class MeResponse(BaseModel):
    """Current user with profile and role"""
    user_id: str
    email: str
    role: str
    profile: Optional[ProfileResponse]


class IntakeCodeResponse(BaseModel):
    """Drop-off QR payload shown by the customer"""
    code: str
