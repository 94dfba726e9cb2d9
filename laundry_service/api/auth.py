"""
Account and profile endpoints
"""
from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from laundry_service.api.deps import get_bearer_token, get_current_user
from laundry_service.database import get_db
from laundry_service.models.user import User
from laundry_service.schemas.auth import (
    SignupRequest, LoginRequest, SessionResponse, MeResponse,
    ProfileResponse, ProfileUpdate, IntakeCodeResponse
)
from laundry_service.services.auth_service import AuthService

router = APIRouter(tags=["auth"])


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    """Dependency to get AuthService instance"""
    return AuthService(db)


@router.post("/auth/signup", response_model=SessionResponse, status_code=status.HTTP_201_CREATED, summary="Create account")
def signup(data: SignupRequest, service: AuthService = Depends(get_auth_service)):
    """
    Create an account and log in
    
    - **email**: Login email (required)
    - **password**: 8-100 characters (required)
    - **gender**: male or female; decides the collection days
    """
    return service.signup(data)


@router.post("/auth/login", response_model=SessionResponse, summary="Log in")
def login(data: LoginRequest, service: AuthService = Depends(get_auth_service)):
    return service.login(data)


@router.post("/auth/logout", status_code=status.HTTP_204_NO_CONTENT, summary="Log out")
def logout(token: str = Depends(get_bearer_token), service: AuthService = Depends(get_auth_service)):
    service.logout(token)


@router.get("/auth/me", response_model=MeResponse, summary="Current user")
def me(user: User = Depends(get_current_user), service: AuthService = Depends(get_auth_service)):
    return service.me(user)


@router.get("/profiles/me", response_model=ProfileResponse, summary="Get own profile")
def get_profile(user: User = Depends(get_current_user), service: AuthService = Depends(get_auth_service)):
    return service.get_profile(user)


@router.put("/profiles/me", response_model=ProfileResponse, summary="Update own profile")
def update_profile(
    data: ProfileUpdate,
    user: User = Depends(get_current_user),
    service: AuthService = Depends(get_auth_service)
):
    return service.update_profile(user, data)


@router.get("/profiles/me/intake-code", response_model=IntakeCodeResponse, summary="Drop-off QR payload")
def intake_code(user: User = Depends(get_current_user)):
    """Payload for the QR code a customer shows when handing in laundry"""
    return IntakeCodeResponse(code=AuthService.intake_code(user))
