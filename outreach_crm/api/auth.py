"""
Authentication API routes.
"""
from fastapi import APIRouter, Depends
from fastapi.security import OAuth2PasswordRequestForm
from sqlmodel.ext.asyncio.session import AsyncSession

from outreach_crm.database import get_session
from outreach_crm.services.auth_service import AuthService
from outreach_crm.schemas.auth import RegisterRequest, TokenResponse
from outreach_crm.schemas.user import UserResponse, UserUpdate
from outreach_crm.api.deps import get_current_user
from outreach_crm.models.user import User

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/register", response_model=UserResponse, status_code=201)
async def register(
    request: RegisterRequest,
    session: AsyncSession = Depends(get_session)
):
    """Register a new user."""
    auth_service = AuthService(session)
    return await auth_service.register(request)


@router.post("/login", response_model=TokenResponse)
async def login(
    form_data: OAuth2PasswordRequestForm = Depends(),
    session: AsyncSession = Depends(get_session)
):
    """Login and get an access token."""
    auth_service = AuthService(session)
    return await auth_service.login(form_data.username, form_data.password)


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: User = Depends(get_current_user)):
    """Get the current user's profile."""
    return current_user


@router.patch("/me", response_model=UserResponse)
async def update_me(
    profile: UserUpdate,
    current_user: User = Depends(get_current_user),
    session: AsyncSession = Depends(get_session)
):
    """Update the current user's profile."""
    auth_service = AuthService(session)
    return await auth_service.update_profile(current_user.id, profile)
