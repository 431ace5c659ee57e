"""
Authentication service - registration, login and profile.
"""
import uuid
import logging
from datetime import datetime

from sqlmodel.ext.asyncio.session import AsyncSession

from outreach_crm.config import settings
from outreach_crm.core.security import get_password_hash, verify_password, create_access_token
from outreach_crm.core.exceptions import AlreadyExistsError, NotFoundError, UnauthorizedError
from outreach_crm.repositories.user_repo import UserRepository
from outreach_crm.models.user import User
from outreach_crm.schemas.auth import RegisterRequest
from outreach_crm.schemas.user import UserUpdate

logger = logging.getLogger(__name__)


class AuthService:
    """Service for authentication operations."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.user_repo = UserRepository(session)

    async def register(self, request: RegisterRequest) -> User:
        """Register a new user."""
        email = request.email.lower()
        existing = await self.user_repo.get_by_email(email)
        if existing:
            raise AlreadyExistsError("User", "email", email)

        user = await self.user_repo.create({
            "email": email,
            "password_hash": get_password_hash(request.password),
            "display_name": request.display_name,
            "company": request.company,
        })
        logger.info(f"User {user.id} registered")
        return user

    async def login(self, email: str, password: str) -> dict:
        """Authenticate a user and return an access token."""
        user = await self.user_repo.get_by_email(email)
        if not user or not verify_password(password, user.password_hash):
            raise UnauthorizedError("Incorrect email or password")

        if not user.is_active:
            raise UnauthorizedError("User account is deactivated")

        access_token = create_access_token({
            "sub": user.email,
            "user_id": str(user.id)
        })
        await self.user_repo.update_last_login(user.id)

        return {
            "access_token": access_token,
            "token_type": "bearer",
            "expires_in": settings.ACCESS_TOKEN_EXPIRE_MINUTES * 60
        }

    async def update_profile(self, user_id: uuid.UUID, profile: UserUpdate) -> User:
        """Update the user's profile fields."""
        user = await self.user_repo.get(user_id)
        if not user:
            raise NotFoundError("User", str(user_id))

        for field, value in profile.model_dump(exclude_unset=True).items():
            setattr(user, field, value)
        user.updated_at = datetime.utcnow()

        return await self.user_repo.save(user)
