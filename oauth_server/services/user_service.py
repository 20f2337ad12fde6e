"""User profile lookup"""

from typing import Protocol

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from oauth_server.core.config import logger
from oauth_server.models.user import User
from oauth_server.schemas.user import UserProfile


class UserProfileProvider(Protocol):
    """Read-only access to the user-account store"""

    async def get_profile(self, user_id: str) -> UserProfile | None: ...


class UserService:
    """User profiles backed by the users table"""

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        self._session_maker = session_maker

    async def create_user(
        self,
        first_name: str,
        last_name: str,
        email: str,
        user_id: str | None = None,
    ) -> UserProfile:
        """
        Create a user

        Args:
            first_name: First name
            last_name: Last name
            email: Email address
            user_id: Explicit ID (generated when omitted)

        Returns:
            Created user profile

        Raises:
            ValueError: If a user with this email already exists
        """
        async with self._session_maker() as db:
            existing = await db.execute(select(User).where(User.email == email))
            if existing.scalar_one_or_none():
                raise ValueError(f"User with email '{email}' already exists")

            user = User(first_name=first_name, last_name=last_name, email=email)
            if user_id is not None:
                user.id = user_id

            db.add(user)
            await db.commit()
            await db.refresh(user)

        logger.info(f"User created: {user.id}")

        return UserProfile.model_validate(user)

    async def get_profile(self, user_id: str) -> UserProfile | None:
        """
        Get user profile by ID

        Args:
            user_id: User ID

        Returns:
            UserProfile or None if not found
        """
        async with self._session_maker() as db:
            result = await db.execute(select(User).where(User.id == user_id))
            user = result.scalar_one_or_none()

        if not user:
            return None

        return UserProfile.model_validate(user)
