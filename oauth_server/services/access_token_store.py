"""Access token store"""

from datetime import datetime, timedelta, timezone

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from oauth_server.core.config import logger
from oauth_server.models.access_token import AccessToken
from oauth_server.utils.crypto import RandomTokenGenerator, hash_token


class AccessTokenStore:
    """Issues and validates opaque bearer access tokens"""

    def __init__(
        self,
        session_maker: async_sessionmaker[AsyncSession],
        generator: RandomTokenGenerator,
        lifetime: timedelta = timedelta(hours=1),
        token_bytes: int = 32,
    ):
        self._session_maker = session_maker
        self._generator = generator
        self.lifetime = lifetime
        self._token_bytes = token_bytes

    @property
    def expires_in(self) -> int:
        """Token lifetime in seconds, as reported to clients"""
        return int(self.lifetime.total_seconds())

    async def issue(self, user_id: str, client_id: str) -> str | None:
        """
        Issue a new access token

        Args:
            user_id: Resource owner the token acts for
            client_id: Client the token is issued to

        Returns:
            Access token, or None if it could not be stored
        """
        token = self._generator.generate(self._token_bytes)
        expires_at = datetime.now(timezone.utc) + self.lifetime

        try:
            async with self._session_maker() as db:
                db.add(
                    AccessToken(
                        token_hash=hash_token(token),
                        client_id=client_id,
                        user_id=user_id,
                        expires_at=expires_at,
                    )
                )
                await db.commit()
        except SQLAlchemyError as e:
            logger.error(
                f"Failed to store access token: {e}",
                extra={"client_id": client_id, "user_id": user_id},
            )
            return None

        logger.info(
            f"Access token issued: {token[:8]}... for user {user_id} and client {client_id}",
            extra={"client_id": client_id, "user_id": user_id},
        )

        return token

    async def validate(self, token: str) -> str | None:
        """
        Validate an access token without consuming it

        Args:
            token: Bearer token presented by the caller

        Returns:
            User ID if the token exists and has not expired, None otherwise
        """
        try:
            async with self._session_maker() as db:
                result = await db.execute(
                    select(AccessToken.user_id).where(
                        AccessToken.token_hash == hash_token(token),
                        AccessToken.expires_at > datetime.now(timezone.utc),
                    )
                )
                user_id = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.error(f"Failed to validate access token {token[:8]}...: {e}")
            return None

        if user_id is None:
            logger.debug(f"Access token unknown or expired: {token[:8]}...")

        return user_id

    async def purge_expired(self) -> int:
        """
        Delete expired access tokens

        Returns:
            Number of deleted tokens
        """
        async with self._session_maker() as db:
            result = await db.execute(
                delete(AccessToken)
                .where(AccessToken.expires_at <= datetime.now(timezone.utc))
                .execution_options(synchronize_session=False)
            )
            await db.commit()

        count = result.rowcount
        if count > 0:
            logger.info(f"Cleaned up {count} expired access tokens")

        return count
