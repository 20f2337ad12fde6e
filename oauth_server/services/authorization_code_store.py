"""Authorization code store"""

from datetime import datetime, timedelta, timezone

from sqlalchemy import delete, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from oauth_server.core.config import logger
from oauth_server.models.authorization_code import AuthorizationCode
from oauth_server.utils.crypto import RandomTokenGenerator, hash_token


class AuthorizationCodeStore:
    """Issues and consumes single-use authorization codes"""

    def __init__(
        self,
        session_maker: async_sessionmaker[AsyncSession],
        generator: RandomTokenGenerator,
        lifetime: timedelta = timedelta(minutes=10),
        code_bytes: int = 16,
    ):
        self._session_maker = session_maker
        self._generator = generator
        self.lifetime = lifetime
        self._code_bytes = code_bytes

    async def issue(self, user_id: str, client_id: str, redirect_uri: str) -> str | None:
        """
        Issue a new authorization code

        The caller must have verified the client and redirect URI beforehand.

        Args:
            user_id: Authenticated resource owner
            client_id: Client the code is bound to
            redirect_uri: Redirect URI the code is delivered to

        Returns:
            Authorization code, or None if it could not be stored
        """
        code = self._generator.generate(self._code_bytes)
        expires_at = datetime.now(timezone.utc) + self.lifetime

        try:
            async with self._session_maker() as db:
                db.add(
                    AuthorizationCode(
                        code_hash=hash_token(code),
                        client_id=client_id,
                        user_id=user_id,
                        redirect_uri=redirect_uri,
                        expires_at=expires_at,
                    )
                )
                await db.commit()
        except SQLAlchemyError as e:
            logger.error(
                f"Failed to store authorization code: {e}",
                extra={"client_id": client_id, "user_id": user_id},
            )
            return None

        logger.info(
            f"Authorization code issued: {code[:8]}... for user {user_id} and client {client_id}",
            extra={"client_id": client_id, "user_id": user_id},
        )

        return code

    async def redeem(self, code: str, client_id: str) -> str | None:
        """
        Consume an authorization code

        The record is removed by a single conditional DELETE, so at most one
        caller ever receives the user id for a given code. Expired codes are
        left in place and rejected.

        Args:
            code: Authorization code presented by the client
            client_id: Client presenting the code

        Returns:
            User ID the code was issued for, or None if invalid
        """
        code_hash = hash_token(code)
        now = datetime.now(timezone.utc)

        try:
            async with self._session_maker() as db:
                result = await db.execute(
                    delete(AuthorizationCode)
                    .where(
                        AuthorizationCode.code_hash == code_hash,
                        AuthorizationCode.client_id == client_id,
                        AuthorizationCode.expires_at > now,
                    )
                    .returning(AuthorizationCode.user_id)
                    .execution_options(synchronize_session=False)
                )
                user_id = result.scalar_one_or_none()
                await db.commit()
        except SQLAlchemyError as e:
            # Without a confirmed delete the code may still be usable: refuse it
            logger.error(
                f"Failed to consume authorization code {code[:8]}...: {e}",
                extra={"client_id": client_id},
            )
            return None

        if user_id is not None:
            logger.info(
                f"Authorization code redeemed: {code[:8]}... for user {user_id}",
                extra={"client_id": client_id, "user_id": user_id},
            )
            return user_id

        await self._log_rejection(code, code_hash, client_id)
        return None

    async def purge_expired(self) -> int:
        """
        Delete expired authorization codes

        Returns:
            Number of deleted codes
        """
        async with self._session_maker() as db:
            result = await db.execute(
                delete(AuthorizationCode)
                .where(AuthorizationCode.expires_at <= datetime.now(timezone.utc))
                .execution_options(synchronize_session=False)
            )
            await db.commit()

        count = result.rowcount
        if count > 0:
            logger.info(f"Cleaned up {count} expired authorization codes")

        return count

    async def _log_rejection(self, code: str, code_hash: str, client_id: str) -> None:
        try:
            async with self._session_maker() as db:
                result = await db.execute(
                    select(AuthorizationCode.expires_at).where(
                        AuthorizationCode.code_hash == code_hash,
                        AuthorizationCode.client_id == client_id,
                    )
                )
                expires_at = result.scalar_one_or_none()
        except SQLAlchemyError as e:
            logger.warning(f"Authorization code rejected: {code[:8]}... ({e})")
            return

        if expires_at is None:
            logger.warning(
                f"Authorization code not found: {code[:8]}...",
                extra={"client_id": client_id},
            )
        else:
            logger.warning(
                f"Authorization code expired: {code[:8]}... (expired at {expires_at})",
                extra={"client_id": client_id},
            )
