"""Client registry service"""

from passlib.context import CryptContext
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from oauth_server.core.config import logger
from oauth_server.models.oauth_client import OAuthClient
from oauth_server.schemas.oauth import OAuthClientCreate
from oauth_server.utils.crypto import create_secret_context, hash_secret, verify_secret


class ClientRegistry:
    """Lookup and verification of registered OAuth clients"""

    def __init__(
        self,
        session_maker: async_sessionmaker[AsyncSession],
        secret_context: CryptContext | None = None,
    ):
        self._session_maker = session_maker
        if secret_context is None:
            secret_context = create_secret_context()
        self._secret_context = secret_context

    async def register_client(self, client_data: OAuthClientCreate) -> OAuthClient:
        """
        Register a new OAuth client

        Args:
            client_data: Client creation data

        Returns:
            Created OAuth client

        Raises:
            ValueError: If client already exists
        """
        async with self._session_maker() as db:
            existing = await self._get(db, client_data.client_id)
            if existing:
                raise ValueError(f"Client with client_id '{client_data.client_id}' already exists")

            client = OAuthClient(
                client_id=client_data.client_id,
                client_secret_hash=hash_secret(client_data.client_secret, self._secret_context),
                name=client_data.name,
                redirect_uri=client_data.redirect_uri,
                login_title=client_data.login_title,
                login_form=client_data.login_form,
                enabled=client_data.enabled,
            )

            db.add(client)
            await db.commit()
            await db.refresh(client)

        logger.info(f"OAuth client registered: {client.client_id}")

        return client

    async def find_by_client_id(self, client_id: str) -> OAuthClient | None:
        """
        Get OAuth client by client_id

        Args:
            client_id: Client ID

        Returns:
            OAuth client or None if not found
        """
        async with self._session_maker() as db:
            return await self._get(db, client_id)

    async def verify_client(self, client_id: str, redirect_uri: str) -> bool:
        """
        Check that a client may receive authorization codes at redirect_uri

        Args:
            client_id: Client ID
            redirect_uri: Redirect URI presented by the caller

        Returns:
            True if the client exists, is enabled and its redirect URI matches exactly
        """
        client = await self.find_by_client_id(client_id)
        if not client:
            logger.warning(f"Client verification failed: client not found ({client_id})")
            return False

        if not client.enabled:
            logger.warning(f"Client verification failed: client disabled ({client_id})")
            return False

        if client.redirect_uri != redirect_uri:
            logger.warning(
                f"Client verification failed: redirect URI mismatch ({client_id})",
                extra={"client_id": client_id, "redirect_uri": redirect_uri},
            )
            return False

        return True

    async def verify_credentials(self, client_id: str, client_secret: str) -> bool:
        """
        Check a client_id / client_secret pair

        The enabled flag is not consulted here, only in verify_client.

        Args:
            client_id: Client ID
            client_secret: Plain text client secret

        Returns:
            True if the client exists and the secret matches
        """
        client = await self.find_by_client_id(client_id)
        if not client:
            logger.warning(f"Client credentials rejected: client not found ({client_id})")
            return False

        if not verify_secret(client_secret, client.client_secret_hash, self._secret_context):
            logger.warning(f"Client credentials rejected: invalid secret ({client_id})")
            return False

        logger.debug(f"Client credentials verified: {client_id}")
        return True

    async def _get(self, db: AsyncSession, client_id: str) -> OAuthClient | None:
        result = await db.execute(
            select(OAuthClient).where(OAuthClient.client_id == client_id)
        )
        return result.scalar_one_or_none()
