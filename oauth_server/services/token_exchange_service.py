"""Token endpoint service"""

from oauth_server.core.config import logger
from oauth_server.core.exceptions import (
    InvalidClientError,
    InvalidGrantError,
    OAuthError,
    ServerError,
    UnsupportedGrantTypeError,
)
from oauth_server.schemas.oauth import TokenRequest, TokenResponse
from oauth_server.services.access_token_store import AccessTokenStore
from oauth_server.services.audit_service import AuditService
from oauth_server.services.authorization_code_store import AuthorizationCodeStore
from oauth_server.services.client_registry import ClientRegistry


class TokenExchangeService:
    """Exchanges authorization codes for access tokens"""

    def __init__(
        self,
        client_registry: ClientRegistry,
        code_store: AuthorizationCodeStore,
        token_store: AccessTokenStore,
        audit: AuditService,
    ):
        self._client_registry = client_registry
        self._code_store = code_store
        self._token_store = token_store
        self._audit = audit

    async def exchange(
        self,
        token_request: TokenRequest,
        ip_address: str | None = None,
    ) -> TokenResponse:
        """
        Run the authorization code grant

        Each check short-circuits: once one fails nothing else is read or written.

        Args:
            token_request: Parsed token request
            ip_address: Caller IP for the audit log

        Returns:
            TokenResponse with a fresh access token

        Raises:
            InvalidClientError: Unknown client or wrong secret
            UnsupportedGrantTypeError: grant_type other than authorization_code
            InvalidGrantError: Code unknown, issued to another client, expired or already used
            ServerError: Access token could not be stored
        """
        client_id = token_request.client_id

        try:
            return await self._exchange(token_request, ip_address)
        except OAuthError as e:
            await self._audit.log_token_rejected(client_id, e.error, ip_address=ip_address)
            raise

    async def _exchange(
        self,
        token_request: TokenRequest,
        ip_address: str | None,
    ) -> TokenResponse:
        client_id = token_request.client_id

        client = await self._client_registry.find_by_client_id(client_id)
        logger.debug(
            f"Token request for client {client_id}",
            extra={
                "trace_point": "token_client_lookup",
                "client_id": client_id,
                "redirect_uri": client.redirect_uri if client else None,
            },
        )

        if not await self._client_registry.verify_credentials(
            client_id, token_request.client_secret
        ):
            logger.warning(f"Invalid client credentials: {client_id}")
            raise InvalidClientError("Client authentication failed")

        if not token_request.is_authorization_code_grant:
            logger.warning(f"Unsupported grant type: {token_request.grant_type}")
            raise UnsupportedGrantTypeError(
                f"Grant type '{token_request.grant_type}' is not supported"
            )

        user_id = await self._code_store.redeem(token_request.code, client_id)
        if user_id is None:
            logger.warning(
                f"Invalid auth code: {token_request.code[:8]}... for client: {client_id}"
            )
            raise InvalidGrantError("Authorization code is invalid, expired or already used")

        access_token = await self._token_store.issue(user_id, client_id)
        if access_token is None:
            raise ServerError("Failed to issue access token")

        await self._audit.log_token_issued(user_id, client_id, ip_address=ip_address)

        return TokenResponse(
            access_token=access_token,
            expires_in=self._token_store.expires_in,
        )
