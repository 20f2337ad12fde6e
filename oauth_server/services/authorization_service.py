"""Authorization endpoint service"""

from oauth_server.core.config import logger
from oauth_server.core.exceptions import InvalidClientError, ServerError
from oauth_server.schemas.oauth import AuthorizationCodeResponse, AuthorizationView
from oauth_server.services.audit_service import AuditService
from oauth_server.services.authorization_code_store import AuthorizationCodeStore
from oauth_server.services.client_registry import ClientRegistry
from oauth_server.utils.validators import add_query_params


class AuthorizationService:
    """Starts the authorization code flow and issues codes after login"""

    def __init__(
        self,
        client_registry: ClientRegistry,
        code_store: AuthorizationCodeStore,
        audit: AuditService,
    ):
        self._client_registry = client_registry
        self._code_store = code_store
        self._audit = audit

    async def begin_authorization(self, client_id: str, state: str) -> AuthorizationView:
        """
        Resolve the client for the external login UI

        Args:
            client_id: Client ID from the authorization request
            state: Opaque client state, passed through unchanged

        Returns:
            AuthorizationView with client metadata

        Raises:
            InvalidClientError: If the client is unknown
        """
        client = await self._client_registry.find_by_client_id(client_id)
        if not client:
            logger.warning(
                f"Authorization request for unknown client: {client_id}",
                extra={"trace_point": "authorize_unknown_client", "client_id": client_id},
            )
            raise InvalidClientError(f"Unknown client '{client_id}'")

        logger.debug(
            f"Authorization request accepted for client {client_id}",
            extra={"trace_point": "authorize_client_found", "client_id": client_id},
        )

        return AuthorizationView(
            client_id=client.client_id,
            redirect_uri=client.redirect_uri,
            login_title=client.login_title,
            login_form=client.login_form,
            state=state,
        )

    async def issue_authorization_code(
        self,
        user_id: str,
        client_id: str,
        redirect_uri: str,
        state: str | None = None,
        ip_address: str | None = None,
    ) -> AuthorizationCodeResponse:
        """
        Issue a code for a user the login UI has authenticated

        Args:
            user_id: Authenticated user
            client_id: Client requesting authorization
            redirect_uri: Redirect URI, must equal the registered one
            state: Client state to echo back on the redirect
            ip_address: Caller IP for the audit log

        Returns:
            Code plus the redirect target carrying it

        Raises:
            InvalidClientError: If the client is unknown, disabled or the redirect URI differs
            ServerError: If the code could not be stored
        """
        if not await self._client_registry.verify_client(client_id, redirect_uri):
            logger.warning(
                f"Invalid client ID or redirect URI: {client_id}, {redirect_uri}",
                extra={"trace_point": "issue_code_invalid_client", "client_id": client_id},
            )
            raise InvalidClientError("Invalid client ID or redirect URI")

        code = await self._code_store.issue(user_id, client_id, redirect_uri)
        if code is None:
            raise ServerError("Failed to issue authorization code")

        await self._audit.log_code_issued(user_id, client_id, ip_address=ip_address)

        return AuthorizationCodeResponse(
            code=code,
            redirect_to=add_query_params(redirect_uri, {"code": code, "state": state}),
            expires_in=int(self._code_store.lifetime.total_seconds()),
        )
