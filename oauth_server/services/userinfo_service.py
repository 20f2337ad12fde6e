"""Userinfo endpoint service"""

from oauth_server.core.config import logger
from oauth_server.core.exceptions import InvalidTokenError
from oauth_server.schemas.user import UserInfoResponse
from oauth_server.services.access_token_store import AccessTokenStore
from oauth_server.services.audit_service import AuditService
from oauth_server.services.user_service import UserProfileProvider


class UserInfoService:
    """Resolves bearer tokens to the profile of the user they act for"""

    def __init__(
        self,
        token_store: AccessTokenStore,
        profiles: UserProfileProvider,
        audit: AuditService,
    ):
        self._token_store = token_store
        self._profiles = profiles
        self._audit = audit

    async def get_user_info(
        self,
        access_token: str | None,
        ip_address: str | None = None,
    ) -> UserInfoResponse:
        """
        Look up the user behind an access token

        Args:
            access_token: Bearer token, None if the header was missing or malformed
            ip_address: Caller IP for the audit log

        Returns:
            UserInfoResponse

        Raises:
            InvalidTokenError: Missing, unknown or expired token, or no profile for its user
        """
        user_id = await self._token_store.validate(access_token) if access_token else None
        if user_id is None:
            await self._audit.log_userinfo_rejected(ip_address=ip_address)
            raise InvalidTokenError("The access token is missing, invalid or expired")

        profile = await self._profiles.get_profile(user_id)
        if profile is None:
            logger.warning(f"Access token refers to unknown user: {user_id}")
            await self._audit.log_userinfo_rejected(ip_address=ip_address)
            raise InvalidTokenError("The access token does not refer to an existing user")

        return UserInfoResponse(
            sub=user_id,
            name=profile.full_name,
            email=profile.email,
        )
