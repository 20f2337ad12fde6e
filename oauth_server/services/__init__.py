"""Service modules"""

from oauth_server.services.access_token_store import AccessTokenStore
from oauth_server.services.audit_service import AuditService
from oauth_server.services.authorization_code_store import AuthorizationCodeStore
from oauth_server.services.authorization_service import AuthorizationService
from oauth_server.services.client_registry import ClientRegistry
from oauth_server.services.token_exchange_service import TokenExchangeService
from oauth_server.services.user_service import UserProfileProvider, UserService
from oauth_server.services.userinfo_service import UserInfoService

__all__ = [
    "ClientRegistry",
    "AuthorizationCodeStore",
    "AccessTokenStore",
    "AuditService",
    "AuthorizationService",
    "TokenExchangeService",
    "UserInfoService",
    "UserProfileProvider",
    "UserService",
]
