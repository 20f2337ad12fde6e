"""Database models"""

from oauth_server.models.access_token import AccessToken
from oauth_server.models.audit_log import AuditLog
from oauth_server.models.authorization_code import AuthorizationCode
from oauth_server.models.database import (
    Base,
    close_db,
    create_engine,
    create_session_maker,
    init_db,
)
from oauth_server.models.oauth_client import OAuthClient
from oauth_server.models.user import User

__all__ = [
    "Base",
    "create_engine",
    "create_session_maker",
    "init_db",
    "close_db",
    "OAuthClient",
    "AuthorizationCode",
    "AccessToken",
    "User",
    "AuditLog",
]
