"""Pydantic schemas"""

from oauth_server.schemas.oauth import (
    AuthorizationCodeRequest,
    AuthorizationCodeResponse,
    AuthorizationView,
    GrantType,
    OAuthClientCreate,
    OAuthClientResponse,
    TokenErrorResponse,
    TokenRequest,
    TokenResponse,
    TokenType,
)
from oauth_server.schemas.user import UserInfoResponse, UserProfile

__all__ = [
    # OAuth
    "GrantType",
    "TokenType",
    "TokenRequest",
    "TokenResponse",
    "TokenErrorResponse",
    "AuthorizationView",
    "AuthorizationCodeRequest",
    "AuthorizationCodeResponse",
    "OAuthClientCreate",
    "OAuthClientResponse",
    # User
    "UserProfile",
    "UserInfoResponse",
]
