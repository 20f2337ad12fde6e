"""FastAPI dependencies"""

from typing import Annotated

from fastapi import Depends, Header, HTTPException, Request

from oauth_server.core.config import Settings, logger
from oauth_server.core.container import OAuthServices
from oauth_server.services.authorization_service import AuthorizationService
from oauth_server.services.token_exchange_service import TokenExchangeService
from oauth_server.services.userinfo_service import UserInfoService
from oauth_server.utils.crypto import constant_time_compare


def get_services(request: Request) -> OAuthServices:
    """Get the services wired for this application"""
    return request.app.state.services


def get_settings(request: Request) -> Settings:
    """Get the settings this application was built with"""
    return request.app.state.settings


def get_authorization_service(
    services: Annotated[OAuthServices, Depends(get_services)],
) -> AuthorizationService:
    """Get authorization service instance"""
    return services.authorization


def get_token_exchange_service(
    services: Annotated[OAuthServices, Depends(get_services)],
) -> TokenExchangeService:
    """Get token exchange service instance"""
    return services.token_exchange


def get_userinfo_service(
    services: Annotated[OAuthServices, Depends(get_services)],
) -> UserInfoService:
    """Get userinfo service instance"""
    return services.userinfo


def require_internal_auth(
    settings: Annotated[Settings, Depends(get_settings)],
    x_internal_auth: Annotated[str | None, Header()] = None,
) -> None:
    """Reject calls that do not carry the internal API key"""
    if not x_internal_auth or not constant_time_compare(x_internal_auth, settings.internal_api_key):
        logger.warning("Unauthorized internal call: missing or wrong X-Internal-Auth")
        raise HTTPException(status_code=401, detail="unauthorized")


# Type annotations for services
SettingsDep = Annotated[Settings, Depends(get_settings)]
AuthorizationServiceDep = Annotated[AuthorizationService, Depends(get_authorization_service)]
TokenExchangeServiceDep = Annotated[TokenExchangeService, Depends(get_token_exchange_service)]
UserInfoServiceDep = Annotated[UserInfoService, Depends(get_userinfo_service)]
InternalAuth = Depends(require_internal_auth)
