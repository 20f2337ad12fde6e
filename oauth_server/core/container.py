"""Service wiring"""

from dataclasses import dataclass
from datetime import timedelta

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from oauth_server.core.config import Settings
from oauth_server.models.database import create_engine, create_session_maker
from oauth_server.services.access_token_store import AccessTokenStore
from oauth_server.services.audit_service import AuditService
from oauth_server.services.authorization_code_store import AuthorizationCodeStore
from oauth_server.services.authorization_service import AuthorizationService
from oauth_server.services.client_registry import ClientRegistry
from oauth_server.services.token_exchange_service import TokenExchangeService
from oauth_server.services.user_service import UserProfileProvider, UserService
from oauth_server.services.userinfo_service import UserInfoService
from oauth_server.utils.crypto import RandomTokenGenerator, create_secret_context


@dataclass
class OAuthServices:
    """Every component of the server, wired to its collaborators"""

    engine: AsyncEngine
    session_maker: async_sessionmaker[AsyncSession]
    client_registry: ClientRegistry
    code_store: AuthorizationCodeStore
    token_store: AccessTokenStore
    users: UserService
    audit: AuditService
    authorization: AuthorizationService
    token_exchange: TokenExchangeService
    userinfo: UserInfoService


def build_services(
    settings: Settings,
    engine: AsyncEngine | None = None,
    profiles: UserProfileProvider | None = None,
) -> OAuthServices:
    """
    Construct all services for one application instance

    Args:
        settings: Application settings
        engine: Existing engine to use instead of one built from settings.db_url
        profiles: External user profile lookup (defaults to the users table)

    Returns:
        OAuthServices
    """
    if engine is None:
        engine = create_engine(settings.db_url, echo=settings.is_development)
    session_maker = create_session_maker(engine)

    generator = RandomTokenGenerator()
    client_registry = ClientRegistry(
        session_maker, create_secret_context(settings.bcrypt_rounds)
    )
    code_store = AuthorizationCodeStore(
        session_maker,
        generator,
        lifetime=timedelta(seconds=settings.authorization_code_lifetime),
        code_bytes=settings.authorization_code_bytes,
    )
    token_store = AccessTokenStore(
        session_maker,
        generator,
        lifetime=timedelta(seconds=settings.access_token_lifetime),
        token_bytes=settings.access_token_bytes,
    )
    users = UserService(session_maker)
    audit = AuditService(session_maker)

    return OAuthServices(
        engine=engine,
        session_maker=session_maker,
        client_registry=client_registry,
        code_store=code_store,
        token_store=token_store,
        users=users,
        audit=audit,
        authorization=AuthorizationService(client_registry, code_store, audit),
        token_exchange=TokenExchangeService(client_registry, code_store, token_store, audit),
        userinfo=UserInfoService(token_store, profiles or users, audit),
    )
