"""
Pytest configuration and fixtures.
"""

import os

os.environ.setdefault("OAUTH_SERVER__ENVIRONMENT", "test")

import httpx
import pytest
import pytest_asyncio

from oauth_server.core.config import Settings
from oauth_server.core.container import build_services
from oauth_server.main import create_app
from oauth_server.models import close_db, init_db
from oauth_server.schemas.oauth import OAuthClientCreate

CLIENT_ID = "client-c1"
CLIENT_SECRET = "secret-s1-value"
REDIRECT_URI = "https://app.example.com/cb"
USER_ID = "u42"
INTERNAL_KEY = "test-internal-key"


@pytest.fixture
def settings(tmp_path):
    """Настройки с отдельной SQLite базой на каждый тест."""
    return Settings(
        _env_file=None,
        environment="test",
        db_url=f"sqlite:///{tmp_path / 'oauth.db'}",
        internal_api_key=INTERNAL_KEY,
        bcrypt_rounds=4,
    )


@pytest_asyncio.fixture
async def services(settings):
    """Собранные сервисы с созданными таблицами."""
    services = build_services(settings)
    await init_db(services.engine)

    yield services

    await close_db(services.engine)


@pytest_asyncio.fixture
async def oauth_client(services):
    """Зарегистрированный включённый клиент."""
    return await services.client_registry.register_client(
        OAuthClientCreate(
            client_id=CLIENT_ID,
            client_secret=CLIENT_SECRET,
            name="Example App",
            redirect_uri=REDIRECT_URI,
            login_title="Sign in to Example App",
            login_form="<form></form>",
        )
    )


@pytest_asyncio.fixture
async def disabled_client(services):
    """Зарегистрированный, но выключенный клиент."""
    return await services.client_registry.register_client(
        OAuthClientCreate(
            client_id="client-disabled",
            client_secret="disabled-secret",
            name="Disabled App",
            redirect_uri="https://disabled.example.com/cb",
            enabled=False,
        )
    )


@pytest_asyncio.fixture
async def user(services):
    """Пользователь, от имени которого выдаются коды."""
    return await services.users.create_user(
        first_name="Ada",
        last_name="Lovelace",
        email="ada@example.com",
        user_id=USER_ID,
    )


@pytest_asyncio.fixture
async def http_client(settings, services):
    """HTTP клиент поверх ASGI приложения."""
    app = create_app(settings, services)
    transport = httpx.ASGITransport(app=app)

    async with httpx.AsyncClient(transport=transport, base_url="http://testserver") as client:
        yield client
