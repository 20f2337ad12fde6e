"""
Integration тесты для ClientRegistry.
"""

import pytest

from oauth_server.core.container import build_services
from oauth_server.schemas.oauth import OAuthClientCreate
from tests.conftest import CLIENT_ID, CLIENT_SECRET, REDIRECT_URI


class TestClientRegistry:
    """Тесты для ClientRegistry."""

    @pytest.mark.asyncio
    async def test_find_by_client_id(self, services, oauth_client):
        """Тест поиска клиента по client_id."""
        client = await services.client_registry.find_by_client_id(CLIENT_ID)

        assert client is not None
        assert client.redirect_uri == REDIRECT_URI
        assert client.login_title == "Sign in to Example App"
        assert client.client_secret_hash != CLIENT_SECRET

    @pytest.mark.asyncio
    async def test_find_unknown_client(self, services, oauth_client):
        """Тест что неизвестный клиент не найден."""
        assert await services.client_registry.find_by_client_id("nope") is None

    @pytest.mark.asyncio
    async def test_register_duplicate_client(self, services, oauth_client):
        """Тест что client_id уникален."""
        with pytest.raises(ValueError):
            await services.client_registry.register_client(
                OAuthClientCreate(
                    client_id=CLIENT_ID,
                    client_secret="another-secret",
                    name="Duplicate",
                    redirect_uri="https://other.example.com/cb",
                )
            )

    @pytest.mark.asyncio
    async def test_verify_client(self, services, oauth_client):
        """Тест проверки клиента и redirect URI."""
        registry = services.client_registry

        assert await registry.verify_client(CLIENT_ID, REDIRECT_URI) is True
        assert await registry.verify_client(CLIENT_ID, REDIRECT_URI + "/other") is False
        assert await registry.verify_client(CLIENT_ID, REDIRECT_URI.upper()) is False
        assert await registry.verify_client("unknown-client", REDIRECT_URI) is False

    @pytest.mark.asyncio
    async def test_verify_disabled_client(self, services, disabled_client):
        """Тест что выключенный клиент не проходит проверку."""
        assert await services.client_registry.verify_client(
            "client-disabled", "https://disabled.example.com/cb"
        ) is False

    @pytest.mark.asyncio
    async def test_verify_credentials(self, services, oauth_client):
        """Тест проверки client_id / client_secret."""
        registry = services.client_registry

        assert await registry.verify_credentials(CLIENT_ID, CLIENT_SECRET) is True
        assert await registry.verify_credentials(CLIENT_ID, "wrong-secret") is False
        assert await registry.verify_credentials("unknown-client", CLIENT_SECRET) is False

    @pytest.mark.asyncio
    async def test_verify_credentials_ignores_enabled_flag(self, services, disabled_client):
        """Тест что проверка секрета не смотрит на флаг enabled."""
        assert await services.client_registry.verify_credentials(
            "client-disabled", "disabled-secret"
        ) is True

    @pytest.mark.asyncio
    async def test_secret_hash_uses_injected_rounds(self, settings, services, oauth_client):
        """Тест что стоимость bcrypt берётся из переданных настроек."""
        assert oauth_client.client_secret_hash.startswith("$2b$04$")

        costly = build_services(
            settings.model_copy(update={"bcrypt_rounds": 5}), engine=services.engine
        )
        client = await costly.client_registry.register_client(
            OAuthClientCreate(
                client_id="client-costly",
                client_secret="costly-secret",
                name="Costly App",
                redirect_uri="https://costly.example.com/cb",
            )
        )

        assert client.client_secret_hash.startswith("$2b$05$")
        assert await services.client_registry.verify_credentials(
            "client-costly", "costly-secret"
        ) is True

    @pytest.mark.asyncio
    async def test_verify_credentials_with_nul_byte(self, services, oauth_client):
        """Тест что секрет с NUL байтом отклоняется как неверный."""
        assert await services.client_registry.verify_credentials(
            CLIENT_ID, "bad\x00secret"
        ) is False
