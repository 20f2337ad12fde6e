"""
Тесты для scripts/init_db.py.
"""

import importlib.util
from pathlib import Path

import pytest

from oauth_server.core.container import build_services

SCRIPT_PATH = Path(__file__).resolve().parent.parent / "scripts" / "init_db.py"


@pytest.fixture
def init_db_script(settings, monkeypatch):
    """Загрузить скрипт с тестовыми настройками."""
    spec = importlib.util.spec_from_file_location("init_db_script", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    monkeypatch.setattr(module, "settings", settings)
    return module


@pytest.mark.asyncio
async def test_register_client(init_db_script, settings):
    """Тест создания таблиц и регистрации клиента."""
    exit_code = await init_db_script.main(
        [
            "--client-id", "cli-client",
            "--client-secret", "cli-secret-value",
            "--redirect-uri", "https://cli.example.com/cb",
        ]
    )

    assert exit_code == 0

    services = build_services(settings)
    try:
        assert await services.client_registry.verify_client(
            "cli-client", "https://cli.example.com/cb"
        ) is True
        assert await services.client_registry.verify_credentials(
            "cli-client", "cli-secret-value"
        ) is True
    finally:
        await services.engine.dispose()


@pytest.mark.asyncio
async def test_invalid_redirect_uri(init_db_script):
    """Тест что относительный redirect URI отклоняется."""
    exit_code = await init_db_script.main(
        [
            "--client-id", "cli-client",
            "--client-secret", "cli-secret-value",
            "--redirect-uri", "/relative",
        ]
    )

    assert exit_code == 1
