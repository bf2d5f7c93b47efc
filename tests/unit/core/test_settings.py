"""
Unit tests for application settings.
"""

import pytest
from pydantic import ValidationError

from app.config.settings import Settings


@pytest.mark.unit
def test_database_url_from_parts():
    settings = Settings(DATABASE_URL=None, DB_USER="app", DB_PASSWORD="p@ss word", DB_HOST="db", DB_NAME="crm")

    assert settings.database_url == "postgresql+asyncpg://app:p%40ss+word@db:5432/crm"


@pytest.mark.unit
def test_database_url_override():
    settings = Settings(DATABASE_URL="sqlite+aiosqlite:///:memory:")

    assert settings.database_url == "sqlite+aiosqlite:///:memory:"


@pytest.mark.unit
@pytest.mark.parametrize(
    ("url", "expected"),
    [
        ("postgresql+asyncpg://app@db:5432/crm", "postgresql://app@db:5432/crm"),
        ("sqlite+aiosqlite:///:memory:", "sqlite:///:memory:"),
    ],
)
def test_sync_database_url_drops_async_driver(url, expected):
    assert Settings(DATABASE_URL=url).sync_database_url == expected


@pytest.mark.unit
def test_is_development():
    assert Settings(ENVIRONMENT="dev", DEBUG=False).is_development is True
    assert Settings(ENVIRONMENT="production", DEBUG=False).is_development is False


@pytest.mark.unit
@pytest.mark.parametrize(
    "overrides",
    [
        {"LOG_FORMAT": "xml"},
        {"DB_POOL_SIZE": 0},
        {"CUSTOMER_PAGE_SIZE_MAX": 5000},
    ],
)
def test_invalid_settings_are_rejected(overrides):
    with pytest.raises(ValidationError):
        Settings(**overrides)
