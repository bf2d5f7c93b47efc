"""
Unit tests for the application lifecycle manager.
"""

from unittest.mock import AsyncMock, patch

import pytest

from app.config.settings import Settings
from app.core.lifecycle import LifecycleManager


@pytest.mark.unit
@pytest.mark.asyncio
async def test_development_startup_creates_tables():
    manager = LifecycleManager(Settings(ENVIRONMENT="development"))

    with (
        patch("app.core.lifecycle.create_tables", new=AsyncMock()) as create_tables,
        patch("app.core.lifecycle.dispose_async_engine", new=AsyncMock()) as dispose,
    ):
        await manager.startup()
        await manager.shutdown()

    create_tables.assert_awaited_once()
    dispose.assert_awaited_once()
    assert manager.initialized is False


@pytest.mark.unit
@pytest.mark.asyncio
async def test_production_startup_leaves_schema_alone():
    manager = LifecycleManager(Settings(ENVIRONMENT="production", DEBUG=False))

    with patch("app.core.lifecycle.create_tables", new=AsyncMock()) as create_tables:
        await manager.startup()
        await manager.startup()

    create_tables.assert_not_awaited()
    assert manager.initialized is True


@pytest.mark.unit
@pytest.mark.asyncio
async def test_shutdown_without_startup_is_noop():
    manager = LifecycleManager(Settings())

    with patch("app.core.lifecycle.dispose_async_engine", new=AsyncMock()) as dispose:
        await manager.shutdown()

    dispose.assert_not_awaited()
