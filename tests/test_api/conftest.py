"""Pytest configuration for API tests."""

import pytest


@pytest.fixture
def anyio_backend():
    """Configure anyio to use asyncio backend."""
    return "asyncio"


@pytest.fixture(autouse=True)
def reset_game_registry():
    """Reset the global registry between tests to avoid state pollution."""
    from deadline99.repositories.game_registry import game_registry

    game_registry.games.clear()
    game_registry.players.clear()

    yield

    game_registry.games.clear()
    game_registry.players.clear()
