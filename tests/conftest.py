"""Pytest configuration and fixtures for redis_singleton tests."""

from __future__ import annotations

import sys
from pathlib import Path

# Add parent directory to Python path so we can import redis_singleton
sys.path.insert(0, str(Path(__file__).parent.parent))

import pytest

import redis_singleton
from redis_singleton.infrastructure.transport import RedisConnectionManager
from tests.doubles.fake_store_client import FakeClientFactory


@pytest.fixture
def client_factory() -> FakeClientFactory:
    """Factory building in-memory store clients."""
    return FakeClientFactory()


@pytest.fixture
def manager(client_factory) -> RedisConnectionManager:
    """Connection manager backed by fake clients."""
    return RedisConnectionManager(client_factory=client_factory)


@pytest.fixture
def default_manager(client_factory, monkeypatch):
    """Install a fake-backed manager as the process-wide default."""
    redis_singleton.reset_default_manager()
    installed = RedisConnectionManager(client_factory=client_factory)
    monkeypatch.setattr(redis_singleton.singleton, "_default_manager", installed)
    yield installed
    redis_singleton.reset_default_manager()


# Pytest configuration
def pytest_configure(config):
    """Configure pytest."""
    config.addinivalue_line("markers", "asyncio: mark test as an asyncio test")
