"""Pytest configuration and shared fixtures."""

from unittest.mock import AsyncMock

import pytest

from linear_toon.config.settings import LinearSettings
from linear_toon.graphql.operations import DEFAULT_OPERATIONS
from linear_toon.tools import ToolContext, ToolRegistry, default_tools


@pytest.fixture
def settings() -> LinearSettings:
    """Settings with a test API key."""
    return LinearSettings(api_key="lin_api_test_key")


@pytest.fixture
def client() -> AsyncMock:
    """Transport double; tests set ``execute`` return values or side effects."""
    transport = AsyncMock()
    transport.execute = AsyncMock(return_value={})
    return transport


@pytest.fixture
def operations():
    return DEFAULT_OPERATIONS


@pytest.fixture
def context(client: AsyncMock) -> ToolContext:
    return ToolContext(client)


@pytest.fixture
def registry(context: ToolContext) -> ToolRegistry:
    return ToolRegistry(default_tools(), context)
