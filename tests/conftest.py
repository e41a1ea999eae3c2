"""Shared fixtures for atlassian-mcp tests."""

import pytest

from tests.utils.factories import ConfigFactory


@pytest.fixture
def anyio_backend():
    """Run async tests on asyncio only."""
    return "asyncio"


@pytest.fixture
def atlassian_config():
    """A valid configuration with test credentials."""
    return ConfigFactory.create()

