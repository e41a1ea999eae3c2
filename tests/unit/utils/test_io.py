"""Tests for the I/O utilities module."""

import os
from unittest.mock import patch

import pytest

from atlassian_mcp.utils.io import is_read_only_mode


def test_is_read_only_mode_default():
    """Test that is_read_only_mode returns False by default."""
    # Arrange - Make sure READ_ONLY_MODE is not set
    with patch.dict(os.environ, clear=True):
        # Act
        result = is_read_only_mode()

        # Assert
        assert result is False


@pytest.mark.parametrize("value", ["true", "TRUE", "1", "yes", "y", "on"])
def test_is_read_only_mode_truthy(value):
    """Test that every extended truthy spelling enables read-only mode."""
    with patch.dict(os.environ, {"READ_ONLY_MODE": value}):
        assert is_read_only_mode() is True


@pytest.mark.parametrize("value", ["false", "0", "no", "off", ""])
def test_is_read_only_mode_falsy(value):
    """Test that other values leave read-only mode disabled."""
    with patch.dict(os.environ, {"READ_ONLY_MODE": value}):
        assert is_read_only_mode() is False


def test_is_read_only_mode_injected_env():
    """Test that an injected mapping is used instead of the process environment."""
    with patch.dict(os.environ, {"READ_ONLY_MODE": "true"}):
        assert is_read_only_mode(env={}) is False
    assert is_read_only_mode(env={"READ_ONLY_MODE": "on"}) is True
