"""Tests for the environment variable utilities."""

import os
from unittest.mock import patch

from atlassian_mcp.utils.env import getenv, is_env_extended_truthy


class TestGetenv:
    """Tests for getenv."""

    def test_reads_process_environment(self):
        with patch.dict(os.environ, {"ATLASSIAN_DOMAIN": "env.atlassian.net"}):
            assert getenv("ATLASSIAN_DOMAIN") == "env.atlassian.net"

    def test_missing_returns_default(self):
        with patch.dict(os.environ, clear=True):
            assert getenv("ATLASSIAN_DOMAIN") is None
            assert getenv("ATLASSIAN_DOMAIN", "fallback") == "fallback"

    def test_injected_mapping_wins_over_process_environment(self):
        with patch.dict(os.environ, {"ATLASSIAN_EMAIL": "process@example.com"}):
            assert getenv("ATLASSIAN_EMAIL", env={}) is None
            assert (
                getenv("ATLASSIAN_EMAIL", env={"ATLASSIAN_EMAIL": "fake@example.com"})
                == "fake@example.com"
            )


class TestIsEnvExtendedTruthy:
    """Tests for is_env_extended_truthy."""

    def test_truthy_values(self):
        for value in ("true", "True", "1", "yes", "Y", "on"):
            assert is_env_extended_truthy("FLAG", env={"FLAG": value}) is True

    def test_unset_uses_default(self):
        assert is_env_extended_truthy("FLAG", env={}) is False
        assert is_env_extended_truthy("FLAG", "yes", env={}) is True

    def test_other_values_are_false(self):
        assert is_env_extended_truthy("FLAG", env={"FLAG": "enabled"}) is False
