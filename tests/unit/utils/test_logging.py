"""Tests for the secret-masking logging helpers."""

import logging
from unittest.mock import MagicMock

from atlassian_mcp.utils.logging import log_config_param, mask_sensitive


class TestMaskSensitive:
    def test_none_and_empty(self):
        assert mask_sensitive(None) == "Not Provided"
        assert mask_sensitive("") == "Not Provided"

    def test_short_value_fully_masked(self):
        assert mask_sensitive("abcd1234") == "********"

    def test_long_value_keeps_ends(self):
        assert mask_sensitive("ATATT3xFfGF0secret") == "ATAT**********cret"

    def test_custom_keep_chars(self):
        assert mask_sensitive("abcdefgh", keep_chars=2) == "ab****gh"


class TestLogConfigParam:
    def test_plain_value(self):
        logger = MagicMock(spec=logging.Logger)
        log_config_param(logger, "Atlassian", "Domain", "test.atlassian.net")
        logger.info.assert_called_once_with("Atlassian Domain: test.atlassian.net")

    def test_sensitive_value_is_masked(self):
        logger = MagicMock(spec=logging.Logger)
        log_config_param(
            logger, "Atlassian", "API Token", "ATATT3xFfGF0secret", sensitive=True
        )
        logger.info.assert_called_once_with("Atlassian API Token: ATAT**********cret")

    def test_missing_value(self):
        logger = MagicMock(spec=logging.Logger)
        log_config_param(logger, "Atlassian", "Email", None)
        logger.info.assert_called_once_with("Atlassian Email: Not Provided")
