"""
Utility functions for the atlassian-mcp integration.
This package provides various utility functions used throughout the codebase.
"""

from .adf import storage_body, text_to_adf
from .env import getenv, is_env_extended_truthy
from .io import is_read_only_mode
from .logging import log_config_param, mask_sensitive
from .urls import build_base_url, build_query_string

__all__ = [
    "build_base_url",
    "build_query_string",
    "getenv",
    "is_env_extended_truthy",
    "is_read_only_mode",
    "log_config_param",
    "mask_sensitive",
    "storage_body",
    "text_to_adf",
]
