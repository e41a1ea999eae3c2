"""Confluence and Jira operations exposed as MCP tools."""

from . import confluence, jira
from .base import (
    Arguments,
    Operation,
    OperationRegistry,
    Param,
    Requester,
    execute,
    format_value,
    render,
)


def build_registry() -> OperationRegistry:
    """Build the registry holding every Confluence and Jira operation."""
    return OperationRegistry(confluence.OPERATIONS + jira.OPERATIONS)


registry = build_registry()

__all__ = [
    "Arguments",
    "Operation",
    "OperationRegistry",
    "Param",
    "Requester",
    "build_registry",
    "execute",
    "format_value",
    "registry",
    "render",
]
