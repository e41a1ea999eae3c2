"""I/O utility functions for atlassian-mcp."""

from collections.abc import Mapping

from .env import is_env_extended_truthy


def is_read_only_mode(env: Mapping[str, str] | None = None) -> bool:
    """Check if the server is running in read-only mode.

    Read-only mode prevents all write operations (create, update, delete)
    while allowing all read operations. This is useful for working with
    production Atlassian sites where you want to prevent accidental
    modifications.

    Args:
        env: Mapping to read READ_ONLY_MODE from instead of the process environment

    Returns:
        True if read-only mode is enabled, False otherwise
    """
    return is_env_extended_truthy("READ_ONLY_MODE", "false", env=env)
