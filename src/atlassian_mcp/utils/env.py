"""Environment variable utility functions for atlassian-mcp."""

import os
from collections.abc import Mapping


def is_env_extended_truthy(
    env_var_name: str, default: str = "", env: Mapping[str, str] | None = None
) -> bool:
    """Check if environment variable is set to an extended truthy value.

    Considers 'true', '1', 'yes', 'y', 'on' as truthy values (case-insensitive).
    Used for READ_ONLY_MODE and similar flags.

    Args:
        env_var_name: Name of the environment variable to check
        default: Default value if environment variable is not set
        env: Mapping to read from instead of the process environment

    Returns:
        True if the environment variable is set to a truthy value, False otherwise
    """
    value = getenv(env_var_name, default, env=env) or ""
    return value.lower() in ("true", "1", "yes", "y", "on")


def getenv(
    env_var_name: str,
    default: str | None = None,
    env: Mapping[str, str] | None = None,
) -> str | None:
    """Retrieve the value of an environment variable.

    The lookup goes to `env` when one is given and to the process
    environment otherwise, so callers can substitute a fake environment
    without touching `os.environ`.

    Args:
        env_var_name: The name of the environment variable to retrieve.
        default: Value returned when the variable is absent.
        env: Optional mapping used in place of `os.environ`.

    Returns:
        The value of the environment variable if found, otherwise `default`.
    """
    source = os.environ if env is None else env
    return source.get(env_var_name, default)
