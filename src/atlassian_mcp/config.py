"""Configuration module for atlassian-mcp.

Credentials come from three tiers, highest priority last:

1. a JSON config file (explicit ``--config`` path or the first existing
   default location)
2. the ``ATLASSIAN_*`` environment variables
3. explicit arguments (command-line options)
"""

import json
import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path

from .exceptions import ConfigurationError
from .utils.env import getenv

logger = logging.getLogger("atlassian-mcp.config")

# Keys as they appear in the config file, in reporting order
CONFIG_FIELDS = ("domain", "email", "apiToken")

ENV_VARS = {
    "domain": "ATLASSIAN_DOMAIN",
    "email": "ATLASSIAN_EMAIL",
    "apiToken": "ATLASSIAN_API_TOKEN",
}

DEFAULT_CONFIG_PATHS = (
    "~/.atlassian-mcp.json",
    "~/.config/atlassian-mcp/config.json",
    ".atlassian-mcp.json",
)

CONFIG_HELP = (
    "Configuration can be provided via:\n"
    "  1. Command-line arguments: --domain, --email, --token\n"
    "  2. Environment variables: ATLASSIAN_DOMAIN, ATLASSIAN_EMAIL, ATLASSIAN_API_TOKEN\n"
    "  3. Config file: ~/.atlassian-mcp.json or --config <path>\n"
)


@dataclass(frozen=True)
class AtlassianConfig:
    """Resolved Atlassian Cloud credentials."""

    domain: str  # Bare hostname or full URL
    email: str  # Account email, used as the Basic auth username
    api_token: str = field(repr=False)  # API token, used as the Basic auth password

    def __post_init__(self) -> None:
        missing = tuple(
            key
            for key, value in zip(
                CONFIG_FIELDS, (self.domain, self.email, self.api_token), strict=True
            )
            if not value
        )
        if missing:
            raise ConfigurationError(
                f"Missing required configuration: {', '.join(missing)}",
                missing=missing,
            )


@dataclass(frozen=True)
class ConfigOptions:
    """Explicit configuration values, usually taken from the command line."""

    config_path: str | None = None
    domain: str | None = None
    email: str | None = None
    api_token: str | None = None


def expand_path(path: str, home: str | Path | None = None, cwd: str | Path | None = None) -> Path:
    """Expand a leading ``~`` and make the path absolute.

    Args:
        path: Path as given by the user or taken from the defaults
        home: Home directory used for ``~`` (defaults to the current user's)
        cwd: Directory relative paths are resolved against

    Returns:
        The absolute path
    """
    home_dir = Path(home) if home is not None else Path.home()
    base_dir = Path(cwd) if cwd is not None else Path.cwd()

    if path == "~":
        return home_dir
    if path.startswith("~/") or path.startswith("~" + os.sep):
        return home_dir / path[2:]
    return base_dir / path


def _exists(path: Path) -> bool:
    """Check for a file, treating only "not found" as absence."""
    try:
        path.stat()
    except (FileNotFoundError, NotADirectoryError):
        return False
    except OSError as e:
        raise ConfigurationError(f"Failed to parse config file {path}: {e}") from e
    return True


def load_config_file(
    config_path: str, home: str | Path | None = None, cwd: str | Path | None = None
) -> dict[str, str] | None:
    """Load credentials from a JSON config file.

    Args:
        config_path: Path to the file; a leading ``~`` is expanded
        home: Home directory used for ``~`` expansion
        cwd: Directory relative paths are resolved against

    Returns:
        Mapping with ``domain``, ``email`` and ``apiToken``, or None when
        there is no file at the path

    Raises:
        ConfigurationError: If the file cannot be read, is not valid JSON,
            or lacks any of the required fields
    """
    expanded = expand_path(config_path, home=home, cwd=cwd)
    if not _exists(expanded):
        logger.debug(f"No config file at {expanded}")
        return None

    try:
        content = json.loads(expanded.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise ConfigurationError(
            f"Failed to parse config file {expanded}: {e}"
        ) from e

    if not isinstance(content, dict):
        content = {}

    missing = tuple(key for key in CONFIG_FIELDS if not content.get(key))
    if missing:
        raise ConfigurationError(
            f"Config file {expanded} missing required fields: {', '.join(missing)}",
            missing=missing,
        )

    invalid = tuple(key for key in CONFIG_FIELDS if not isinstance(content[key], str))
    if invalid:
        raise ConfigurationError(
            f"Config file {expanded} has non-string fields: {', '.join(invalid)}"
        )

    logger.debug(f"Loaded config file {expanded}")
    return {key: content[key] for key in CONFIG_FIELDS}


def resolve_config(
    options: ConfigOptions | None = None,
    env: Mapping[str, str] | None = None,
    home: str | Path | None = None,
    cwd: str | Path | None = None,
) -> AtlassianConfig:
    """Merge the file, environment and explicit tiers into one configuration.

    Args:
        options: Explicit values; these win over every other source
        env: Environment mapping (defaults to the process environment)
        home: Home directory used for ``~`` expansion
        cwd: Directory relative config paths are resolved against

    Returns:
        A validated AtlassianConfig

    Raises:
        ConfigurationError: If a config file is malformed or incomplete, or
            if any field is still missing after all tiers are applied
    """
    options = options or ConfigOptions()
    values: dict[str, str] = {}

    # 1. Config file
    if options.config_path:
        file_values = load_config_file(options.config_path, home=home, cwd=cwd)
        if file_values:
            logger.info(f"Using config file {options.config_path}")
            values.update(file_values)
    else:
        for candidate in DEFAULT_CONFIG_PATHS:
            if not _exists(expand_path(candidate, home=home, cwd=cwd)):
                continue
            file_values = load_config_file(candidate, home=home, cwd=cwd)
            if file_values:
                logger.info(f"Using config file {candidate}")
                values.update(file_values)
            break

    # 2. Environment variables
    for key, env_var in ENV_VARS.items():
        env_value = getenv(env_var, env=env)
        if env_value:
            values[key] = env_value

    # 3. Explicit arguments
    explicit = {
        "domain": options.domain,
        "email": options.email,
        "apiToken": options.api_token,
    }
    for key, value in explicit.items():
        if value:
            values[key] = value

    missing = tuple(key for key in CONFIG_FIELDS if not values.get(key))
    if missing:
        raise ConfigurationError(
            f"Missing required configuration: {', '.join(missing)}\n\n{CONFIG_HELP}",
            missing=missing,
        )

    return AtlassianConfig(
        domain=values["domain"],
        email=values["email"],
        api_token=values["apiToken"],
    )
