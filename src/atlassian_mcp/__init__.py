import asyncio
import os
import sys

import click
from dotenv import load_dotenv

__version__ = "0.1.0"

from .config import ConfigOptions, resolve_config
from .exceptions import ConfigurationError
from .logging_config import log_operation, setup_logger
from .utils.io import is_read_only_mode

logger = setup_logger()


@click.command()
@click.option(
    "-c",
    "--config",
    "config_path",
    help="Path to a JSON config file (default: ~/.atlassian-mcp.json)",
)
@click.option(
    "-d",
    "--domain",
    help="Atlassian domain (e.g., your-domain.atlassian.net)",
)
@click.option("-e", "--email", help="Atlassian account email")
@click.option("-t", "--token", help="Atlassian API token")
@click.option(
    "--env-file", type=click.Path(exists=True, dir_okay=False), help="Path to .env file"
)
@click.option(
    "-v",
    "--verbose",
    count=True,
    help="Increase verbosity (can be used multiple times)",
)
@click.option(
    "--log-dir",
    help="Directory to store log files",
)
@click.option(
    "--read-only/--no-read-only",
    default=None,
    help="Hide and refuse write operations (default: READ_ONLY_MODE)",
)
@click.version_option(__version__, prog_name="atlassian-mcp")
def main(
    config_path: str | None,
    domain: str | None,
    email: str | None,
    token: str | None,
    env_file: str | None,
    verbose: int,
    log_dir: str | None,
    read_only: bool | None,
) -> None:
    """Atlassian MCP Server - Confluence and Jira Cloud tools for MCP."""
    # Configure logging based on verbosity
    logging_level = None
    if verbose == 1:
        logging_level = "INFO"
    elif verbose >= 2:
        logging_level = "DEBUG"

    # Load environment variables from file if specified, otherwise try default .env
    if env_file:
        load_dotenv(env_file)
    else:
        load_dotenv()

    log_directory = log_dir or os.getenv("LOG_DIR")
    setup_logger(
        name="atlassian-mcp",
        level=logging_level,
        log_to_file=bool(log_directory),
        log_dir=log_directory,
    )

    try:
        config = resolve_config(
            ConfigOptions(
                config_path=config_path,
                domain=domain,
                email=email,
                api_token=token,
            ),
            env=os.environ,
        )
    except ConfigurationError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)

    with log_operation(logger, "application_startup", app_version=__version__):
        if read_only is None:
            read_only = is_read_only_mode()

        from . import server

        logger.info(f"Starting atlassian-mcp v{__version__} with stdio transport")
        asyncio.run(server.run_server(config, read_only=read_only))


__all__ = ["main", "__version__", "setup_logger", "log_operation"]

if __name__ == "__main__":
    main()
