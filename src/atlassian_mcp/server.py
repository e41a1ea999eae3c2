import logging
import math
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import dataclass, field
from typing import Any

import anyio
import requests
from mcp.server import Server
from mcp.types import CallToolResult, TextContent, Tool

from .client import AtlassianClient
from .config import AtlassianConfig
from .exceptions import ReadOnlyModeError, TransportError, UnknownOperationError
from .logging_config import log_operation
from .operations import OperationRegistry, Requester, execute, registry
from .utils.logging import log_config_param

# Configure logging
logger = logging.getLogger("atlassian-mcp.server")

SERVER_NAME = "atlassian-mcp"

# Failures reported to the caller as an error result instead of propagating
TOOL_ERRORS = (
    TransportError,
    UnknownOperationError,
    ReadOnlyModeError,
    ValueError,
    requests.exceptions.RequestException,
)


@dataclass
class AppContext:
    """Application context for atlassian-mcp."""

    client: Requester
    read_only: bool = False
    registry: OperationRegistry = field(default=registry)
    # Worker-thread limiter for tool calls; None uses anyio's default of 40
    limiter: anyio.CapacityLimiter | None = None


@dataclass(frozen=True)
class ToolResult:
    """Outcome of one tool call: response text, flagged when it is an error."""

    text: str
    is_error: bool = False

    def to_call_tool_result(self) -> CallToolResult:
        return CallToolResult(
            content=[TextContent(type="text", text=self.text)],
            isError=self.is_error,
        )


def dispatch(
    client: Requester,
    name: str,
    arguments: dict[str, Any] | None,
    read_only: bool = False,
    registry: OperationRegistry = registry,
) -> ToolResult:
    """Run the named tool and turn any expected failure into an error result.

    Args:
        client: Authenticated client
        name: Tool name
        arguments: Raw tool arguments
        read_only: Refuse write operations when True
        registry: Operation table to look the name up in

    Returns:
        The tool's output, or ``Error: <message>`` flagged as an error
    """
    try:
        operation = registry.get(name)
        if read_only and operation.write:
            raise ReadOnlyModeError(name)
        return ToolResult(execute(client, operation, arguments))
    except TOOL_ERRORS as e:
        logger.error(f"Tool execution error: {name}: {e}")
        return ToolResult(f"Error: {e}", is_error=True)


async def handle_list_tools(ctx: AppContext) -> list[Tool]:
    """List available tools, leaving out writes in read-only mode."""
    tools = ctx.registry.tools(include_writes=not ctx.read_only)
    logger.debug(f"Listing {len(tools)} tools")
    return tools


async def handle_call_tool(
    ctx: AppContext, name: str, arguments: dict[str, Any] | None
) -> CallToolResult:
    """Run a tool call on a worker thread so concurrent calls overlap."""
    with log_operation(logger, "call_tool", tool=name):
        logger.info(f"Calling tool {name}")
        result = await anyio.to_thread.run_sync(
            dispatch,
            ctx.client,
            name,
            arguments,
            ctx.read_only,
            ctx.registry,
            limiter=ctx.limiter,
        )
    return result.to_call_tool_result()


def create_app(config: AtlassianConfig, read_only: bool = False) -> Server:
    """Create the MCP server for a resolved configuration.

    One client is created when the session starts and shared by every
    tool call. Tool calls are not capped: each gets its own worker thread.
    """

    @asynccontextmanager
    async def server_lifespan(server: Server) -> AsyncIterator[AppContext]:
        """Initialize and clean up application resources."""
        logger.info("Starting atlassian-mcp server")
        logger.info(f"Read-only mode: {'ENABLED' if read_only else 'DISABLED'}")
        log_config_param(logger, "Atlassian", "Domain", config.domain)
        log_config_param(logger, "Atlassian", "Email", config.email)
        log_config_param(
            logger, "Atlassian", "API Token", config.api_token, sensitive=True
        )

        client = AtlassianClient(config)
        try:
            yield AppContext(
                client=client,
                read_only=read_only,
                limiter=anyio.CapacityLimiter(math.inf),
            )
        finally:
            client.session.close()

    app = Server(SERVER_NAME, lifespan=server_lifespan)

    @app.list_tools()
    async def list_tools() -> list[Tool]:
        return await handle_list_tools(app.request_context.lifespan_context)

    # Arguments are checked by the operation itself
    @app.call_tool(validate_input=False)
    async def call_tool(name: str, arguments: dict[str, Any]) -> CallToolResult:
        return await handle_call_tool(
            app.request_context.lifespan_context, name, arguments
        )

    return app


async def run_server(config: AtlassianConfig, read_only: bool = False) -> None:
    """Run the atlassian-mcp server over stdio."""
    from mcp.server.stdio import stdio_server

    app = create_app(config, read_only=read_only)
    async with stdio_server() as (read_stream, write_stream):
        await app.run(read_stream, write_stream, app.create_initialization_options())
