"""Logging setup for atlassian-mcp.

Handlers write to stderr only: stdout carries the MCP protocol stream.

Each tool call runs inside ``log_operation``, which stores the tool name
and a short trace id in a context variable. Every record passing through
our handlers is stamped with that context, including records emitted on
the worker thread that performs the HTTP call.
"""

import logging
import os
import sys
import time
import types
import uuid
from contextvars import ContextVar, Token
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any

DEFAULT_FORMAT = "%(asctime)s [%(levelname)s] [%(name)s] [%(context)s] %(message)s"
DEFAULT_LOG_LEVEL = "WARNING"
MAX_LOG_SIZE = 10 * 1024 * 1024  # 10 MB
LOG_BACKUP_COUNT = 5

# Never mutated in place; log_operation installs a fresh dict
_log_context: ContextVar[dict[str, Any]] = ContextVar("atlassian_mcp_log_context")


def current_context() -> dict[str, Any]:
    """Return a copy of the logging context of the running task or thread."""
    return dict(_log_context.get({}))


def format_context(context: dict[str, Any]) -> str:
    """Render context as ``key=value`` pairs, or ``no-context``."""
    if not context:
        return "no-context"
    return ",".join(f"{key}={value}" for key, value in context.items())


class ContextFilter(logging.Filter):
    """Adds the current operation context to each record as ``context``."""

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "context"):
            record.context = format_context(_log_context.get({}))
        return True


class OperationLog:
    """Scope one operation: sets the log context and records its duration."""

    def __init__(self, logger: logging.Logger, operation: str, **context: Any) -> None:
        self.logger = logger
        self.operation = operation
        self.trace_id = context.pop("trace_id", None) or uuid.uuid4().hex[:8]
        self.context = context
        self.start_time = 0.0
        self._token: Token[dict[str, Any]] | None = None

    def __enter__(self) -> "OperationLog":
        scoped = current_context()
        scoped.update(self.context)
        scoped["operation"] = self.operation
        scoped["trace_id"] = self.trace_id
        self._token = _log_context.set(scoped)

        self.start_time = time.perf_counter()
        self.logger.debug(f"{self.operation} started")
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: types.TracebackType | None,
    ) -> None:
        elapsed = time.perf_counter() - self.start_time
        try:
            if exc_type is None:
                self.logger.debug(f"{self.operation} finished in {elapsed:.3f}s")
            else:
                self.logger.error(
                    f"{self.operation} failed after {elapsed:.3f}s: {exc_val}"
                )
        finally:
            if self._token is not None:
                _log_context.reset(self._token)
                self._token = None


def log_operation(logger: logging.Logger, operation: str, **context: Any) -> OperationLog:
    """
    Create a scope for logging one operation.

    Args:
        logger: Logger that receives the start, finish and failure records
        operation: Name of the operation (e.g. ``call_tool``)
        **context: Extra key-value pairs shown with every record in scope;
            pass ``trace_id`` to reuse an existing id

    Returns:
        The context manager
    """
    return OperationLog(logger, operation, **context)


def setup_logger(
    name: str = "atlassian-mcp",
    level: str | None = None,
    log_to_file: bool = False,
    log_dir: str | None = None,
    log_format: str | None = None,
) -> logging.Logger:
    """
    Configure the named logger with a stderr handler and an optional log file.

    Calling it again for the same name replaces the handlers from the
    previous call, so the CLI can reconfigure the logger set up at import.

    Args:
        name: Logger name; child loggers (``atlassian-mcp.client`` ...)
            propagate to it
        level: Level name; defaults to LOG_LEVEL, then WARNING
        log_to_file: Also write to ``<log_dir>/<name>.log``, rotated at 10 MB
        log_dir: Directory for the log file; defaults to LOG_DIR
        log_format: Format string; defaults to LOG_FORMAT, then DEFAULT_FORMAT

    Returns:
        The configured logger
    """
    logger = logging.getLogger(name)

    level_name = (level or os.getenv("LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()
    # getLevelName maps a known name to its number and anything else to a string
    level_value = logging.getLevelName(level_name)
    logger.setLevel(level_value if isinstance(level_value, int) else logging.WARNING)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(log_format or os.getenv("LOG_FORMAT") or DEFAULT_FORMAT)
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]

    directory = log_dir or os.getenv("LOG_DIR")
    if log_to_file and directory:
        log_path = Path(directory)
        log_path.mkdir(parents=True, exist_ok=True)
        handlers.append(
            RotatingFileHandler(
                log_path / f"{name}.log",
                maxBytes=MAX_LOG_SIZE,
                backupCount=LOG_BACKUP_COUNT,
                encoding="utf-8",
            )
        )

    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(ContextFilter())
        logger.addHandler(handler)

    # Records stay off the root logger, whose default handler could be stdout
    logger.propagate = False
    return logger
