"""Declarative operation table and the generic executor behind every tool."""

import json
import logging
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import Any, Protocol
from urllib.parse import quote

from mcp.types import Tool

from ..exceptions import UnknownOperationError
from ..utils.urls import build_query_string

logger = logging.getLogger("atlassian-mcp.operations")

_PLACEHOLDER = re.compile(r"\{(\w+)\}")


class Requester(Protocol):
    """Anything with the AtlassianClient.request signature."""

    def request(
        self,
        path: str,
        method: str = "GET",
        json: Any = None,
        data: str | bytes | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any: ...


Arguments = dict[str, Any]


@dataclass(frozen=True)
class Param:
    """One tool argument, with its JSON schema and where it goes in the request."""

    name: str
    type: str = "string"
    description: str = ""
    required: bool = False
    default: Any = None
    items: dict[str, Any] | None = None
    enum: tuple[str, ...] | None = None
    query: bool = False  # Sent as a query parameter
    query_name: str | None = None  # Query key when it differs from `name`

    def schema(self) -> dict[str, Any]:
        """JSON schema fragment for this argument."""
        schema: dict[str, Any] = {"type": self.type}
        if self.description:
            schema["description"] = self.description
        if self.items is not None:
            schema["items"] = self.items
        if self.enum is not None:
            schema["enum"] = list(self.enum)
        return schema

    def check(self, value: Any) -> None:
        """Reject a value whose shape does not match the declared type.

        Raises:
            ValueError: If an array or object argument is malformed
        """
        if self.type == "array":
            if not isinstance(value, list):
                raise ValueError(f"Parameter {self.name} must be an array")
            for index, item in enumerate(value):
                _check_item(f"{self.name}[{index}]", item, self.items or {})
        elif self.type == "object":
            _check_item(self.name, value, self.schema())


def _check_item(label: str, value: Any, schema: dict[str, Any]) -> None:
    expected = schema.get("type")
    if expected == "string" and not isinstance(value, str):
        raise ValueError(f"{label} must be a string")
    if expected == "object":
        if not isinstance(value, dict):
            raise ValueError(f"{label} must be an object")
        missing = [key for key in schema.get("required", ()) if value.get(key) is None]
        if missing:
            raise ValueError(
                f"{label} is missing required fields: {', '.join(missing)}"
            )


@dataclass(frozen=True)
class Operation:
    """A named tool mapped onto one Atlassian REST call.

    ``path`` may embed ``{param}`` placeholders. ``body`` builds the JSON
    payload from the arguments. Operations that need more than one call
    supply a ``handler`` instead. ``message`` replaces the JSON output with
    a fixed confirmation for calls that return no content.
    """

    name: str
    description: str
    method: str = "GET"
    path: str = ""
    params: tuple[Param, ...] = ()
    body: Callable[[Arguments], Any] | None = None
    handler: Callable[[Requester, Arguments], Any] | None = None
    message: Callable[[Arguments], str] | None = None
    write: bool = False

    def input_schema(self) -> dict[str, Any]:
        """JSON schema describing the tool's arguments."""
        schema: dict[str, Any] = {
            "type": "object",
            "properties": {param.name: param.schema() for param in self.params},
        }
        required = [param.name for param in self.params if param.required]
        if required:
            schema["required"] = required
        return schema

    def to_tool(self) -> Tool:
        """Describe this operation as an MCP tool."""
        return Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.input_schema(),
        )

    def prepare(self, arguments: Arguments | None) -> Arguments:
        """Check required arguments and their shapes, and fill in defaults.

        Raises:
            ValueError: If a required argument is missing, or an array
                argument is not a list of the declared items
        """
        args = dict(arguments or {})
        missing = [
            param.name
            for param in self.params
            if param.required and args.get(param.name) is None
        ]
        if missing:
            raise ValueError(f"Missing required parameters: {', '.join(missing)}")

        for param in self.params:
            if args.get(param.name) is None:
                if param.default is not None:
                    args[param.name] = param.default
            else:
                param.check(args[param.name])
        return args

    def build_path(self, args: Arguments) -> str:
        """Substitute path placeholders and append the query string."""
        path = _PLACEHOLDER.sub(
            lambda match: quote(format_value(args[match.group(1)]), safe=""),
            self.path,
        )

        query: list[tuple[str, str]] = []
        for param in self.params:
            if not param.query:
                continue
            value = args.get(param.name)
            if value is None or value is False or value == "" or value == []:
                continue
            query.append((param.query_name or param.name, format_value(value)))

        return path + build_query_string(query)


def format_value(value: Any) -> str:
    """Render an argument for a URL: lists comma-joined, whole floats as ints."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, list | tuple):
        return ",".join(format_value(item) for item in value)
    return str(value)


def render(data: Any) -> str:
    """Pretty-print an API response as tool output."""
    return json.dumps(data, indent=2, ensure_ascii=False)


def execute(client: Requester, operation: Operation, arguments: Arguments | None) -> str:
    """Run an operation and return the tool's text output.

    Args:
        client: Authenticated client
        operation: The operation to run
        arguments: Raw tool arguments

    Returns:
        JSON text of the response, or the operation's confirmation message

    Raises:
        ValueError: If a required argument is missing
        TransportError: If the API answers with a non-2xx status
    """
    args = operation.prepare(arguments)

    if operation.handler is not None:
        data = operation.handler(client, args)
    else:
        body = operation.body(args) if operation.body is not None else None
        data = client.request(
            operation.build_path(args), method=operation.method, json=body
        )

    if operation.message is not None:
        return operation.message(args)
    return render(data)


class OperationRegistry:
    """Name-to-operation map built once at startup."""

    def __init__(self, operations: Iterable[Operation] = ()) -> None:
        self._operations: dict[str, Operation] = {}
        for operation in operations:
            self.register(operation)

    def register(self, operation: Operation) -> None:
        """Add an operation.

        Raises:
            ValueError: If an operation with the same name exists
        """
        if operation.name in self._operations:
            raise ValueError(f"Duplicate operation name: {operation.name}")
        self._operations[operation.name] = operation

    def get(self, name: str) -> Operation:
        """Look up an operation by tool name.

        Raises:
            UnknownOperationError: If no operation has that name
        """
        try:
            return self._operations[name]
        except KeyError:
            raise UnknownOperationError(name) from None

    def names(self) -> list[str]:
        return list(self._operations)

    def operations(self, include_writes: bool = True) -> list[Operation]:
        return [
            operation
            for operation in self._operations.values()
            if include_writes or not operation.write
        ]

    def tools(self, include_writes: bool = True) -> list[Tool]:
        """MCP tool descriptions, optionally without write operations."""
        return [operation.to_tool() for operation in self.operations(include_writes)]

    def __contains__(self, name: object) -> bool:
        return name in self._operations

    def __len__(self) -> int:
        return len(self._operations)
