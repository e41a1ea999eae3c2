class AtlassianMCPError(Exception):
    """Base exception for atlassian-mcp errors."""

    pass


class ConfigurationError(AtlassianMCPError):
    """Raised when credentials cannot be resolved into a valid configuration.

    Fatal: raised before any network activity and never caught by the
    tool dispatch boundary.
    """

    def __init__(self, message: str, missing: tuple[str, ...] = ()) -> None:
        super().__init__(message)
        self.missing = tuple(missing)


class TransportError(AtlassianMCPError):
    """Raised when the Atlassian API answers with a non-2xx status.

    The raw response body is kept verbatim so the server's own error
    detail reaches the caller.
    """

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"Atlassian API error ({status_code}): {body}")
        self.status_code = status_code
        self.body = body


class UnknownOperationError(AtlassianMCPError):
    """Raised when a tool name has no entry in the operation table."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown tool: {name}")
        self.name = name


class ReadOnlyModeError(AtlassianMCPError):
    """Raised when a write operation is requested in read-only mode."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Operation '{name}' is not available in read-only mode.")
        self.name = name
