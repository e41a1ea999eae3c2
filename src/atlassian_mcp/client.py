"""Base client module for Atlassian Cloud API interactions."""

import base64
import logging
from typing import Any

import requests

from .config import AtlassianConfig
from .exceptions import TransportError
from .utils.urls import build_base_url

# Configure logging
logger = logging.getLogger("atlassian-mcp.client")


class AtlassianClient:
    """Authenticated client shared by every Confluence and Jira operation."""

    def __init__(
        self, config: AtlassianConfig, session: requests.Session | None = None
    ) -> None:
        """Initialize the client with a resolved configuration.

        Args:
            config: Validated Atlassian configuration
            session: Optional requests session; its connection pool is shared
                by concurrent calls
        """
        self.config = config
        self._base_url = build_base_url(config.domain)
        self.session = session or requests.Session()

    @property
    def base_url(self) -> str:
        """Base URL every request path is appended to."""
        return self._base_url

    def _authorization(self) -> str:
        credentials = f"{self.config.email}:{self.config.api_token}"
        encoded = base64.b64encode(credentials.encode("utf-8")).decode("ascii")
        return f"Basic {encoded}"

    def request(
        self,
        path: str,
        method: str = "GET",
        json: Any = None,
        data: str | bytes | None = None,
        headers: dict[str, str] | None = None,
    ) -> Any:
        """Make an authenticated request to the Atlassian API.

        Args:
            path: Root-relative API path, including any query string
            method: HTTP method (GET, POST, PUT, DELETE)
            json: Request body, serialized as JSON
            data: Pre-serialized request body, sent as is
            headers: Extra headers; these win over the defaults

        Returns:
            The parsed JSON response, or None for a response without content

        Raises:
            TransportError: If the API answers with a non-2xx status
            requests.exceptions.RequestException: If the request cannot be sent
        """
        url = f"{self.base_url}{path}"

        request_headers = {
            "Authorization": self._authorization(),
            "Accept": "application/json",
            "Content-Type": "application/json",
        }
        if headers:
            request_headers.update(headers)

        logger.debug(f"{method} {path}")
        response = self.session.request(
            method,
            url,
            headers=request_headers,
            json=json,
            data=data,
        )

        if not 200 <= response.status_code < 300:
            logger.error(f"Atlassian API error: {method} {path} -> {response.status_code}")
            raise TransportError(response.status_code, response.text)

        if response.status_code == 204 or response.headers.get("content-length") == "0":
            return None

        return response.json()
