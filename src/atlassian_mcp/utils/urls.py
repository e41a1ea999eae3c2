"""URL-related utility functions for atlassian-mcp."""

from urllib.parse import quote, urlencode


def build_base_url(domain: str) -> str:
    """Turn a configured domain into the API base URL.

    A domain that already carries a scheme is used verbatim; a bare
    hostname gets ``https://``.

    Args:
        domain: Bare hostname (``example.atlassian.net``) or full URL

    Returns:
        The base URL
    """
    if domain.startswith("http"):
        return domain
    return f"https://{domain}"


def build_query_string(params: list[tuple[str, str]]) -> str:
    """Percent-encode query parameters, keeping commas readable.

    Args:
        params: Ordered (name, value) pairs

    Returns:
        The query string including the leading ``?``, or an empty string
    """
    if not params:
        return ""
    return "?" + urlencode(params, quote_via=quote, safe=",")
