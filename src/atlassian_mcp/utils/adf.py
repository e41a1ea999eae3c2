"""
Request body wrappers for Atlassian rich-text fields.

Jira Cloud's v3 API takes descriptions and comments as Atlassian Document
Format (ADF) documents; Confluence takes page and comment bodies in the
storage representation.
"""

from typing import Any


def text_to_adf(text: str) -> dict[str, Any]:
    """
    Wrap plain text in a single-paragraph ADF document.

    Args:
        text: Plain text content

    Returns:
        ADF document dictionary
    """
    return {
        "type": "doc",
        "version": 1,
        "content": [
            {
                "type": "paragraph",
                "content": [{"type": "text", "text": text}],
            }
        ],
    }


def storage_body(value: str) -> dict[str, str]:
    """Wrap Confluence storage-format markup as a v2 API body."""
    return {"representation": "storage", "value": value}
