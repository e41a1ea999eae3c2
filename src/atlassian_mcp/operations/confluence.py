"""Confluence Cloud operations.

Spaces, search and labels still go through the v1 REST API
(``/wiki/rest/api``); pages and comments use the v2 API (``/wiki/api/v2``).
"""

from typing import Any

from ..utils.adf import storage_body
from .base import Arguments, Operation, Param

V1 = "/wiki/rest/api"
V2 = "/wiki/api/v2"

PAGE_ID = Param("pageId", description="The ID of the page", required=True)
CURSOR = Param("cursor", description="Cursor for pagination", query=True)


def _create_page_body(args: Arguments) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "spaceId": args["spaceId"],
        "status": "current",
        "title": args["title"],
        "body": storage_body(args["body"]),
    }
    if args.get("parentId"):
        payload["parentId"] = args["parentId"]
    return payload


def _update_page_body(args: Arguments) -> dict[str, Any]:
    return {
        "id": args["pageId"],
        "status": "current",
        "title": args["title"],
        "body": storage_body(args["body"]),
        "version": {"number": int(args["version"]) + 1},
    }


def _add_comment_body(args: Arguments) -> dict[str, Any]:
    # A reply names only its parent comment; a top-level comment names the page
    payload: dict[str, Any] = {"body": storage_body(args["body"])}
    if args.get("parentCommentId"):
        payload["parentCommentId"] = args["parentCommentId"]
    else:
        payload["pageId"] = args["pageId"]
    return payload


def _delete_page_message(args: Arguments) -> str:
    where = " (permanently)" if args.get("purge") else " (moved to trash)"
    return f"Page {args['pageId']} deleted successfully{where}"


OPERATIONS: tuple[Operation, ...] = (
    Operation(
        name="confluence_list_spaces",
        description="List all Confluence spaces. Returns space keys, names, and types.",
        path=f"{V1}/space",
        params=(
            Param(
                "limit",
                "number",
                "Maximum number of spaces to return (default: 25)",
                default=25,
                query=True,
            ),
            Param(
                "start",
                "number",
                "Starting index for pagination (default: 0)",
                default=0,
                query=True,
            ),
        ),
    ),
    Operation(
        name="confluence_list_pages",
        description="List pages in a Confluence space. Returns page titles, IDs, and metadata.",
        path=f"{V2}/pages",
        params=(
            Param(
                "spaceId",
                description="The ID of the space to list pages from",
                query=True,
            ),
            Param(
                "limit",
                "number",
                "Maximum number of pages to return (default: 50, max: 250)",
                default=50,
                query=True,
            ),
            Param(
                "status",
                description="Filter by status: current, archived, or trashed",
                default="current",
                enum=("current", "archived", "trashed"),
                query=True,
            ),
            CURSOR,
        ),
    ),
    Operation(
        name="confluence_create_page",
        description=(
            "Create a new page in Confluence. Requires space ID, title, and content "
            "in storage format."
        ),
        method="POST",
        path=f"{V2}/pages",
        params=(
            Param(
                "spaceId",
                description="The ID of the space where the page will be created",
                required=True,
            ),
            Param("title", description="The title of the new page", required=True),
            Param(
                "body",
                description=(
                    "The content of the page in Confluence storage format "
                    "(HTML-like format)"
                ),
                required=True,
            ),
            Param("parentId", description="Optional parent page ID to create as a child page"),
        ),
        body=_create_page_body,
        write=True,
    ),
    Operation(
        name="confluence_update_page",
        description=(
            "Update an existing Confluence page. Requires page ID, new title, and content."
        ),
        method="PUT",
        path=f"{V2}/pages/{{pageId}}",
        params=(
            Param("pageId", description="The ID of the page to update", required=True),
            Param("title", description="The new title for the page", required=True),
            Param(
                "body",
                description=(
                    "The new content in Confluence storage format (HTML-like format)"
                ),
                required=True,
            ),
            Param(
                "version",
                "number",
                "The current version number of the page (incremented automatically)",
                required=True,
            ),
        ),
        body=_update_page_body,
        write=True,
    ),
    Operation(
        name="confluence_search",
        description=(
            "Search Confluence content using CQL (Confluence Query Language). "
            "Returns matching pages, blog posts, and other content."
        ),
        path=f"{V1}/search",
        params=(
            Param(
                "cql",
                description=(
                    "CQL query string (e.g., 'type=page AND space=DEV', "
                    "'title~\"documentation\"')"
                ),
                required=True,
                query=True,
            ),
            Param(
                "limit",
                "number",
                "Maximum number of results to return (default: 25)",
                default=25,
                query=True,
            ),
            Param(
                "start",
                "number",
                "Starting index for pagination (default: 0)",
                default=0,
                query=True,
            ),
            Param(
                "expand",
                description=(
                    "Comma-separated list of properties to expand "
                    "(e.g., 'body.storage,metadata.labels')"
                ),
                query=True,
            ),
        ),
    ),
    Operation(
        name="confluence_get_page",
        description=(
            "Get a single page by ID with detailed information. Supports single body format."
        ),
        path=f"{V2}/pages/{{pageId}}",
        params=(
            Param("pageId", description="The ID of the page to retrieve", required=True),
            Param(
                "bodyFormat",
                description=(
                    "Body format to retrieve: storage, view, atlas_doc_format, "
                    "export_view, anonymous_export_view, styled_view, editor "
                    "(default: 'storage')"
                ),
                default="storage",
                query=True,
                query_name="body-format",
            ),
        ),
    ),
    Operation(
        name="confluence_get_page_children",
        description="Get child pages of a specific page. Returns a list of direct children.",
        path=f"{V2}/pages/{{pageId}}/children",
        params=(
            Param("pageId", description="The ID of the parent page", required=True),
            Param(
                "limit",
                "number",
                "Maximum number of children to return (default: 25, max: 250)",
                default=25,
                query=True,
            ),
            CURSOR,
            Param(
                "sort",
                description="Sort field (e.g., 'title', 'created-date')",
                query=True,
            ),
        ),
    ),
    Operation(
        name="confluence_get_comments",
        description=(
            "Get footer comments on a page. Returns comments with their content and metadata."
        ),
        path=f"{V2}/pages/{{pageId}}/footer-comments",
        params=(
            PAGE_ID,
            Param(
                "bodyFormat",
                description="Body format for comment content: storage, view (default: storage)",
                default="storage",
                query=True,
                query_name="body-format",
            ),
            Param(
                "limit",
                "number",
                "Maximum number of comments to return (default: 25)",
                default=25,
                query=True,
            ),
            CURSOR,
        ),
    ),
    Operation(
        name="confluence_get_labels",
        description="Get labels attached to a page. Returns label names and prefixes.",
        path=f"{V2}/pages/{{pageId}}/labels",
        params=(
            PAGE_ID,
            Param(
                "limit",
                "number",
                "Maximum number of labels to return (default: 25, max: 250)",
                default=25,
                query=True,
            ),
            Param(
                "prefix",
                description=(
                    "Filter by label prefix: my, team, global, system "
                    "(default: returns all)"
                ),
                query=True,
            ),
            CURSOR,
            Param("sort", description="Sort field", query=True),
        ),
    ),
    Operation(
        name="confluence_search_user",
        description=(
            "Search for users using CQL. Returns user information including account ID, "
            "display name, and email."
        ),
        path=f"{V1}/search/user",
        params=(
            Param(
                "cql",
                description=(
                    "CQL query for user search (e.g., 'user.fullname~\"John\"', "
                    "'user.accountid=\"123\"')"
                ),
                required=True,
                query=True,
            ),
            Param(
                "limit",
                "number",
                "Maximum number of users to return (default: 25)",
                default=25,
                query=True,
            ),
            Param(
                "start",
                "number",
                "Starting index for pagination (default: 0)",
                default=0,
                query=True,
            ),
        ),
    ),
    Operation(
        name="confluence_delete_page",
        description=(
            "Delete a page. By default, moves to trash. Use purge option for permanent deletion."
        ),
        method="DELETE",
        path=f"{V2}/pages/{{pageId}}",
        params=(
            Param("pageId", description="The ID of the page to delete", required=True),
            Param(
                "purge",
                "boolean",
                (
                    "If true, permanently delete the page. If false, move to trash "
                    "(default: false)"
                ),
                query=True,
            ),
        ),
        message=_delete_page_message,
        write=True,
    ),
    Operation(
        name="confluence_add_label",
        description=(
            "Add one or more labels to a page. Labels help organize and categorize content."
        ),
        method="POST",
        path=f"{V1}/content/{{pageId}}/label",
        params=(
            PAGE_ID,
            Param(
                "labels",
                "array",
                (
                    "Array of labels to add "
                    "(e.g., [{'prefix': 'global', 'name': 'important'}])"
                ),
                required=True,
                items={
                    "type": "object",
                    "properties": {
                        "prefix": {
                            "type": "string",
                            "description": "Label prefix (usually 'global')",
                        },
                        "name": {"type": "string", "description": "Label name"},
                    },
                    "required": ["prefix", "name"],
                },
            ),
        ),
        body=lambda args: args["labels"],
        write=True,
    ),
    Operation(
        name="confluence_add_comment",
        description=(
            "Add a footer comment to a page. Can be a top-level comment or a reply to "
            "another comment."
        ),
        method="POST",
        path=f"{V2}/footer-comments",
        params=(
            Param("pageId", description="The ID of the page to comment on", required=True),
            Param(
                "body",
                description="Comment content in storage format (HTML-like format)",
                required=True,
            ),
            Param(
                "parentCommentId",
                description="Optional: ID of parent comment to create a reply",
            ),
        ),
        body=_add_comment_body,
        write=True,
    ),
)
