"""Jira Cloud operations.

Platform calls use the v3 REST API (``/rest/api/3``), whose rich-text
fields take ADF documents; boards, sprints, epics and ranking use the
Agile API (``/rest/agile/1.0``).
"""

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Any

from ..utils.adf import text_to_adf
from ..utils.urls import build_query_string
from .base import Arguments, Operation, Param, Requester

logger = logging.getLogger("atlassian-mcp.jira")

API = "/rest/api/3"
AGILE = "/rest/agile/1.0"

DEFAULT_SEARCH_FIELDS = ["summary", "status", "assignee", "created", "updated"]
EPIC_LINK_TYPE = "Epic-Story Link"

ISSUE_KEY = Param("issueKey", description="The issue key (e.g., 'PROJ-123')", required=True)
PROJECT_KEY = Param("projectKey", description="The project key (e.g., 'PROJ')", required=True)
BOARD_ID = Param("boardId", "number", "The board ID", required=True)
STRING_LIST = {"type": "string"}


def _max_results(default: int, what: str = "issues") -> Param:
    return Param(
        "maxResults",
        "number",
        f"Maximum number of {what} to return (default: {default})",
        default=default,
        query=True,
    )


START_AT = Param(
    "startAt",
    "number",
    "Starting index for pagination (default: 0)",
    default=0,
    query=True,
)
FIELDS = Param(
    "fields",
    "array",
    "Specific fields to return",
    items=STRING_LIST,
    query=True,
)


def _fan_out(func: Any, items: list[Any]) -> list[Any]:
    """Run ``func`` over ``items`` concurrently, keeping input order.

    Every item gets its own worker. The first failure, in input order, is
    raised.
    """
    if not items:
        return []
    with ThreadPoolExecutor(max_workers=len(items)) as executor:
        futures = [executor.submit(func, item) for item in items]
        return [future.result() for future in futures]


# ---------------------------------------------------------------------------
# Body builders
# ---------------------------------------------------------------------------


def _issue_fields(args: Arguments, require_core: bool = True) -> dict[str, Any]:
    """Map flat issue arguments onto the Jira ``fields`` object."""
    fields: dict[str, Any] = {}

    if require_core:
        fields["project"] = {"key": args["projectKey"]}
        fields["issuetype"] = {"name": args["issueType"]}
        fields["summary"] = args["summary"]
    elif args.get("summary"):
        fields["summary"] = args["summary"]

    if args.get("description"):
        fields["description"] = text_to_adf(args["description"])
    if args.get("priority"):
        fields["priority"] = {"name": args["priority"]}

    labels = args.get("labels")
    if require_core:
        if labels:
            fields["labels"] = labels
    elif labels is not None:
        # Replaces the existing labels, so an empty list clears them
        fields["labels"] = labels

    if args.get("assignee"):
        fields["assignee"] = {"accountId": args["assignee"]}
    if args.get("parentKey"):
        fields["parent"] = {"key": args["parentKey"]}
    return fields


def _search_body(args: Arguments) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "jql": args["jql"],
        "maxResults": args["maxResults"],
        "fields": args.get("fields") or DEFAULT_SEARCH_FIELDS,
    }
    if args.get("nextPageToken"):
        payload["nextPageToken"] = args["nextPageToken"]
    return payload


def _transition_body(args: Arguments) -> dict[str, Any]:
    payload: dict[str, Any] = {"transition": {"id": str(args["transitionId"])}}
    if args.get("comment"):
        payload["update"] = {
            "comment": [{"add": {"body": text_to_adf(args["comment"])}}]
        }
    return payload


def _worklog_body(args: Arguments) -> dict[str, Any]:
    payload: dict[str, Any] = {"timeSpentSeconds": args["timeSpentSeconds"]}
    if args.get("comment"):
        payload["comment"] = text_to_adf(args["comment"])
    if args.get("started"):
        payload["started"] = args["started"]
    return payload


def _issue_link_body(args: Arguments) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "type": {"name": args["type"]},
        "inwardIssue": {"key": args["inwardIssue"]},
        "outwardIssue": {"key": args["outwardIssue"]},
    }
    if args.get("comment"):
        payload["comment"] = {"body": text_to_adf(args["comment"])}
    return payload


def _version_body(project_key: str, version: Arguments) -> dict[str, Any]:
    payload: dict[str, Any] = {
        "name": version["name"],
        "project": project_key,
        "released": bool(version.get("released", False)),
    }
    if version.get("description"):
        payload["description"] = version["description"]
    if version.get("releaseDate"):
        payload["releaseDate"] = version["releaseDate"]
    return payload


def _optional_fields(args: Arguments, names: tuple[str, ...]) -> dict[str, Any]:
    return {name: args[name] for name in names if args.get(name)}


def _create_sprint_body(args: Arguments) -> dict[str, Any]:
    payload: dict[str, Any] = {"name": args["name"], "originBoardId": args["boardId"]}
    payload.update(_optional_fields(args, ("startDate", "endDate", "goal")))
    return payload


# ---------------------------------------------------------------------------
# Composite handlers
# ---------------------------------------------------------------------------


def _get_project_issues(client: Requester, args: Arguments) -> Any:
    # The JQL search endpoint paginates by token, so startAt is not forwarded
    search_args = {
        "jql": f"project = {args['projectKey']} ORDER BY created DESC",
        "maxResults": args["maxResults"],
        "fields": args.get("fields"),
    }
    return client.request(
        f"{API}/search/jql", method="POST", json=_search_body(search_args)
    )


def _batch_get_changelogs(client: Requester, args: Arguments) -> list[Any]:
    def fetch(issue_key: str) -> Any:
        path = f"{API}/issue/{issue_key}" + build_query_string([("expand", "changelog")])
        return client.request(path)

    return _fan_out(fetch, list(args["issueKeys"]))


def _batch_create_issues(client: Requester, args: Arguments) -> Any:
    issue_updates = [{"fields": _issue_fields(issue)} for issue in args["issues"]]
    return client.request(
        f"{API}/issue/bulk", method="POST", json={"issueUpdates": issue_updates}
    )


def _link_to_epic(client: Requester, args: Arguments) -> None:
    for issue_key in args["issueKeys"]:
        client.request(
            f"{API}/issueLink",
            method="POST",
            json=_issue_link_body(
                {
                    "type": EPIC_LINK_TYPE,
                    "inwardIssue": issue_key,
                    "outwardIssue": args["epicKey"],
                }
            ),
        )


def _create_board(client: Requester, args: Arguments) -> Any:
    filter_id = args.get("filterId")

    # A board needs a saved filter; create one scoped to the project
    if not filter_id:
        filter_payload = {
            "name": f"Filter for {args['name']}",
            "jql": f"project = {args['projectKeyOrId']} ORDER BY Rank ASC",
            "description": f"Automatically created filter for board {args['name']}",
        }
        created = client.request(f"{API}/filter", method="POST", json=filter_payload)
        if not isinstance(created, dict) or not created.get("id"):
            raise ValueError(
                f"Filter creation for board {args['name']} returned no filter id"
            )
        filter_id = created["id"]
        logger.info(f"Created filter {filter_id} for board {args['name']}")

    payload = {"name": args["name"], "type": args["type"], "filterId": filter_id}
    return client.request(f"{AGILE}/board", method="POST", json=payload)


def _rank_backlog_issues(client: Requester, args: Arguments) -> None:
    for issue_key in args["issueKeys"]:
        payload: dict[str, Any] = {"issues": [issue_key]}
        if args.get("rankBeforeIssue"):
            payload["rankBeforeIssue"] = args["rankBeforeIssue"]
        elif args.get("rankAfterIssue"):
            payload["rankAfterIssue"] = args["rankAfterIssue"]
        client.request(f"{AGILE}/issue/rank", method="PUT", json=payload)


def _batch_create_versions(client: Requester, args: Arguments) -> list[Any]:
    project_key = args["projectKey"]

    def create(version: Arguments) -> Any:
        return client.request(
            f"{API}/version", method="POST", json=_version_body(project_key, version)
        )

    return _fan_out(create, list(args["versions"]))


# ---------------------------------------------------------------------------
# Operation table
# ---------------------------------------------------------------------------

_ISSUE_INPUT_PROPERTIES = {
    "projectKey": {"type": "string"},
    "issueType": {"type": "string"},
    "summary": {"type": "string"},
    "description": {"type": "string"},
    "priority": {"type": "string"},
    "labels": {"type": "array", "items": STRING_LIST},
    "assignee": {"type": "string"},
}

OPERATIONS: tuple[Operation, ...] = (
    Operation(
        name="jira_list_projects",
        description=(
            "List all Jira projects accessible to the user. Returns project keys, "
            "names, and types."
        ),
        path=f"{API}/project/search",
        params=(_max_results(50, "projects"), START_AT),
    ),
    Operation(
        name="jira_search_issues",
        description=(
            "Search for Jira issues using JQL (Jira Query Language). Returns issue keys, "
            "summaries, and fields."
        ),
        method="POST",
        path=f"{API}/search/jql",
        params=(
            Param(
                "jql",
                description="JQL query string (e.g., 'project = PROJ AND status = Open')",
                required=True,
            ),
            Param(
                "maxResults",
                "number",
                "Maximum number of issues to return (default: 50, max: 5000)",
                default=50,
            ),
            Param(
                "nextPageToken",
                description="Token for pagination to get next page of results",
            ),
            Param(
                "fields",
                "array",
                (
                    "Specific fields to return "
                    "(default: summary, status, assignee, created, updated)"
                ),
                items=STRING_LIST,
            ),
        ),
        body=_search_body,
    ),
    Operation(
        name="jira_create_issue",
        description="Create a new Jira issue. Requires project key, issue type, and summary.",
        method="POST",
        path=f"{API}/issue",
        params=(
            PROJECT_KEY,
            Param(
                "issueType",
                description="The issue type name (e.g., 'Task', 'Bug', 'Story')",
                required=True,
            ),
            Param("summary", description="Brief summary of the issue", required=True),
            Param("description", description="Detailed description of the issue"),
            Param("priority", description="Priority name (e.g., 'High', 'Medium', 'Low')"),
            Param(
                "labels",
                "array",
                "Array of labels to add to the issue",
                items=STRING_LIST,
            ),
            Param("assignee", description="Account ID of the assignee"),
            Param(
                "parentKey",
                description="Parent issue key, for sub-tasks or issues under an epic",
            ),
        ),
        body=lambda args: {"fields": _issue_fields(args)},
        write=True,
    ),
    Operation(
        name="jira_update_issue",
        description=(
            "Update an existing Jira issue. Can modify summary, description, status, "
            "and other fields."
        ),
        method="PUT",
        path=f"{API}/issue/{{issueKey}}",
        params=(
            ISSUE_KEY,
            Param("summary", description="New summary for the issue"),
            Param("description", description="New description for the issue"),
            Param("priority", description="New priority name"),
            Param(
                "labels",
                "array",
                "New labels (replaces existing)",
                items=STRING_LIST,
            ),
            Param("assignee", description="Account ID of the new assignee"),
            Param("parentKey", description="New parent issue key"),
        ),
        body=lambda args: {"fields": _issue_fields(args, require_core=False)},
        message=lambda args: f"Issue {args['issueKey']} updated successfully",
        write=True,
    ),
    Operation(
        name="jira_delete_issue",
        description="Delete a Jira issue. Optionally deletes its subtasks as well.",
        method="DELETE",
        path=f"{API}/issue/{{issueKey}}",
        params=(
            Param(
                "issueKey",
                description="The issue key to delete (e.g., 'PROJ-123')",
                required=True,
            ),
            Param(
                "deleteSubtasks",
                "boolean",
                "Whether to delete subtasks if they exist (default: false)",
                query=True,
            ),
        ),
        message=lambda args: f"Issue {args['issueKey']} deleted successfully",
        write=True,
    ),
    Operation(
        name="jira_get_issue",
        description="Get a single issue by key with its fields, and optionally its changelog.",
        path=f"{API}/issue/{{issueKey}}",
        params=(
            ISSUE_KEY,
            Param(
                "fields",
                "array",
                "Specific fields to return (default: all fields)",
                items=STRING_LIST,
                query=True,
            ),
            Param(
                "expand",
                "array",
                "Additional properties to expand (e.g., 'changelog', 'renderedFields')",
                items=STRING_LIST,
                query=True,
            ),
        ),
    ),
    Operation(
        name="jira_get_transitions",
        description="Get the transitions currently available for an issue.",
        path=f"{API}/issue/{{issueKey}}/transitions",
        params=(ISSUE_KEY,),
    ),
    Operation(
        name="jira_transition_issue",
        description="Move an issue to a new status by performing a transition.",
        method="POST",
        path=f"{API}/issue/{{issueKey}}/transitions",
        params=(
            ISSUE_KEY,
            Param(
                "transitionId",
                description="The ID of the transition to perform",
                required=True,
            ),
            Param("comment", description="Optional comment to add when transitioning"),
        ),
        body=_transition_body,
        message=lambda args: f"Issue {args['issueKey']} transitioned successfully",
        write=True,
    ),
    Operation(
        name="jira_add_comment",
        description="Add a comment to a Jira issue. Comments support plain text.",
        method="POST",
        path=f"{API}/issue/{{issueKey}}/comment",
        params=(
            ISSUE_KEY,
            Param("body", description="The comment text", required=True),
        ),
        body=lambda args: {"body": text_to_adf(args["body"])},
        write=True,
    ),
    Operation(
        name="jira_get_worklog",
        description=(
            "Get all worklog entries for an issue. Returns time spent, author, and dates."
        ),
        path=f"{API}/issue/{{issueKey}}/worklog",
        params=(ISSUE_KEY, _max_results(1000, "worklogs"), START_AT),
    ),
    Operation(
        name="jira_add_worklog",
        description=(
            "Add a worklog entry to an issue. Records time spent working on the issue."
        ),
        method="POST",
        path=f"{API}/issue/{{issueKey}}/worklog",
        params=(
            ISSUE_KEY,
            Param(
                "timeSpentSeconds",
                "number",
                "Time spent in seconds (e.g., 3600 for 1 hour)",
                required=True,
            ),
            Param("comment", description="Optional description of work done"),
            Param(
                "started",
                description=(
                    "Start time in ISO 8601 format (e.g., '2024-01-15T10:00:00.000+0000')"
                ),
            ),
        ),
        body=_worklog_body,
        write=True,
    ),
    Operation(
        name="jira_get_issue_link_types",
        description=(
            "Get all available issue link types. Returns link type names, "
            "inward/outward descriptions."
        ),
        path=f"{API}/issueLinkType",
    ),
    Operation(
        name="jira_create_issue_link",
        description="Create a link between two issues (e.g., 'Blocks', 'Relates').",
        method="POST",
        path=f"{API}/issueLink",
        params=(
            Param(
                "type",
                description="The link type name (e.g., 'Blocks', 'Relates')",
                required=True,
            ),
            Param(
                "inwardIssue",
                description="The inward issue key (e.g., 'PROJ-123')",
                required=True,
            ),
            Param(
                "outwardIssue",
                description="The outward issue key (e.g., 'PROJ-456')",
                required=True,
            ),
            Param("comment", description="Optional comment about the link"),
        ),
        body=_issue_link_body,
        message=lambda args: (
            "Issue link created successfully between "
            f"{args['inwardIssue']} and {args['outwardIssue']}"
        ),
        write=True,
    ),
    Operation(
        name="jira_get_project_versions",
        description="Get all versions (releases) of a project.",
        path=f"{API}/project/{{projectKey}}/versions",
        params=(PROJECT_KEY,),
    ),
    Operation(
        name="jira_create_version",
        description=(
            "Create a new version/release in a project. Used for release management."
        ),
        method="POST",
        path=f"{API}/version",
        params=(
            PROJECT_KEY,
            Param(
                "name",
                description="Version name (e.g., 'v1.0.0', 'Release 2024.1')",
                required=True,
            ),
            Param("description", description="Optional version description"),
            Param("releaseDate", description="Optional release date in YYYY-MM-DD format"),
            Param(
                "released",
                "boolean",
                "Whether the version is released (default: false)",
            ),
        ),
        body=lambda args: _version_body(args["projectKey"], args),
        write=True,
    ),
    Operation(
        name="jira_get_project_issues",
        description=(
            "Get all issues for a specific project. Returns issues ordered by creation date."
        ),
        params=(
            PROJECT_KEY,
            Param(
                "maxResults",
                "number",
                "Maximum number of issues to return (default: 50)",
                default=50,
            ),
            Param(
                "startAt",
                "number",
                "Starting index for pagination (default: 0)",
            ),
            Param("fields", "array", "Specific fields to return", items=STRING_LIST),
        ),
        handler=_get_project_issues,
    ),
    Operation(
        name="jira_search_fields",
        description=(
            "Search for custom fields in Jira. Returns field IDs, names, and schemas."
        ),
        path=f"{API}/field/search",
        params=(
            _max_results(50, "fields"),
            START_AT,
            Param("query", description="Query string to search field names", query=True),
        ),
    ),
    Operation(
        name="jira_get_agile_boards",
        description=(
            "Get all agile boards. Can filter by project. Returns board names and types."
        ),
        path=f"{AGILE}/board",
        params=(
            _max_results(50, "boards"),
            START_AT,
            Param(
                "projectKeyOrId",
                description="Filter by project key or ID",
                query=True,
            ),
        ),
    ),
    Operation(
        name="jira_create_board",
        description=(
            "Create a new agile board (Scrum or Kanban). The board can be created for a "
            "specific project or based on a filter."
        ),
        method="POST",
        path=f"{AGILE}/board",
        params=(
            Param("name", description="Board name", required=True),
            Param(
                "type",
                description="Board type: 'scrum' or 'kanban'",
                required=True,
                enum=("scrum", "kanban"),
            ),
            Param(
                "projectKeyOrId",
                description="Project key or ID to associate with the board",
                required=True,
            ),
            Param(
                "filterId",
                "number",
                "Optional: Filter ID to base the board on (instead of project)",
            ),
        ),
        handler=_create_board,
        write=True,
    ),
    Operation(
        name="jira_update_board",
        description=(
            "Update an existing board. Can modify board name or filter. "
            "Note: Cannot change board type."
        ),
        method="PUT",
        path=f"{AGILE}/board/{{boardId}}/configuration",
        params=(
            Param("boardId", "number", "The board ID to update", required=True),
            Param("name", description="New board name"),
            Param("filterId", "number", "New filter ID"),
        ),
        body=lambda args: _optional_fields(args, ("name", "filterId")),
        write=True,
    ),
    Operation(
        name="jira_delete_board",
        description="Delete an agile board. Issues on the board are not deleted.",
        method="DELETE",
        path=f"{AGILE}/board/{{boardId}}",
        params=(Param("boardId", "number", "The board ID to delete", required=True),),
        message=lambda args: f"Board {args['boardId']} deleted successfully",
        write=True,
    ),
    Operation(
        name="jira_get_board_issues",
        description="Get issues on an agile board, optionally filtered with JQL.",
        path=f"{AGILE}/board/{{boardId}}/issue",
        params=(
            BOARD_ID,
            _max_results(50),
            START_AT,
            Param("jql", description="Optional JQL filter for issues", query=True),
        ),
    ),
    Operation(
        name="jira_get_sprints_from_board",
        description="Get the sprints of an agile board, optionally filtered by state.",
        path=f"{AGILE}/board/{{boardId}}/sprint",
        params=(
            BOARD_ID,
            _max_results(50, "sprints"),
            START_AT,
            Param(
                "state",
                description="Filter by sprint state: active, future, closed",
                query=True,
            ),
        ),
    ),
    Operation(
        name="jira_get_sprint_issues",
        description="Get all issues in a specific sprint. Returns issue details and status.",
        path=f"{AGILE}/sprint/{{sprintId}}/issue",
        params=(
            Param("sprintId", "number", "The sprint ID", required=True),
            _max_results(50),
            START_AT,
            FIELDS,
        ),
    ),
    Operation(
        name="jira_batch_get_changelogs",
        description=(
            "Batch get changelogs for multiple issues. Returns complete change history "
            "for each issue."
        ),
        params=(
            Param(
                "issueKeys",
                "array",
                "Array of issue keys (e.g., ['PROJ-1', 'PROJ-2'])",
                required=True,
                items=STRING_LIST,
            ),
        ),
        handler=_batch_get_changelogs,
    ),
    Operation(
        name="jira_get_user_profile",
        description=(
            "Get user profile information by account ID. Returns display name, email, "
            "and avatar."
        ),
        path=f"{API}/user",
        params=(
            Param(
                "accountId",
                description="The user's account ID",
                required=True,
                query=True,
            ),
        ),
    ),
    Operation(
        name="jira_download_attachments",
        description=(
            "Get attachment information including download URL. Returns attachment "
            "metadata and content URL."
        ),
        path=f"{API}/attachment/{{attachmentId}}",
        params=(Param("attachmentId", description="The attachment ID", required=True),),
    ),
    Operation(
        name="jira_batch_create_issues",
        description=(
            "Create multiple issues in a single request. More efficient than creating "
            "one at a time."
        ),
        params=(
            Param(
                "issues",
                "array",
                "Array of issues to create",
                required=True,
                items={
                    "type": "object",
                    "properties": _ISSUE_INPUT_PROPERTIES,
                    "required": ["projectKey", "issueType", "summary"],
                },
            ),
        ),
        handler=_batch_create_issues,
        write=True,
    ),
    Operation(
        name="jira_link_to_epic",
        description=(
            "Link multiple issues to an epic. Creates Epic-Story links between issues "
            "and epic."
        ),
        params=(
            Param(
                "epicKey",
                description="The epic issue key (e.g., 'PROJ-123')",
                required=True,
            ),
            Param(
                "issueKeys",
                "array",
                "Array of issue keys to link to the epic",
                required=True,
                items=STRING_LIST,
            ),
        ),
        handler=_link_to_epic,
        message=lambda args: (
            f"Successfully linked {len(args['issueKeys'])} issues to epic {args['epicKey']}"
        ),
        write=True,
    ),
    Operation(
        name="jira_create_sprint",
        description=(
            "Create a new sprint on a board. Requires board ID, sprint name, and "
            "optional dates."
        ),
        method="POST",
        path=f"{AGILE}/sprint",
        params=(
            Param(
                "boardId",
                "number",
                "The board ID where sprint will be created",
                required=True,
            ),
            Param(
                "name",
                description="Sprint name (e.g., 'Sprint 1', 'Q1 Sprint')",
                required=True,
            ),
            Param(
                "startDate",
                description=(
                    "Start date in ISO 8601 format (e.g., '2024-01-15T10:00:00.000Z')"
                ),
            ),
            Param("endDate", description="End date in ISO 8601 format"),
            Param("goal", description="Sprint goal description"),
        ),
        body=_create_sprint_body,
        write=True,
    ),
    Operation(
        name="jira_update_sprint",
        description=(
            "Update an existing sprint. Can modify name, dates, goal, or state "
            "(start/close sprint)."
        ),
        method="PUT",
        path=f"{AGILE}/sprint/{{sprintId}}",
        params=(
            Param("sprintId", "number", "The sprint ID to update", required=True),
            Param("name", description="New sprint name"),
            Param("startDate", description="New start date in ISO 8601 format"),
            Param("endDate", description="New end date in ISO 8601 format"),
            Param("goal", description="New sprint goal"),
            Param("state", description="Sprint state: active, future, closed"),
        ),
        body=lambda args: _optional_fields(
            args, ("name", "startDate", "endDate", "goal", "state")
        ),
        write=True,
    ),
    Operation(
        name="jira_delete_sprint",
        description=(
            "Delete a sprint. Note: Can only delete sprints that have not been started "
            "(future state). Cannot delete active or closed sprints."
        ),
        method="DELETE",
        path=f"{AGILE}/sprint/{{sprintId}}",
        params=(Param("sprintId", "number", "The sprint ID to delete", required=True),),
        message=lambda args: f"Sprint {args['sprintId']} deleted successfully",
        write=True,
    ),
    Operation(
        name="jira_remove_issue_link",
        description="Remove/delete a link between two issues. Requires the link ID.",
        method="DELETE",
        path=f"{API}/issueLink/{{linkId}}",
        params=(Param("linkId", description="The issue link ID to remove", required=True),),
        message=lambda args: f"Issue link {args['linkId']} removed successfully",
        write=True,
    ),
    Operation(
        name="jira_move_issues_to_sprint",
        description=(
            "Move issues to a sprint. This is essential for sprint planning - add issues "
            "from backlog to sprint."
        ),
        method="POST",
        path=f"{AGILE}/sprint/{{sprintId}}/issue",
        params=(
            Param("sprintId", "number", "The sprint ID to move issues to", required=True),
            Param(
                "issues",
                "array",
                "Array of issue keys to move (e.g., ['PROJ-1', 'PROJ-2'])",
                required=True,
                items=STRING_LIST,
            ),
        ),
        body=lambda args: {"issues": args["issues"]},
        message=lambda args: (
            f"Successfully moved {len(args['issues'])} issues to sprint {args['sprintId']}"
        ),
        write=True,
    ),
    Operation(
        name="jira_get_backlog_issues",
        description=(
            "Get all issues in the backlog for a board. Returns issues that are not "
            "assigned to any sprint."
        ),
        path=f"{AGILE}/board/{{boardId}}/backlog",
        params=(
            BOARD_ID,
            _max_results(50),
            START_AT,
            Param("jql", description="Additional JQL filter", query=True),
            FIELDS,
        ),
    ),
    Operation(
        name="jira_rank_backlog_issues",
        description=(
            "Rank/reorder issues in the backlog. Used to adjust issue priority order "
            "before sprint planning. Specify either rankBeforeIssue or rankAfterIssue "
            "to position the issues."
        ),
        params=(
            Param(
                "issueKeys",
                "array",
                "Array of issue keys to rank (e.g., ['PROJ-1', 'PROJ-2'])",
                required=True,
                items=STRING_LIST,
            ),
            Param(
                "rankBeforeIssue",
                description="Rank the issues before this issue key (e.g., 'PROJ-10')",
            ),
            Param(
                "rankAfterIssue",
                description="Rank the issues after this issue key (e.g., 'PROJ-5')",
            ),
        ),
        handler=_rank_backlog_issues,
        message=lambda args: (
            f"Successfully ranked {len(args['issueKeys'])} issues in backlog"
        ),
        write=True,
    ),
    Operation(
        name="jira_get_epic_issues",
        description=(
            "Get all issues (stories, tasks, bugs) that belong to an epic. Returns child "
            "issues of the epic."
        ),
        path=f"{AGILE}/epic/{{epicIdOrKey}}/issue",
        params=(
            Param(
                "epicIdOrKey",
                description="The epic ID or key (e.g., 'PROJ-123')",
                required=True,
            ),
            _max_results(50),
            START_AT,
            FIELDS,
        ),
    ),
    Operation(
        name="jira_batch_create_versions",
        description=(
            "Create multiple versions/releases in a project. More efficient than "
            "creating one at a time."
        ),
        params=(
            Param("projectKey", description="The project key", required=True),
            Param(
                "versions",
                "array",
                "Array of versions to create",
                required=True,
                items={
                    "type": "object",
                    "properties": {
                        "name": {"type": "string"},
                        "description": {"type": "string"},
                        "releaseDate": {"type": "string"},
                        "released": {"type": "boolean"},
                    },
                    "required": ["name"],
                },
            ),
        ),
        handler=_batch_create_versions,
        write=True,
    ),
)
