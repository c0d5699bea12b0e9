"""Issue tools: get, search, create and update."""

from __future__ import annotations

from typing import Any

import structlog

from linear_toon.exceptions import NotFoundError
from linear_toon.models.requests import (
    CreateIssueRequest,
    GetIssueRequest,
    ListIssuesRequest,
    UpdateIssueRequest,
)
from linear_toon.resolution.filters import clamp_limit, include_archived
from linear_toon.tools.registry import ToolContext, ToolDefinition

log = structlog.get_logger(__name__)

DEFAULT_ORDER = "updatedAt"


async def get_issue(request: GetIssueRequest, context: ToolContext) -> dict[str, Any]:
    """Retrieve one issue by id or identifier (e.g. ``LIN-123``)."""
    data = await context.require_client().execute(context.operations.get_issue, {"id": request.id})
    issue = data.get("issue")
    if issue is None:
        raise NotFoundError("issue", request.id)
    return issue


async def list_issues(request: ListIssuesRequest, context: ToolContext) -> dict[str, Any]:
    """Search issues with optional filters and cursor pagination.

    Returns:
        ``nodes`` plus ``pageInfo`` (``hasNextPage``, ``endCursor``)
    """
    expression = context.filters.build(
        assignee=request.assignee,
        delegate=request.delegate,
        team=request.team,
        project=request.project,
        state=request.state,
        label=request.label,
        cycle=request.cycle,
        priority=request.priority,
        parent_id=request.parent_id,
        query=request.query,
        created_at=request.created_at,
        updated_at=request.updated_at,
    )

    variables: dict[str, Any] = {
        "first": clamp_limit(request.limit, context.default_limit, context.max_limit),
        "orderBy": request.order_by or DEFAULT_ORDER,
        "includeArchived": include_archived(request.include_archived),
    }
    if expression is not None:
        variables["filter"] = expression
    if request.cursor is not None:
        variables["after"] = request.cursor

    issues = await context.query(context.operations.search_issues, variables, root="issues")
    log.debug("issues_listed", count=len(issues.get("nodes") or []))
    return issues


async def create_issue(request: CreateIssueRequest, context: ToolContext) -> dict[str, Any]:
    return await context.orchestrator.create(request)


async def update_issue(request: UpdateIssueRequest, context: ToolContext) -> dict[str, Any]:
    return await context.orchestrator.update(request)


TOOLS = (
    ToolDefinition(
        name="get_issue",
        description="Retrieve a Linear issue by ID",
        request_model=GetIssueRequest,
        handler=get_issue,
    ),
    ToolDefinition(
        name="list_issues",
        description="List issues with optional filters and pagination",
        request_model=ListIssuesRequest,
        handler=list_issues,
    ),
    ToolDefinition(
        name="create_issue",
        description="Create a new Linear issue",
        request_model=CreateIssueRequest,
        handler=create_issue,
        read_only=False,
        idempotent=False,
    ),
    ToolDefinition(
        name="update_issue",
        description="Update an existing Linear issue",
        request_model=UpdateIssueRequest,
        handler=update_issue,
        read_only=False,
        idempotent=True,
    ),
)
