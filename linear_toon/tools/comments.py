"""Comment tools."""

from __future__ import annotations

from typing import Any

from linear_toon.exceptions import CreationFailedError, UnexpectedResponseError
from linear_toon.models.requests import CreateCommentRequest
from linear_toon.tools.registry import ToolContext, ToolDefinition


async def create_comment(request: CreateCommentRequest, context: ToolContext) -> dict[str, Any]:
    """Comment on an issue; ``parentId`` makes it a threaded reply."""
    comment_input: dict[str, Any] = {"issueId": request.issue_id, "body": request.body}
    if request.parent_id is not None:
        comment_input["parentId"] = request.parent_id

    data = await context.require_client().execute(context.operations.create_comment, {"input": comment_input})
    result = data.get("commentCreate")
    if result is None:
        raise UnexpectedResponseError("commentCreate")
    if not result.get("success"):
        raise CreationFailedError("comment")
    return result.get("comment") or {}


TOOLS = (
    ToolDefinition(
        name="create_comment",
        description="Create a comment on a Linear issue",
        request_model=CreateCommentRequest,
        handler=create_comment,
        read_only=False,
        idempotent=False,
    ),
)
