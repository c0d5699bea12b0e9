"""Tool request models.

One model per tool. Parameters use the API's camelCase names on the wire
(``dueDate``, ``blockedBy``) and snake_case attributes in Python. Unknown
parameters are rejected. For updates, ``model_fields_set`` tells a
parameter that was left out apart from one sent as null.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

PRIORITY_HELP = "0=None, 1=Urgent, 2=High, 3=Normal, 4=Low"


class ToolRequest(BaseModel):
    """Base for all tool requests."""

    model_config = ConfigDict(
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )


class LinkInput(ToolRequest):
    url: str = Field(..., description="Link URL")
    title: str = Field(..., description="Link title")


class GetIssueRequest(ToolRequest):
    id: str = Field(..., description="Issue ID or identifier (e.g., LIN-123)")


class ListIssuesRequest(ToolRequest):
    assignee: str | None = Field(default=None, description='User ID, name, email, or "me"')
    created_at: str | None = Field(
        default=None, description="Created after: ISO-8601 date/duration (e.g., -P1D)"
    )
    cursor: str | None = Field(default=None, description="Next page cursor")
    cycle: str | None = Field(default=None, description="Cycle name, number, or ID")
    delegate: str | None = Field(default=None, description="Agent name or ID")
    include_archived: bool | None = Field(default=None, description="Include archived items (default true)")
    label: str | None = Field(default=None, description="Label name or ID")
    limit: int | None = Field(default=None, description="Max results (default 50, max 250)")
    order_by: Literal["createdAt", "updatedAt"] | None = Field(
        default=None, description="createdAt or updatedAt (default updatedAt)"
    )
    parent_id: str | None = Field(default=None, description="Parent issue ID")
    priority: int | None = Field(default=None, ge=0, le=4, description=PRIORITY_HELP)
    project: str | None = Field(default=None, description="Project name or ID")
    query: str | None = Field(default=None, description="Search issue title or description")
    state: str | None = Field(default=None, description="State name or ID")
    team: str | None = Field(default=None, description="Team name or ID")
    updated_at: str | None = Field(
        default=None, description="Updated after: ISO-8601 date/duration (e.g., -P1D)"
    )


class CreateIssueRequest(ToolRequest):
    title: str = Field(..., description="Issue title")
    team: str = Field(..., description="Team name or ID")
    description: str | None = Field(default=None, description="Content as Markdown")
    assignee: str | None = Field(default=None, description='User ID, name, email, or "me"')
    delegate: str | None = Field(default=None, description="Agent name or ID")
    priority: int | None = Field(default=None, ge=0, le=4, description=PRIORITY_HELP)
    state: str | None = Field(default=None, description="State name or ID")
    labels: list[str] | None = Field(default=None, description="Label names or IDs")
    project: str | None = Field(default=None, description="Project name or ID")
    cycle: str | None = Field(default=None, description="Cycle name, number, or ID")
    milestone: str | None = Field(default=None, description="Milestone name or ID (requires project)")
    estimate: float | None = Field(default=None, description="Issue estimate value")
    due_date: str | None = Field(default=None, description="Due date (ISO format)")
    parent_id: str | None = Field(default=None, description="Parent issue ID")
    blocked_by: list[str] | None = Field(default=None, description="Issue IDs/identifiers blocking this")
    blocks: list[str] | None = Field(default=None, description="Issue IDs/identifiers this blocks")
    related_to: list[str] | None = Field(default=None, description="Related issue IDs/identifiers")
    duplicate_of: str | None = Field(default=None, description="Duplicate of issue ID/identifier")
    links: list[LinkInput] | None = Field(default=None, description="Link attachments [{url, title}]")


class UpdateIssueRequest(ToolRequest):
    """Partial update.

    Omitted parameters leave the issue untouched. Nullable parameters sent
    as null clear the attribute. Relation lists replace every existing edge
    of their kind; an empty list removes them all.
    """

    id: str = Field(..., description="Issue ID")
    title: str | None = Field(default=None, description="Issue title")
    team: str | None = Field(default=None, description="Team name or ID")
    description: str | None = Field(default=None, description="Content as Markdown. Null to clear")
    assignee: str | None = Field(default=None, description='User ID, name, email, or "me". Null to remove')
    delegate: str | None = Field(default=None, description="Agent name or ID. Null to remove")
    priority: int | None = Field(default=None, ge=0, le=4, description=PRIORITY_HELP)
    state: str | None = Field(default=None, description="State name or ID")
    labels: list[str] | None = Field(default=None, description="Label names or IDs. Replaces existing labels; null or empty removes all")
    project: str | None = Field(default=None, description="Project name or ID. Null to remove")
    cycle: str | None = Field(default=None, description="Cycle name, number, or ID. Null to remove")
    milestone: str | None = Field(default=None, description="Milestone name or ID. Null to remove")
    estimate: float | None = Field(default=None, description="Issue estimate value. Null to clear")
    due_date: str | None = Field(default=None, description="Due date (ISO format). Null to clear")
    parent_id: str | None = Field(default=None, description="Parent issue ID. Null to remove")
    blocked_by: list[str] | None = Field(
        default=None, description="Issue IDs blocking this. Replaces existing; omit to keep unchanged"
    )
    blocks: list[str] | None = Field(
        default=None, description="Issue IDs this blocks. Replaces existing; omit to keep unchanged"
    )
    related_to: list[str] | None = Field(
        default=None, description="Related issue IDs. Replaces existing; omit to keep unchanged"
    )
    duplicate_of: str | None = Field(default=None, description="Duplicate of issue ID. Null to remove")
    links: list[LinkInput] | None = Field(default=None, description="Link attachments [{url, title}]")

    def provided(self, field: str) -> bool:
        """Whether ``field`` was present in the request, even as null."""
        return field in self.model_fields_set


class CreateCommentRequest(ToolRequest):
    issue_id: str = Field(..., description="Issue ID")
    body: str = Field(..., description="Content as Markdown")
    parent_id: str | None = Field(default=None, description="Parent comment ID (for replies)")


class ListTeamsRequest(ToolRequest):
    pass


class TeamScopedRequest(ToolRequest):
    """Lists that require a team."""

    team: str = Field(..., description="Team name or ID")


class OptionalTeamRequest(ToolRequest):
    """Lists that may be narrowed to a team."""

    team: str | None = Field(default=None, description="Team name or ID (optional)")
