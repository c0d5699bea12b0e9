"""Request models for the tool surface."""

from linear_toon.models.requests import (
    CreateCommentRequest,
    CreateIssueRequest,
    GetIssueRequest,
    LinkInput,
    ListIssuesRequest,
    ListTeamsRequest,
    OptionalTeamRequest,
    TeamScopedRequest,
    ToolRequest,
    UpdateIssueRequest,
)

__all__ = [
    "CreateCommentRequest",
    "CreateIssueRequest",
    "GetIssueRequest",
    "LinkInput",
    "ListIssuesRequest",
    "ListTeamsRequest",
    "OptionalTeamRequest",
    "TeamScopedRequest",
    "ToolRequest",
    "UpdateIssueRequest",
]
