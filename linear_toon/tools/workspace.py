"""Workspace listing tools: teams, users, statuses, labels, projects, cycles."""

from __future__ import annotations

from typing import Any

from linear_toon.enums import ResolutionKind
from linear_toon.exceptions import UnexpectedResponseError
from linear_toon.models.requests import ListTeamsRequest, OptionalTeamRequest, TeamScopedRequest
from linear_toon.resolution.filters import id_eq
from linear_toon.tools.registry import ToolContext, ToolDefinition


async def _team_id(context: ToolContext, team: str) -> str:
    return await context.resolver.resolve(ResolutionKind.TEAM, team)


async def list_teams(request: ListTeamsRequest, context: ToolContext) -> Any:
    return await context.query(context.operations.list_teams, root="teams")


async def list_users(request: OptionalTeamRequest, context: ToolContext) -> Any:
    """All users, or the members of one team."""
    if request.team is None:
        return await context.query(context.operations.list_users, root="users")

    team_id = await _team_id(context, request.team)
    team = await context.query(context.operations.team_members, {"id": team_id}, root="team")
    members = team.get("members")
    if members is None:
        raise UnexpectedResponseError("members")
    return members


async def list_issue_statuses(request: TeamScopedRequest, context: ToolContext) -> Any:
    team_id = await _team_id(context, request.team)
    return await context.query(
        context.operations.list_states, {"filter": {"team": id_eq(team_id)}}, root="workflowStates"
    )


async def list_issue_labels(request: OptionalTeamRequest, context: ToolContext) -> Any:
    variables: dict[str, Any] = {}
    if request.team is not None:
        variables["filter"] = {"team": id_eq(await _team_id(context, request.team))}
    return await context.query(context.operations.list_labels, variables, root="issueLabels")


async def list_projects(request: OptionalTeamRequest, context: ToolContext) -> Any:
    variables: dict[str, Any] = {}
    if request.team is not None:
        variables["filter"] = {"accessibleTeams": id_eq(await _team_id(context, request.team))}
    return await context.query(context.operations.list_projects, variables, root="projects")


async def list_cycles(request: TeamScopedRequest, context: ToolContext) -> Any:
    team_id = await _team_id(context, request.team)
    return await context.query(context.operations.list_cycles, {"filter": {"team": id_eq(team_id)}}, root="cycles")


TOOLS = (
    ToolDefinition(
        name="list_teams",
        description="List teams in the workspace",
        request_model=ListTeamsRequest,
        handler=list_teams,
    ),
    ToolDefinition(
        name="list_users",
        description="List users in the workspace, optionally members of a team",
        request_model=OptionalTeamRequest,
        handler=list_users,
    ),
    ToolDefinition(
        name="list_issue_statuses",
        description="List available issue statuses in a Linear team",
        request_model=TeamScopedRequest,
        handler=list_issue_statuses,
    ),
    ToolDefinition(
        name="list_issue_labels",
        description="List issue labels, optionally scoped to a team",
        request_model=OptionalTeamRequest,
        handler=list_issue_labels,
    ),
    ToolDefinition(
        name="list_projects",
        description="List projects in the workspace",
        request_model=OptionalTeamRequest,
        handler=list_projects,
    ),
    ToolDefinition(
        name="list_cycles",
        description="List cycles for a team",
        request_model=TeamScopedRequest,
        handler=list_cycles,
    ),
)
