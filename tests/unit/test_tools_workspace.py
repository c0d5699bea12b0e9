"""Tests for linear_toon/tools/workspace.py - listing tools."""

import pytest

TEAM_ID = "7d1e5a8c-3b2f-4c6d-9e0a-1b2c3d4e5f60"
TEAM_FILTER = {"team": {"id": {"eq": TEAM_ID}}}


def team_found() -> dict:
    return {"teams": {"nodes": [{"id": TEAM_ID}]}}


class TestListTeams:
    @pytest.mark.asyncio
    async def test_lists_teams(self, registry, client, operations):
        client.execute.return_value = {"teams": {"nodes": [{"id": "t1", "name": "Mobile", "key": "MOB"}]}}

        result = await registry.call("list_teams", {})

        assert result.text == "nodes[1]{id,name,key}:\n  t1,Mobile,MOB"
        client.execute.assert_awaited_once_with(operations.list_teams, None)


class TestListUsers:
    """Test workspace users and team members."""

    @pytest.mark.asyncio
    async def test_all_users(self, registry, client, operations):
        client.execute.return_value = {"users": {"nodes": []}}

        await registry.call("list_users", {})

        client.execute.assert_awaited_once_with(operations.list_users, None)

    @pytest.mark.asyncio
    async def test_team_members_by_name(self, registry, client, operations):
        client.execute.side_effect = [
            team_found(),
            {"team": {"members": {"nodes": [{"id": "u1", "name": "Ana", "email": "ana@example.com"}]}}},
        ]

        result = await registry.call("list_users", {"team": "Mobile"})

        assert client.execute.call_args_list[1].args == (operations.team_members, {"id": TEAM_ID})
        assert result.text == "nodes[1]{id,name,email}:\n  u1,Ana,ana@example.com"

    @pytest.mark.asyncio
    async def test_unknown_team(self, registry, client):
        client.execute.return_value = {"teams": {"nodes": []}}

        result = await registry.call("list_users", {"team": "Ghost"})

        assert result.is_error
        assert result.text == "Team not found: Ghost"


class TestTeamScopedLists:
    """Test statuses and cycles, which require a team."""

    @pytest.mark.asyncio
    async def test_statuses(self, registry, client, operations):
        client.execute.return_value = {"workflowStates": {"nodes": [{"id": "s1", "type": "started", "name": "Doing"}]}}

        await registry.call("list_issue_statuses", {"team": TEAM_ID})

        client.execute.assert_awaited_once_with(operations.list_states, {"filter": TEAM_FILTER})

    @pytest.mark.asyncio
    async def test_cycles_resolve_team_name(self, registry, client, operations):
        client.execute.side_effect = [team_found(), {"cycles": {"nodes": []}}]

        await registry.call("list_cycles", {"team": "Mobile"})

        assert client.execute.call_args_list[1].args == (operations.list_cycles, {"filter": TEAM_FILTER})

    @pytest.mark.asyncio
    async def test_team_required(self, registry, client):
        result = await registry.call("list_cycles", {})

        assert result.is_error
        client.execute.assert_not_called()


class TestOptionalTeamLists:
    """Test labels and projects."""

    @pytest.mark.asyncio
    async def test_labels_unfiltered(self, registry, client, operations):
        client.execute.return_value = {"issueLabels": {"nodes": []}}

        await registry.call("list_issue_labels", {})

        client.execute.assert_awaited_once_with(operations.list_labels, {})

    @pytest.mark.asyncio
    async def test_labels_for_team(self, registry, client, operations):
        client.execute.return_value = {"issueLabels": {"nodes": []}}

        await registry.call("list_issue_labels", {"team": TEAM_ID})

        client.execute.assert_awaited_once_with(operations.list_labels, {"filter": TEAM_FILTER})

    @pytest.mark.asyncio
    async def test_projects_for_team(self, registry, client, operations):
        client.execute.return_value = {"projects": {"nodes": []}}

        await registry.call("list_projects", {"team": TEAM_ID})

        client.execute.assert_awaited_once_with(
            operations.list_projects, {"filter": {"accessibleTeams": {"id": {"eq": TEAM_ID}}}}
        )

    @pytest.mark.asyncio
    async def test_missing_root_is_error(self, registry, client):
        client.execute.return_value = {}

        result = await registry.call("list_projects", {})

        assert result.is_error
        assert result.text == "Unexpected response: missing projects field"
