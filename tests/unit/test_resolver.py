"""Tests for linear_toon/resolution/resolver.py - reference resolution."""

import pytest

from linear_toon.enums import ResolutionKind
from linear_toon.exceptions import NotFoundError, ScopeRequiredError, ViewerUnavailableError
from linear_toon.resolution.resolver import ReferenceResolver

TEAM_ID = "7d1e5a8c-3b2f-4c6d-9e0a-1b2c3d4e5f60"
PROJECT_ID = "9a8b7c6d-5e4f-4a3b-8c2d-1e0f9a8b7c6d"
RESOLVED_ID = "11111111-2222-4333-8444-555555555555"


# =============================================================================
# Fixtures
# =============================================================================


@pytest.fixture
def resolver(client) -> ReferenceResolver:
    return ReferenceResolver(client)


def found(root: str, node_id: str = RESOLVED_ID) -> dict:
    return {root: {"nodes": [{"id": node_id}]}}


def sent_filter(client) -> dict:
    """Filter variable of the last lookup."""
    return client.execute.call_args.args[1]["filter"]


# =============================================================================
# Canonical passthrough
# =============================================================================


class TestCanonicalPassthrough:
    """Canonical ids are returned without a request."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("kind", list(ResolutionKind))
    async def test_no_request_for_any_kind(self, resolver, client, kind):
        result = await resolver.resolve(kind, TEAM_ID)

        assert result == TEAM_ID
        client.execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_uppercase_canonical_passes_through(self, resolver, client):
        assert await resolver.resolve(ResolutionKind.TEAM, TEAM_ID.upper()) == TEAM_ID.upper()
        client.execute.assert_not_called()


# =============================================================================
# Lookups
# =============================================================================


class TestNameLookup:
    """Test name lookups."""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("name", ["ENGINEERING", "engineering", "Engineering"])
    async def test_team_by_name_ignores_case(self, resolver, client, operations, name):
        client.execute.return_value = found("teams")

        result = await resolver.resolve(ResolutionKind.TEAM, name)

        assert result == RESOLVED_ID
        client.execute.assert_awaited_once_with(
            operations.lookup(ResolutionKind.TEAM).document,
            {"filter": {"name": {"eqIgnoreCase": name}}},
        )

    def test_lookup_asks_for_one_node(self, operations):
        for kind in ResolutionKind:
            assert "first: 1" in operations.lookup(kind).document

    @pytest.mark.asyncio
    async def test_not_found(self, resolver, client):
        client.execute.return_value = {"projects": {"nodes": []}}

        with pytest.raises(NotFoundError) as exc_info:
            await resolver.resolve(ResolutionKind.PROJECT, "Ghost")

        assert exc_info.value.message == "Project not found: Ghost"

    @pytest.mark.asyncio
    async def test_missing_root_is_not_found(self, resolver, client):
        client.execute.return_value = {}

        with pytest.raises(NotFoundError):
            await resolver.resolve(ResolutionKind.LABEL, "bug")


class TestUserLookup:
    """Test user-specific tokens."""

    @pytest.mark.asyncio
    async def test_email_never_uses_name(self, resolver, client):
        client.execute.return_value = found("users")

        await resolver.resolve(ResolutionKind.USER, "ana@example.com")

        assert client.execute.await_count == 1
        assert sent_filter(client) == {"email": {"eq": "ana@example.com"}}

    @pytest.mark.asyncio
    async def test_me_resolves_viewer(self, resolver, client, operations):
        client.execute.return_value = {"viewer": {"id": RESOLVED_ID}}

        assert await resolver.resolve(ResolutionKind.USER, "me") == RESOLVED_ID
        client.execute.assert_awaited_once_with(operations.viewer)

    @pytest.mark.asyncio
    async def test_viewer_unavailable(self, resolver, client):
        client.execute.return_value = {"viewer": None}

        with pytest.raises(ViewerUnavailableError):
            await resolver.resolve(ResolutionKind.USER, "me")

    @pytest.mark.asyncio
    async def test_user_name(self, resolver, client):
        client.execute.return_value = found("users")

        await resolver.resolve(ResolutionKind.USER, "Ana Lopez")

        assert sent_filter(client) == {"name": {"eqIgnoreCase": "Ana Lopez"}}


class TestScopedLookup:
    """Test team/project scoped kinds."""

    @pytest.mark.asyncio
    async def test_state_scoped_to_team(self, resolver, client):
        client.execute.return_value = found("workflowStates")

        await resolver.resolve(ResolutionKind.STATE, "Done", scope=TEAM_ID)

        assert sent_filter(client) == {
            "name": {"eqIgnoreCase": "Done"},
            "team": {"id": {"eq": TEAM_ID}},
        }

    @pytest.mark.asyncio
    async def test_cycle_number_scoped_to_team(self, resolver, client):
        client.execute.return_value = found("cycles")

        await resolver.resolve(ResolutionKind.CYCLE, "42", scope=TEAM_ID)

        assert sent_filter(client) == {"number": {"eq": 42}, "team": {"id": {"eq": TEAM_ID}}}

    @pytest.mark.asyncio
    async def test_milestone_scoped_to_project(self, resolver, client):
        client.execute.return_value = found("projectMilestones")

        await resolver.resolve(ResolutionKind.MILESTONE, "Beta", scope=PROJECT_ID)

        assert sent_filter(client) == {
            "name": {"eqIgnoreCase": "Beta"},
            "project": {"id": {"eq": PROJECT_ID}},
        }

    @pytest.mark.asyncio
    @pytest.mark.parametrize("kind", [ResolutionKind.STATE, ResolutionKind.CYCLE, ResolutionKind.MILESTONE])
    async def test_missing_scope_is_caller_error(self, resolver, client, kind):
        with pytest.raises(ScopeRequiredError):
            await resolver.resolve(kind, "Done")

        client.execute.assert_not_called()


class TestResolveMany:
    """Test batch resolution."""

    @pytest.mark.asyncio
    async def test_keeps_input_order(self, resolver, client):
        client.execute.side_effect = [found("issueLabels", "id-bug"), found("issueLabels", "id-ui")]

        result = await resolver.resolve_labels(["bug", TEAM_ID, "ui"])

        assert result == ["id-bug", TEAM_ID, "id-ui"]
        assert client.execute.await_count == 2

    @pytest.mark.asyncio
    async def test_first_miss_stops(self, resolver, client):
        client.execute.side_effect = [{"issueLabels": {"nodes": []}}]

        with pytest.raises(NotFoundError, match="Label not found: nope"):
            await resolver.resolve_labels(["nope", "bug"])
