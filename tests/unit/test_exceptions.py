"""Tests for linear_toon.exceptions module."""

import pytest

from linear_toon.exceptions import (
    ConfigurationError,
    ConflictingAssigneeError,
    CreationFailedError,
    EmptyResponseError,
    InvalidDurationError,
    LinearAPIError,
    LinearToonError,
    LinkFailedError,
    MilestoneRequiresProjectError,
    MissingCollaboratorError,
    MutationError,
    NotFoundError,
    RelationFailedError,
    RemoteError,
    ResolutionError,
    ScopeRequiredError,
    TransportError,
    UnexpectedResponseError,
    ViewerUnavailableError,
)


class TestLinearToonError:
    """Test base LinearToonError class."""

    def test_init_with_message(self):
        """Test initialization with message."""
        error = LinearToonError("Test error message")

        assert error.message == "Test error message"
        assert str(error) == "Test error message"

    def test_exception_can_be_raised(self):
        with pytest.raises(LinearToonError) as exc_info:
            raise ConfigurationError("bad config")

        assert exc_info.value.message == "bad config"


class TestHierarchy:
    """Test which base each error derives from."""

    @pytest.mark.parametrize(
        "error, base",
        [
            (TransportError(500, "boom"), LinearAPIError),
            (RemoteError(["a"]), LinearAPIError),
            (EmptyResponseError(), LinearAPIError),
            (UnexpectedResponseError("issue"), LinearAPIError),
            (NotFoundError("team", "x"), ResolutionError),
            (ViewerUnavailableError(), ResolutionError),
            (InvalidDurationError("-PX"), ResolutionError),
            (ConflictingAssigneeError(), ResolutionError),
            (CreationFailedError(), MutationError),
            (LinkFailedError("https://x"), MutationError),
            (MissingCollaboratorError(), LinearToonError),
        ],
    )
    def test_base_class(self, error, base):
        assert isinstance(error, base)
        assert isinstance(error, LinearToonError)

    def test_scope_required_is_value_error(self):
        """Missing scope is a caller bug, not a tool failure."""
        error = ScopeRequiredError("state")

        assert isinstance(error, ValueError)
        assert not isinstance(error, LinearToonError)
        assert error.kind == "state"


class TestMessages:
    """Test the messages surfaced to tool callers."""

    def test_transport_error(self):
        error = TransportError(401, "Authentication required")

        assert error.status_code == 401
        assert error.message == "HTTP 401: Authentication required"

    def test_remote_error_joins_messages(self):
        error = RemoteError(["Field 'x' missing", "Invalid id"])

        assert error.message == "GraphQL error: Field 'x' missing; Invalid id"

    def test_empty_response(self):
        assert EmptyResponseError().message == "Empty response from Linear API"

    def test_unexpected_response_names_field(self):
        assert UnexpectedResponseError("issues").message == "Unexpected response: missing issues field"

    def test_not_found_capitalizes_kind(self):
        assert NotFoundError("team", "Platform").message == "Team not found: Platform"

    def test_viewer_unavailable(self):
        assert ViewerUnavailableError().message == "Could not resolve current user"

    def test_milestone_requires_project(self):
        assert MilestoneRequiresProjectError().message == "milestone requires project"

    def test_invalid_duration(self):
        assert InvalidDurationError("-PBOGUS").message == "Invalid duration: -PBOGUS"

    def test_conflicting_assignee(self):
        assert ConflictingAssigneeError().message == "Cannot specify both assignee and delegate"

    def test_creation_failed(self):
        assert CreationFailedError().message == "Issue creation failed"
        assert CreationFailedError("comment").message == "Comment creation failed"

    def test_relation_failed_mentions_created_issue(self):
        error = RelationFailedError("blocks", "LIN-2", "LIN-1")

        assert error.message == "Failed to create blocks relation with LIN-2 (issue LIN-1 was created)"
        assert error.issue_id == "LIN-1"

    def test_relation_failed_without_issue(self):
        assert RelationFailedError("related", "LIN-2").message == "Failed to create related relation with LIN-2"

    def test_missing_collaborator(self):
        assert MissingCollaboratorError().message == "client missing from tool context"
