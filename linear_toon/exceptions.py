"""Custom exception hierarchy for linear-toon.

This module defines a structured exception hierarchy that lets the tool
boundary turn any failure into a readable error payload, while the layers
below it (transport, resolution, orchestration) raise precise types.

Exception Hierarchy:
    LinearToonError (base)
    ├── ConfigurationError
    ├── MissingCollaboratorError
    ├── LinearAPIError
    │   ├── TransportError
    │   ├── RemoteError
    │   ├── EmptyResponseError
    │   └── UnexpectedResponseError
    ├── ResolutionError
    │   ├── NotFoundError
    │   ├── ViewerUnavailableError
    │   ├── MilestoneRequiresProjectError
    │   ├── InvalidDurationError
    │   ├── ConflictingAssigneeError
    │   └── IssueTeamUnavailableError
    └── MutationError
        ├── CreationFailedError
        ├── UpdateFailedError
        ├── RelationFailedError
        ├── RelationDeleteFailedError
        ├── RelationCreateFailedError
        └── LinkFailedError

    ScopeRequiredError (ValueError) - a scoped lookup was issued without
    its scope. This is a caller bug, not a search miss.

Example Usage:
    >>> from linear_toon.exceptions import NotFoundError
    >>> try:
    ...     team_id = await resolver.resolve(ResolutionKind.TEAM, "Platform")
    ... except NotFoundError as e:
    ...     print(e.message)
    Team not found: Platform
"""

from collections.abc import Sequence


class LinearToonError(Exception):
    """Base exception for all linear-toon errors.

    Attributes:
        message: Human-readable error description
    """

    def __init__(self, message: str) -> None:
        """Initialize exception.

        Args:
            message: Error message
        """
        self.message = message
        super().__init__(message)


class ConfigurationError(LinearToonError):
    """Configuration-related errors.

    Examples:
        - Configuration file not found
        - Invalid YAML syntax
        - Missing API key
    """

    pass


class MissingCollaboratorError(LinearToonError):
    """A tool was invoked without the transport it depends on."""

    def __init__(self, collaborator: str = "client") -> None:
        self.collaborator = collaborator
        super().__init__(f"{collaborator} missing from tool context")


# === Transport ===


class LinearAPIError(LinearToonError):
    """Base class for failures reported by the GraphQL transport."""

    pass


class TransportError(LinearAPIError):
    """The API answered with a non-2xx status.

    Attributes:
        status_code: HTTP status returned by the API
        detail: GraphQL error messages when present, otherwise the raw body
    """

    def __init__(self, status_code: int, detail: str) -> None:
        self.status_code = status_code
        self.detail = detail
        super().__init__(f"HTTP {status_code}: {detail}")


class RemoteError(LinearAPIError):
    """The API answered 2xx but carried application-level errors.

    Attributes:
        messages: Error messages taken from the response ``errors`` array
    """

    def __init__(self, messages: Sequence[str]) -> None:
        self.messages = list(messages)
        super().__init__(f"GraphQL error: {'; '.join(self.messages)}")


class EmptyResponseError(LinearAPIError):
    """The API answered 2xx with no decodable payload."""

    def __init__(self) -> None:
        super().__init__("Empty response from Linear API")


class UnexpectedResponseError(LinearAPIError):
    """The payload decoded but lacked the field the operation selects."""

    def __init__(self, field: str) -> None:
        self.field = field
        super().__init__(f"Unexpected response: missing {field} field")


# === Resolution ===


class ResolutionError(LinearToonError):
    """Base class for failures turning user input into references."""

    pass


class NotFoundError(ResolutionError):
    """A lookup returned zero matches.

    Attributes:
        kind: Entity kind that was searched (team, user, state, ...)
        value: The raw value the caller supplied
    """

    def __init__(self, kind: str, value: str) -> None:
        self.kind = kind
        self.value = value
        super().__init__(f"{kind.capitalize()} not found: {value}")


class ViewerUnavailableError(ResolutionError):
    """``"me"`` was supplied but the viewer lookup returned nothing."""

    def __init__(self) -> None:
        super().__init__("Could not resolve current user")


class MilestoneRequiresProjectError(ResolutionError):
    """A milestone was supplied without a project to scope it."""

    def __init__(self) -> None:
        super().__init__("milestone requires project")


class InvalidDurationError(ResolutionError):
    """A relative date did not match ``-P[nY][nM][nW][nD]``."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"Invalid duration: {value}")


class ConflictingAssigneeError(ResolutionError):
    """Both ``assignee`` and ``delegate`` were supplied."""

    def __init__(self) -> None:
        super().__init__("Cannot specify both assignee and delegate")


class IssueTeamUnavailableError(ResolutionError):
    """The implicit team scope of an issue could not be fetched."""

    def __init__(self, issue_id: str) -> None:
        self.issue_id = issue_id
        super().__init__(f"Could not determine issue team: {issue_id}")


class ScopeRequiredError(ValueError):
    """A scoped kind was resolved without its scope.

    Derives from ``ValueError`` rather than LinearToonError: callers must
    supply the scope, so reaching this is a programming error.
    """

    def __init__(self, kind: str) -> None:
        self.kind = kind
        self.message = f"{kind} resolution requires a scope"
        super().__init__(self.message)


# === Mutations ===


class MutationError(LinearToonError):
    """Base class for failed write steps.

    Every subclass names the step and its sub-target so a caller can
    reconcile a partially applied plan by hand. Earlier steps are never
    rolled back.
    """

    pass


class CreationFailedError(MutationError):
    """The primary create call reported ``success: false``."""

    def __init__(self, entity: str = "issue") -> None:
        self.entity = entity
        super().__init__(f"{entity.capitalize()} creation failed")


class UpdateFailedError(MutationError):
    """The primary update call reported ``success: false``."""

    def __init__(self, issue_id: str) -> None:
        self.issue_id = issue_id
        super().__init__(f"Issue update failed: {issue_id}")


class RelationFailedError(MutationError):
    """A relation create after issue creation reported failure.

    Attributes:
        kind: Relation type sent to the API (blocks, isBlockedBy, ...)
        target: Related issue the edge pointed at
        issue_id: The already-created subject issue
    """

    def __init__(self, kind: str, target: str, issue_id: str | None = None) -> None:
        self.kind = kind
        self.target = target
        self.issue_id = issue_id
        message = f"Failed to create {kind} relation with {target}"
        if issue_id:
            message = f"{message} (issue {issue_id} was created)"
        super().__init__(message)


class RelationDeleteFailedError(MutationError):
    """Removing an existing edge during replace-by-kind failed."""

    def __init__(self, kind: str, relation_id: str) -> None:
        self.kind = kind
        self.relation_id = relation_id
        super().__init__(f"Failed to delete {kind} relation {relation_id}")


class RelationCreateFailedError(MutationError):
    """Creating a replacement edge during replace-by-kind failed."""

    def __init__(self, kind: str, target: str) -> None:
        self.kind = kind
        self.target = target
        super().__init__(f"Failed to create {kind} relation with {target}")


class LinkFailedError(MutationError):
    """Attaching a link to the issue failed."""

    def __init__(self, url: str) -> None:
        self.url = url
        super().__init__(f"Failed to attach link: {url}")
