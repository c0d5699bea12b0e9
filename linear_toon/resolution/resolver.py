"""Reference resolution.

Converts human-friendly identifiers (names, emails, ``"me"``, cycle
numbers) into Linear ids. Canonical ids pass through without a request.
Every lookup asks for exactly one node and matches names exactly, ignoring
case. Nothing is cached between calls.
"""

from __future__ import annotations

from collections.abc import Sequence

import structlog

from linear_toon.client import Transport
from linear_toon.enums import ResolutionKind
from linear_toon.exceptions import NotFoundError, ScopeRequiredError, ViewerUnavailableError
from linear_toon.graphql.operations import DEFAULT_OPERATIONS, Operations
from linear_toon.resolution.filters import FilterExpression, comparator, id_eq
from linear_toon.resolution.identifiers import CanonicalReference, SelfToken, classify_for

log = structlog.get_logger(__name__)

# Parent field each scoped kind is narrowed by.
_SCOPE_FIELDS = {
    ResolutionKind.STATE: "team",
    ResolutionKind.CYCLE: "team",
    ResolutionKind.MILESTONE: "project",
}


class ReferenceResolver:
    """Resolve raw identifiers into canonical references.

    Example:
        >>> resolver = ReferenceResolver(client)
        >>> team_id = await resolver.resolve(ResolutionKind.TEAM, "Engineering")
        >>> state_id = await resolver.resolve(ResolutionKind.STATE, "Done", scope=team_id)
    """

    def __init__(self, client: Transport, operations: Operations = DEFAULT_OPERATIONS) -> None:
        """Initialize resolver.

        Args:
            client: Transport used for lookups
            operations: GraphQL documents
        """
        self.client = client
        self.operations = operations

    async def resolve(self, kind: ResolutionKind, value: str, scope: str | None = None) -> str:
        """Resolve one identifier.

        Args:
            kind: Entity kind to look up
            value: Raw identifier (id, name, email, "me", number)
            scope: Team id for state/cycle, project id for milestone

        Returns:
            Canonical id

        Raises:
            NotFoundError: No entity matched
            ViewerUnavailableError: ``"me"`` could not be resolved
            ScopeRequiredError: A scoped kind was resolved without ``scope``
        """
        token = classify_for(kind, value)
        if isinstance(token, CanonicalReference):
            return token.value

        if isinstance(token, SelfToken):
            return await self._resolve_viewer()

        expression = comparator(token)
        if kind.is_scoped:
            if scope is None:
                raise ScopeRequiredError(kind.value)
            expression[_SCOPE_FIELDS[kind]] = id_eq(scope)

        reference = await self._lookup(kind, expression)
        if reference is None:
            raise NotFoundError(kind.value, value)
        log.debug("reference_resolved", kind=kind.value, value=value)
        return reference

    async def resolve_many(self, kind: ResolutionKind, values: Sequence[str], scope: str | None = None) -> list[str]:
        """Resolve each value independently, keeping input order."""
        return [await self.resolve(kind, value, scope) for value in values]

    async def resolve_labels(self, values: Sequence[str]) -> list[str]:
        return await self.resolve_many(ResolutionKind.LABEL, values)

    async def _resolve_viewer(self) -> str:
        data = await self.client.execute(self.operations.viewer)
        viewer_id = (data.get("viewer") or {}).get("id")
        if not viewer_id:
            raise ViewerUnavailableError()
        return viewer_id

    async def _lookup(self, kind: ResolutionKind, expression: FilterExpression) -> str | None:
        lookup = self.operations.lookup(kind)
        data = await self.client.execute(lookup.document, {"filter": expression})
        nodes = (data.get(lookup.root) or {}).get("nodes") or []
        return nodes[0]["id"] if nodes else None
