"""Enumerations for resolution kinds and relation kinds."""

from enum import Enum


class ResolutionKind(str, Enum):
    """Entity categories the reference resolver understands.

    State and cycle are scoped to a team, milestone to a project.
    """

    TEAM = "team"
    USER = "user"
    STATE = "state"
    LABEL = "label"
    PROJECT = "project"
    CYCLE = "cycle"
    MILESTONE = "milestone"

    def __str__(self) -> str:
        return self.value

    @property
    def is_scoped(self) -> bool:
        """Check if a name lookup of this kind needs a parent reference."""
        return self in (ResolutionKind.STATE, ResolutionKind.CYCLE, ResolutionKind.MILESTONE)


class RelationKind(str, Enum):
    """Issue relation types, valued as the API spells them."""

    BLOCKED_BY = "isBlockedBy"
    BLOCKS = "blocks"
    RELATED = "related"
    DUPLICATE = "duplicate"

    def __str__(self) -> str:
        return self.value

    @property
    def request_attr(self) -> str:
        """Request attribute that carries edges of this kind."""
        return _REQUEST_ATTRS[self]


_REQUEST_ATTRS = {
    RelationKind.BLOCKED_BY: "blocked_by",
    RelationKind.BLOCKS: "blocks",
    RelationKind.RELATED: "related_to",
    RelationKind.DUPLICATE: "duplicate_of",
}

# Order in which relation edges are written after the primary mutation.
RELATION_ORDER: tuple[RelationKind, ...] = (
    RelationKind.BLOCKED_BY,
    RelationKind.BLOCKS,
    RelationKind.RELATED,
    RelationKind.DUPLICATE,
)
