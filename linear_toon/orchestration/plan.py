"""Mutation plan data types.

A plan is built only after every reference in a request has resolved. It
holds the primary write followed by the side effects that depend on the
written issue: relation edges first, then link attachments.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any, Literal, Union

from linear_toon.enums import RelationKind


@dataclass(frozen=True, slots=True)
class PrimaryWrite:
    """The issue create or update call.

    Attributes:
        action: ``create`` or ``update``
        input: ``IssueCreateInput`` / ``IssueUpdateInput`` payload
        issue_id: Subject of an update, None for a create
    """

    action: Literal["create", "update"]
    input: dict[str, Any]
    issue_id: str | None = None


@dataclass(frozen=True, slots=True)
class RelationCreate:
    """Add one edge from the subject issue to ``target``."""

    kind: RelationKind
    target: str


@dataclass(frozen=True, slots=True)
class RelationReplace:
    """Remove every edge of ``kind`` on the subject, then add ``targets``.

    An empty ``targets`` removes all edges of the kind.
    """

    kind: RelationKind
    targets: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class LinkAttach:
    url: str
    title: str


SideEffect = Union[RelationCreate, RelationReplace, LinkAttach]


@dataclass
class MutationPlan:
    """Ordered writes for one create/update request."""

    primary: PrimaryWrite
    relations: list[RelationCreate | RelationReplace] = field(default_factory=list)
    links: list[LinkAttach] = field(default_factory=list)

    def side_effects(self) -> Iterator[SideEffect]:
        """Steps that run after the primary write, in execution order."""
        yield from self.relations
        yield from self.links

    def __len__(self) -> int:
        return 1 + len(self.relations) + len(self.links)
