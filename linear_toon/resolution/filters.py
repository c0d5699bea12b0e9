"""Issue search filter construction.

Turns flat, human-friendly search parameters into the nested ``IssueFilter``
expression the search query takes. No network calls are made here: names
and emails are matched server-side by the comparators below.

Comparators used on the wire:
    eq                 exact equality (ids, emails, numbers)
    eqIgnoreCase       case-insensitive equality (names)
    containsIgnoreCase case-insensitive substring (free-text query)
    gte                lower date bound
    some               any-of quantifier over a collection
    isMe               current-viewer predicate
"""

from __future__ import annotations

import re
from collections.abc import Callable
from datetime import datetime, timedelta, timezone
from typing import Any

import structlog

from linear_toon.exceptions import InvalidDurationError
from linear_toon.resolution.identifiers import (
    CanonicalReference,
    EmailToken,
    Identifier,
    NameToken,
    NumericToken,
    SelfToken,
    classify,
)

log = structlog.get_logger(__name__)

FilterExpression = dict[str, Any]

DURATION_MARKER = "-P"
DURATION_RE = re.compile(r"\A-P(?:(\d+)Y)?(?:(\d+)M)?(?:(\d+)W)?(?:(\d+)D)?\Z")
# Fixed calendar: a year is 365 days and a month 30.
DURATION_DAYS = (365, 30, 7, 1)

DEFAULT_LIMIT = 50
MAX_LIMIT = 250


def id_eq(value: str) -> FilterExpression:
    return {"id": {"eq": value}}


def name_eq(value: str) -> FilterExpression:
    return {"name": {"eqIgnoreCase": value}}


def email_eq(value: str) -> FilterExpression:
    return {"email": {"eq": value}}


def number_eq(value: int) -> FilterExpression:
    return {"number": {"eq": value}}


def is_viewer() -> FilterExpression:
    return {"isMe": {"eq": True}}


def comparator(token: Identifier) -> FilterExpression:
    """Pick the single comparator matching a classified identifier."""
    if isinstance(token, CanonicalReference):
        return id_eq(token.value)
    if isinstance(token, SelfToken):
        return is_viewer()
    if isinstance(token, EmailToken):
        return email_eq(token.value)
    if isinstance(token, NumericToken):
        return number_eq(token.number)
    if isinstance(token, NameToken):
        return name_eq(token.value)
    raise TypeError(f"Unhandled identifier token: {token!r}")


def user_filter(value: str) -> FilterExpression:
    """``me`` → viewer, ``@`` → email, id → id, otherwise name."""
    return comparator(classify(value, self_token=True, email=True))


def name_or_id_filter(value: str) -> FilterExpression:
    return comparator(classify(value))


def cycle_filter(value: str) -> FilterExpression:
    return comparator(classify(value, numeric=True))


def text_filter(query: str) -> FilterExpression:
    """Title-or-description substring match."""
    return {
        "or": [
            {"title": {"containsIgnoreCase": query}},
            {"description": {"containsIgnoreCase": query}},
        ]
    }


def parse_duration(value: str, now: datetime) -> str:
    """Subtract an ISO-8601 style duration from ``now``.

    Accepts ``-P[nY][nM][nW][nD]``. Years count as 365 days, months as 30
    and weeks as 7.

    Args:
        value: Duration string, for example ``-P1Y2M3D``
        now: Reference instant (UTC)

    Returns:
        ISO-8601 UTC timestamp with second precision

    Raises:
        InvalidDurationError: If ``value`` does not match the grammar
    """
    match = DURATION_RE.match(value)
    if match is None:
        raise InvalidDurationError(value)
    days = sum(int(count or 0) * factor for count, factor in zip(match.groups(), DURATION_DAYS))
    moment = now.astimezone(timezone.utc).replace(microsecond=0) - timedelta(days=days)
    return moment.strftime("%Y-%m-%dT%H:%M:%SZ")


def resolve_date(value: str, now: datetime) -> str:
    """Durations become timestamps; anything else passes through unchanged."""
    if value.startswith(DURATION_MARKER):
        return parse_duration(value, now)
    return value


def clamp_limit(limit: int | None, default: int = DEFAULT_LIMIT, maximum: int = MAX_LIMIT) -> int:
    """Clamp a requested page size into ``[1, maximum]``."""
    if limit is None:
        return default
    return max(1, min(limit, maximum))


def include_archived(flag: bool | None) -> bool:
    """Archived issues are included unless explicitly turned off."""
    return flag is not False


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class FilterBuilder:
    """Builds the ``IssueFilter`` for issue search.

    Args:
        clock: Returns the current instant; relative dates count back from it
    """

    def __init__(self, clock: Callable[[], datetime] = _utcnow) -> None:
        self._clock = clock

    def build(
        self,
        *,
        assignee: str | None = None,
        delegate: str | None = None,
        team: str | None = None,
        project: str | None = None,
        state: str | None = None,
        label: str | None = None,
        cycle: str | None = None,
        priority: int | None = None,
        parent_id: str | None = None,
        query: str | None = None,
        created_at: str | None = None,
        updated_at: str | None = None,
    ) -> FilterExpression | None:
        """Build the filter, or return None when no parameter was given.

        Raises:
            InvalidDurationError: If a date bound is a malformed duration
        """
        expression: FilterExpression = {}
        if assignee is not None:
            expression["assignee"] = user_filter(assignee)
        if team is not None:
            expression["team"] = name_or_id_filter(team)
        if project is not None:
            expression["project"] = name_or_id_filter(project)
        if state is not None:
            expression["state"] = name_or_id_filter(state)
        if label is not None:
            expression["labels"] = {"some": name_or_id_filter(label)}
        if priority is not None:
            expression["priority"] = {"eq": priority}
        if parent_id is not None:
            expression["parent"] = id_eq(parent_id)
        if cycle is not None:
            expression["cycle"] = cycle_filter(cycle)
        if delegate is not None:
            expression["delegate"] = name_or_id_filter(delegate)
        if query is not None:
            expression.update(text_filter(query))
        if created_at is not None or updated_at is not None:
            now = self._clock()
            if created_at is not None:
                expression["createdAt"] = {"gte": resolve_date(created_at, now)}
            if updated_at is not None:
                expression["updatedAt"] = {"gte": resolve_date(updated_at, now)}

        if not expression:
            return None
        log.debug("issue_filter_built", keys=sorted(expression))
        return expression
