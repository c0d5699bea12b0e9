"""Identifier classification.

A raw identifier is classified once into a closed set of token shapes.
Resolver and filter builder then branch on the token type instead of
re-inspecting the string.

Classification order matters: canonical shape first, then the tokens a
kind allows ("me", email), then all-digit numbers, then names.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Union

from linear_toon.enums import ResolutionKind

CANONICAL_RE = re.compile(r"\A[0-9a-fA-F]{8}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{4}-[0-9a-fA-F]{12}\Z")
NUMERIC_RE = re.compile(r"\A[0-9]+\Z")
SELF_TOKEN = "me"


@dataclass(frozen=True, slots=True)
class CanonicalReference:
    """Already an internal id; used unchanged."""

    value: str


@dataclass(frozen=True, slots=True)
class SelfToken:
    """The literal ``"me"``: the authenticated viewer."""

    value: str = SELF_TOKEN


@dataclass(frozen=True, slots=True)
class EmailToken:
    value: str


@dataclass(frozen=True, slots=True)
class NumericToken:
    """All-digit ordinal, such as a cycle number."""

    value: str

    @property
    def number(self) -> int:
        return int(self.value)


@dataclass(frozen=True, slots=True)
class NameToken:
    value: str


Identifier = Union[CanonicalReference, SelfToken, EmailToken, NumericToken, NameToken]


def is_canonical(value: str) -> bool:
    """Check for the 8-4-4-4-12 hexadecimal id shape."""
    return CANONICAL_RE.match(value) is not None


def classify(
    value: str,
    *,
    self_token: bool = False,
    email: bool = False,
    numeric: bool = False,
) -> Identifier:
    """Classify a raw identifier.

    Args:
        value: Raw caller input
        self_token: Recognize ``"me"``
        email: Recognize values containing ``@``
        numeric: Recognize all-digit values

    Returns:
        The token for ``value``
    """
    if is_canonical(value):
        return CanonicalReference(value)
    if self_token and value == SELF_TOKEN:
        return SelfToken()
    if email and "@" in value:
        return EmailToken(value)
    if numeric and NUMERIC_RE.match(value):
        return NumericToken(value)
    return NameToken(value)


def classify_for(kind: ResolutionKind, value: str) -> Identifier:
    """Classify ``value`` with the tokens ``kind`` accepts."""
    return classify(
        value,
        self_token=kind is ResolutionKind.USER,
        email=kind is ResolutionKind.USER,
        numeric=kind is ResolutionKind.CYCLE,
    )
