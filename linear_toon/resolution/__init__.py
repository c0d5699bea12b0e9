"""Identifier resolution and search filter construction."""

from linear_toon.resolution.filters import FilterBuilder, clamp_limit, include_archived, parse_duration
from linear_toon.resolution.identifiers import classify, classify_for, is_canonical
from linear_toon.resolution.resolver import ReferenceResolver

__all__ = [
    "FilterBuilder",
    "ReferenceResolver",
    "clamp_limit",
    "classify",
    "classify_for",
    "include_archived",
    "is_canonical",
    "parse_duration",
]
