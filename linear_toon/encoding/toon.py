"""TOON (Token-Oriented Object Notation) encoder.

Renders JSON-like values as compact, indentation-based text:

    issue:
      id: 9f1c...
      title: Crash on save
      labels:
        nodes[2]{name}:
          bug
          mobile

Objects become ``key: value`` lines, lists of primitives are inlined
(``tags[3]: a,b,c``), lists of flat objects sharing the same keys become a
table (``nodes[2]{id,name}:`` followed by one row per object) and any other
list falls back to ``- item`` entries. Strings are quoted only when they
would otherwise be ambiguous.
"""

from __future__ import annotations

import math
import re
from collections.abc import Mapping, Sequence
from typing import Any

INDENT = "  "
DELIMITER = ","

_SAFE_KEY_RE = re.compile(r"\A[A-Za-z_][A-Za-z0-9_.]*\Z")
_NUMERIC_LIKE_RE = re.compile(r"\A-?\d+(?:\.\d+)?(?:[eE][+-]?\d+)?\Z|\A0\d+\Z")
_NEEDS_QUOTES = frozenset(':"\\[]{}\n\r\t' + DELIMITER)
_ESCAPES = {"\\": "\\\\", '"': '\\"', "\n": "\\n", "\r": "\\r", "\t": "\\t"}


def encode(value: Any) -> str:
    """Encode a JSON-compatible value as TOON text.

    Args:
        value: dicts, lists, strings, numbers, booleans and None, nested freely

    Returns:
        TOON text without a trailing newline
    """
    if isinstance(value, Mapping):
        return "\n".join(_object_lines(value, 0))
    if _is_list(value):
        return "\n".join(_list_lines(None, value, 0))
    return _primitive(value)


def _object_lines(obj: Mapping[str, Any], depth: int) -> list[str]:
    lines: list[str] = []
    for key, value in obj.items():
        lines.extend(_field_lines(str(key), value, depth))
    return lines


def _field_lines(key: str, value: Any, depth: int) -> list[str]:
    prefix = INDENT * depth
    if isinstance(value, Mapping):
        return [f"{prefix}{_key(key)}:", *_object_lines(value, depth + 1)]
    if _is_list(value):
        return _list_lines(key, value, depth)
    return [f"{prefix}{_key(key)}: {_primitive(value)}"]


def _list_lines(key: str | None, items: Sequence[Any], depth: int) -> list[str]:
    prefix = INDENT * depth
    name = _key(key) if key is not None else ""
    header = f"{name}[{len(items)}]"

    if all(_is_primitive(item) for item in items):
        inline = DELIMITER.join(_primitive(item) for item in items)
        return [f"{prefix}{header}:" + (f" {inline}" if inline else "")]

    fields = _tabular_fields(items)
    if fields is not None:
        lines = [f"{prefix}{header}{{{DELIMITER.join(_key(f) for f in fields)}}}:"]
        row_prefix = INDENT * (depth + 1)
        for item in items:
            lines.append(row_prefix + DELIMITER.join(_primitive(item[f]) for f in fields))
        return lines

    lines = [f"{prefix}{header}:"]
    for item in items:
        lines.extend(_list_item_lines(item, depth + 1))
    return lines


def _list_item_lines(item: Any, depth: int) -> list[str]:
    prefix = INDENT * depth
    if isinstance(item, Mapping):
        if not item:
            return [f"{prefix}-"]
        nested = _object_lines(item, depth + 1)
        # First field shares the hyphen line.
        return [f"{prefix}- {nested[0].lstrip()}", *nested[1:]]
    if _is_list(item):
        nested = _list_lines(None, item, depth + 1)
        return [f"{prefix}- {nested[0].lstrip()}", *nested[1:]]
    return [f"{prefix}- {_primitive(item)}"]


def _tabular_fields(items: Sequence[Any]) -> list[str] | None:
    """Shared keys when every item is a flat object with the same keys."""
    if not items or not all(isinstance(item, Mapping) and item for item in items):
        return None
    fields = list(items[0].keys())
    for item in items:
        if set(item.keys()) != set(fields):
            return None
        if not all(_is_primitive(v) for v in item.values()):
            return None
    return [str(f) for f in fields]


def _is_list(value: Any) -> bool:
    return isinstance(value, (list, tuple))


def _is_primitive(value: Any) -> bool:
    return value is None or isinstance(value, (str, bool, int, float))


def _primitive(value: Any) -> str:
    if value is None:
        return "null"
    if value is True:
        return "true"
    if value is False:
        return "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _number(value)
    return _string(str(value))


def _number(value: float) -> str:
    if math.isnan(value) or math.isinf(value):
        return "null"
    if value == 0:
        return "0"
    if value.is_integer():
        return str(int(value))
    text = repr(value)
    if "e" in text or "E" in text:
        text = f"{value:f}".rstrip("0").rstrip(".")
    return text


def _string(value: str) -> str:
    if _needs_quotes(value):
        escaped = "".join(_ESCAPES.get(ch, ch) for ch in value)
        return f'"{escaped}"'
    return value


def _needs_quotes(value: str) -> bool:
    if not value or value != value.strip():
        return True
    if value in ("true", "false", "null"):
        return True
    if _NUMERIC_LIKE_RE.match(value):
        return True
    if value.startswith("-"):
        return True
    return any(ch in _NEEDS_QUOTES for ch in value)


def _key(key: str) -> str:
    if _SAFE_KEY_RE.match(key):
        return key
    escaped = "".join(_ESCAPES.get(ch, ch) for ch in key)
    return f'"{escaped}"'
