"""Compact text encoding of tool results."""

from linear_toon.encoding.toon import encode

__all__ = ["encode"]
