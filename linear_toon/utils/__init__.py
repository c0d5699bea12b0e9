"""Shared utilities."""

from linear_toon.utils.logging_config import configure_logging

__all__ = ["configure_logging"]
