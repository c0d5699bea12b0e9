"""Configuration for linear-toon."""

from linear_toon.config.settings import DEFAULT_ENDPOINT, LinearSettings

__all__ = ["DEFAULT_ENDPOINT", "LinearSettings"]
