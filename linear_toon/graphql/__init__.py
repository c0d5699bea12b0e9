"""GraphQL documents for the Linear API."""

from linear_toon.graphql.operations import DEFAULT_OPERATIONS, Lookup, Operations

__all__ = ["DEFAULT_OPERATIONS", "Lookup", "Operations"]
