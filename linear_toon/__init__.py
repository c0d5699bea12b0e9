"""linear-toon: Linear GraphQL tools over MCP with TOON-encoded results."""

__version__ = "0.1.0"
