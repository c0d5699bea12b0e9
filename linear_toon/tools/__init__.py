"""Tool catalogue exposed over MCP."""

from linear_toon.tools import comments, issues, workspace
from linear_toon.tools.registry import ToolContext, ToolDefinition, ToolRegistry, ToolResult


def default_tools() -> tuple[ToolDefinition, ...]:
    """All tools in the order they are advertised."""
    return (*issues.TOOLS, *comments.TOOLS, *workspace.TOOLS)


__all__ = [
    "ToolContext",
    "ToolDefinition",
    "ToolRegistry",
    "ToolResult",
    "default_tools",
]
