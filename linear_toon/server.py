"""MCP server exposing the tool registry over stdio."""

from __future__ import annotations

from typing import Any

import structlog
from mcp import types
from mcp.server import Server
from mcp.server.stdio import stdio_server

from linear_toon import __version__
from linear_toon.client import LinearClient, Transport
from linear_toon.config.settings import LinearSettings
from linear_toon.exceptions import LinearToonError
from linear_toon.tools import ToolContext, ToolDefinition, ToolRegistry, default_tools

log = structlog.get_logger(__name__)

SERVER_NAME = "linear-toon"


class ToolCallError(LinearToonError):
    """Carries an error result's text out of ``call_tool``.

    The MCP server turns an exception raised by a tool handler into a
    result with ``isError`` set and the exception text as content.
    """


def build_registry(client: Transport | None, settings: LinearSettings) -> ToolRegistry:
    """Registry of the default tools bound to ``client`` and the configured limits."""
    context = ToolContext(
        client,
        default_limit=settings.default_limit,
        max_limit=settings.max_limit,
    )
    return ToolRegistry(default_tools(), context)


def tool_descriptor(definition: ToolDefinition) -> types.Tool:
    return types.Tool(
        name=definition.name,
        description=definition.description,
        inputSchema=definition.input_schema(),
        annotations=types.ToolAnnotations(
            readOnlyHint=definition.read_only,
            destructiveHint=definition.destructive,
            idempotentHint=definition.idempotent,
            openWorldHint=True,
        ),
    )


async def dispatch(registry: ToolRegistry, name: str, arguments: dict[str, Any] | None) -> list[types.TextContent]:
    """Run one tool call through the registry.

    Raises:
        ToolCallError: If the registry returned an error result
    """
    result = await registry.call(name, arguments)
    if result.is_error:
        raise ToolCallError(result.text)
    return [types.TextContent(type="text", text=result.text)]


def build_server(registry: ToolRegistry) -> Server:
    """Create an MCP server whose tools are served from ``registry``."""
    server: Server = Server(SERVER_NAME, version=__version__)

    @server.list_tools()
    async def list_tools() -> list[types.Tool]:
        return [tool_descriptor(definition) for definition in registry.list_tools()]

    @server.call_tool()
    async def call_tool(name: str, arguments: dict[str, Any] | None) -> list[types.TextContent]:
        return await dispatch(registry, name, arguments)

    return server


async def run_stdio(settings: LinearSettings) -> None:
    """Serve MCP over stdin/stdout until the client disconnects."""
    async with LinearClient(settings) as client:
        server = build_server(build_registry(client, settings))
        log.info("server_starting", name=SERVER_NAME, version=__version__, endpoint=client.endpoint)
        async with stdio_server() as (read_stream, write_stream):
            await server.run(read_stream, write_stream, server.create_initialization_options())
        log.info("server_stopped")
