"""Tool registry and the error boundary around tool calls.

Every tool declares a request model, a handler and MCP annotation hints.
``ToolRegistry.call`` validates arguments, runs the handler, encodes the
result as TOON and turns any failure into an error result. Nothing raised
by a handler escapes ``call``.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Iterable
from dataclasses import dataclass, field
from typing import Any

import structlog
from pydantic import ValidationError

from linear_toon.client import Transport
from linear_toon.encoding.toon import encode
from linear_toon.exceptions import LinearToonError, MissingCollaboratorError, UnexpectedResponseError
from linear_toon.graphql.operations import DEFAULT_OPERATIONS, Operations
from linear_toon.models.requests import ToolRequest
from linear_toon.orchestration.orchestrator import MutationOrchestrator
from linear_toon.resolution.filters import DEFAULT_LIMIT, MAX_LIMIT, FilterBuilder
from linear_toon.resolution.resolver import ReferenceResolver

log = structlog.get_logger(__name__)


@dataclass
class ToolContext:
    """Collaborators shared by all tool handlers for one server process.

    Attributes:
        client: GraphQL transport; tools fail with MissingCollaboratorError when None
        operations: GraphQL documents
        filters: Issue search filter builder
        default_limit: Search page size when none is requested
        max_limit: Upper bound for requested search page size
    """

    client: Transport | None
    operations: Operations = DEFAULT_OPERATIONS
    filters: FilterBuilder = field(default_factory=FilterBuilder)
    default_limit: int = DEFAULT_LIMIT
    max_limit: int = MAX_LIMIT

    def require_client(self) -> Transport:
        if self.client is None:
            raise MissingCollaboratorError("client")
        return self.client

    @property
    def resolver(self) -> ReferenceResolver:
        return ReferenceResolver(self.require_client(), self.operations)

    @property
    def orchestrator(self) -> MutationOrchestrator:
        return MutationOrchestrator(self.require_client(), self.resolver, self.operations)

    async def query(self, operation: str, variables: dict[str, Any] | None = None, *, root: str) -> Any:
        """Execute ``operation`` and return its top-level ``root`` field.

        Raises:
            UnexpectedResponseError: If the field is missing or null
        """
        data = await self.require_client().execute(operation, variables)
        value = data.get(root)
        if value is None:
            raise UnexpectedResponseError(root)
        return value


Handler = Callable[[Any, ToolContext], Awaitable[Any]]


@dataclass(frozen=True)
class ToolDefinition:
    """Definition of a tool exposed over MCP."""

    name: str
    description: str
    request_model: type[ToolRequest]
    handler: Handler
    read_only: bool = True
    destructive: bool = False
    idempotent: bool = True

    def input_schema(self) -> dict[str, Any]:
        """JSON schema of the request, unknown properties disallowed."""
        schema = self.request_model.model_json_schema(by_alias=True)
        schema.pop("title", None)
        schema.setdefault("properties", {})
        schema["additionalProperties"] = False
        return schema


@dataclass(frozen=True)
class ToolResult:
    """Text payload of a tool call; ``is_error`` marks a failure message."""

    text: str
    is_error: bool = False


class ToolRegistry:
    """Named tools plus the context they run with.

    Example:
        >>> registry = ToolRegistry(default_tools(), ToolContext(client))
        >>> result = await registry.call("list_teams", {})
        >>> print(result.text)
    """

    def __init__(self, tools: Iterable[ToolDefinition], context: ToolContext) -> None:
        self._tools = {tool.name: tool for tool in tools}
        self.context = context

    def __contains__(self, name: str) -> bool:
        return name in self._tools

    def get(self, name: str) -> ToolDefinition | None:
        return self._tools.get(name)

    def list_tools(self) -> list[ToolDefinition]:
        return list(self._tools.values())

    async def call(self, name: str, arguments: dict[str, Any] | None) -> ToolResult:
        """Run a tool and encode its result.

        Args:
            name: Tool name
            arguments: Raw arguments from the client

        Returns:
            Encoded result, or an error result carrying the failure message
        """
        tool = self._tools.get(name)
        if tool is None:
            return ToolResult(f"Unknown tool: {name}", is_error=True)

        try:
            request = tool.request_model.model_validate(arguments or {}, by_alias=True, by_name=False)
        except ValidationError as e:
            log.info("tool_arguments_rejected", tool=name, errors=e.error_count())
            return ToolResult(_validation_message(e), is_error=True)

        log.info("tool_called", tool=name)
        try:
            value = await tool.handler(request, self.context)
        except LinearToonError as e:
            log.info("tool_failed", tool=name, error_type=type(e).__name__, error=e.message)
            return ToolResult(e.message, is_error=True)
        except Exception as e:
            log.error("tool_failed_unexpected", tool=name, error_type=type(e).__name__, exc_info=True)
            return ToolResult(str(e) or type(e).__name__, is_error=True)

        return ToolResult(encode(value))


def _validation_message(error: ValidationError) -> str:
    details = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "arguments"
        details.append(f"{location}: {item['msg']}")
    return "Invalid arguments: " + "; ".join(details)
