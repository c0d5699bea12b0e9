"""HTTP client for Linear's GraphQL API."""

from __future__ import annotations

import json
from typing import Any, Protocol

import httpx
import structlog

from linear_toon.config.settings import LinearSettings
from linear_toon.exceptions import EmptyResponseError, RemoteError, TransportError

log = structlog.get_logger(__name__)


class Transport(Protocol):
    """Anything that can execute a GraphQL operation.

    ``execute`` returns the decoded ``data`` payload or raises
    TransportError, RemoteError or EmptyResponseError.
    """

    async def execute(self, operation: str, variables: dict[str, Any] | None = None) -> dict[str, Any]: ...


class LinearClient:
    """Minimal GraphQL client for the Linear API.

    One request per call: no retries and no caching. Timeouts come from
    the settings and surface as ``httpx`` exceptions.

    Example:
        >>> async with LinearClient(settings) as client:
        ...     data = await client.execute("query { viewer { id } }")
    """

    def __init__(self, settings: LinearSettings, transport: httpx.AsyncBaseTransport | None = None) -> None:
        """Initialize client.

        Args:
            settings: Loaded settings (endpoint, API key, timeout)
            transport: Optional httpx transport, used by tests
        """
        self.endpoint = str(settings.endpoint)
        self.timeout = settings.timeout
        self._api_key = settings.api_key
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    async def initialize(self) -> None:
        """Create the underlying HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
                headers={
                    "Authorization": self._api_key.get_secret_value(),
                    "Content-Type": "application/json",
                },
            )
            log.info("linear_client_initialized", endpoint=self.endpoint)

    async def close(self) -> None:
        """Close the underlying HTTP client."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            log.info("linear_client_closed", endpoint=self.endpoint)

    async def __aenter__(self) -> LinearClient:
        await self.initialize()
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def execute(self, operation: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """Execute a GraphQL operation.

        Args:
            operation: GraphQL query or mutation text
            variables: Bound variables

        Returns:
            The ``data`` member of the response

        Raises:
            TransportError: Non-2xx status
            EmptyResponseError: 2xx with no decodable body
            RemoteError: 2xx carrying GraphQL ``errors``
        """
        if self._client is None:
            await self.initialize()

        assert self._client is not None
        log.debug("graphql_request", operation=_operation_name(operation))
        response = await self._client.post(
            self.endpoint,
            json={"query": operation, "variables": variables or {}},
        )

        body = _decode(response)

        if not response.is_success:
            detail = "; ".join(_error_messages(body)) or response.text
            log.warning("graphql_http_error", status_code=response.status_code)
            raise TransportError(response.status_code, detail)

        if not isinstance(body, dict):
            raise EmptyResponseError()

        messages = _error_messages(body)
        if messages:
            log.warning("graphql_remote_error", messages=messages)
            raise RemoteError(messages)

        data = body.get("data")
        if data is None:
            raise EmptyResponseError()
        return data


def _decode(response: httpx.Response) -> Any:
    try:
        return response.json()
    except (json.JSONDecodeError, ValueError):
        return None


def _error_messages(body: Any) -> list[str]:
    """Collect the ``errors[].message`` strings of a GraphQL body."""
    if not isinstance(body, dict):
        return []
    errors = body.get("errors") or []
    return [str(e.get("message", e)) if isinstance(e, dict) else str(e) for e in errors]


def _operation_name(operation: str) -> str:
    # First line of the document is enough to tell operations apart in logs.
    return operation.strip().split("\n", 1)[0][:80]
