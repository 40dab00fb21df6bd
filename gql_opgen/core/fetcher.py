"""Introspection fetcher for remote GraphQL endpoints.

Sends the standard introspection query over HTTP and returns the
``__schema`` payload.
"""

from typing import Any

import httpx
from graphql import get_introspection_query

from .errors import SchemaFetchError, SchemaLoadError
from .logger import get_logger
from .parser import extract_schema_payload

logger = get_logger(__name__)


class SchemaFetcher:
    """Fetches a schema from a GraphQL endpoint via introspection.

    Examples:
        fetcher = SchemaFetcher("https://api.example.com/graphql")
        payload = await fetcher.fetch()

        # With auth headers
        fetcher = SchemaFetcher(url, headers={"Authorization": "Bearer token"})
    """

    def __init__(
        self,
        endpoint: str,
        headers: dict[str, str] | None = None,
        *,
        timeout: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """Initialize the fetcher.

        Args:
            endpoint: GraphQL endpoint URL
            headers: Extra request headers (auth tokens, tenant ids, ...)
            timeout: Request timeout in seconds
            transport: Optional httpx transport, e.g. ``httpx.MockTransport``
        """
        self.endpoint = endpoint
        self.timeout = timeout
        self._headers = {"Content-Type": "application/json"}
        self._headers.update(headers or {})
        self._transport = transport

    async def fetch(self) -> dict[str, Any]:
        """Run the introspection query.

        Returns:
            The ``__schema`` object of the response

        Raises:
            SchemaFetchError: On HTTP failures, GraphQL errors or a response
                without a schema
        """
        payload = {"query": get_introspection_query(descriptions=True)}
        logger.debug(f"Fetching schema from {self.endpoint}")

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                headers=self._headers,
                transport=self._transport,
            ) as client:
                response = await client.post(self.endpoint, json=payload)
                response.raise_for_status()
                result = response.json()
        except httpx.HTTPStatusError as e:
            raise self._status_error(e.response.status_code, str(e)) from e
        except httpx.ConnectError as e:
            raise SchemaFetchError(
                "Connection refused. Make sure the GraphQL server is running."
            ) from e
        except httpx.HTTPError as e:
            raise SchemaFetchError(f"Failed to fetch schema: {e}") from e
        except ValueError as e:
            raise SchemaFetchError(f"Failed to fetch schema: invalid JSON response ({e})") from e

        if not isinstance(result, dict):
            raise SchemaFetchError("Failed to fetch schema: unexpected response shape")

        if result.get("errors"):
            messages = "; ".join(
                e.get("message", str(e)) if isinstance(e, dict) else str(e)
                for e in result["errors"]
            )
            raise SchemaFetchError(f"Failed to fetch schema: GraphQL errors: {messages}")

        try:
            return extract_schema_payload(result)
        except SchemaLoadError as e:
            raise SchemaFetchError(f"Failed to fetch schema: {e}") from e

    @staticmethod
    def _status_error(status_code: int, detail: str) -> SchemaFetchError:
        if status_code == 401:
            message = "Authentication failed. Check your headers/credentials."
        elif status_code == 404:
            message = "GraphQL endpoint not found. Check your endpoint URL."
        else:
            message = f"Failed to fetch schema: {detail}"
        return SchemaFetchError(message, status_code=status_code)
