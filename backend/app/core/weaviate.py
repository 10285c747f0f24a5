"""Weaviate async HTTP client.

Talks to the Weaviate REST and GraphQL endpoints over httpx:
- POST /v1/graphql: Get and Aggregate queries
- GET /v1/schema: class and property declarations
- DELETE /v1/schema/{class}: class removal
- GET /v1/.well-known/ready: readiness

No retries and no caching: every call goes to the live database.
"""

from __future__ import annotations

import time
from typing import Any

import httpx
import structlog

from app.core.config import ConfigurationError, WeaviateSettings, settings
from app.core.metrics import weaviate_request_duration_seconds, weaviate_requests_total

logger = structlog.stdlib.get_logger("weaviate_dashboard.weaviate")


class WeaviateError(Exception):
    """Base error for failed Weaviate calls."""

    def __init__(self, message: str, url: str | None = None):
        self.url = url
        super().__init__(message)


class WeaviateRequestError(WeaviateError):
    """Transport failure or non-2xx response. status_code is None for transport errors."""

    def __init__(self, message: str, url: str | None = None, status_code: int | None = None):
        self.status_code = status_code
        super().__init__(message, url=url)


class WeaviateResponseError(WeaviateError):
    """Response body could not be parsed or lacked the expected shape."""


class WeaviateClient:
    """Thin async wrapper over the Weaviate HTTP API.

    One httpx.AsyncClient is shared across requests; call close() at shutdown.
    """

    def __init__(
        self,
        base_url: str,
        *,
        api_key: str | None = None,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        headers = {"Content-Type": "application/json"}
        if api_key:
            headers["Authorization"] = f"Bearer {api_key}"
        self._http = httpx.AsyncClient(
            base_url=self.base_url,
            headers=headers,
            timeout=timeout,
            transport=transport,
        )

    async def close(self) -> None:
        await self._http.aclose()

    async def _request(
        self,
        operation: str,
        method: str,
        path: str,
        *,
        failure_message: str,
        json: dict | None = None,
    ) -> httpx.Response:
        """Send a request and raise WeaviateRequestError on transport or HTTP failure."""
        url = f"{self.base_url}{path}"
        start = time.monotonic()
        try:
            response = await self._http.request(method, path, json=json)
        except httpx.HTTPError as exc:
            weaviate_requests_total.labels(operation=operation, status="error").inc()
            logger.error(
                "weaviate_request_failed",
                operation=operation,
                url=url,
                error_type=type(exc).__name__,
                error=str(exc),
                exc_info=True,
            )
            raise WeaviateRequestError(f"{failure_message}: {exc}", url=url) from exc
        finally:
            weaviate_request_duration_seconds.labels(operation=operation).observe(
                time.monotonic() - start
            )

        if response.is_error:
            weaviate_requests_total.labels(operation=operation, status="error").inc()
            logger.error(
                "weaviate_request_failed",
                operation=operation,
                url=url,
                status=response.status_code,
                reason=response.reason_phrase,
            )
            raise WeaviateRequestError(
                f"{failure_message}: {response.reason_phrase}",
                url=url,
                status_code=response.status_code,
            )

        weaviate_requests_total.labels(operation=operation, status="ok").inc()
        return response

    @staticmethod
    def _parse_object(response: httpx.Response) -> dict[str, Any]:
        url = str(response.request.url)
        try:
            body = response.json()
        except ValueError as exc:
            logger.error("weaviate_invalid_json", url=url, error=str(exc))
            raise WeaviateResponseError(
                "Weaviate returned a response that is not valid JSON", url=url
            ) from exc
        if not isinstance(body, dict):
            raise WeaviateResponseError(
                f"Expected a JSON object from Weaviate, got {type(body).__name__}",
                url=url,
            )
        return body

    async def execute_query(self, query: str) -> dict[str, Any]:
        """Run a GraphQL query and return the decoded envelope.

        The envelope is returned as-is; callers check for the
        ``data.Get`` / ``data.Aggregate`` shape they expect.
        """
        logger.info("weaviate_query_started", url=f"{self.base_url}/v1/graphql")
        response = await self._request(
            "graphql",
            "POST",
            "/v1/graphql",
            json={"query": query},
            failure_message="Query failed",
        )
        return self._parse_object(response)

    async def fetch_schema(self) -> list[dict[str, Any]]:
        """Return the declared classes. A missing ``classes`` field means none."""
        logger.info("weaviate_schema_fetch_started", url=f"{self.base_url}/v1/schema")
        response = await self._request(
            "schema",
            "GET",
            "/v1/schema",
            failure_message="Failed to fetch schema",
        )
        schema = self._parse_object(response)
        classes = schema.get("classes") or []
        if not isinstance(classes, list):
            raise WeaviateResponseError(
                "Schema 'classes' field is not a list", url=str(response.request.url)
            )
        return classes

    async def delete_class(self, class_name: str) -> None:
        """Delete a class and all of its objects."""
        await self._request(
            "delete_class",
            "DELETE",
            f"/v1/schema/{class_name}",
            failure_message="Failed to delete collection",
        )
        logger.info("weaviate_class_deleted", class_name=class_name)

    async def create_class(self, class_definition: dict[str, Any]) -> dict[str, Any]:
        """Create a class from a schema definition (used for seeding)."""
        response = await self._request(
            "create_class",
            "POST",
            "/v1/schema",
            json=class_definition,
            failure_message="Failed to create collection",
        )
        return self._parse_object(response)

    async def create_object(
        self, class_name: str, properties: dict[str, Any]
    ) -> dict[str, Any]:
        """Insert one object into a class (used for seeding)."""
        response = await self._request(
            "create_object",
            "POST",
            "/v1/objects",
            json={"class": class_name, "properties": properties},
            failure_message="Failed to create object",
        )
        return self._parse_object(response)

    async def ping(self) -> bool:
        """Health check."""
        try:
            await self._request(
                "ready",
                "GET",
                "/v1/.well-known/ready",
                failure_message="Weaviate not ready",
            )
            return True
        except WeaviateError:
            return False


def get_weaviate_client(config: WeaviateSettings | None = None) -> WeaviateClient:
    """Build a client from settings.

    Raises:
        ConfigurationError: If WEAVIATE_URL is not configured.
    """
    config = config or settings.weaviate
    if not config.weaviate_url:
        raise ConfigurationError(
            "WEAVIATE_URL must be set via environment variable. "
            "The dashboard cannot start without a database to browse."
        )
    return WeaviateClient(
        config.weaviate_url,
        api_key=config.weaviate_api_key,
        timeout=config.weaviate_timeout,
    )
