"""Collection Catalog: lists Weaviate classes with their object counts.

Reads the schema from /v1/schema, then runs one Aggregate count query per
class. Count queries are fanned out with a bounded semaphore; results keep
schema declaration order.

Count failures are masked: a class whose Aggregate query fails is reported
with count 0 so that one broken class does not hide the whole catalog.
Schema failures always propagate.
"""

import asyncio

import structlog

from app.core.metrics import aggregate_count_failures_total, collections_deleted_total
from app.core.weaviate import WeaviateClient, WeaviateError
from app.schemas.collection import CollectionInfo, PropertyInfo
from app.services.graphql_builder import build_aggregate_count_query

logger = structlog.stdlib.get_logger("weaviate_dashboard.catalog")


def _extract_count(response: dict, class_name: str) -> int:
    """Read data.Aggregate[class][0].meta.count, defaulting to 0."""
    aggregate = (response.get("data") or {}).get("Aggregate") or {}
    rows = aggregate.get(class_name) or []
    if not rows:
        return 0
    count = ((rows[0] or {}).get("meta") or {}).get("count")
    return int(count) if count else 0


class CollectionCatalog:
    def __init__(self, client: WeaviateClient, count_concurrency: int = 4):
        self._client = client
        self._count_concurrency = max(1, count_concurrency)

    async def get_object_count(self, class_name: str) -> int:
        """Return the object count for a class, or 0 if the query fails."""
        query = build_aggregate_count_query(class_name)
        try:
            response = await self._client.execute_query(query)
        except WeaviateError as exc:
            aggregate_count_failures_total.inc()
            logger.warning(
                "aggregate_count_failed",
                class_name=class_name,
                url=exc.url,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            return 0
        return _extract_count(response, class_name)

    async def get_collections(self) -> list[CollectionInfo]:
        """Return every declared class with its count, in schema order."""
        try:
            classes = await self._client.fetch_schema()
        except WeaviateError as exc:
            logger.error(
                "collections_fetch_failed",
                url=exc.url,
                error_type=type(exc).__name__,
                error=str(exc),
            )
            raise

        semaphore = asyncio.Semaphore(self._count_concurrency)

        async def _bounded_count(class_name: str) -> int:
            async with semaphore:
                return await self.get_object_count(class_name)

        counts = await asyncio.gather(*(_bounded_count(c["class"]) for c in classes))

        return [
            CollectionInfo(
                name=weaviate_class["class"],
                description=weaviate_class.get("description"),
                count=count,
                properties=[
                    PropertyInfo.model_validate(p)
                    for p in weaviate_class.get("properties") or []
                ],
            )
            for weaviate_class, count in zip(classes, counts, strict=True)
        ]

    async def find_collection(self, name: str) -> CollectionInfo | None:
        """Look up one collection by exact name from a fresh catalog snapshot."""
        collections = await self.get_collections()
        return next((c for c in collections if c.name == name), None)

    async def delete_collection(self, name: str) -> None:
        """Delete a class through Weaviate's schema endpoint."""
        await self._client.delete_class(name)
        collections_deleted_total.inc()
