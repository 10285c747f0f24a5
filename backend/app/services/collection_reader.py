"""Collection Data Reader: fetches the objects stored in one Weaviate class."""

from collections.abc import Sequence

import structlog

from app.core.metrics import collection_rows_returned
from app.core.weaviate import WeaviateClient, WeaviateResponseError
from app.schemas.collection import CollectionData, PropertyInfo, SortDirective
from app.services.graphql_builder import build_get_query, build_ids_query

logger = structlog.stdlib.get_logger("weaviate_dashboard.reader")


def _graphql_error_message(response: dict) -> str | None:
    errors = response.get("errors") or []
    if errors and isinstance(errors[0], dict):
        return errors[0].get("message")
    return None


class CollectionDataReader:
    def __init__(self, client: WeaviateClient):
        self._client = client

    async def _get_rows(self, class_name: str, query: str) -> list[CollectionData]:
        response = await self._client.execute_query(query)

        get = (response.get("data") or {}).get("Get")
        if not isinstance(get, dict):
            message = "Invalid response structure from Weaviate"
            graphql_error = _graphql_error_message(response)
            if graphql_error:
                message = f"{message}: {graphql_error}"
            logger.error(
                "collection_data_invalid_response",
                class_name=class_name,
                graphql_error=graphql_error,
            )
            raise WeaviateResponseError(message, url=self._client.base_url)

        return get.get(class_name) or []

    async def get_collection_data(
        self,
        class_name: str,
        properties: Sequence[PropertyInfo],
        sort: SortDirective | None = None,
        limit: int | None = None,
    ) -> list[CollectionData]:
        """Return all objects of class_name with the requested properties.

        Raises:
            ValueError: If a class or property name is not a valid GraphQL name.
            WeaviateError: If the query fails or the response lacks ``data.Get``.
        """
        query = build_get_query(class_name, properties, sort=sort, limit=limit)
        rows = await self._get_rows(class_name, query)
        collection_rows_returned.observe(len(rows))
        logger.info("collection_data_fetched", class_name=class_name, rows=len(rows))
        return rows

    async def get_object_ids(self, class_name: str) -> list[str]:
        """Return the ids of every object in class_name."""
        rows = await self._get_rows(class_name, build_ids_query(class_name))
        return [
            row["_additional"]["id"]
            for row in rows
            if (row.get("_additional") or {}).get("id")
        ]
