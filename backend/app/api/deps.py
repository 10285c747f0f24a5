"""Dependency injection for FastAPI routes.

All services are provided via Depends() from this module.
Route handlers never instantiate services directly.
"""

from fastapi import Depends, Request

from app.core.config import settings
from app.core.weaviate import WeaviateClient
from app.services.collection_catalog import CollectionCatalog
from app.services.collection_reader import CollectionDataReader


async def get_weaviate_client(request: Request) -> WeaviateClient:
    """Return the shared Weaviate client created at startup."""
    return request.app.state.weaviate_client


async def get_collection_catalog(
    client: WeaviateClient = Depends(get_weaviate_client),
) -> CollectionCatalog:
    return CollectionCatalog(
        client=client,
        count_concurrency=settings.weaviate.weaviate_count_concurrency,
    )


async def get_collection_reader(
    client: WeaviateClient = Depends(get_weaviate_client),
) -> CollectionDataReader:
    return CollectionDataReader(client=client)
