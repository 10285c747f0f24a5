"""Collection endpoints.

Proxies catalog listing, per-collection row fetches, and class deletion to
Weaviate. Error bodies use ``{"error": ..., "details": ...}`` so the dashboard
can show the underlying message.
"""

from typing import Literal

import structlog
from fastapi import APIRouter, Depends, Query, status
from fastapi.responses import JSONResponse

from app.api.deps import get_collection_catalog, get_collection_reader
from app.core.weaviate import WeaviateError
from app.schemas.collection import (
    CollectionDataResponse,
    CollectionIdsResponse,
    CollectionListResponse,
    DeleteResponse,
    ErrorResponse,
    SortDirective,
)
from app.services.collection_catalog import CollectionCatalog
from app.services.collection_reader import CollectionDataReader
from app.services.graphql_builder import validate_name

router = APIRouter()
logger = structlog.stdlib.get_logger("weaviate_dashboard.api")

_ERROR_RESPONSES = {
    400: {"model": ErrorResponse},
    404: {"model": ErrorResponse},
    500: {"model": ErrorResponse},
}


def _error(status_code: int, error: str, details: str | None = None) -> JSONResponse:
    content: dict = {"error": error}
    if details is not None:
        content["details"] = details
    return JSONResponse(content=content, status_code=status_code)


def _missing_name() -> JSONResponse:
    logger.info("collection_name_missing")
    return _error(status.HTTP_400_BAD_REQUEST, "Collection name is required")


@router.get(
    "/collections",
    response_model=CollectionListResponse,
    responses={500: {"model": ErrorResponse}},
)
async def list_collections(
    catalog: CollectionCatalog = Depends(get_collection_catalog),
):
    """Return every collection with its object count and properties."""
    try:
        collections = await catalog.get_collections()
    except WeaviateError as exc:
        logger.error("list_collections_failed", error=str(exc), url=exc.url, exc_info=True)
        return _error(500, "Failed to fetch collections", str(exc))
    return CollectionListResponse(collections=collections)


@router.get("/collection/", responses={400: {"model": ErrorResponse}})
async def get_collection_data_without_name():
    return _missing_name()


@router.get(
    "/collection/{name}",
    response_model=CollectionDataResponse,
    responses=_ERROR_RESPONSES,
)
async def get_collection_data(
    name: str,
    sort_property: str | None = Query(default=None, alias="sortProperty"),
    sort_order: Literal["asc", "desc"] | None = Query(default=None, alias="sortOrder"),
    limit: int | None = Query(default=None, ge=1, le=10000),
    catalog: CollectionCatalog = Depends(get_collection_catalog),
    reader: CollectionDataReader = Depends(get_collection_reader),
):
    """Return the objects stored in one collection.

    ``sortProperty`` must be one of the collection's declared properties;
    ``sortOrder`` defaults to ascending and is ignored without a property.
    """
    logger.info("collection_data_requested", collection=name)
    try:
        collection = await catalog.find_collection(name)
        if collection is None:
            logger.info("collection_not_found", collection=name)
            return _error(status.HTTP_404_NOT_FOUND, "Collection not found")

        sort = None
        if sort_property:
            sort_prop = collection.get_property(sort_property)
            if sort_prop is None:
                return _error(
                    status.HTTP_400_BAD_REQUEST,
                    "Unknown sort property",
                    f"{sort_property!r} is not a property of {name}",
                )
            if not sort_prop.is_sortable:
                return _error(
                    status.HTTP_400_BAD_REQUEST,
                    "Property cannot be sorted",
                    f"{sort_property!r} has type {sort_prop.data_type[0]}",
                )
            sort = SortDirective(property=sort_property, order=sort_order or "asc")

        rows = await reader.get_collection_data(
            name, collection.properties, sort=sort, limit=limit
        )
    except WeaviateError as exc:
        logger.error(
            "collection_data_failed",
            collection=name,
            url=exc.url,
            error_type=type(exc).__name__,
            error=str(exc),
            exc_info=True,
        )
        return _error(500, "Failed to fetch data", str(exc))

    return CollectionDataResponse(data=rows)


@router.get(
    "/collection/{name}/ids",
    response_model=CollectionIdsResponse,
    responses=_ERROR_RESPONSES,
)
async def get_collection_ids(
    name: str,
    catalog: CollectionCatalog = Depends(get_collection_catalog),
    reader: CollectionDataReader = Depends(get_collection_reader),
):
    """Return the object ids stored in one collection."""
    try:
        collection = await catalog.find_collection(name)
        if collection is None:
            return _error(status.HTTP_404_NOT_FOUND, "Collection not found")
        ids = await reader.get_object_ids(name)
    except WeaviateError as exc:
        logger.error("collection_ids_failed", collection=name, error=str(exc), exc_info=True)
        return _error(500, "Failed to fetch data", str(exc))
    return CollectionIdsResponse(ids=ids)


@router.delete("/collection/", responses={400: {"model": ErrorResponse}})
async def delete_collection_without_name():
    return _missing_name()


@router.delete(
    "/collection/{name}",
    response_model=DeleteResponse,
    responses=_ERROR_RESPONSES,
)
async def delete_collection(
    name: str,
    catalog: CollectionCatalog = Depends(get_collection_catalog),
):
    """Delete a collection and every object in it."""
    try:
        validate_name(name)
    except ValueError as exc:
        return _error(status.HTTP_400_BAD_REQUEST, "Invalid collection name", str(exc))

    try:
        await catalog.delete_collection(name)
    except WeaviateError as exc:
        logger.error(
            "collection_delete_failed",
            collection=name,
            url=exc.url,
            error_type=type(exc).__name__,
            error=str(exc),
            exc_info=True,
        )
        return _error(500, "Failed to delete collection", str(exc))

    logger.info("collection_deleted", collection=name)
    return DeleteResponse(success=True)
