"""Dashboard page tests."""

from unittest.mock import patch

from httpx import AsyncClient


async def test_index_renders_shell(client: AsyncClient):
    response = await client.get("/")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/html")
    assert "Weaviate collections" in response.text
    assert 'id="loading"' in response.text
    assert 'id="error"' in response.text
    assert "/api/collections" in response.text


async def test_index_shows_configured_host(client: AsyncClient):
    with patch("app.api.routes.dashboard.settings") as mock_settings:
        mock_settings.weaviate.weaviate_url = "http://localhost:8080"
        response = await client.get("/")

    assert "on http://localhost:8080" in response.text


async def test_collection_page_embeds_name_safely(client: AsyncClient):
    response = await client.get("/collections/Article")

    assert response.status_code == 200
    assert 'const collectionName = "Article";' in response.text
    assert "/api/collection/" in response.text


async def test_collection_page_only_binds_sort_to_schema_columns(client: AsyncClient):
    response = await client.get("/collections/Article")

    # Headers get a click handler only when the schema marks them sortable
    assert "if (sortableColumns.has(column))" in response.text
    assert '"geoCoordinates", "phoneNumber", "blob"' in response.text


async def test_collection_page_restores_sort_state_when_fetch_fails(client: AsyncClient):
    response = await client.get("/collections/Article")

    assert "const previous = { ...sortState };" in response.text
    assert "Object.assign(sortState, previous);" in response.text
