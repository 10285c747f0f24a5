"""Metrics endpoint tests."""

from httpx import AsyncClient


async def test_metrics_endpoint_exposes_prometheus_text(client: AsyncClient):
    await client.get("/health")

    response = await client.get("/metrics")

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/plain")
    assert "weaviate_dashboard_http_requests_total" in response.text
