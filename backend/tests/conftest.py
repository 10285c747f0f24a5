"""Shared test fixtures.

Weaviate is replaced by an in-memory fake served through httpx.MockTransport.
Tests never require a running Weaviate instance (except tests/integration).
"""

import json
import re

import httpx
import pytest
from httpx import ASGITransport, AsyncClient

from app.api.deps import get_weaviate_client
from app.core.weaviate import WeaviateClient
from app.main import app

WEAVIATE_TEST_URL = "http://weaviate.test"

_CLASS_RE = re.compile(r"(Get|Aggregate)\s*\{\s*(\w+)")


class FakeWeaviate:
    """In-memory stand-in for the Weaviate REST and GraphQL endpoints."""

    def __init__(self):
        self.classes: list[dict] = []
        self.objects: dict[str, list[dict]] = {}
        self.schema_status = 200
        self.delete_status = 200
        self.ready_status = 200
        self.failing_aggregates: set[str] = set()
        # When set, returned verbatim for every Get query
        self.get_response: dict | None = None
        self.queries: list[str] = []
        self.requests: list[httpx.Request] = []

    def add_class(
        self,
        name: str,
        properties: list[str] | None = None,
        objects: list[dict] | None = None,
        description: str | None = None,
    ) -> None:
        self.classes.append(
            {
                "class": name,
                "description": description,
                "properties": [
                    {"name": p, "dataType": ["text"]} for p in properties or []
                ],
            }
        )
        self.objects[name] = list(objects or [])

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path

        if path == "/v1/schema" and request.method == "GET":
            if self.schema_status != 200:
                return httpx.Response(self.schema_status)
            return httpx.Response(200, json={"classes": self.classes})

        if path.startswith("/v1/schema/") and request.method == "DELETE":
            if self.delete_status != 200:
                return httpx.Response(self.delete_status)
            name = path.rsplit("/", 1)[1]
            self.classes = [c for c in self.classes if c["class"] != name]
            self.objects.pop(name, None)
            return httpx.Response(200)

        if path == "/v1/graphql" and request.method == "POST":
            query = json.loads(request.content)["query"]
            self.queries.append(query)
            return self._graphql(query)

        if path == "/v1/.well-known/ready":
            return httpx.Response(self.ready_status)

        return httpx.Response(404)

    def _graphql(self, query: str) -> httpx.Response:
        kind, class_name = _CLASS_RE.search(query).groups()
        if kind == "Aggregate":
            if class_name in self.failing_aggregates:
                return httpx.Response(500)
            count = len(self.objects.get(class_name, []))
            return httpx.Response(
                200,
                json={"data": {"Aggregate": {class_name: [{"meta": {"count": count}}]}}},
            )
        if self.get_response is not None:
            return httpx.Response(200, json=self.get_response)
        return httpx.Response(
            200, json={"data": {"Get": {class_name: self.objects.get(class_name)}}}
        )


@pytest.fixture
def fake_weaviate() -> FakeWeaviate:
    return FakeWeaviate()


@pytest.fixture
async def weaviate_client(fake_weaviate: FakeWeaviate) -> WeaviateClient:
    """WeaviateClient wired to the in-memory fake."""
    client = WeaviateClient(
        WEAVIATE_TEST_URL, transport=httpx.MockTransport(fake_weaviate.handler)
    )
    yield client
    await client.close()


@pytest.fixture
async def client(weaviate_client: WeaviateClient) -> AsyncClient:
    """Provide an httpx AsyncClient wired to the FastAPI test app."""
    app.dependency_overrides[get_weaviate_client] = lambda: weaviate_client

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.pop(get_weaviate_client, None)
