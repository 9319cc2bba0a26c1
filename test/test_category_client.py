from __future__ import annotations

from pathlib import Path

import httpx
import pytest
from fastapi.testclient import TestClient

from app.API.server import create_app
from app.services.category_client import CategoryClient, CategoryServiceError
from app.services.category_store import CategoryStore


def _build_client(categories_path: Path) -> CategoryClient:
    http_client = TestClient(create_app(CategoryStore(categories_path)))
    return CategoryClient("http://testserver/api", http_client=http_client)


def test_round_trip_through_the_api(categories_path: Path) -> None:
    client = _build_client(categories_path)

    created = client.create("Ops", description="Operations")
    client.create("Finance", color="#000000")
    updated = client.update(created.id, description="Ops team")

    assert updated.description == "Ops team"
    assert [category.name for category in client.list()] == ["Ops", "Finance"]
    assert client.get(2).color == "#000000"

    deleted = client.delete(created.id)
    assert deleted.name == "Ops"
    assert [category.id for category in client.list()] == [2]


def test_server_errors_surface_as_service_errors(categories_path: Path) -> None:
    client = _build_client(categories_path)
    client.create("Ops")

    with pytest.raises(CategoryServiceError, match="already exists") as excinfo:
        client.create("OPS")
    assert excinfo.value.status_code == 400

    with pytest.raises(CategoryServiceError) as excinfo:
        client.delete(99)
    assert excinfo.value.status_code == 404


def test_connection_failures_are_reported() -> None:
    def _refuse(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("refused", request=request)

    client = CategoryClient(
        "http://localhost:9/api",
        http_client=httpx.Client(transport=httpx.MockTransport(_refuse)),
    )

    with pytest.raises(CategoryServiceError, match="Make sure the server is running"):
        client.list()
