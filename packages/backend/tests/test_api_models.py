"""Test catalog listing endpoint."""

import pytest
from httpx import AsyncClient

from api.dependencies import get_catalog_service
from api.main import app
from core.cache import TTLCache
from services.catalog import CatalogService


@pytest.mark.asyncio
async def test_models_for_task(client: AsyncClient):
    response = await client.get("/api/models", params={"taskType": "classification"})
    assert response.status_code == 200
    data = response.json()

    assert data["total"] == 3
    assert [m["id"] for m in data["models"]] == ["deberta-v3-large", "roberta-large", "distilbert"]


@pytest.mark.asyncio
async def test_warning_model_for_task(client: AsyncClient):
    response = await client.get(
        "/api/models", params={"taskType": "classification", "isWarning": "true"}
    )
    assert response.status_code == 200
    data = response.json()
    assert data["total"] == 1
    assert data["models"][0]["id"] == "bert-base"


@pytest.mark.asyncio
async def test_models_filtered_by_deployment_target(client: AsyncClient):
    response = await client.get(
        "/api/models",
        params={"taskType": "text-generation", "deploymentTarget": "edge-device"},
    )
    assert response.status_code == 200
    assert [m["id"] for m in response.json()["models"]] == ["phi-3-mini"]


@pytest.mark.asyncio
async def test_all_models_merged(client: AsyncClient):
    response = await client.get("/api/models")
    assert response.status_code == 200
    data = response.json()

    scores = [m["score"] for m in data["models"]]
    assert data["total"] == len(data["models"]) > 6
    assert scores == sorted(scores, reverse=True)
    assert not any(m["isWarning"] for m in data["models"])


@pytest.mark.asyncio
async def test_all_warning_models(client: AsyncClient):
    response = await client.get("/api/models", params={"isWarning": "true"})
    assert response.status_code == 200
    assert response.json()["total"] == 6


@pytest.mark.asyncio
async def test_invalid_task_type(client: AsyncClient):
    response = await client.get("/api/models", params={"taskType": "image-generation"})
    assert response.status_code == 422
    assert response.json()["details"][0]["field"] == "taskType"


@pytest.mark.asyncio
async def test_exhausted_catalog_returns_404(client: AsyncClient):
    """Test that a chain with no usable tier reports 404."""
    empty = CatalogService([], TTLCache(60.0))
    app.dependency_overrides[get_catalog_service] = lambda: empty

    response = await client.get("/api/models", params={"taskType": "classification"})
    assert response.status_code == 404
    assert "classification" in response.json()["detail"]
