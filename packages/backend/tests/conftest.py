"""Pytest configuration and fixtures."""

import os
from collections.abc import AsyncGenerator, Callable

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

# Set test environment before imports
os.environ["INFRALENS_DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["INFRALENS_HF_ENABLED"] = "false"
os.environ["INFRALENS_AUTH_ENABLED"] = "false"
os.environ.pop("INFRALENS_ANTHROPIC_API_KEY", None)

from adapters.auth import NoAuthProvider
from adapters.catalog import DatabaseCatalogSource, StaticCatalogSource
from api.dependencies import (
    get_analytics_recorder,
    get_auth_provider,
    get_catalog_service,
    get_recommendation_service,
)
from api.main import app
from core.cache import TTLCache
from core.schemas import ModelRecommendation
from persistence.database import get_db, seed_defaults
from persistence.models import Base
from services.analytics import AnalyticsRecorder
from services.catalog import CatalogService
from services.recommendation import RecommendationService


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def make_model() -> Callable[..., ModelRecommendation]:
    """Build a catalog entry, overriding only the fields a test cares about."""

    def _make(model_id: str = "model-a", **overrides) -> ModelRecommendation:
        fields = {
            "id": model_id,
            "name": model_id.replace("-", " ").title(),
            "provider": "Acme",
            "parameters": "1B",
            "memory_required": "2 GB",
            "latency": "~10ms",
            "license": "MIT",
            "score": 80,
            "reasoning": f"Reasoning for {model_id}.",
            "tradeoffs": ["Some tradeoff"],
        }
        fields.update(overrides)
        return ModelRecommendation(**fields)

    return _make


@pytest_asyncio.fixture
async def session_factory() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Seeded in-memory database, fresh per test."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with factory() as session:
        await seed_defaults(session)

    yield factory

    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(
    session_factory: async_sessionmaker[AsyncSession],
) -> AsyncGenerator[AsyncSession, None]:
    """Create a test database session."""
    async with session_factory() as session:
        yield session


@pytest.fixture
def catalog_service(session_factory: async_sessionmaker[AsyncSession]) -> CatalogService:
    return CatalogService(
        [DatabaseCatalogSource(session_factory), StaticCatalogSource()],
        TTLCache(60.0, name="result"),
    )


@pytest.fixture
def recorder(session_factory: async_sessionmaker[AsyncSession]) -> AnalyticsRecorder:
    return AnalyticsRecorder(session_factory)


@pytest_asyncio.fixture
async def client(
    db_session: AsyncSession,
    catalog_service: CatalogService,
    recorder: AnalyticsRecorder,
) -> AsyncGenerator[AsyncClient, None]:
    """Create test client with database and service overrides."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    service = RecommendationService(catalog_service, reranker=None, recorder=recorder)

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_catalog_service] = lambda: catalog_service
    app.dependency_overrides[get_analytics_recorder] = lambda: recorder
    app.dependency_overrides[get_recommendation_service] = lambda: service
    app.dependency_overrides[get_auth_provider] = NoAuthProvider

    async with AsyncClient(
        transport=ASGITransport(app=app),
        base_url="http://test",
    ) as ac:
        yield ac

    await recorder.drain()
    app.dependency_overrides.clear()
