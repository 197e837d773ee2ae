"""Database connection and session management."""

import logging
from collections.abc import AsyncGenerator

from sqlalchemy import event, select
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from core.config import settings

logger = logging.getLogger(__name__)

_is_sqlite = settings.DATABASE_URL.startswith("sqlite")
_engine_kwargs: dict = {"echo": False}
if _is_sqlite:
    _engine_kwargs["connect_args"] = {"timeout": 30}  # Wait up to 30s for database locks
    if ":memory:" in settings.DATABASE_URL:
        # One shared connection, otherwise every session sees an empty database
        _engine_kwargs["poolclass"] = StaticPool

engine = create_async_engine(settings.DATABASE_URL, **_engine_kwargs)


if _is_sqlite:
    # WAL allows concurrent reads during the fire-and-forget analytics writes
    @event.listens_for(engine.sync_engine, "connect")
    def set_sqlite_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA synchronous=NORMAL")
        cursor.execute("PRAGMA busy_timeout=30000")
        cursor.close()

async_session = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


def get_session_factory() -> async_sessionmaker[AsyncSession]:
    """Session factory for code running outside a request (catalog tier, analytics)."""
    return async_session


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Dependency for database sessions."""
    async with async_session() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


async def seed_defaults(session: AsyncSession) -> None:
    """Seed or update the curated catalog from the static model table."""
    from core.model_catalog import MODEL_DATABASE, WARNING_MODELS

    from .defaults import DEFAULT_MODEL_METADATA
    from .models import CatalogModel

    entries = [
        (task_type, model)
        for task_type, models in MODEL_DATABASE.items()
        for model in models
    ]
    entries += list(WARNING_MODELS.items())

    result = await session.execute(select(CatalogModel))
    existing = {row.id: row for row in result.scalars().all()}

    for task_type, model in entries:
        metadata = DEFAULT_MODEL_METADATA.get(model.id, {})
        row = existing.get(model.id)
        if row is None:
            row = CatalogModel(id=model.id, is_active=True)
            session.add(row)
            existing[model.id] = row
        row.name = model.name
        row.provider = model.provider
        row.parameters = model.parameters
        row.memory_required = model.memory_required
        row.latency = model.latency
        row.license = model.license
        row.base_score = model.score
        row.reasoning = model.reasoning
        row.tradeoffs = list(model.tradeoffs)
        row.is_warning = model.is_warning
        row.task_types = sorted(set(row.task_types or []) | {task_type})
        row.inference_frameworks = list(metadata.get("inference_frameworks", []))
        row.quantization_formats = list(metadata.get("quantization_formats", []))
        row.deployment_targets = list(metadata.get("deployment_targets", []))

    await session.commit()
    logger.info("Seeded %d catalog models", len(entries))


async def init_db() -> None:
    """Initialize database tables and seed defaults."""
    from .models import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with async_session() as session:
        await seed_defaults(session)
