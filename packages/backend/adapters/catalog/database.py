"""Database catalog source.

Serves curated rows from the ``catalog_models`` table. Task, framework,
quantization and deployment-target matching is containment on JSON array
columns, evaluated after loading the active rows since SQLite has no
array operators.
"""

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.exceptions import SourceNotConfiguredError, SourceUnavailableError
from core.interfaces import CatalogQuery, ICatalogSource, TaskModels
from core.model_catalog import MODEL_DATABASE, get_warning_model
from persistence.models import CatalogModel

from .mappers import catalog_row_to_model

logger = logging.getLogger(__name__)


def _contains(values: list | None, wanted: str) -> bool:
    return wanted in (values or [])


def row_matches(row: CatalogModel, query: CatalogQuery) -> bool:
    """Whether a row supports the task and every narrowing filter in the query."""
    if not _contains(row.task_types, query.task_type):
        return False
    if query.framework != "any" and not _contains(row.inference_frameworks, query.framework):
        return False
    if query.quantization != "none" and not _contains(row.quantization_formats, query.quantization):
        return False
    if query.deployment_target != "local-dev" and not _contains(
        row.deployment_targets, query.deployment_target
    ):
        return False
    return True


class DatabaseCatalogSource(ICatalogSource):
    """Catalog tier backed by the application database."""

    name = "database"

    def __init__(self, session_factory: async_sessionmaker[AsyncSession] | None):
        self._session_factory = session_factory

    async def _load_rows(self, query: CatalogQuery) -> list[CatalogModel]:
        async with self._session_factory() as session:
            result = await session.execute(
                select(CatalogModel)
                .where(CatalogModel.is_active.is_(True))
                .order_by(CatalogModel.base_score.desc())
            )
            return [row for row in result.scalars().all() if row_matches(row, query)]

    async def fetch(self, query: CatalogQuery) -> TaskModels:
        if self._session_factory is None:
            raise SourceNotConfiguredError("No database session factory configured")

        try:
            rows = await self._load_rows(query)
        except SQLAlchemyError as e:
            raise SourceUnavailableError(f"Catalog query failed: {e}") from e

        if not rows:
            raise SourceUnavailableError(f"No catalog rows for {query.cache_key}")

        normal = [catalog_row_to_model(r) for r in rows if not r.is_warning]
        warnings = [catalog_row_to_model(r) for r in rows if r.is_warning]

        # Backfill whichever half is missing from the curated table
        models = normal or list(MODEL_DATABASE.get(query.task_type, []))
        warning_model = warnings[0] if warnings else get_warning_model(query.task_type)

        if not models or warning_model is None:
            raise SourceUnavailableError(f"Incomplete catalog rows for {query.cache_key}")

        logger.debug(
            "Database catalog returned %d models for %s", len(models), query.cache_key
        )
        return TaskModels(models=models, warning_model=warning_model)
