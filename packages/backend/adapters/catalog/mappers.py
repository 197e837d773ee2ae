"""Mappers between catalog rows and domain models."""

from core.schemas import ModelRecommendation
from persistence.models import CatalogModel


def catalog_row_to_model(row: CatalogModel) -> ModelRecommendation:
    """Convert a CatalogModel row to a ModelRecommendation."""
    return ModelRecommendation(
        id=row.id,
        name=row.name,
        provider=row.provider,
        parameters=row.parameters,
        memory_required=row.memory_required,
        latency=row.latency,
        license=row.license,
        score=row.base_score,
        reasoning=row.reasoning or "",
        tradeoffs=list(row.tradeoffs or []),
        is_warning=row.is_warning,
    )
