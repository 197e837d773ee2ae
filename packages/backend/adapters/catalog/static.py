"""Static catalog source over the curated in-memory table."""

from core.exceptions import NoModelsAvailableError
from core.interfaces import CatalogQuery, ICatalogSource, TaskModels
from core.model_catalog import MODEL_DATABASE, WARNING_MODELS


class StaticCatalogSource(ICatalogSource):
    """Last-resort tier. Never fails for a known task type."""

    name = "static"

    async def fetch(self, query: CatalogQuery) -> TaskModels:
        models = MODEL_DATABASE.get(query.task_type)
        warning_model = WARNING_MODELS.get(query.task_type)
        if not models or warning_model is None:
            raise NoModelsAvailableError(query.task_type)
        return TaskModels(models=list(models), warning_model=warning_model)
