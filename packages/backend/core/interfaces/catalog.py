"""Catalog source interface definitions.

A catalog source supplies candidate models for one task. Sources are tried
in order (live Hub, database, static table) and each may fail; the chain in
``services.catalog`` turns failures into ``SourceResult.unavailable`` and
moves on.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from core.schemas import ModelRecommendation


@dataclass(frozen=True)
class CatalogQuery:
    """Parameters that select a candidate set."""

    task_type: str
    framework: str = "any"
    quantization: str = "none"
    deployment_target: str = "local-dev"

    @property
    def cache_key(self) -> str:
        return f"{self.task_type}:{self.framework}:{self.quantization}:{self.deployment_target}"


@dataclass(frozen=True)
class TaskModels:
    """Candidates for a task plus its designated warning model."""

    models: list[ModelRecommendation]
    warning_model: ModelRecommendation


@dataclass(frozen=True)
class SourceResult:
    """Tagged outcome of asking one tier for candidates."""

    source: str
    data: TaskModels | None = None
    reason: str | None = None
    not_configured: bool = False
    error: Exception | None = field(default=None, compare=False)

    @classmethod
    def success(cls, source: str, data: TaskModels) -> "SourceResult":
        return cls(source=source, data=data)

    @classmethod
    def unavailable(
        cls,
        source: str,
        reason: str,
        not_configured: bool = False,
        error: Exception | None = None,
    ) -> "SourceResult":
        return cls(source=source, reason=reason, not_configured=not_configured, error=error)

    @property
    def ok(self) -> bool:
        return self.data is not None


class ICatalogSource(ABC):
    """Interface for one tier of the model catalog."""

    name: str = "source"

    @abstractmethod
    async def fetch(self, query: CatalogQuery) -> TaskModels:
        """Return candidates for the query.

        Raises:
            SourceNotConfiguredError: The tier has no client to call.
            SourceUnavailableError: The call failed or produced no usable models.
            NoModelsAvailableError: The tier does not know the task at all.
        """
        ...
