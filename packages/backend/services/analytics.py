"""Fire-and-forget analytics for recommendation decisions.

``record`` schedules the insert and returns immediately. Write failures
are logged and dropped; they never reach the request that produced the
event, and they are not retried.
"""

import asyncio
import logging
from dataclasses import dataclass, field

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.schemas import ModelRecommendation, RecommendationConfig
from persistence.models import AnalyticsEvent

logger = logging.getLogger(__name__)


@dataclass
class RecommendationEvent:
    """A recommendation decision as served to the caller."""

    config: RecommendationConfig
    primary: ModelRecommendation
    alternatives: list[ModelRecommendation]
    warning: ModelRecommendation
    used_llm_reranking: bool
    response_time_ms: int
    user_id: str | None = None
    session_id: str | None = None

    def to_row(self) -> AnalyticsEvent:
        return AnalyticsEvent(
            user_id=self.user_id,
            session_id=self.session_id,
            task_type=self.config.task_type,
            gpu_memory=self.config.gpu_memory,
            inference_device=self.config.inference_device,
            max_latency=self.config.max_latency,
            license_type=self.config.license_type,
            inference_framework=self.config.inference_framework,
            quantization=self.config.quantization,
            deployment_target=self.config.deployment_target,
            had_use_case_description=self.config.has_description,
            primary_model_id=self.primary.id,
            alternative_model_ids=[m.id for m in self.alternatives],
            warning_model_id=self.warning.id,
            used_llm_reranking=self.used_llm_reranking,
            response_time_ms=self.response_time_ms,
        )


@dataclass
class ClientEvent:
    """An event reported by the frontend; every field is optional."""

    user_id: str | None = None
    session_id: str | None = None
    task_type: str | None = None
    gpu_memory: str | None = None
    inference_device: str | None = None
    max_latency: int | None = None
    license_type: str | None = None
    inference_framework: str | None = None
    quantization: str | None = None
    deployment_target: str | None = None
    had_use_case_description: bool = False
    primary_model_id: str | None = None
    alternative_model_ids: list[str] = field(default_factory=list)
    warning_model_id: str | None = None
    used_llm_reranking: bool = False
    response_time_ms: int | None = None

    def to_row(self) -> AnalyticsEvent:
        return AnalyticsEvent(**self.__dict__)


class AnalyticsRecorder:
    """Writes analytics rows in background tasks."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession] | None):
        self._session_factory = session_factory
        # Strong references so pending writes are not garbage collected
        self._pending: set[asyncio.Task] = set()

    @property
    def pending(self) -> int:
        return len(self._pending)

    def record(self, event: RecommendationEvent | ClientEvent) -> None:
        """Schedule an insert without waiting for it."""
        if self._session_factory is None:
            logger.debug("Analytics disabled, dropping event")
            return
        task = asyncio.create_task(self._write(event))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)

    async def _write(self, event: RecommendationEvent | ClientEvent) -> None:
        try:
            async with self._session_factory() as session:
                session.add(event.to_row())
                await session.commit()
        except Exception:
            logger.exception("Analytics insert failed")

    async def drain(self) -> None:
        """Wait for pending writes (shutdown, tests)."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)
