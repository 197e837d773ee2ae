"""Client-reported analytics events."""

from typing import Annotated

from fastapi import APIRouter, Depends
from pydantic import Field

from api.dependencies import get_analytics_recorder
from core.schemas import CamelModel
from services.analytics import AnalyticsRecorder, ClientEvent

router = APIRouter(prefix="/analytics", tags=["analytics"])


class AnalyticsEventRequest(CamelModel):
    """An event reported by the frontend. All fields are optional."""

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
    alternative_model_ids: list[str] = Field(default_factory=list)
    warning_model_id: str | None = None
    used_llm_reranking: bool = False
    response_time_ms: int | None = None


class RecordedResponse(CamelModel):
    recorded: bool = True


@router.post("/event", response_model=RecordedResponse, status_code=202)
async def record_event(
    data: AnalyticsEventRequest,
    recorder: Annotated[AnalyticsRecorder, Depends(get_analytics_recorder)],
) -> RecordedResponse:
    """Queue an analytics event; the write happens after the response."""
    recorder.record(ClientEvent(**data.model_dump()))
    return RecordedResponse()
