"""Catalog listing endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query

from api.dependencies import get_catalog_service
from core.exceptions import NoModelsAvailableError
from core.interfaces import CatalogQuery
from core.schemas import (
    CamelModel,
    DeploymentTarget,
    InferenceFramework,
    ModelRecommendation,
    Quantization,
    TaskType,
)
from services.catalog import CatalogService

router = APIRouter(prefix="/models", tags=["models"])


class ModelListResponse(CamelModel):
    """Response model for listing catalog models."""

    models: list[ModelRecommendation]
    total: int


@router.get("", response_model=ModelListResponse)
async def list_models(
    catalog: Annotated[CatalogService, Depends(get_catalog_service)],
    task_type: Annotated[TaskType | None, Query(alias="taskType")] = None,
    framework: InferenceFramework = "any",
    quantization: Quantization = "none",
    deployment_target: Annotated[DeploymentTarget, Query(alias="deploymentTarget")] = "local-dev",
    is_warning: Annotated[bool, Query(alias="isWarning")] = False,
) -> ModelListResponse:
    """List candidate models.

    With ``taskType`` the list is the one the recommender would rank for that
    task and deployment filter; without it, every task's candidates merged.
    ``isWarning=true`` returns warning models instead.
    """
    try:
        if task_type is None:
            models = (
                await catalog.get_warning_models()
                if is_warning
                else await catalog.get_all_models()
            )
        else:
            task_models = await catalog.resolve_candidates(
                CatalogQuery(
                    task_type=task_type,
                    framework=framework,
                    quantization=quantization,
                    deployment_target=deployment_target,
                )
            )
            models = [task_models.warning_model] if is_warning else list(task_models.models)
    except NoModelsAvailableError as e:
        raise HTTPException(status_code=404, detail=str(e)) from e

    return ModelListResponse(models=models, total=len(models))
