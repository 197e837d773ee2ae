"""Saved configuration endpoints.

Configurations belong to the authenticated user; names are unique per user.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException
from pydantic import Field
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import require_user
from core.interfaces import User
from core.schemas import (
    MAX_DESCRIPTION_LENGTH,
    MAX_LATENCY_MS,
    MIN_LATENCY_MS,
    CamelModel,
    DeploymentTarget,
    GpuMemoryTier,
    InferenceDevice,
    InferenceFramework,
    LicenseType,
    Quantization,
    RecommendationConfig,
    TaskType,
)
from persistence.database import get_db
from persistence.models import SavedConfig

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/configs", tags=["configs"])


class SavedConfigCreate(RecommendationConfig):
    """Request model for saving a configuration."""

    name: str = Field(min_length=1, max_length=255)


class SavedConfigUpdate(CamelModel):
    """Request model for updating a configuration. Omitted fields are kept."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    task_type: TaskType | None = None
    gpu_memory: GpuMemoryTier | None = None
    inference_device: InferenceDevice | None = None
    max_latency: int | None = Field(default=None, ge=MIN_LATENCY_MS, le=MAX_LATENCY_MS)
    license_type: LicenseType | None = None
    inference_framework: InferenceFramework | None = None
    quantization: Quantization | None = None
    deployment_target: DeploymentTarget | None = None
    use_case_description: str | None = Field(default=None, max_length=MAX_DESCRIPTION_LENGTH)


class SavedConfigResponse(CamelModel):
    """Response model for a saved configuration."""

    id: str
    name: str
    task_type: str
    gpu_memory: str
    inference_device: str
    max_latency: int
    license_type: str
    inference_framework: str
    quantization: str
    deployment_target: str
    use_case_description: str
    created_at: str
    updated_at: str


class SavedConfigListResponse(CamelModel):
    """Response model for listing saved configurations."""

    items: list[SavedConfigResponse]
    total: int


class MessageResponse(CamelModel):
    """Generic message response."""

    message: str
    id: str | None = None


def _to_response(row: SavedConfig) -> SavedConfigResponse:
    return SavedConfigResponse(
        id=row.id,
        name=row.name,
        task_type=row.task_type,
        gpu_memory=row.gpu_memory,
        inference_device=row.inference_device,
        max_latency=row.max_latency,
        license_type=row.license_type,
        inference_framework=row.inference_framework,
        quantization=row.quantization,
        deployment_target=row.deployment_target,
        use_case_description=row.use_case_description or "",
        created_at=row.created_at.isoformat(),
        updated_at=row.updated_at.isoformat(),
    )


async def _get_owned(db: AsyncSession, config_id: str, user: User) -> SavedConfig:
    result = await db.execute(
        select(SavedConfig).where(SavedConfig.id == config_id, SavedConfig.user_id == user.id)
    )
    row = result.scalar_one_or_none()
    if not row:
        raise HTTPException(status_code=404, detail="Config not found")
    return row


async def _commit(db: AsyncSession, name: str) -> None:
    """Commit, translating duplicate names to 409 and other failures to 500."""
    try:
        await db.commit()
    except IntegrityError as e:
        await db.rollback()
        raise HTTPException(
            status_code=409, detail=f"A config named '{name}' already exists"
        ) from e
    except SQLAlchemyError as e:
        await db.rollback()
        logger.exception("Saving config failed")
        raise HTTPException(status_code=500, detail="Failed to save config") from e


@router.get("", response_model=SavedConfigListResponse)
async def list_configs(
    db: Annotated[AsyncSession, Depends(get_db)],
    user: Annotated[User, Depends(require_user)],
) -> SavedConfigListResponse:
    """List the caller's saved configurations, newest first."""
    try:
        result = await db.execute(
            select(SavedConfig)
            .where(SavedConfig.user_id == user.id)
            .order_by(SavedConfig.created_at.desc())
        )
    except SQLAlchemyError as e:
        logger.exception("Listing configs failed")
        raise HTTPException(status_code=500, detail="Failed to load configs") from e

    items = [_to_response(row) for row in result.scalars().all()]
    return SavedConfigListResponse(items=items, total=len(items))


@router.post("", response_model=SavedConfigResponse, status_code=201)
async def create_config(
    db: Annotated[AsyncSession, Depends(get_db)],
    user: Annotated[User, Depends(require_user)],
    data: SavedConfigCreate,
) -> SavedConfigResponse:
    """Save a named configuration for the caller."""
    row = SavedConfig(user_id=user.id, **data.model_dump())
    db.add(row)
    await _commit(db, data.name)
    await db.refresh(row)

    logger.info("Saved config %s for user %s", row.id, user.id)
    return _to_response(row)


@router.put("/{config_id}", response_model=SavedConfigResponse)
async def update_config(
    db: Annotated[AsyncSession, Depends(get_db)],
    user: Annotated[User, Depends(require_user)],
    config_id: str,
    data: SavedConfigUpdate,
) -> SavedConfigResponse:
    """Update fields of one of the caller's configurations."""
    row = await _get_owned(db, config_id, user)

    for key, value in data.model_dump(exclude_unset=True).items():
        if value is not None:
            setattr(row, key, value)

    await _commit(db, row.name)
    await db.refresh(row)
    return _to_response(row)


@router.delete("/{config_id}", response_model=MessageResponse)
async def delete_config(
    db: Annotated[AsyncSession, Depends(get_db)],
    user: Annotated[User, Depends(require_user)],
    config_id: str,
) -> MessageResponse:
    """Delete one of the caller's configurations."""
    row = await _get_owned(db, config_id, user)
    await db.delete(row)
    await _commit(db, row.name)

    return MessageResponse(message="Config deleted", id=config_id)
