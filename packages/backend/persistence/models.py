"""SQLAlchemy models."""

import uuid
from datetime import datetime

from sqlalchemy import JSON, Boolean, Float, Integer, String, Text, UniqueConstraint, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


def generate_uuid() -> str:
    """Generate a UUID string."""
    return str(uuid.uuid4())


class CatalogModel(Base):
    """Curated model entry served by the database catalog tier."""

    __tablename__ = "catalog_models"

    id: Mapped[str] = mapped_column(String(128), primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    provider: Mapped[str] = mapped_column(String(100), nullable=False)
    parameters: Mapped[str] = mapped_column(String(20), nullable=False)
    memory_required: Mapped[str] = mapped_column(String(20), nullable=False)
    latency: Mapped[str] = mapped_column(String(30), nullable=False)
    license: Mapped[str] = mapped_column(String(100), nullable=False)
    base_score: Mapped[float] = mapped_column(Float, default=0)
    reasoning: Mapped[str] = mapped_column(Text, default="")
    tradeoffs: Mapped[list] = mapped_column(JSON, default=list)
    is_warning: Mapped[bool] = mapped_column(Boolean, default=False)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True)
    # Array columns matched by containment
    task_types: Mapped[list] = mapped_column(JSON, default=list)
    inference_frameworks: Mapped[list] = mapped_column(JSON, default=list)
    quantization_formats: Mapped[list] = mapped_column(JSON, default=list)
    deployment_targets: Mapped[list] = mapped_column(JSON, default=list)
    created_at: Mapped[datetime] = mapped_column(default=func.now())
    updated_at: Mapped[datetime] = mapped_column(default=func.now(), onupdate=func.now())


class AnalyticsEvent(Base):
    """One recommendation decision, written fire-and-forget."""

    __tablename__ = "analytics_events"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    user_id: Mapped[str | None] = mapped_column(String(100))
    session_id: Mapped[str | None] = mapped_column(String(100))
    task_type: Mapped[str | None] = mapped_column(String(50))
    gpu_memory: Mapped[str | None] = mapped_column(String(10))
    inference_device: Mapped[str | None] = mapped_column(String(30))
    max_latency: Mapped[int | None] = mapped_column(Integer)
    license_type: Mapped[str | None] = mapped_column(String(30))
    inference_framework: Mapped[str | None] = mapped_column(String(30))
    quantization: Mapped[str | None] = mapped_column(String(10))
    deployment_target: Mapped[str | None] = mapped_column(String(30))
    had_use_case_description: Mapped[bool] = mapped_column(Boolean, default=False)
    primary_model_id: Mapped[str | None] = mapped_column(String(128))
    alternative_model_ids: Mapped[list] = mapped_column(JSON, default=list)
    warning_model_id: Mapped[str | None] = mapped_column(String(128))
    used_llm_reranking: Mapped[bool] = mapped_column(Boolean, default=False)
    response_time_ms: Mapped[int | None] = mapped_column(Integer)
    created_at: Mapped[datetime] = mapped_column(default=func.now())


class SavedConfig(Base):
    """A named set of constraints saved by a user."""

    __tablename__ = "saved_configs"
    __table_args__ = (UniqueConstraint("user_id", "name", name="uq_saved_configs_user_name"),)

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=generate_uuid)
    user_id: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    task_type: Mapped[str] = mapped_column(String(50), nullable=False)
    gpu_memory: Mapped[str] = mapped_column(String(10), nullable=False)
    inference_device: Mapped[str] = mapped_column(String(30), nullable=False)
    max_latency: Mapped[int] = mapped_column(Integer, nullable=False)
    license_type: Mapped[str] = mapped_column(String(30), nullable=False)
    inference_framework: Mapped[str] = mapped_column(String(30), default="any")
    quantization: Mapped[str] = mapped_column(String(10), default="none")
    deployment_target: Mapped[str] = mapped_column(String(30), default="local-dev")
    use_case_description: Mapped[str] = mapped_column(Text, default="")
    created_at: Mapped[datetime] = mapped_column(default=func.now())
    updated_at: Mapped[datetime] = mapped_column(default=func.now(), onupdate=func.now())
