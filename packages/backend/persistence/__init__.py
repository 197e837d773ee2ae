"""Database persistence layer."""

from .database import get_db, get_session_factory, init_db
from .models import (
    AnalyticsEvent,
    Base,
    CatalogModel,
    SavedConfig,
)

__all__ = [
    "get_db",
    "get_session_factory",
    "init_db",
    "Base",
    "AnalyticsEvent",
    "CatalogModel",
    "SavedConfig",
]
