"""Process-wide service instances for route dependencies.

Services hold caches, so they are built once per process. Tests replace
them through ``app.dependency_overrides``.
"""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Header, HTTPException

from core.exceptions import AuthError
from core.factory import get_factory
from core.interfaces import IAuthProvider, User
from services.analytics import AnalyticsRecorder
from services.catalog import CatalogService
from services.recommendation import RecommendationService


@lru_cache
def get_catalog_service() -> CatalogService:
    return get_factory().create_catalog_service()


@lru_cache
def get_analytics_recorder() -> AnalyticsRecorder:
    return get_factory().create_analytics_recorder()


@lru_cache
def get_recommendation_service() -> RecommendationService:
    return get_factory().create_recommendation_service(
        catalog=get_catalog_service(),
        recorder=get_analytics_recorder(),
    )


@lru_cache
def get_auth_provider() -> IAuthProvider:
    return get_factory().create_auth_provider()


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


async def require_user(
    auth: Annotated[IAuthProvider, Depends(get_auth_provider)],
    authorization: Annotated[str | None, Header()] = None,
) -> User:
    """Resolve the caller from the Authorization header, or 401."""
    try:
        return await auth.validate_token(_bearer_token(authorization))
    except AuthError as e:
        raise HTTPException(
            status_code=401,
            detail=str(e),
            headers={"WWW-Authenticate": "Bearer"},
        ) from e
