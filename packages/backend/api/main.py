"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.dependencies import get_analytics_recorder
from api.routes import analytics, configs, health, models, recommendations
from core.config import settings
from core.schemas import ValidationErrorResponse, ValidationIssue
from persistence import init_db

logger = logging.getLogger(__name__)

APP_NAME = "InfraLens API"
APP_VERSION = "1.0.0"

_REQUEST_PARTS = {"body", "query", "path", "header"}


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    await init_db()

    yield

    # Shutdown: let queued analytics writes finish
    await get_analytics_recorder().drain()


app = FastAPI(
    title=APP_NAME,
    description="Open-source model recommendations from deployment constraints",
    version=APP_VERSION,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_ORIGIN],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


def _field_path(loc: tuple) -> str:
    parts = [str(p) for p in loc]
    if parts and parts[0] in _REQUEST_PARTS:
        parts = parts[1:]
    return ".".join(parts) or "body"


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report every rejected field as {field, message}."""
    body = ValidationErrorResponse(
        details=[
            ValidationIssue(field=_field_path(err.get("loc", ())), message=err.get("msg", "Invalid value"))
            for err in exc.errors()
        ]
    )
    logger.debug("Rejected %s %s: %s", request.method, request.url.path, body.details)
    return JSONResponse(status_code=422, content=body.model_dump())


# Routes
app.include_router(health.router)
app.include_router(recommendations.router, prefix="/api")
app.include_router(models.router, prefix="/api")
app.include_router(analytics.router, prefix="/api")
app.include_router(configs.router, prefix="/api")


@app.get("/api/info")
async def api_info():
    """API info endpoint."""
    return {
        "name": APP_NAME,
        "version": APP_VERSION,
    }


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "name": APP_NAME,
        "version": APP_VERSION,
    }


if __name__ == "__main__":
    import uvicorn

    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(app, host=settings.API_HOST, port=settings.API_PORT)
