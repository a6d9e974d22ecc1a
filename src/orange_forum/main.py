# src/orange_forum/main.py
"""Main entry point for the Orange Forum application."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import JSONResponse

from orange_forum.api.v1 import (
    auth_router,
    comments_router,
    groups_router,
    site_router,
    topics_router,
    users_router,
    votes_router,
)
from orange_forum.core.errors import ForumError
from orange_forum.core.settings import settings
from orange_forum.db.session import SessionLocal, engine
from orange_forum.services.config_service import is_migration_needed, load_forum_config, migrate

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger("orange_forum")

ERROR_STATUS = {
    "not_found": status.HTTP_404_NOT_FOUND,
    "already_exists": status.HTTP_409_CONFLICT,
    "invalid_credential": status.HTTP_401_UNAUTHORIZED,
    "invalid_token": status.HTTP_400_BAD_REQUEST,
    "validation_failure": status.HTTP_400_BAD_REQUEST,
    "permission_denied": status.HTTP_403_FORBIDDEN,
    "feature_disabled": status.HTTP_403_FORBIDDEN,
    "internal": status.HTTP_500_INTERNAL_SERVER_ERROR,
}

# Initialize FastAPI app
app = FastAPI(
    title="Orange Forum API",
    description="Discussion forum with groups, threaded comments and karma",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(auth_router, prefix="/api/v1")
app.include_router(users_router, prefix="/api/v1")
app.include_router(groups_router, prefix="/api/v1")
app.include_router(topics_router, prefix="/api/v1")
app.include_router(comments_router, prefix="/api/v1")
app.include_router(votes_router, prefix="/api/v1")
app.include_router(site_router, prefix="/api/v1")


@app.exception_handler(ForumError)
async def forum_error_handler(request: Request, exc: ForumError) -> JSONResponse:
    """Translate core failures into JSON responses keyed by their kind."""
    code = ERROR_STATUS.get(exc.kind, status.HTTP_500_INTERNAL_SERVER_ERROR)
    if code >= status.HTTP_500_INTERNAL_SERVER_ERROR:
        logger.error("Request %s %s failed: %s", request.method, request.url.path, exc)
    return JSONResponse(status_code=code, content={"detail": exc.message, "kind": exc.kind})


@app.on_event("startup")
async def on_startup() -> None:
    if is_migration_needed(engine):
        logger.info("Database needs migration; running it now")
        migrate(engine)
    with SessionLocal() as db:
        app.state.forum_config = load_forum_config(db)
    logger.info("%s %s started", settings.app_name, settings.app_version)


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": "Orange Forum API",
        "version": settings.app_version,
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("orange_forum.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
