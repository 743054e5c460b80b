"""FastAPI application factory.

API layer:
- Validates inputs, reads/writes DB through domain modules
- Returns payloads for the survey UI and admin dashboard
- Forbidden: statistics computation outside the aggregation package
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Generator

from fastapi import Depends, FastAPI, Header, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

from designpoll.admin.auth import check_password
from designpoll.admin.guard import OperationGuard
from designpoll.config import Settings, load_settings
from designpoll.core.errors import AuthorizationError, DesignPollError
from designpoll.db import repo
from designpoll.db.repo import DbSession
from designpoll.db.session import get_session, init_db
from designpoll.models.types import StoreStatus
from designpoll.storage import BlobStore, LocalBlobStore
from designpoll.storage.local import LOCATOR_PREFIX

logger = logging.getLogger(__name__)


def get_settings(request: Request) -> Settings:
    """Dependency returning the application settings."""
    return request.app.state.settings


def get_db_session(request: Request) -> Generator[DbSession, None, None]:
    """Dependency to get database session.

    Yields:
        Database session that is automatically closed after request.
    """
    settings: Settings = request.app.state.settings
    session = get_session(settings.db_path, settings.store_timeout_s)
    try:
        yield session
    finally:
        session.close()


def get_blob_store(request: Request) -> BlobStore:
    """Dependency returning the blob store."""
    return request.app.state.blob_store


def get_guard(request: Request) -> OperationGuard:
    """Dependency returning the admin busy guard."""
    return request.app.state.guard


def require_admin(
    x_admin_password: str | None = Header(default=None),
    settings: Settings = Depends(get_settings),
) -> None:
    """Dependency enforcing the placeholder admin password header."""
    try:
        check_password(x_admin_password, settings.admin_password)
    except AuthorizationError as e:
        raise HTTPException(status_code=401, detail=str(e)) from e


def create_app(settings: Settings | None = None) -> FastAPI:
    """Create FastAPI application.

    Args:
        settings: Optional settings; read from the environment when omitted.

    Returns:
        Configured FastAPI application.
    """
    settings = settings or load_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        init_db(settings.db_path, settings.store_timeout_s)
        settings.blob_dir.mkdir(parents=True, exist_ok=True)
        if settings.uses_default_password:
            logger.warning(
                "Using the default placeholder admin password; "
                "set DESIGNPOLL_ADMIN_PASSWORD"
            )
        yield

    app = FastAPI(
        title="designpoll API",
        description="Design rating survey with admin analytics",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.blob_store = LocalBlobStore(settings.blob_dir)
    app.state.guard = OperationGuard()

    # Add CORS middleware for UI access
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routes
    from designpoll.api.routes import admin, analytics, designs, export, responses

    app.include_router(designs.router, prefix="/api")
    app.include_router(responses.router, prefix="/api")
    app.include_router(admin.router, prefix="/api")
    app.include_router(analytics.router, prefix="/api")
    app.include_router(export.router, prefix="/api")

    # Serve stored design images
    app.mount(
        LOCATOR_PREFIX,
        StaticFiles(directory=str(settings.blob_dir), check_dir=False),
        name="blobs",
    )

    # Health check endpoint
    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "ok"}

    @app.get("/api/status", response_model=StoreStatus)
    def store_status(session: DbSession = Depends(get_db_session)) -> StoreStatus:
        """Check that the record store answers queries."""
        try:
            with repo.store_call(session, "count designs"):
                count = repo.count_designs(session)
        except DesignPollError as e:
            raise HTTPException(status_code=503, detail=str(e)) from e
        return StoreStatus(status="connected", design_count=count)

    return app


# Default app instance
app = create_app()
