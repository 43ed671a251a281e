"""FastAPI application with lifespan and router mounting."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from loguru import logger

from nestegg.api.errors import register_error_handlers
from nestegg.api.routes import contribution, health, projection, user
from nestegg.core.config import AppSettings
from nestegg.core.protocols import IPolicyStore
from nestegg.persistence import create_policy_store


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    settings: AppSettings = app.state.settings
    logger.info(f"NestEgg API starting ({settings.environment}, store={settings.store.backend})")
    yield
    logger.info("NestEgg API shutting down")


def create_app(settings: AppSettings | None = None, store: IPolicyStore | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    ``store`` overrides the backend selected by settings (tests inject a
    MemoryPolicyStore here).
    """
    if settings is None:
        settings = AppSettings()

    app = FastAPI(
        title="NestEgg 401(k) Contribution Planner",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.store = store if store is not None else create_policy_store(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.api.cors_origins,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
    register_error_handlers(app)

    app.include_router(health.router, prefix="/api")
    app.include_router(contribution.router, prefix="/api")
    app.include_router(user.router, prefix="/api")
    app.include_router(projection.router, prefix="/api")
    return app
