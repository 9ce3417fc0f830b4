"""Dependency wiring helpers."""

from fastapi import FastAPI

from .branding.branding_api import router as branding_router
from .channels.dashboard_api import router as dashboard_router
from .config import AppConfig
from .export.export_api import router as export_router
from .session import StudioSession, build_session


def include_routers(app: FastAPI, config: AppConfig) -> StudioSession:
    """Mount module routers and attach the studio session."""
    session = build_session(config)

    app.state.config = config
    app.state.session = session

    app.include_router(export_router)
    app.include_router(branding_router)
    app.include_router(dashboard_router)
    return session
