"""FastAPI dependencies pulling shared objects off ``app.state``."""

from __future__ import annotations

from fastapi import Request

from nestegg.core.config import AppSettings
from nestegg.services.contribution_service import ContributionService


def get_settings(request: Request) -> AppSettings:
    return request.app.state.settings


def get_contribution_service(request: Request) -> ContributionService:
    return ContributionService(store=request.app.state.store)
