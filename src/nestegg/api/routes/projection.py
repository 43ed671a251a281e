"""Retirement projection endpoint."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from nestegg.api.dependencies import get_settings
from nestegg.core.config import AppSettings
from nestegg.models.projection import ProjectionRequest, ProjectionResponse
from nestegg.services.projection_calc import project

router = APIRouter(tags=["projection"])


@router.post("/calculate-projection")
async def calculate_projection(
    body: ProjectionRequest,
    settings: AppSettings = Depends(get_settings),
) -> dict[str, Any]:
    """Project the balance at retirement for a (possibly unsaved) policy."""
    result = project(
        body,
        default_annual_return=settings.projection.default_annual_return,
        irs_annual_limit=settings.projection.irs_annual_limit,
        series_compounding=settings.projection.series_compounding,
    )
    return ProjectionResponse(projection=result).to_json_dict()
