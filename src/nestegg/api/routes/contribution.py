"""Contribution policy endpoints."""

from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Depends, Query

from nestegg.api.dependencies import get_contribution_service, get_settings
from nestegg.core.config import AppSettings
from nestegg.models.policy import ContributionRequest
from nestegg.services.contribution_service import ContributionService

router = APIRouter(tags=["contribution"])


@router.get("/contribution")
def get_contribution(
    user_id: Optional[str] = Query(default=None, alias="userId", min_length=1),
    settings: AppSettings = Depends(get_settings),
    service: ContributionService = Depends(get_contribution_service),
) -> dict[str, Any]:
    """Return the saved policy for ``userId`` (defaults to the configured user)."""
    policy = service.get_policy(user_id or settings.default_user_id)
    return policy.to_json_dict()


@router.post("/contribution")
def save_contribution(
    body: ContributionRequest,
    settings: AppSettings = Depends(get_settings),
    service: ContributionService = Depends(get_contribution_service),
) -> dict[str, Any]:
    """Create or replace the user's contribution choice."""
    policy = service.save_policy(body.user_id or settings.default_user_id, body.to_update())
    return {
        "success": True,
        "message": "Contribution settings updated successfully",
        "data": policy.to_json_dict(),
    }
