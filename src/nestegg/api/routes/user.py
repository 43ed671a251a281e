"""Read-only user profile endpoint."""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Depends

from nestegg.api.dependencies import get_contribution_service
from nestegg.services.contribution_service import ContributionService

router = APIRouter(tags=["user"])


@router.get("/user/{user_id}")
def get_user(
    user_id: str,
    service: ContributionService = Depends(get_contribution_service),
) -> dict[str, Any]:
    return service.get_demographics(user_id).to_json_dict()
