"""Health check endpoints."""

from __future__ import annotations

from datetime import datetime, timezone
from http import HTTPStatus

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from loguru import logger

from nestegg.api.dependencies import get_contribution_service
from nestegg.core.exceptions import StoreError
from nestegg.services.contribution_service import ContributionService

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


@router.get("/ready")
def ready(service: ContributionService = Depends(get_contribution_service)):
    """Report whether the policy store is reachable."""
    try:
        service.store_ready()
    except StoreError as exc:
        logger.warning(f"Readiness check failed: {exc}")
        return JSONResponse({"status": "unavailable"}, status_code=HTTPStatus.SERVICE_UNAVAILABLE)
    return {"status": "ready"}
