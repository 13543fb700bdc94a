"""Health check endpoints."""

from datetime import datetime, timezone
from typing import Any, Dict

from fastapi import APIRouter, Depends

import pourcost
from api.config import Settings, get_settings

router = APIRouter()


@router.get("/health")
async def health_check() -> Dict[str, Any]:
    """
    Basic liveness check.

    Returns 200 if the service is running.
    """
    return {
        "status": "ok",
        "timestamp": datetime.now(timezone.utc).isoformat()
    }


@router.get("/health/info")
async def service_info(
    settings: Settings = Depends(get_settings)
) -> Dict[str, Any]:
    """Return service information and the pricing defaults in effect."""
    return {
        "service": settings.app_name,
        "version": settings.app_version,
        "engine_version": pourcost.__version__,
        "environment": "development" if settings.debug else "production",
        "defaults": {
            "pour_cost_goal": settings.default_pour_cost_goal,
            "cocktail_goal": settings.default_cocktail_goal,
            "base_currency": settings.base_currency,
            "measurement_system": settings.measurement_system.value,
            "locale": settings.locale,
        },
    }
