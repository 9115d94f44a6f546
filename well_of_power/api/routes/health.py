"""Health & Readiness Probes: liveness and readiness endpoints.

Invariants:
    - GET /health/ always returns 200 if process is up (liveness)
    - GET /health/ready returns 503 if the save slot backend is unreachable (readiness)
"""

import logging
from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from well_of_power.api.routes.game import get_game_session
from well_of_power.services.game_session import GameSession

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def health_check():
    """Basic liveness probe. Returns 200 if the process is up."""
    return {
        "status": "healthy",
        "service": "well-of-power-api",
        "version": "1.0.0",
    }


@router.get("/ready")
async def readiness_check(game: GameSession = Depends(get_game_session)):
    """Readiness probe: catalog loaded and save storage reachable."""
    storage_ok = await game.saves.store.ping()
    if not storage_ok:
        logger.warning("Readiness failed: save storage unreachable")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={
                "status": "not_ready",
                "reason": "storage_unavailable",
            },
        )
    return {
        "status": "ready",
        "checks": {
            "storage": "healthy",
            "catalog_dilemmas": game.machine.catalog_length,
        },
    }
