from __future__ import annotations

from fastapi import APIRouter

from core.config import get_settings
from predictions.leagues import LEAGUES, default_leagues

router = APIRouter(tags=["health"])


@router.get("/health", summary="Health check")
def health():
    """
    Health endpoint minimale.
    """
    settings = get_settings()
    return {
        "status": "ok",
        "leagues": default_leagues(),
        "max_concurrency": settings.max_concurrency,
        "prometheus_exporter_enabled": settings.enable_prometheus_exporter,
    }


@router.get("/leagues", summary="Catalogo leghe")
def leagues():
    return {
        "count": len(LEAGUES),
        "items": [{"league_id": lid, "name": name} for lid, name in LEAGUES.items()],
    }
