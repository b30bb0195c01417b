from __future__ import annotations

from typing import Any, Dict

from fastapi import APIRouter, Depends, HTTPException

from api.deps import get_pipeline
from core.logging import get_logger
from predictions.leagues import default_leagues, league_name, normalize_league_id
from predictions.pipeline import (
    STATUS_EMPTY,
    STATUS_OK,
    LeaguePipeline,
    LeagueReport,
    run_leagues,
)
from providers.api_football.exceptions import TransportError

logger = get_logger("api.routes.predictions")

router = APIRouter(prefix="/predictions", tags=["predictions"])


@router.get("", summary="Pronostici di domani per tutte le leghe configurate")
async def list_predictions(pipeline: LeaguePipeline = Depends(get_pipeline)) -> Dict[str, Any]:
    """
    Un report per lega (status ok | empty | error).
    Un fetch fixtures fallito non produce errore HTTP: le leghe risultano in stato 'error'.
    """
    reports = await run_leagues(pipeline, default_leagues())
    return {
        "count": len(reports),
        "items": [r.to_dict() for r in reports],
    }


@router.get("/{league_id}", summary="Pronostici di domani per una lega")
async def league_predictions(
    league_id: str,
    pipeline: LeaguePipeline = Depends(get_pipeline),
) -> Dict[str, Any]:
    """
    - league_id non numerico -> 422
    - fetch fixtures fallito -> 502
    - nessuna partita -> status 'empty' con lista vuota
    """
    try:
        lid = normalize_league_id(league_id)
    except ValueError as exc:
        raise HTTPException(status_code=422, detail=str(exc)) from exc

    date = pipeline.resolve_date()
    try:
        fixtures = await pipeline.fetch_fixtures(date)
    except TransportError as exc:
        logger.error("Fetch fixtures fallito lega=%s: %s", lid, exc)
        raise HTTPException(status_code=502, detail="fixtures provider unavailable") from exc

    matches = await pipeline.predict_league(fixtures, lid, date)
    report = LeagueReport(
        league_id=lid,
        league_name=league_name(lid),
        date=date,
        status=STATUS_OK if matches else STATUS_EMPTY,
        matches=matches,
    )
    return report.to_dict()
