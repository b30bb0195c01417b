from __future__ import annotations

import asyncio
import logging
import random
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from core import events
from core.config import get_settings
from core.dates import DateResolver, season_for
from core.events import LoggingObserver, PipelineObserver
from core.logging import get_logger
from core.models import EnrichedFixture, Fixture
from predictions.leagues import league_name, normalize_league_id
from predictions.predictor import MatchPredictor
from providers.api_football.base import DataSource
from providers.api_football.exceptions import TransportError

logger = get_logger("predictions.pipeline")

STATUS_OK = "ok"
STATUS_EMPTY = "empty"
STATUS_ERROR = "error"

DEFAULT_MAX_CONCURRENCY = 5


@dataclass
class LeagueReport:
    league_id: int
    league_name: Optional[str]
    date: str
    status: str
    matches: List[EnrichedFixture] = field(default_factory=list)
    error: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "league_id": self.league_id,
            "league_name": self.league_name,
            "date": self.date,
            "status": self.status,
            "count": len(self.matches),
            "matches": [m.to_dict() for m in self.matches],
            "error": self.error,
        }


class LeaguePipeline:
    """
    Flusso per lega: data target -> fixtures del giorno -> filtro lega ->
    pronostico per ogni fixture (concorrenza limitata) -> EnrichedFixture.

    Un TransportError sul fetch delle fixtures fa fallire il run (propagato);
    gli errori sui fetch per squadra sono assorbiti da MatchPredictor.
    """

    def __init__(
        self,
        source: DataSource,
        date_resolver: Optional[DateResolver] = None,
        observer: Optional[PipelineObserver] = None,
        season: Optional[int] = None,
        max_concurrency: Optional[int] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._source = source
        self._dates = date_resolver or DateResolver()
        self._observer = observer or LoggingObserver()
        self._season = season
        self._max_concurrency = max(1, max_concurrency or DEFAULT_MAX_CONCURRENCY)
        self._rng = rng

    @classmethod
    def from_settings(
        cls,
        source: DataSource,
        observer: Optional[PipelineObserver] = None,
    ) -> "LeaguePipeline":
        settings = get_settings()
        return cls(
            source,
            observer=observer,
            season=settings.season,
            max_concurrency=settings.max_concurrency,
        )

    def resolve_date(self) -> str:
        return self._dates.resolve()

    def new_semaphore(self) -> asyncio.Semaphore:
        return asyncio.Semaphore(self._max_concurrency)

    async def fetch_fixtures(self, date: str) -> List[Fixture]:
        self._observer.emit(events.FIXTURES_FETCH_STARTED, logging.INFO, date=date)
        try:
            fixtures = await self._source.get_fixtures(date)
        except TransportError as exc:
            self._observer.emit(events.FIXTURES_FETCH_FAILED, logging.ERROR, date=date, error=str(exc))
            raise
        self._observer.emit(events.FIXTURES_FETCH_SUCCEEDED, logging.INFO, date=date, count=len(fixtures))
        return fixtures

    async def predict_league(
        self,
        fixtures: Iterable[Fixture],
        league_id: Any,
        date: str,
        semaphore: Optional[asyncio.Semaphore] = None,
    ) -> List[EnrichedFixture]:
        """`semaphore` condiviso tra più leghe limita i pronostici in volo sull'intero run."""
        league = normalize_league_id(league_id)
        selected = [f for f in fixtures if f.league_id == league]
        self._observer.emit(events.LEAGUE_FILTERED, logging.INFO, league_id=league, count=len(selected))
        if not selected:
            self._observer.emit(events.LEAGUE_EMPTY, logging.INFO, league_id=league, date=date)
            return []

        season = self._season if self._season is not None else season_for(date)
        predictor = MatchPredictor(self._source, season, observer=self._observer, rng=self._rng)
        if semaphore is None:
            semaphore = self.new_semaphore()

        async def _predict(fx: Fixture):
            async with semaphore:
                return await predictor.predict(fx.home.id, fx.away.id)

        # gather mantiene l'ordine delle fixtures filtrate
        predictions = await asyncio.gather(*(_predict(fx) for fx in selected))
        enriched = [EnrichedFixture(fx, pred) for fx, pred in zip(selected, predictions)]
        self._observer.emit(
            events.LEAGUE_RUN_COMPLETED, logging.INFO, league_id=league, date=date, count=len(enriched)
        )
        return enriched

    async def run(self, league_id: Any) -> List[EnrichedFixture]:
        league = normalize_league_id(league_id)
        date = self.resolve_date()
        fixtures = await self.fetch_fixtures(date)
        return await self.predict_league(fixtures, league, date)


async def run_leagues(
    pipeline: LeaguePipeline,
    league_ids: Iterable[Any],
    date: Optional[str] = None,
) -> List[LeagueReport]:
    """
    Esegue più leghe sulla stessa data con un solo fetch delle fixtures.
    Fetch fallito -> tutte le leghe in stato 'error'; lega senza partite -> 'empty'.
    """
    leagues = [normalize_league_id(lid) for lid in league_ids]
    target = date or pipeline.resolve_date()

    try:
        fixtures = await pipeline.fetch_fixtures(target)
    except TransportError as exc:
        logger.error("Fetch fixtures fallito data=%s: %s", target, exc)
        return [
            LeagueReport(lid, league_name(lid), target, STATUS_ERROR, error=str(exc))
            for lid in leagues
        ]

    # un solo limite di concorrenza per tutte le leghe del run
    semaphore = pipeline.new_semaphore()
    results = await asyncio.gather(
        *(pipeline.predict_league(fixtures, lid, target, semaphore=semaphore) for lid in leagues)
    )
    reports: List[LeagueReport] = []
    for lid, matches in zip(leagues, results):
        status = STATUS_OK if matches else STATUS_EMPTY
        reports.append(LeagueReport(lid, league_name(lid), target, status, matches=list(matches)))
    return reports


__all__ = [
    "LeaguePipeline",
    "LeagueReport",
    "run_leagues",
    "STATUS_OK",
    "STATUS_EMPTY",
    "STATUS_ERROR",
]
