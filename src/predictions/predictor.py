from __future__ import annotations

import asyncio
import logging
import random
from typing import Awaitable, Optional, Tuple, TypeVar

from core import events
from core.events import PipelineObserver
from core.logging import get_logger
from core.models import InjuryList, PredictionResult, StatisticsState, TeamStatistics
from predictions.score import calculate_team_score
from providers.api_football.base import DataSource
from providers.api_football.exceptions import TransportError

logger = get_logger("predictions.predictor")

T = TypeVar("T")
U = TypeVar("U")

RANDOM_SCORE_MIN = 1
RANDOM_SCORE_MAX = 3


async def join_pair(first: Awaitable[T], second: Awaitable[U]) -> Tuple[T, U]:
    """Attende due chiamate in parallelo; se una fallisce l'altra viene cancellata."""
    tasks = [asyncio.ensure_future(first), asyncio.ensure_future(second)]
    try:
        a, b = await asyncio.gather(*tasks)
    except BaseException:
        for t in tasks:
            t.cancel()
        # raccoglie anche l'eccezione del secondo task (niente "never retrieved")
        await asyncio.gather(*tasks, return_exceptions=True)
        raise
    return a, b


class MatchPredictor:
    """
    Pronostico di una singola partita.

    Fallback:
    - statistiche UNAVAILABLE per una squadra -> punteggio casuale in [1, 3] per quel lato
    - form assente -> rating di default dentro calculate_team_score
    - TransportError su qualunque fetch -> pareggio 1 - 1 per l'intera partita
    """

    def __init__(
        self,
        source: DataSource,
        season: int,
        observer: Optional[PipelineObserver] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self._source = source
        self._season = season
        self._observer = observer or PipelineObserver()
        self._rng = rng or random.Random()

    async def _fetch_statistics(self, team_id: int) -> StatisticsState:
        self._observer.emit(events.STATS_FETCH_STARTED, logging.DEBUG, team_id=team_id, season=self._season)
        try:
            stats = await self._source.get_team_statistics(team_id, self._season)
        except TransportError as exc:
            self._observer.emit(
                events.FETCH_FAILED, logging.WARNING, kind="statistics", team_id=team_id, error=str(exc)
            )
            raise
        if isinstance(stats, TeamStatistics):
            self._observer.emit(events.STATS_FETCH_SUCCEEDED, logging.DEBUG, team_id=team_id)
        else:
            self._observer.emit(events.STATS_UNAVAILABLE, logging.INFO, team_id=team_id)
        return stats

    async def _fetch_injuries(self, team_id: int) -> InjuryList:
        self._observer.emit(events.INJURIES_FETCH_STARTED, logging.DEBUG, team_id=team_id)
        try:
            injuries = await self._source.get_team_injuries(team_id)
        except TransportError as exc:
            self._observer.emit(
                events.FETCH_FAILED, logging.WARNING, kind="injuries", team_id=team_id, error=str(exc)
            )
            raise
        self._observer.emit(
            events.INJURIES_FETCH_SUCCEEDED, logging.DEBUG, team_id=team_id, count=len(injuries)
        )
        return injuries

    def _side_score(self, side: str, team_id: int, stats: StatisticsState, injuries: InjuryList) -> int:
        if not isinstance(stats, TeamStatistics):
            score = self._rng.randint(RANDOM_SCORE_MIN, RANDOM_SCORE_MAX)
            self._observer.emit(
                events.FALLBACK_RANDOM_SCORE, logging.INFO, side=side, team_id=team_id, score=score
            )
            return score
        if stats.form is None:
            self._observer.emit(events.FALLBACK_DEFAULT_FORM, logging.INFO, side=side, team_id=team_id)
        return calculate_team_score(stats, injuries)

    async def predict(self, home_team_id: int, away_team_id: int) -> PredictionResult:
        try:
            home_stats, away_stats = await join_pair(
                self._fetch_statistics(home_team_id),
                self._fetch_statistics(away_team_id),
            )
            home_injuries, away_injuries = await join_pair(
                self._fetch_injuries(home_team_id),
                self._fetch_injuries(away_team_id),
            )
        except TransportError as exc:
            self._observer.emit(
                events.FALLBACK_DRAW,
                logging.WARNING,
                home_team_id=home_team_id,
                away_team_id=away_team_id,
                error=str(exc),
            )
            return PredictionResult.draw()
        except Exception as exc:
            logger.exception("Errore inatteso nel pronostico %s-%s", home_team_id, away_team_id)
            self._observer.emit(
                events.FALLBACK_DRAW,
                logging.ERROR,
                home_team_id=home_team_id,
                away_team_id=away_team_id,
                error=repr(exc),
            )
            return PredictionResult.draw()

        result = PredictionResult(
            self._side_score("home", home_team_id, home_stats, home_injuries),
            self._side_score("away", away_team_id, away_stats, away_injuries),
        )
        self._observer.emit(
            events.PREDICTION_COMPLETED,
            logging.DEBUG,
            home_team_id=home_team_id,
            away_team_id=away_team_id,
            prediction=str(result),
        )
        return result


__all__ = ["MatchPredictor", "join_pair"]
