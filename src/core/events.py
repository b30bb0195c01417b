from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional

from core.logging import get_logger

# Nomi evento emessi da pipeline / predictor
FIXTURES_FETCH_STARTED = "fixtures_fetch_started"
FIXTURES_FETCH_SUCCEEDED = "fixtures_fetch_succeeded"
FIXTURES_FETCH_FAILED = "fixtures_fetch_failed"
LEAGUE_FILTERED = "league_filtered"
LEAGUE_EMPTY = "league_empty"
LEAGUE_RUN_COMPLETED = "league_run_completed"
STATS_FETCH_STARTED = "stats_fetch_started"
STATS_FETCH_SUCCEEDED = "stats_fetch_succeeded"
STATS_UNAVAILABLE = "stats_unavailable"
INJURIES_FETCH_STARTED = "injuries_fetch_started"
INJURIES_FETCH_SUCCEEDED = "injuries_fetch_succeeded"
FETCH_FAILED = "fetch_failed"
FALLBACK_RANDOM_SCORE = "fallback_random_score"
FALLBACK_DEFAULT_FORM = "fallback_default_form"
FALLBACK_DRAW = "fallback_draw"
PREDICTION_COMPLETED = "prediction_completed"


class PipelineObserver:
    """
    Hook di osservabilità iniettato nei componenti.
    L'implementazione base ignora gli eventi.
    """

    def emit(self, event: str, level: int = logging.INFO, **fields: Any) -> None:
        return None


class LoggingObserver(PipelineObserver):
    """Scrive ogni evento come riga JSON (campi in `event_fields`)."""

    def __init__(self, logger: Optional[logging.Logger] = None) -> None:
        self._logger = logger or get_logger("core.events")

    def emit(self, event: str, level: int = logging.INFO, **fields: Any) -> None:
        self._logger.log(level, event, extra={"event_fields": fields})


class CompositeObserver(PipelineObserver):
    def __init__(self, observers: Iterable[PipelineObserver]) -> None:
        self._observers: List[PipelineObserver] = list(observers)

    def emit(self, event: str, level: int = logging.INFO, **fields: Any) -> None:
        for obs in self._observers:
            obs.emit(event, level, **fields)


__all__ = [
    "PipelineObserver",
    "LoggingObserver",
    "CompositeObserver",
    "FIXTURES_FETCH_STARTED",
    "FIXTURES_FETCH_SUCCEEDED",
    "FIXTURES_FETCH_FAILED",
    "LEAGUE_FILTERED",
    "LEAGUE_EMPTY",
    "LEAGUE_RUN_COMPLETED",
    "STATS_FETCH_STARTED",
    "STATS_FETCH_SUCCEEDED",
    "STATS_UNAVAILABLE",
    "INJURIES_FETCH_STARTED",
    "INJURIES_FETCH_SUCCEEDED",
    "FETCH_FAILED",
    "FALLBACK_RANDOM_SCORE",
    "FALLBACK_DEFAULT_FORM",
    "FALLBACK_DRAW",
    "PREDICTION_COMPLETED",
]
