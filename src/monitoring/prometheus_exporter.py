from __future__ import annotations

import logging
from typing import Any

from prometheus_client import (
    CollectorRegistry,
    Counter,
    Gauge,
    generate_latest,
)
from core.events import FIXTURES_FETCH_SUCCEEDED, LEAGUE_RUN_COMPLETED, PipelineObserver
from core.logging import get_logger

logger = get_logger("monitoring.prometheus_exporter")

# Registry dedicato (non quello globale di prometheus_client)
_REGISTRY = CollectorRegistry()

EVENTS_TOTAL = Counter(
    "predictor_events_total",
    "Eventi emessi da pipeline e predictor",
    ["event"],
    registry=_REGISTRY,
)
LAST_FIXTURES_TOTAL = Gauge(
    "predictor_last_fixtures_total",
    "Fixtures ricevute nell'ultimo fetch per data",
    registry=_REGISTRY,
)
LAST_LEAGUE_MATCHES = Gauge(
    "predictor_last_league_matches",
    "Partite pronosticate nell'ultimo run per lega",
    ["league_id"],
    registry=_REGISTRY,
)


class PrometheusObserver(PipelineObserver):
    """Conta gli eventi per nome e aggiorna qualche gauge di riepilogo."""

    def emit(self, event: str, level: int = logging.INFO, **fields: Any) -> None:
        EVENTS_TOTAL.labels(event=event).inc()
        if event == FIXTURES_FETCH_SUCCEEDED and isinstance(fields.get("count"), int):
            LAST_FIXTURES_TOTAL.set(fields["count"])
        elif event == LEAGUE_RUN_COMPLETED and fields.get("league_id") is not None:
            LAST_LEAGUE_MATCHES.labels(league_id=str(fields["league_id"])).set(fields.get("count", 0))


def generate_prometheus_text() -> bytes:
    return generate_latest(_REGISTRY)


__all__ = ["PrometheusObserver", "generate_prometheus_text", "_REGISTRY"]
