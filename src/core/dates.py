from __future__ import annotations

from datetime import date, timedelta
from typing import Callable, Optional


def tomorrow(today: Optional[date] = None) -> str:
    """Data di domani (calendario locale) in formato YYYY-MM-DD."""
    base = today or date.today()
    return (base + timedelta(days=1)).strftime("%Y-%m-%d")


def season_for(day: str) -> int:
    """
    Stagione API-Football (anno di inizio) per una data YYYY-MM-DD:
    da luglio in poi è l'anno corrente, prima è l'anno precedente.
    """
    d = date.fromisoformat(day)
    return d.year if d.month >= 7 else d.year - 1


class DateResolver:
    """Risolve la data target delle fixtures. `clock` iniettabile per i test."""

    def __init__(self, clock: Optional[Callable[[], date]] = None) -> None:
        self._clock = clock or date.today

    def resolve(self) -> str:
        return tomorrow(self._clock())


__all__ = ["DateResolver", "tomorrow", "season_for"]
