from __future__ import annotations

import math
from typing import Sized

from core.models import StatisticsState, TeamStatistics

DEFAULT_FORM_RATING = 5
FORM_POINTS = {"W": 3, "D": 1}
INJURY_WEIGHT = 0.1
MIN_SCORE = 1


def round_half_up(value: float) -> int:
    """Arrotondamento con .5 verso +inf (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


def form_rating(stats: StatisticsState) -> int:
    if not isinstance(stats, TeamStatistics) or stats.form is None:
        return DEFAULT_FORM_RATING
    return sum(FORM_POINTS.get(ch, 0) for ch in stats.form)


def injury_impact(injuries: Sized) -> float:
    n = len(injuries)
    return n * INJURY_WEIGHT if n > 0 else 0.0


def calculate_team_score(stats: StatisticsState, injuries: Sized) -> int:
    """
    Punteggio forza squadra:
    - rating forma: W=+3, D=+1, altro 0 (default 5 se form assente)
    - impatto infortuni: 0.1 per infortunio
    - score = max(1, round_half_up(rating / 5 - impatto))
    """
    raw = form_rating(stats) / 5 - injury_impact(injuries)
    return max(MIN_SCORE, round_half_up(raw))


__all__ = [
    "DEFAULT_FORM_RATING",
    "calculate_team_score",
    "form_rating",
    "injury_impact",
    "round_half_up",
]
