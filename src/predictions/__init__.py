"""
Predictions package.

Contiene:
- score: calcolo punteggio forza squadra (forma + infortuni)
- predictor: MatchPredictor (pronostico singola partita con fallback)
- pipeline: LeaguePipeline / run_leagues (orchestrazione per lega)
- leagues: catalogo leghe predefinite
"""
from .score import calculate_team_score  # noqa: F401
from .predictor import MatchPredictor  # noqa: F401
from .pipeline import LeaguePipeline, LeagueReport, run_leagues  # noqa: F401


__all__ = ["calculate_team_score", "MatchPredictor", "LeaguePipeline", "LeagueReport", "run_leagues"]
