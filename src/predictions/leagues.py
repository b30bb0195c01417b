from __future__ import annotations

from typing import Dict, List, Optional

from core.config import get_settings

# id API-Football -> nome visualizzato
LEAGUES: Dict[int, str] = {
    39: "English Premier League",
    140: "La Liga",
    135: "Serie A",
    78: "Bundesliga",
    61: "Ligue 1",
    2: "UEFA Champions League",
    203: "Turkish Super Lig",
    713: "Carabao Cup",
}


def normalize_league_id(value: object) -> int:
    """Accetta int o stringa numerica ("39", " 140 "). Altrimenti ValueError."""
    if isinstance(value, bool):
        raise ValueError(f"league_id non valido: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError as e:
            raise ValueError(f"league_id non valido: {value!r}") from e
    raise ValueError(f"league_id non valido: {value!r}")


def league_name(league_id: int) -> Optional[str]:
    return LEAGUES.get(league_id)


def default_leagues() -> List[int]:
    """Leghe configurate (PREDICTOR_LEAGUES) o l'intero catalogo."""
    settings = get_settings()
    if settings.leagues:
        return list(settings.leagues)
    return list(LEAGUES)


__all__ = ["LEAGUES", "normalize_league_id", "league_name", "default_leagues"]
