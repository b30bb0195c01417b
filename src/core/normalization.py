from __future__ import annotations

import re
from typing import Any, Dict, List, Optional

from core.logging import get_logger
from core.models import (
    UNAVAILABLE,
    Fixture,
    InjuryList,
    StatisticsState,
    Team,
    TeamStatistics,
)

logger = get_logger("core.normalization")

# Pattern ISO 8601 semplice: YYYY-MM-DDTHH:MM:SS (accetta suffisso Z o offset)
_ISO_DATETIME_RE = re.compile(
    r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}(?:\.\d+)?(?:Z|[+-]\d{2}:\d{2})?$"
)


def _as_int(v: Any) -> Optional[int]:
    try:
        return int(v) if v is not None else None
    except (ValueError, TypeError):
        return None


def _dict(raw: Any) -> Dict[str, Any]:
    return raw if isinstance(raw, dict) else {}


def _team(raw: Any) -> Optional[Team]:
    if not isinstance(raw, dict):
        return None
    team_id = _as_int(raw.get("id"))
    if team_id is None:
        return None
    return Team(id=team_id, name=raw.get("name"))


def normalize_api_football_fixture(item: Dict[str, Any]) -> Optional[Fixture]:
    """
    Converte un record grezzo di /fixtures in Fixture.
    Ritorna None se mancano id fixture o id squadre (record non predicibile).
    """
    # sotto-oggetti non dict trattati come assenti
    fixture = _dict(item.get("fixture"))
    league = _dict(item.get("league"))
    teams = _dict(item.get("teams"))

    fixture_id = _as_int(fixture.get("id"))
    home = _team(teams.get("home"))
    away = _team(teams.get("away"))
    if fixture_id is None or home is None or away is None:
        return None

    date_raw = fixture.get("date")
    if date_raw and not _ISO_DATETIME_RE.match(str(date_raw)):
        logger.debug("date non conforme ISO8601 fixture=%s: %s", fixture_id, date_raw)

    return Fixture(
        fixture_id=fixture_id,
        date_utc=date_raw,
        home=home,
        away=away,
        league_id=_as_int(league.get("id")),
        league_name=league.get("name"),
        season=_as_int(league.get("season")),
        status=_dict(fixture.get("status")).get("short"),
    )


def normalize_fixtures(response: Any) -> List[Fixture]:
    if not isinstance(response, list):
        logger.warning("Formato inatteso: 'response' non è una lista")
        return []
    out: List[Fixture] = []
    skipped = 0
    for item in response:
        fx = normalize_api_football_fixture(item) if isinstance(item, dict) else None
        if fx is None:
            skipped += 1
            continue
        out.append(fx)
    if skipped:
        logger.warning("Scartati %d record fixture incompleti", skipped)
    return out


def normalize_team_statistics(response: Any) -> StatisticsState:
    """
    /teams/statistics restituisce un oggetto; senza dati arriva null, [] o {}.
    Il campo form non stringa viene trattato come assente.
    """
    if not response or not isinstance(response, dict):
        return UNAVAILABLE
    form = response.get("form")
    if not isinstance(form, str):
        form = None
    return TeamStatistics(form=form, raw=response)


def normalize_injuries(response: Any) -> InjuryList:
    if response is None:
        return []
    if not isinstance(response, list):
        logger.warning("Formato inatteso injuries: %s", type(response).__name__)
        return []
    return response


__all__ = [
    "normalize_api_football_fixture",
    "normalize_fixtures",
    "normalize_team_statistics",
    "normalize_injuries",
]
