from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union


@dataclass(frozen=True)
class Team:
    id: int
    name: Optional[str] = None


@dataclass(frozen=True)
class Fixture:
    fixture_id: int
    date_utc: Optional[str]        # ISO 8601 come arriva dal provider
    home: Team
    away: Team
    league_id: Optional[int]
    league_name: Optional[str] = None
    season: Optional[int] = None
    status: Optional[str] = None


class Unavailable:
    """
    Stato "statistiche non disponibili" (payload vuoto dal provider).
    Distinto da TeamStatistics(form=None): i due casi hanno fallback diversi.
    """

    _instance: Optional["Unavailable"] = None

    def __new__(cls) -> "Unavailable":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "UNAVAILABLE"


UNAVAILABLE = Unavailable()


@dataclass(frozen=True)
class TeamStatistics:
    form: Optional[str]
    raw: Dict[str, Any] = field(default_factory=dict, compare=False, repr=False)


StatisticsState = Union[TeamStatistics, Unavailable]
InjuryList = List[Dict[str, Any]]


@dataclass(frozen=True)
class PredictionResult:
    home_score: int
    away_score: int

    @classmethod
    def draw(cls) -> "PredictionResult":
        return cls(1, 1)

    def __str__(self) -> str:
        return f"{self.home_score} - {self.away_score}"


@dataclass(frozen=True)
class EnrichedFixture:
    fixture: Fixture
    prediction: PredictionResult

    @property
    def league_id(self) -> Optional[int]:
        return self.fixture.league_id

    def to_dict(self) -> Dict[str, Any]:
        f = self.fixture
        return {
            "fixture_id": f.fixture_id,
            "date": f.date_utc,
            "league_id": f.league_id,
            "home_team": {"id": f.home.id, "name": f.home.name},
            "away_team": {"id": f.away.id, "name": f.away.name},
            "prediction": str(self.prediction),
            "home_score": self.prediction.home_score,
            "away_score": self.prediction.away_score,
        }


__all__ = [
    "Team",
    "Fixture",
    "Unavailable",
    "UNAVAILABLE",
    "TeamStatistics",
    "StatisticsState",
    "InjuryList",
    "PredictionResult",
    "EnrichedFixture",
]
