from __future__ import annotations

from typing import Any, Dict, List, Optional

from core.logging import get_logger
from core.models import Fixture, InjuryList, StatisticsState
from core.normalization import (
    normalize_fixtures,
    normalize_injuries,
    normalize_team_statistics,
)
from .base import DataSource
from .http_client import APIFootballHttpClient, get_http_client

log = get_logger(__name__)


class ApiFootballDataSource(DataSource):
    """
    DataSource su API-Football v3:
      - /fixtures?date=...
      - /teams/statistics?team=...&season=...
      - /injuries?team=...
    """

    def __init__(self, client: Optional[APIFootballHttpClient] = None) -> None:
        self._client = client or get_http_client()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> "ApiFootballDataSource":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def get_fixtures(self, date: str) -> List[Fixture]:
        raw = await self._client.api_get("/fixtures", params={"date": date})
        return normalize_fixtures(raw.get("response", []))

    async def get_team_statistics(self, team_id: int, season: int) -> StatisticsState:
        params: Dict[str, Any] = {"team": team_id, "season": season}
        raw = await self._client.api_get("/teams/statistics", params=params)
        return normalize_team_statistics(raw.get("response"))

    async def get_team_injuries(self, team_id: int) -> InjuryList:
        raw = await self._client.api_get("/injuries", params={"team": team_id})
        return normalize_injuries(raw.get("response"))

    def get_last_stats(self) -> Dict[str, Any]:
        return self._client.get_stats()


__all__ = ["ApiFootballDataSource"]
