import asyncio
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))

import pytest  # noqa: E402
from core.config import _reset_settings_cache_for_tests  # noqa: E402
from core.events import PipelineObserver  # noqa: E402
from core.models import UNAVAILABLE, Fixture, Team  # noqa: E402
from providers.api_football.base import DataSource  # noqa: E402
from providers.api_football.exceptions import TransientAPIError  # noqa: E402


@pytest.fixture(autouse=True)
def reset_settings_cache():
    _reset_settings_cache_for_tests()
    yield
    _reset_settings_cache_for_tests()


class RecordingObserver(PipelineObserver):
    """Raccoglie gli eventi emessi (nome, livello, campi)."""

    def __init__(self):
        self.events = []

    def emit(self, event, level=20, **fields):
        self.events.append((event, level, fields))

    def names(self):
        return [e[0] for e in self.events]

    def of(self, name):
        return [e[2] for e in self.events if e[0] == name]


class FakeDataSource(DataSource):
    """
    DataSource in memoria.
    - stats / injuries: dict team_id -> valore (default UNAVAILABLE / [])
    - fail: insieme di chiavi che sollevano TransientAPIError:
      "fixtures", ("statistics", team_id), ("injuries", team_id)
    - delays: team_id -> secondi di attesa sulle chiamate per squadra
    """

    def __init__(self, fixtures=None, stats=None, injuries=None, fail=None, delays=None):
        self.fixtures = list(fixtures or [])
        self.stats = dict(stats or {})
        self.injuries = dict(injuries or {})
        self.fail = set(fail or ())
        self.delays = dict(delays or {})
        self.calls = []

    async def __aenter__(self):
        return self

    async def __aexit__(self, *exc_info):
        return None

    async def get_fixtures(self, date):
        self.calls.append(("fixtures", date))
        if "fixtures" in self.fail:
            raise TransientAPIError("fixtures down")
        return list(self.fixtures)

    async def get_team_statistics(self, team_id, season):
        self.calls.append(("statistics", team_id, season))
        await asyncio.sleep(self.delays.get(team_id, 0))
        if ("statistics", team_id) in self.fail:
            raise TransientAPIError(f"statistics down team={team_id}")
        return self.stats.get(team_id, UNAVAILABLE)

    async def get_team_injuries(self, team_id):
        self.calls.append(("injuries", team_id))
        await asyncio.sleep(self.delays.get(team_id, 0))
        if ("injuries", team_id) in self.fail:
            raise TransientAPIError(f"injuries down team={team_id}")
        return list(self.injuries.get(team_id, []))


def build_fixture(fixture_id, league_id, home_id, away_id, date_utc="2030-01-02T18:45:00+00:00"):
    return Fixture(
        fixture_id=fixture_id,
        date_utc=date_utc,
        home=Team(home_id, f"Team {home_id}"),
        away=Team(away_id, f"Team {away_id}"),
        league_id=league_id,
    )


@pytest.fixture
def recorder():
    return RecordingObserver()


@pytest.fixture
def fake_source():
    return FakeDataSource


@pytest.fixture
def make_fixture():
    return build_fixture
