from core.models import UNAVAILABLE, TeamStatistics
from core.normalization import (
    normalize_api_football_fixture,
    normalize_fixtures,
    normalize_injuries,
    normalize_team_statistics,
)


def _raw(fid=123, league=135, home=1, away=2):
    return {
        "fixture": {"id": fid, "date": "2024-08-30T18:45:00+00:00", "status": {"short": "NS"}},
        "league": {"id": league, "name": "Serie A", "season": 2024},
        "teams": {"home": {"id": home, "name": "Team A"}, "away": {"id": away, "name": "Team B"}},
        "goals": {"home": None, "away": None},
    }


def test_fixture_normalization():
    fx = normalize_api_football_fixture(_raw())
    assert fx.fixture_id == 123
    assert fx.league_id == 135
    assert fx.league_name == "Serie A"
    assert fx.season == 2024
    assert fx.status == "NS"
    assert fx.home.id == 1 and fx.home.name == "Team A"
    assert fx.away.id == 2 and fx.away.name == "Team B"
    assert fx.date_utc == "2024-08-30T18:45:00+00:00"


def test_fixture_string_ids_are_coerced():
    fx = normalize_api_football_fixture(_raw(fid="77", league="39", home="5"))
    assert fx.fixture_id == 77
    assert fx.league_id == 39
    assert fx.home.id == 5


def test_fixture_without_team_id_is_dropped():
    raw = _raw()
    raw["teams"]["away"] = {"name": "No id"}
    assert normalize_api_football_fixture(raw) is None


def test_normalize_fixtures_skips_incomplete_records():
    bad = {"fixture": {}, "league": {"id": 39}}
    out = normalize_fixtures([_raw(fid=1), bad, "garbage", _raw(fid=2)])
    assert [f.fixture_id for f in out] == [1, 2]


def test_normalize_fixtures_non_list():
    assert normalize_fixtures({"unexpected": True}) == []
    assert normalize_fixtures(None) == []


def test_statistics_empty_payload_is_unavailable():
    assert normalize_team_statistics(None) is UNAVAILABLE
    assert normalize_team_statistics([]) is UNAVAILABLE
    assert normalize_team_statistics({}) is UNAVAILABLE


def test_statistics_with_form():
    stats = normalize_team_statistics({"form": "WDLWW", "team": {"id": 1}})
    assert stats == TeamStatistics(form="WDLWW")
    assert stats.raw["team"]["id"] == 1


def test_statistics_missing_or_bad_form():
    assert normalize_team_statistics({"team": {"id": 1}}).form is None
    assert normalize_team_statistics({"form": None, "x": 1}).form is None
    assert normalize_team_statistics({"form": 12}).form is None
    # stringa vuota resta stringa vuota (rating 0, non default)
    assert normalize_team_statistics({"form": ""}).form == ""


def test_injuries():
    assert normalize_injuries(None) == []
    assert normalize_injuries([]) == []
    assert normalize_injuries([{"player": {"id": 1}}]) == [{"player": {"id": 1}}]
    assert normalize_injuries({"oops": 1}) == []


def test_fixture_string_status_is_ignored():
    raw = _raw()
    raw["fixture"]["status"] = "NS"
    fx = normalize_api_football_fixture(raw)
    assert fx.fixture_id == 123
    assert fx.status is None


def test_fixture_scalar_league_keeps_record():
    raw = _raw()
    raw["league"] = 39
    fx = normalize_api_football_fixture(raw)
    assert fx.fixture_id == 123
    assert fx.league_id is None
    assert fx.league_name is None


def test_fixture_string_teams_is_dropped():
    raw = _raw()
    raw["teams"] = "Team A - Team B"
    assert normalize_api_football_fixture(raw) is None


def test_normalize_fixtures_malformed_subobjects():
    league_int = _raw(fid=2)
    league_int["league"] = 39
    status_str = _raw(fid=3)
    status_str["fixture"]["status"] = "NS"
    teams_str = _raw(fid=4)
    teams_str["teams"] = "x"
    fixture_list = _raw(fid=5)
    fixture_list["fixture"] = [5]
    out = normalize_fixtures([_raw(fid=1), league_int, status_str, teams_str, fixture_list])
    assert [f.fixture_id for f in out] == [1, 2, 3]
