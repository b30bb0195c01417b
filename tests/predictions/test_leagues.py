import pytest

from predictions.leagues import LEAGUES, default_leagues, league_name, normalize_league_id


@pytest.mark.parametrize("value,expected", [(39, 39), ("39", 39), (" 140 ", 140), ("2", 2)])
def test_normalize_league_id(value, expected):
    assert normalize_league_id(value) == expected


@pytest.mark.parametrize("value", ["", "abc", "39.5", None, True, 3.0])
def test_normalize_league_id_invalid(value):
    with pytest.raises(ValueError):
        normalize_league_id(value)


def test_catalogue():
    assert league_name(39) == "English Premier League"
    assert league_name(713) == "Carabao Cup"
    assert league_name(999) is None
    assert len(LEAGUES) == 8


def test_default_leagues_from_catalogue(monkeypatch):
    monkeypatch.setenv("API_FOOTBALL_KEY", "DUMMY")
    monkeypatch.delenv("PREDICTOR_LEAGUES", raising=False)
    assert default_leagues() == [39, 140, 135, 78, 61, 2, 203, 713]


def test_default_leagues_from_env(monkeypatch):
    monkeypatch.setenv("API_FOOTBALL_KEY", "DUMMY")
    monkeypatch.setenv("PREDICTOR_LEAGUES", "135, 2")
    assert default_leagues() == [135, 2]
