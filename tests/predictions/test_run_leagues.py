import asyncio
from datetime import date

from core.dates import DateResolver
from core.models import TeamStatistics
from predictions.pipeline import (
    STATUS_EMPTY,
    STATUS_ERROR,
    STATUS_OK,
    LeaguePipeline,
    run_leagues,
)


def _pipeline(source, recorder=None):
    return LeaguePipeline(source, date_resolver=DateResolver(clock=lambda: date(2030, 8, 10)), observer=recorder)


def test_reports_per_league(fake_source, make_fixture):
    fixtures = [make_fixture(1, 39, 10, 11), make_fixture(2, 140, 12, 13), make_fixture(3, 39, 14, 15)]
    stats = {i: TeamStatistics(form="WWWWW") for i in range(10, 16)}
    source = fake_source(fixtures=fixtures, stats=stats)
    reports = asyncio.run(run_leagues(_pipeline(source), [39, "140", 78]))

    assert [r.league_id for r in reports] == [39, 140, 78]
    assert [r.status for r in reports] == [STATUS_OK, STATUS_OK, STATUS_EMPTY]
    assert [m.fixture.fixture_id for m in reports[0].matches] == [1, 3]
    assert reports[0].league_name == "English Premier League"
    assert reports[2].matches == []
    assert all(r.date == "2030-08-11" for r in reports)
    # un solo fetch fixtures per tutte le leghe
    assert [c for c in source.calls if c[0] == "fixtures"] == [("fixtures", "2030-08-11")]


def test_fetch_failure_marks_all_leagues_error(fake_source):
    source = fake_source(fail={"fixtures"})
    reports = asyncio.run(run_leagues(_pipeline(source), [39, 140]))
    assert [r.status for r in reports] == [STATUS_ERROR, STATUS_ERROR]
    assert all(r.error for r in reports)
    assert all(r.matches == [] for r in reports)


def test_report_to_dict(fake_source, make_fixture):
    stats = {10: TeamStatistics(form="WWWDD"), 11: TeamStatistics(form="WWWDD")}
    source = fake_source(fixtures=[make_fixture(1, 135, 10, 11)], stats=stats)
    report = asyncio.run(run_leagues(_pipeline(source), [135]))[0]
    payload = report.to_dict()
    assert payload["league_name"] == "Serie A"
    assert payload["status"] == "ok"
    assert payload["count"] == 1
    assert payload["matches"][0]["prediction"] == "2 - 2"
    assert payload["error"] is None


def test_explicit_date(fake_source):
    source = fake_source()
    asyncio.run(run_leagues(_pipeline(source), [39], date="2031-03-03"))
    assert source.calls == [("fixtures", "2031-03-03")]


def test_concurrency_limit_shared_across_leagues(fake_source, make_fixture):
    fixtures = [make_fixture(i, 39, 100 + i, 200 + i) for i in range(4)]
    fixtures += [make_fixture(10 + i, 140, 300 + i, 400 + i) for i in range(4)]
    state = {"active": 0, "peak": 0}

    class Counting(fake_source):
        async def get_team_statistics(self, team_id, season):
            state["active"] += 1
            state["peak"] = max(state["peak"], state["active"])
            await asyncio.sleep(0.01)
            state["active"] -= 1
            return await super().get_team_statistics(team_id, season)

    source = Counting(fixtures=fixtures)
    pipeline = LeaguePipeline(
        source,
        date_resolver=DateResolver(clock=lambda: date(2030, 8, 10)),
        max_concurrency=1,
    )
    reports = asyncio.run(run_leagues(pipeline, [39, 140]))
    assert [len(r.matches) for r in reports] == [4, 4]
    # un pronostico alla volta sull'intero run: 2 fetch statistiche in parallelo
    assert state["peak"] == 2
