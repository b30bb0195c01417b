#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import json
from typing import List, Optional

from dotenv import find_dotenv, load_dotenv

from core.config import get_settings
from core.logging import get_logger
from predictions.leagues import default_leagues
from predictions.pipeline import STATUS_ERROR, LeaguePipeline, LeagueReport, run_leagues
from providers.api_football.data_source import ApiFootballDataSource

logger = get_logger("scripts.run_predictions")


def _parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Pronostici delle partite di domani per lega")
    p.add_argument("--league", action="append", default=None, help="ID lega (ripetibile)")
    p.add_argument("--json", action="store_true", help="Output JSON invece del testo")
    return p.parse_args(argv)


def _print_report(report: LeagueReport) -> None:
    title = report.league_name or f"League {report.league_id}"
    print(f"== {title} ({report.date})")
    if not report.matches:
        print("   No matches available for tomorrow in this league.")
        return
    for m in report.matches:
        fx = m.fixture
        print(f"   {fx.home.name} vs {fx.away.name} - {fx.date_utc}  Prediction: {m.prediction}")


async def _run(league_ids: List[str]) -> List[LeagueReport]:
    async with ApiFootballDataSource() as source:
        pipeline = LeaguePipeline.from_settings(source)
        return await run_leagues(pipeline, league_ids)


def main(argv: Optional[List[str]] = None) -> int:
    dotenv_path = find_dotenv(usecwd=True)
    if dotenv_path:
        load_dotenv(dotenv_path, override=True)

    args = _parse_args(argv)
    try:
        get_settings()
    except ValueError as e:
        logger.error("Configurazione non valida: %s", e)
        return 2

    try:
        leagues = args.league or default_leagues()
        reports = asyncio.run(_run(leagues))
    except ValueError as e:
        logger.error("Parametri non validi: %s", e)
        return 2

    if args.json:
        print(json.dumps([r.to_dict() for r in reports], ensure_ascii=False, indent=2))
    else:
        for r in reports:
            _print_report(r)

    return 1 if any(r.status == STATUS_ERROR for r in reports) else 0


if __name__ == "__main__":
    raise SystemExit(main())
