from __future__ import annotations

from typing import AsyncIterator, List

from fastapi import Depends

from core.config import get_settings
from core.events import CompositeObserver, LoggingObserver, PipelineObserver
from monitoring.prometheus_exporter import PrometheusObserver
from predictions.pipeline import LeaguePipeline
from providers.api_football.base import DataSource
from providers.api_football.data_source import ApiFootballDataSource


def get_observer() -> PipelineObserver:
    observers: List[PipelineObserver] = [LoggingObserver()]
    if get_settings().enable_prometheus_exporter:
        observers.append(PrometheusObserver())
    return CompositeObserver(observers)


async def get_data_source() -> AsyncIterator[DataSource]:
    # Un client HTTP per richiesta: nessuno stato condiviso tra run
    source = ApiFootballDataSource()
    try:
        yield source
    finally:
        await source.aclose()


def get_pipeline(
    source: DataSource = Depends(get_data_source),
    observer: PipelineObserver = Depends(get_observer),
) -> LeaguePipeline:
    return LeaguePipeline.from_settings(source, observer=observer)
