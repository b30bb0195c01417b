from __future__ import annotations

from fastapi import APIRouter, HTTPException, Response

from core.config import get_settings
from monitoring.prometheus_exporter import generate_prometheus_text

router = APIRouter(tags=["metrics"])

_CONTENT_TYPE = "text/plain; version=0.0.4; charset=utf-8"


@router.get("/metrics/prometheus", summary="Metriche Prometheus (testo)")
def prometheus_metrics():
    """
    Espone il registry del predictor se ENABLE_PROMETHEUS_EXPORTER=1, altrimenti 404.
    """
    settings = get_settings()
    if not settings.enable_prometheus_exporter:
        raise HTTPException(status_code=404, detail="prometheus exporter disabled")
    return Response(content=generate_prometheus_text(), media_type=_CONTENT_TYPE)
