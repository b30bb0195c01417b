from __future__ import annotations

from fastapi import FastAPI

from core.config import get_settings
from core.logging import get_logger

from api.routes.health import router as health_router
from api.routes.metrics import router as metrics_router
from api.routes.predictions import router as predictions_router

logger = get_logger("api.app")


def create_app() -> FastAPI:
    app = FastAPI(title="Matchday Predictor API", version="0.1.0")
    try:
        get_settings()
    except ValueError as exc:
        logger.error("Impossibile caricare settings: %s", exc)

    app.include_router(health_router)
    app.include_router(metrics_router)
    app.include_router(predictions_router)
    return app


app = create_app()


if __name__ == "__main__":  # pragma: no cover
    import uvicorn

    uvicorn.run("api.app:app", host="0.0.0.0", port=8000, reload=False)
