"""
Day Timeline API Server - REST API for the timeline UI.
"""
# ruff: noqa: S104
# S104: Development server binding (guarded by __name__ check)

import logging
from datetime import datetime

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.response_models import HealthResponse
from api.timeline_router import timeline_router
from timeline import __version__, config
from timeline.errors import PlacementNotFound, TimelineError
from timeline.observability import CorrelationIdMiddleware, configure_logging

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Day Timeline API",
    description="Model a day of fixed obligations and place habits into the free time",
    version=__version__,
)

# Dev default: allow all origins; Production: set CORS_ORIGINS to comma-separated list
cors_origins = (
    ["*"] if config.CORS_ORIGINS == "*" else [o.strip() for o in config.CORS_ORIGINS.split(",")]
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(CorrelationIdMiddleware)

app.include_router(timeline_router, prefix="/api")


# ==== Error Handling ====


@app.exception_handler(TimelineError)
async def timeline_error_handler(request: Request, exc: TimelineError):
    """Engine errors are the caller's input problem: 404 for missing placements, else 422."""
    status_code = 404 if isinstance(exc, PlacementNotFound) else 422
    logger.warning("%s %s rejected: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=status_code,
        content={"error": str(exc), "error_code": exc.error_code},
    )


# ==== Health ====


@app.get("/api/health", response_model=HealthResponse)
async def health():
    return {
        "status": "healthy",
        "version": __version__,
        "timestamp": datetime.now().isoformat(),
    }


def main():
    configure_logging()
    logger.info("Starting Day Timeline API on %s:%d", config.API_HOST, config.API_PORT)
    uvicorn.run(app, host=config.API_HOST, port=config.API_PORT)


if __name__ == "__main__":
    main()
