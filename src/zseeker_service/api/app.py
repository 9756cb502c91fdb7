"""
FastAPI application setup.

Responsibility:
    - FastAPI app initialization from a ServiceConfig
    - CORS middleware configuration
    - Request logging middleware
    - Health check endpoint
    - Router registration (job submission)

No job logic lives here; the JobPipeline stored on ``app.state`` does
the work.
"""

import logging
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from zseeker_service import __version__
from zseeker_service.api import routes
from zseeker_service.core.pipeline import JobPipeline
from zseeker_service.models.config import ServiceConfig

logger = logging.getLogger(__name__)


class HealthCheckResponse(BaseModel):
    """
    Health check response model.

    Attributes:
        status: Health status (always "ok" if endpoint responds)
        version: Service version
        tool_available: Whether the ZSeeker executable was found in PATH
    """

    status: str = "ok"
    version: str = __version__
    tool_available: bool


async def request_logging_middleware(request: Request, call_next):
    """
    Log every request with method, path, status code, and duration.

    Logging Format:
        INFO: "Incoming request: POST /submit-job"
        INFO: "Request completed: POST /submit-job - 200 - 12.345s"
    """
    logger.info("Incoming request: %s %s", request.method, request.url.path)
    start_time = time.time()

    response = await call_next(request)

    duration = time.time() - start_time
    logger.info(
        "Request completed: %s %s - %d - %.3fs",
        request.method,
        request.url.path,
        response.status_code,
        duration,
    )
    return response


def create_app(
    config: ServiceConfig | None = None,
    pipeline: JobPipeline | None = None,
) -> FastAPI:
    """
    FastAPI application factory.

    Args:
        config: Service configuration (defaults if None).
        pipeline: Job pipeline to serve; built from config if None.

    Returns:
        Configured FastAPI application instance.

    Usage:
        >>> app = create_app(ServiceConfig(port=9000))
        >>> # uvicorn.run(app, host="0.0.0.0", port=9000)
    """
    config = config or ServiceConfig()
    pipeline = pipeline or JobPipeline(config)

    app = FastAPI(
        title="zseeker-service",
        version=__version__,
        description=(
            "Upload a FASTA file and ZSeeker scoring parameters; "
            "receive the detected Z-DNA regions as CSV headers and rows."
        ),
    )
    app.state.config = config
    app.state.pipeline = pipeline

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.cors_allow_origins,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Authorization"],
    )
    app.middleware("http")(request_logging_middleware)

    @app.get("/health", response_model=HealthCheckResponse, tags=["health"])
    def health_check() -> HealthCheckResponse:
        """Report service liveness and whether ZSeeker is installed."""
        return HealthCheckResponse(tool_available=pipeline.tool.check_available())

    app.include_router(routes.router)

    logger.info(
        "Application created (work_dir=%s, timeout=%s)",
        config.work_dir,
        config.tool_timeout_seconds,
    )
    return app
