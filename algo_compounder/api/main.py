"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from algo_compounder.api.middleware import RequestIDMiddleware, MetricsMiddleware
from algo_compounder.api.v1 import projection, wait_time
from algo_compounder.infrastructure.observability.logging import setup_logging
from algo_compounder.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Algo Compounder",
        description="Reward collection timing from a compounding-with-fees model",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    # Health check endpoint
    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    # Register API routers
    app.include_router(wait_time.router, prefix="/v1", tags=["wait-time"])
    app.include_router(projection.router, prefix="/v1", tags=["projection"])

    return app


app = create_app()
