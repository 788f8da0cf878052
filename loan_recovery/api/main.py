"""FastAPI application factory"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from loan_recovery.api.dependencies import get_dashboard
from loan_recovery.api.middleware import RequestIDMiddleware, MetricsMiddleware
from loan_recovery.api.v1 import dashboard, loans, system
from loan_recovery.infrastructure.observability.logging import setup_logging
from loan_recovery.config import settings

# Setup structured logging
setup_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Initial load, as the dashboard does when first shown
    provider = app.dependency_overrides.get(get_dashboard, get_dashboard)
    await provider().refresh()
    yield


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Smart Loan Recovery Dashboard",
        description="Loan/borrower view with default prediction and recovery strategy analysis",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
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
    app.include_router(dashboard.router, prefix="/v1", tags=["dashboard"])
    app.include_router(loans.router, prefix="/v1", tags=["loans"])
    app.include_router(system.router, prefix="/v1", tags=["system"])

    return app


app = create_app()
