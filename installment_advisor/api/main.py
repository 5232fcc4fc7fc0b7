"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from installment_advisor.api.middleware import RequestIDMiddleware, MetricsMiddleware
from installment_advisor.api.v1 import rates, scenarios
from installment_advisor.infrastructure.observability.logging import setup_logging
from installment_advisor.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Installment Advisor",
        description="Pay upfront or in installments? Scenario calculator with yield and tax detail",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
    )

    # Add middleware (order matters: last added = first executed)
    app.add_middleware(MetricsMiddleware)
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health")
    def health_check():
        return {"status": "ok", "service": settings.service_name}

    # Prometheus metrics endpoint
    @app.get("/metrics")
    def metrics():
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    app.include_router(scenarios.router, prefix="/v1", tags=["scenarios"])
    app.include_router(rates.router, prefix="/v1", tags=["rates"])

    return app


app = create_app()
