"""FastAPI application factory"""

from fastapi import FastAPI
from prometheus_client import generate_latest, CONTENT_TYPE_LATEST
from starlette.responses import Response

from forecast_analytics.api.middleware import RequestIDMiddleware, MetricsMiddleware
from forecast_analytics.api.v1 import kpis, liquidity, comparison, drilldown, dashboard
from forecast_analytics.infrastructure.observability.logging import setup_logging
from forecast_analytics.config import settings

# Setup structured logging
setup_logging(settings.log_level)


def create_app() -> FastAPI:
    """Create and configure FastAPI application"""
    app = FastAPI(
        title="Forecast Analytics",
        description="KPIs, liquidity risk, period comparison and drilldown data for cash-flow dashboards",
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

    app.include_router(kpis.router, prefix="/v1", tags=["kpis"])
    app.include_router(liquidity.router, prefix="/v1", tags=["liquidity"])
    app.include_router(comparison.router, prefix="/v1", tags=["comparison"])
    app.include_router(drilldown.router, prefix="/v1", tags=["drilldown"])
    app.include_router(dashboard.router, prefix="/v1", tags=["dashboard"])

    return app


app = create_app()
