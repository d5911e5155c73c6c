"""GET /v1/dashboard - Full dashboard payload from the forecast provider"""

import time
import logging
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query

from forecast_analytics.api.v1.schemas import (
    DashboardResponse,
    ForecastTableRowSchema,
    ChartPointSchema,
    ComparisonResponse,
)
from forecast_analytics.api.v1.kpis import derive_configured_kpis, to_kpi_response
from forecast_analytics.api.v1.liquidity import classify_configured_risk, to_liquidity_response
from forecast_analytics.api.v1.drilldown import build_configured_drilldown
from forecast_analytics.api.dependencies import get_forecast_client, get_request_id, get_rng
from forecast_analytics.config import settings
from forecast_analytics.infrastructure.clients.forecast import ForecastClient
from forecast_analytics.domain.series import combine_history_and_forecast, build_forecast_table, rollup_monthly
from forecast_analytics.domain.comparison import compare_periods, SimulatedPreviousPeriod
from forecast_analytics.domain.exceptions import ForecastProviderError, InputPreconditionError
from forecast_analytics.infrastructure.observability.metrics import (
    record_engine_run,
    record_engine_failure,
    provider_fetch_failures_counter,
)
from forecast_analytics.infrastructure.observability.logging import log_engine_run

router = APIRouter()


@router.get("/dashboard", response_model=DashboardResponse)
async def get_dashboard(
    seed: Optional[int] = Query(None, description="Fixes the simulated comparison and drilldown data"),
    request_id: str = Depends(get_request_id),
    forecast_client: ForecastClient = Depends(get_forecast_client),
):
    """
    Build every derived dataset the dashboard renders.

    Flow:
    1. Fetch historical and forecast series from the provider
    2. Derive KPIs and classify liquidity risk (independently)
    3. Compare the near-term forecast balance with the simulated previous year
    4. Shape chart series and forecast tables, with a monthly rollup of history
    5. Synthesize monthly drilldown transactions
    """
    start_time = time.perf_counter()

    try:
        historical = await forecast_client.get_historical()
        forecast = await forecast_client.get_forecast()

        kpi_set = derive_configured_kpis(forecast.daily, forecast.monthly, forecast.kpis)
        annotated = classify_configured_risk(forecast.daily)
        comparison = compare_periods(
            forecast.daily[: settings.dashboard_comparison_days],
            "balance",
            granularity="year",
            previous_source=SimulatedPreviousPeriod(
                rng=get_rng(seed),
                factor_min=settings.comparison_factor_min,
                factor_max=settings.comparison_factor_max,
            ),
        )

        chart_series = combine_history_and_forecast(
            historical,
            forecast.daily,
            history_days=settings.chart_history_days,
            forecast_days=settings.chart_forecast_days,
        )
        history_monthly = rollup_monthly(historical) if historical else []
        drilldown = build_configured_drilldown(forecast.monthly, get_rng(seed))

    except ForecastProviderError as e:
        provider_fetch_failures_counter.inc()
        logging.error(f"Forecast provider error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=503, detail="Forecast provider unavailable")

    except InputPreconditionError as e:
        record_engine_failure("dashboard", e)
        logging.warning(f"Dashboard rejected: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    except Exception as e:
        logging.error(f"Unexpected error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    record_engine_run("dashboard")
    log_engine_run(
        request_id,
        "dashboard",
        len(forecast.daily),
        (time.perf_counter() - start_time) * 1000,
        risk_date_count=len(annotated.risk_dates),
    )

    return DashboardResponse(
        kpis=to_kpi_response(kpi_set),
        liquidity_risk=to_liquidity_response(annotated),
        chart_series=[ChartPointSchema.model_validate(p) for p in chart_series],
        daily_table=[ForecastTableRowSchema.model_validate(r) for r in build_forecast_table(forecast.daily)],
        monthly_table=[ForecastTableRowSchema.model_validate(r) for r in build_forecast_table(forecast.monthly)],
        history_monthly_table=[ForecastTableRowSchema.model_validate(r) for r in build_forecast_table(history_monthly)],
        comparison=ComparisonResponse.model_validate(comparison),
        drilldown=drilldown,
    )
