"""POST /v1/kpis - KPI derivation endpoint"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException

from forecast_analytics.api.v1.schemas import KpiRequest, KpiResponse
from forecast_analytics.api.dependencies import get_request_id
from forecast_analytics.config import settings
from forecast_analytics.domain.kpis import derive_kpis, classify_cash_conversion_cycle, classify_runway
from forecast_analytics.domain.models import KpiSet
from forecast_analytics.domain.exceptions import InputPreconditionError
from forecast_analytics.infrastructure.observability.metrics import record_engine_run, record_engine_failure
from forecast_analytics.infrastructure.observability.logging import log_engine_run

router = APIRouter()


def to_kpi_response(kpi_set: KpiSet) -> KpiResponse:
    return KpiResponse(
        current_balance=kpi_set.current_balance,
        projected_balance_30d=kpi_set.projected_balance_30d,
        delta=kpi_set.delta,
        monthly_burn_rate=kpi_set.monthly_burn_rate,
        dso=kpi_set.dso,
        dpo=kpi_set.dpo,
        cash_conversion_cycle_days=kpi_set.cash_conversion_cycle_days,
        cash_conversion_cycle_band=classify_cash_conversion_cycle(kpi_set.cash_conversion_cycle_days),
        runway_days=kpi_set.runway_days,
        runway_band=classify_runway(kpi_set.runway_days),
    )


def derive_configured_kpis(daily, monthly, raw_kpis) -> KpiSet:
    """derive_kpis with the service's configured design parameters"""
    return derive_kpis(
        daily,
        monthly,
        raw_kpis,
        days_inventory_outstanding=settings.days_inventory_outstanding,
        horizon_days=settings.projection_horizon_days,
        burn_rate_window_months=settings.burn_rate_window_months,
    )


@router.post("/kpis", response_model=KpiResponse)
def create_kpis(request_body: KpiRequest, request_id: str = Depends(get_request_id)):
    """
    Derive dashboard KPIs from a forecast.

    Requires at least 30 daily points and 3 monthly points; a zero burn
    rate is rejected because runway would be unbounded.
    """
    start_time = time.perf_counter()

    try:
        kpi_set = derive_configured_kpis(
            [p.to_domain() for p in request_body.daily_forecasts],
            [m.to_domain() for m in request_body.monthly_forecasts],
            request_body.kpis.to_domain(),
        )
    except InputPreconditionError as e:
        record_engine_failure("kpis", e)
        logging.warning(f"KPI derivation rejected: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    record_engine_run("kpis")
    log_engine_run(
        request_id,
        "kpis",
        len(request_body.daily_forecasts),
        (time.perf_counter() - start_time) * 1000,
    )

    return to_kpi_response(kpi_set)
