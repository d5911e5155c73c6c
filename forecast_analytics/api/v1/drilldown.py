"""POST /v1/drilldown - Monthly drilldown endpoint"""

import random
import time
from typing import List, Sequence
from fastapi import APIRouter, Depends

from forecast_analytics.api.v1.schemas import DrilldownRequest, DrilldownResponse, MonthlyDrilldownSchema
from forecast_analytics.api.dependencies import get_request_id, get_rng
from forecast_analytics.config import settings
from forecast_analytics.domain.drilldown import build_monthly_drilldown
from forecast_analytics.domain.models import MonthlyForecastPoint
from forecast_analytics.infrastructure.observability.metrics import record_engine_run
from forecast_analytics.infrastructure.observability.logging import log_engine_run

router = APIRouter()


def build_configured_drilldown(
    monthly: Sequence[MonthlyForecastPoint],
    rng: random.Random,
) -> List[MonthlyDrilldownSchema]:
    """build_monthly_drilldown with the configured synthesis ranges"""
    months = build_monthly_drilldown(
        monthly,
        rng,
        min_transactions=settings.drilldown_min_transactions,
        max_transactions=settings.drilldown_max_transactions,
        inflow_probability=settings.drilldown_inflow_probability,
        amount_fraction_min=settings.drilldown_amount_fraction_min,
        amount_fraction_max=settings.drilldown_amount_fraction_max,
    )
    return [MonthlyDrilldownSchema.model_validate(m) for m in months]


@router.post("/drilldown", response_model=DrilldownResponse)
def create_drilldown(request_body: DrilldownRequest, request_id: str = Depends(get_request_id)):
    """
    Expand monthly summaries into illustrative transactions.

    Transactions are synthesized on every call and do not reconcile to the
    monthly totals. Pass `seed` for reproducible output.
    """
    start_time = time.perf_counter()

    months = build_configured_drilldown(
        [m.to_domain() for m in request_body.monthly_forecasts],
        get_rng(request_body.seed),
    )

    record_engine_run("drilldown")
    log_engine_run(
        request_id,
        "drilldown",
        len(months),
        (time.perf_counter() - start_time) * 1000,
        transaction_count=sum(len(m.transactions) for m in months),
    )

    return DrilldownResponse(months=months)
