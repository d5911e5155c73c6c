"""POST /v1/liquidity-risk - Liquidity risk classification endpoint"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException

from forecast_analytics.api.v1.schemas import LiquidityRiskRequest, LiquidityRiskResponse, RiskPointSchema
from forecast_analytics.api.dependencies import get_request_id
from forecast_analytics.config import settings
from forecast_analytics.domain.liquidity import classify_liquidity_risk
from forecast_analytics.domain.models import RiskAnnotatedSeries
from forecast_analytics.domain.exceptions import InputPreconditionError
from forecast_analytics.infrastructure.observability.metrics import (
    record_engine_run,
    record_engine_failure,
    record_risk_dates,
)
from forecast_analytics.infrastructure.observability.logging import log_engine_run

router = APIRouter()


def to_liquidity_response(annotated: RiskAnnotatedSeries) -> LiquidityRiskResponse:
    return LiquidityRiskResponse(
        min_safe_balance=annotated.min_safe_balance,
        risk_threshold=annotated.risk_threshold,
        risk_dates=annotated.risk_dates,
        points=[
            RiskPointSchema(
                date=p.point.date,
                balance=p.point.balance,
                inflows=p.point.inflows,
                outflows=p.point.outflows,
                confidence=p.point.confidence,
                is_risk_date=p.is_risk_date,
            )
            for p in annotated.points
        ],
    )


def classify_configured_risk(series) -> RiskAnnotatedSeries:
    """classify_liquidity_risk with the configured multipliers; records the flagged count"""
    annotated = classify_liquidity_risk(
        series,
        min_safe_multiplier=settings.min_safe_balance_multiplier,
        risk_margin=settings.risk_margin_multiplier,
    )
    record_risk_dates(len(annotated.risk_dates))
    return annotated


@router.post("/liquidity-risk", response_model=LiquidityRiskResponse)
def create_liquidity_risk(request_body: LiquidityRiskRequest, request_id: str = Depends(get_request_id)):
    """
    Flag dates whose balance falls within the configured margin of the
    series' minimum safe balance.
    """
    start_time = time.perf_counter()

    try:
        annotated = classify_configured_risk([p.to_domain() for p in request_body.daily_forecasts])
    except InputPreconditionError as e:
        record_engine_failure("liquidity_risk", e)
        logging.warning(f"Liquidity risk classification rejected: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))

    record_engine_run("liquidity_risk")
    log_engine_run(
        request_id,
        "liquidity_risk",
        len(annotated.points),
        (time.perf_counter() - start_time) * 1000,
        risk_date_count=len(annotated.risk_dates),
    )

    return to_liquidity_response(annotated)
