"""POST /v1/comparison - Period-over-period comparison endpoint"""

import time
import logging
from fastapi import APIRouter, Depends, HTTPException

from forecast_analytics.api.v1.schemas import ComparisonRequest, ComparisonResponse
from forecast_analytics.api.dependencies import get_request_id, get_rng
from forecast_analytics.config import settings
from forecast_analytics.domain.comparison import compare_periods, SimulatedPreviousPeriod
from forecast_analytics.domain.exceptions import InputPreconditionError
from forecast_analytics.infrastructure.observability.metrics import record_engine_run, record_engine_failure
from forecast_analytics.infrastructure.observability.logging import log_engine_run

router = APIRouter()


@router.post("/comparison", response_model=ComparisonResponse)
def create_comparison(request_body: ComparisonRequest, request_id: str = Depends(get_request_id)):
    """
    Compare each current value with a previous-period value.

    Previous values are SIMULATED (current value scaled by a random factor),
    not fetched from history. Pass `seed` for reproducible output.
    """
    start_time = time.perf_counter()
    previous_source = SimulatedPreviousPeriod(
        rng=get_rng(request_body.seed),
        factor_min=settings.comparison_factor_min,
        factor_max=settings.comparison_factor_max,
    )

    try:
        result = compare_periods(
            request_body.current_data,
            request_body.value_key,
            granularity=request_body.compare_type,
            date_key=request_body.date_key,
            secondary_value_key=request_body.secondary_value_key,
            previous_source=previous_source,
        )
    except InputPreconditionError as e:
        record_engine_failure("comparison", e)
        logging.warning(f"Comparison rejected: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=str(e))
    except (KeyError, AttributeError, TypeError, ValueError) as e:
        # Records missing the requested keys or carrying unparseable dates
        record_engine_failure("comparison", e)
        logging.warning(f"Malformed comparison records: {e!r}", extra={"request_id": request_id})
        raise HTTPException(status_code=422, detail=f"Malformed comparison records: {e!r}")

    record_engine_run("comparison")
    log_engine_run(
        request_id,
        "comparison",
        len(result.points),
        (time.perf_counter() - start_time) * 1000,
        granularity=result.granularity,
    )

    return ComparisonResponse.model_validate(result)
