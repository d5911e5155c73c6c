"""Forecast provider HTTP client for fetching historical and forecast series"""

import httpx
from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, List
from forecast_analytics.domain.models import DailyForecastPoint, MonthlyForecastPoint, ForecastKpiPayload
from forecast_analytics.domain.exceptions import ForecastProviderError
from forecast_analytics.config import settings


@dataclass
class ForecastBundle:
    """Everything the forecast provider returns for one request"""

    daily: List[DailyForecastPoint]
    monthly: List[MonthlyForecastPoint]
    kpis: ForecastKpiPayload


def parse_daily_point(raw: Dict[str, Any]) -> DailyForecastPoint:
    return DailyForecastPoint(
        date=date.fromisoformat(raw["date"]),
        balance=raw["balance"],
        inflows=raw["inflows"],
        outflows=raw["outflows"],
        # Historical actuals carry no confidence
        confidence=raw.get("confidence", 100),
    )


def parse_monthly_point(raw: Dict[str, Any]) -> MonthlyForecastPoint:
    return MonthlyForecastPoint(
        month=raw["month"],
        inflows=raw["inflows"],
        outflows=raw["outflows"],
        balance=raw["balance"],
        confidence=raw["confidence"],
        start_date=date.fromisoformat(raw["start_date"]),
    )


class ForecastClient:
    """Client for the external historical/forecast data provider"""

    def __init__(self, base_url: str | None = None, timeout: float | None = None):
        self.base_url = base_url or settings.forecast_api_base
        self.timeout = timeout or settings.http_timeout_seconds

    async def _get_json(self, path: str) -> Dict[str, Any]:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            try:
                response = await client.get(f"{self.base_url}{path}")
                response.raise_for_status()
                return response.json()
            except httpx.TimeoutException as e:
                raise ForecastProviderError(f"Forecast provider timeout after {self.timeout}s") from e
            except httpx.HTTPStatusError as e:
                raise ForecastProviderError(f"Forecast provider error: {e.response.status_code}") from e
            except httpx.RequestError as e:
                raise ForecastProviderError(f"Forecast provider unreachable: {e}") from e
            except ValueError as e:
                raise ForecastProviderError(f"Forecast provider returned invalid JSON: {e}") from e

    async def get_historical(self) -> List[DailyForecastPoint]:
        """
        Fetch the ordered historical daily series.

        Raises:
            ForecastProviderError: On timeout, HTTP errors, or invalid response
        """
        data = await self._get_json("/historical")
        try:
            return [parse_daily_point(raw) for raw in data["daily"]]
        except (KeyError, ValueError, TypeError) as e:
            raise ForecastProviderError(f"Invalid historical data from provider: {e}") from e

    async def get_forecast(self) -> ForecastBundle:
        """
        Fetch the daily forecast (90+ points expected), monthly forecast and raw KPIs.

        Raises:
            ForecastProviderError: On timeout, HTTP errors, or invalid response
        """
        data = await self._get_json("/forecast")
        try:
            return ForecastBundle(
                daily=[parse_daily_point(raw) for raw in data["daily_forecasts"]],
                monthly=[parse_monthly_point(raw) for raw in data["monthly_forecasts"]],
                kpis=ForecastKpiPayload(dso=data["kpis"]["dso"], dpo=data["kpis"]["dpo"]),
            )
        except (KeyError, ValueError, TypeError) as e:
            raise ForecastProviderError(f"Invalid forecast data from provider: {e}") from e
