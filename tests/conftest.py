"""Pytest fixtures for testing"""

import pytest
from datetime import date, timedelta
from typing import Callable, List
from fastapi.testclient import TestClient
from forecast_analytics.api.main import create_app
from forecast_analytics.api.dependencies import get_forecast_client
from forecast_analytics.domain.models import DailyForecastPoint, MonthlyForecastPoint, ForecastKpiPayload
from forecast_analytics.infrastructure.clients.forecast import ForecastBundle


START_DATE = date(2026, 1, 1)


def build_daily_series(
    days: int,
    balance: float = 1000,
    inflows: float = 100,
    outflows: float = 50,
    confidence: int = 90,
    start: date = START_DATE,
) -> List[DailyForecastPoint]:
    """Flat daily series: identical values on consecutive days"""
    return [
        DailyForecastPoint(
            date=start + timedelta(days=i),
            balance=balance,
            inflows=inflows,
            outflows=outflows,
            confidence=confidence,
        )
        for i in range(days)
    ]


def build_monthly_series(outflows: List[float], inflows: float = 500, balance: float = 10000) -> List[MonthlyForecastPoint]:
    """One monthly point per outflow value, starting January 2026"""
    return [
        MonthlyForecastPoint(
            month=date(2026, i + 1, 1).strftime("%b %Y"),
            inflows=inflows,
            outflows=out,
            balance=balance,
            confidence=80,
            start_date=date(2026, i + 1, 1),
        )
        for i, out in enumerate(outflows)
    ]


@pytest.fixture
def daily_series() -> Callable[..., List[DailyForecastPoint]]:
    return build_daily_series


@pytest.fixture
def monthly_series() -> Callable[..., List[MonthlyForecastPoint]]:
    return build_monthly_series


class FakeForecastClient:
    """In-memory forecast provider"""

    def __init__(self, historical, bundle=None, error: Exception | None = None):
        self.historical = historical
        self.bundle = bundle
        self.error = error

    async def get_historical(self):
        if self.error:
            raise self.error
        return self.historical

    async def get_forecast(self):
        if self.error:
            raise self.error
        return self.bundle


@pytest.fixture
def forecast_bundle() -> ForecastBundle:
    """90-day declining forecast with three months of outflows of 3000"""
    daily = [
        DailyForecastPoint(
            date=START_DATE + timedelta(days=i),
            balance=100_000 - i * 500,
            inflows=400,
            outflows=900,
            confidence=95 - i // 2,
        )
        for i in range(90)
    ]
    return ForecastBundle(
        daily=daily,
        monthly=build_monthly_series([3000, 3000, 3000]),
        kpis=ForecastKpiPayload(dso=42.4, dpo=35.6),
    )


@pytest.fixture
def fake_forecast_client(forecast_bundle: ForecastBundle) -> FakeForecastClient:
    historical = build_daily_series(45, balance=101_000, start=START_DATE - timedelta(days=45))
    return FakeForecastClient(historical, forecast_bundle)


@pytest.fixture
def client(fake_forecast_client: FakeForecastClient) -> TestClient:
    """Create FastAPI test client backed by the in-memory forecast provider"""
    app = create_app()
    app.dependency_overrides[get_forecast_client] = lambda: fake_forecast_client
    return TestClient(app)
