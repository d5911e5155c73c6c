"""Dependency injection for FastAPI endpoints"""

import random
from fastapi import Request
from forecast_analytics.config import settings
from forecast_analytics.infrastructure.clients.forecast import ForecastClient
from forecast_analytics.utils.random_utils import seeded_rng


def get_request_id(request: Request) -> str:
    """Extract request ID from request state"""
    return getattr(request.state, "request_id", "unknown")


def get_forecast_client() -> ForecastClient:
    """Provide forecast provider client instance"""
    return ForecastClient()


def get_rng(seed: int | None = None) -> random.Random:
    """Random source for simulated data: request seed, then configured seed, then process-wide"""
    return seeded_rng(seed if seed is not None else settings.random_seed)
