"""Configuration management using Pydantic Settings"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # External Services
    forecast_api_base: str = "http://localhost:8001"

    # Service
    service_name: str = "forecast-analytics"
    log_level: str = "INFO"

    # HTTP Client
    http_timeout_seconds: float = 5.0

    # KPI derivation
    days_inventory_outstanding: int = 30  # Assumed DIO in the cash conversion cycle
    projection_horizon_days: int = 30
    burn_rate_window_months: int = 3

    # Liquidity risk
    min_safe_balance_multiplier: float = 0.8
    risk_margin_multiplier: float = 1.15

    # Simulated previous-period values
    comparison_factor_min: float = 0.7
    comparison_factor_max: float = 1.3

    # Drilldown synthesis
    drilldown_min_transactions: int = 5
    drilldown_max_transactions: int = 10
    drilldown_inflow_probability: float = 0.6
    drilldown_amount_fraction_min: float = 0.05
    drilldown_amount_fraction_max: float = 0.20

    # Chart windows
    chart_history_days: int = 30
    chart_forecast_days: int = 60
    dashboard_comparison_days: int = 30

    # Fixed seed for the simulated generators (None = process-wide random source)
    random_seed: int | None = None


settings = Settings()
