"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, ConfigDict, Field
from datetime import date
from typing import Any, Dict, List, Literal, Optional

from forecast_analytics.domain.models import DailyForecastPoint, MonthlyForecastPoint, ForecastKpiPayload


class DailyPointSchema(BaseModel):
    """Single day of a cash-flow series"""

    model_config = ConfigDict(from_attributes=True)

    date: date
    balance: float
    inflows: float = Field(..., ge=0)
    outflows: float = Field(..., ge=0)
    confidence: int = Field(..., ge=0, le=100)

    def to_domain(self) -> DailyForecastPoint:
        return DailyForecastPoint(
            date=self.date,
            balance=self.balance,
            inflows=self.inflows,
            outflows=self.outflows,
            confidence=self.confidence,
        )


class MonthlyPointSchema(BaseModel):
    """Monthly cash-flow summary"""

    model_config = ConfigDict(from_attributes=True)

    month: str = Field(..., min_length=1, description="Display label, e.g. 'Oct 2026'")
    inflows: float = Field(..., ge=0)
    outflows: float = Field(..., ge=0)
    balance: float
    confidence: int = Field(..., ge=0, le=100)
    start_date: date = Field(..., description="First calendar day of the month")

    def to_domain(self) -> MonthlyForecastPoint:
        return MonthlyForecastPoint(
            month=self.month,
            inflows=self.inflows,
            outflows=self.outflows,
            balance=self.balance,
            confidence=self.confidence,
            start_date=self.start_date,
        )


class RawKpiSchema(BaseModel):
    dso: float
    dpo: float

    def to_domain(self) -> ForecastKpiPayload:
        return ForecastKpiPayload(dso=self.dso, dpo=self.dpo)


class KpiRequest(BaseModel):
    """Request body for POST /v1/kpis"""

    daily_forecasts: List[DailyPointSchema]
    monthly_forecasts: List[MonthlyPointSchema]
    kpis: RawKpiSchema


class KpiResponse(BaseModel):
    """KPI set with display tiers"""

    model_config = ConfigDict(from_attributes=True)

    current_balance: float
    projected_balance_30d: float
    delta: float
    monthly_burn_rate: float
    dso: int
    dpo: int
    cash_conversion_cycle_days: int
    cash_conversion_cycle_band: str
    runway_days: float
    runway_band: str


class LiquidityRiskRequest(BaseModel):
    """Request body for POST /v1/liquidity-risk"""

    daily_forecasts: List[DailyPointSchema]


class RiskPointSchema(DailyPointSchema):
    is_risk_date: bool


class LiquidityRiskResponse(BaseModel):
    min_safe_balance: float
    risk_threshold: float
    risk_dates: List[date]
    points: List[RiskPointSchema]


class ComparisonRequest(BaseModel):
    """Request body for POST /v1/comparison"""

    current_data: List[Dict[str, Any]]
    compare_type: Literal["month", "quarter", "year"] = "year"
    date_key: str = "date"
    value_key: str = Field(..., min_length=1)
    secondary_value_key: Optional[str] = None
    seed: Optional[int] = Field(None, description="Fixes the simulated previous-period values")


class ComparisonPointSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    date: date
    current_value: float
    previous_value: float
    display_date: str
    previous_display_date: str
    previous_date: date
    secondary_current_value: Optional[float] = None
    secondary_previous_value: Optional[float] = None


class ComparisonSummarySchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    current_total: float
    previous_total: float
    percent_change: float
    is_positive: bool


class ComparisonResponse(BaseModel):
    """Response for POST /v1/comparison; previous values are simulated"""

    model_config = ConfigDict(from_attributes=True)

    granularity: str
    points: List[ComparisonPointSchema]
    summary: ComparisonSummarySchema
    simulated: bool = True


class DrilldownRequest(BaseModel):
    """Request body for POST /v1/drilldown"""

    monthly_forecasts: List[MonthlyPointSchema]
    seed: Optional[int] = Field(None, description="Fixes the synthesized transactions")


class TransactionSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    date: date
    description: str
    category: Literal["Income", "Expense"]
    amount: int
    status: str


class MonthlyDrilldownSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    month: str
    inflows: float
    outflows: float
    balance: float
    confidence: int
    transactions: List[TransactionSchema]


class DrilldownResponse(BaseModel):
    months: List[MonthlyDrilldownSchema]


class ForecastTableRowSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    label: str
    opening_balance: float
    inflows: float
    outflows: float
    balance: float
    confidence: int
    confidence_band: str


class ChartPointSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    date: date
    balance: float
    inflows: float
    outflows: float
    confidence: int
    data_type: Literal["historical", "forecast"]


class DashboardResponse(BaseModel):
    """Response for GET /v1/dashboard"""

    kpis: KpiResponse
    liquidity_risk: LiquidityRiskResponse
    chart_series: List[ChartPointSchema]
    daily_table: List[ForecastTableRowSchema]
    monthly_table: List[ForecastTableRowSchema]
    history_monthly_table: List[ForecastTableRowSchema]
    comparison: ComparisonResponse
    drilldown: List[MonthlyDrilldownSchema]
