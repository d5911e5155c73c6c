"""Domain models - pure Python dataclasses representing forecast data and derived views"""

from dataclasses import dataclass, field
from datetime import date
from typing import List, Optional


@dataclass
class DailyForecastPoint:
    """Single day of historical or forecast cash flow"""

    date: date
    balance: float
    inflows: float
    outflows: float
    confidence: int  # percent, 0-100


@dataclass
class MonthlyForecastPoint:
    """Monthly cash-flow summary"""

    month: str  # display label, e.g. "Oct 2026"
    inflows: float
    outflows: float
    balance: float
    confidence: int
    start_date: date  # first calendar day of the month


@dataclass
class ForecastKpiPayload:
    """Raw KPI inputs supplied by the forecast provider"""

    dso: float
    dpo: float


@dataclass
class KpiSet:
    """Scalar summary metrics derived from a forecast"""

    current_balance: float
    projected_balance_30d: float
    delta: float
    monthly_burn_rate: float
    dso: int
    dpo: int
    cash_conversion_cycle_days: int
    runway_days: float


@dataclass
class RiskAnnotatedPoint:
    point: DailyForecastPoint
    is_risk_date: bool


@dataclass
class RiskAnnotatedSeries:
    """Series with per-point liquidity risk flags and the series-wide threshold"""

    points: List[RiskAnnotatedPoint]
    min_safe_balance: float
    risk_threshold: float

    @property
    def risk_dates(self) -> List[date]:
        return [p.point.date for p in self.points if p.is_risk_date]


@dataclass
class ComparisonPoint:
    """Current value paired with its previous-period counterpart"""

    date: date
    current_value: float
    previous_value: float
    display_date: str
    previous_display_date: str
    previous_date: date
    secondary_current_value: Optional[float] = None
    secondary_previous_value: Optional[float] = None


@dataclass
class ComparisonSummary:
    current_total: float
    previous_total: float
    percent_change: float
    is_positive: bool


@dataclass
class ComparisonResult:
    granularity: str
    points: List[ComparisonPoint]
    summary: ComparisonSummary


@dataclass
class TransactionRecord:
    """Illustrative transaction synthesized for a monthly drilldown"""

    id: str
    date: date
    description: str
    category: str  # "Income" or "Expense"
    amount: int  # signed: negative for expenses
    status: str


@dataclass
class MonthlyDrilldown:
    """Monthly summary row with its nested transactions"""

    id: str
    month: str
    inflows: float
    outflows: float
    balance: float
    confidence: int
    transactions: List[TransactionRecord] = field(default_factory=list)


@dataclass
class ForecastTableRow:
    """Row of the forecast table: opening/closing balance and confidence tier"""

    label: str
    opening_balance: float
    inflows: float
    outflows: float
    balance: float
    confidence: int
    confidence_band: str


@dataclass
class ChartPoint:
    """Daily point tagged with its source for combined history/forecast charts"""

    date: date
    balance: float
    inflows: float
    outflows: float
    confidence: int
    data_type: str  # "historical" or "forecast"
