"""Monthly drilldown - illustrative transactions synthesized under each monthly summary"""

import random
from typing import List, Sequence
from forecast_analytics.domain.models import MonthlyForecastPoint, TransactionRecord, MonthlyDrilldown
from forecast_analytics.utils.date_utils import month_days
from forecast_analytics.utils.random_utils import resolve_rng

MIN_TRANSACTIONS = 5
MAX_TRANSACTIONS = 10
INFLOW_PROBABILITY = 0.6
AMOUNT_FRACTION_MIN = 0.05
AMOUNT_FRACTION_MAX = 0.20

INCOME_DESCRIPTIONS = (
    "Customer Payment",
    "Subscription Revenue",
    "Investment",
    "Asset Sale",
    "Loan Disbursement",
)
EXPENSE_DESCRIPTIONS = (
    "Vendor Payment",
    "Payroll",
    "Rent",
    "Utilities",
    "Equipment Purchase",
    "Marketing",
)
# Repeated entries weight the draw: Confirmed 3/5, Pending 1/5, Scheduled 1/5
STATUSES = ("Confirmed", "Pending", "Confirmed", "Confirmed", "Scheduled")


def synthesize_month_transactions(
    month: MonthlyForecastPoint,
    month_index: int = 0,
    rng: random.Random | None = None,
    min_transactions: int = MIN_TRANSACTIONS,
    max_transactions: int = MAX_TRANSACTIONS,
    inflow_probability: float = INFLOW_PROBABILITY,
    amount_fraction_min: float = AMOUNT_FRACTION_MIN,
    amount_fraction_max: float = AMOUNT_FRACTION_MAX,
) -> List[TransactionRecord]:
    """
    Generate 5-10 illustrative transactions for one month, sorted by date.

    Each transaction is an inflow with probability `inflow_probability` and
    carries 5-20% of the month's inflows or outflows. The set is detail data
    for display only: amounts are NOT reconciled against the monthly totals,
    and every call produces a fresh, statistically similar set.
    """
    rng = resolve_rng(rng)
    days = month_days(month.start_date)
    count = rng.randint(min_transactions, max_transactions)

    transactions = []
    for i in range(count):
        is_inflow = rng.random() < inflow_probability
        total = month.inflows if is_inflow else month.outflows
        fraction = amount_fraction_min + rng.random() * (amount_fraction_max - amount_fraction_min)
        amount = round(total * fraction)

        transactions.append(
            TransactionRecord(
                id=f"transaction-{month_index}-{i}",
                date=rng.choice(days),
                description=rng.choice(INCOME_DESCRIPTIONS if is_inflow else EXPENSE_DESCRIPTIONS),
                category="Income" if is_inflow else "Expense",
                amount=amount if is_inflow else -amount,
                status=rng.choice(STATUSES),
            )
        )

    transactions.sort(key=lambda t: t.date)
    return transactions


def build_monthly_drilldown(
    monthly: Sequence[MonthlyForecastPoint],
    rng: random.Random | None = None,
    **synthesis_options,
) -> List[MonthlyDrilldown]:
    """Wrap each monthly summary with its synthesized transactions"""
    rng = resolve_rng(rng)

    return [
        MonthlyDrilldown(
            id=f"month-{index}",
            month=month.month,
            inflows=month.inflows,
            outflows=month.outflows,
            balance=month.balance,
            confidence=month.confidence,
            transactions=synthesize_month_transactions(month, index, rng, **synthesis_options),
        )
        for index, month in enumerate(monthly)
    ]
