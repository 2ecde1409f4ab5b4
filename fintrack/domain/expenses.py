"""Expense analytics - totals by category and day over a reporting period"""

from collections import defaultdict
from datetime import date
from decimal import Decimal
from typing import Dict, Iterable, Optional
from fintrack.domain.models import Expense, ExpenseSummary, RecurringPeriod
from fintrack.domain.exceptions import InvalidExpenseError
from fintrack.utils.date_utils import days_in_range, is_within
from fintrack.utils.money import round_cents, to_decimal


def validate_recurrence(is_recurring: bool, recurring_period: Optional[str]) -> None:
    """Recurring expenses must name a known recurrence period"""
    if not is_recurring:
        return
    if recurring_period is None:
        raise InvalidExpenseError("Recurring period is required for recurring expenses")
    if recurring_period not in [p.value for p in RecurringPeriod]:
        raise InvalidExpenseError(f"Unknown recurring period: {recurring_period}")


def total_amount(expenses: Iterable[Expense]) -> Decimal:
    return sum((to_decimal(e.amount) for e in expenses), Decimal("0"))


def summarize_expenses(expenses: Iterable[Expense], start: date, end: date) -> ExpenseSummary:
    """
    Summarize spending dated within [start, end].

    average_per_day divides by the number of calendar days in the period,
    not the number of days with spending.
    """
    in_period = [e for e in expenses if is_within(e.date, start, end)]

    by_category: Dict[str, Decimal] = defaultdict(Decimal)
    by_day: Dict[str, Decimal] = defaultdict(Decimal)
    for e in in_period:
        amount = to_decimal(e.amount)
        by_category[e.category] += amount
        by_day[e.date.isoformat()] += amount

    total = total_amount(in_period)

    return ExpenseSummary(
        start_date=start,
        end_date=end,
        total_amount=total,
        average_per_day=round_cents(total / days_in_range(start, end)),
        transaction_count=len(in_period),
        category_breakdown=dict(by_category),
        daily_spending=dict(sorted(by_day.items())),
    )
