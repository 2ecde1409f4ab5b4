"""Budget reconciliation - matches expenses to budgets and derives spend-vs-cap metrics"""

from datetime import date
from decimal import Decimal
from typing import Iterable, List, Optional
from fintrack.domain.models import (
    CATEGORIES,
    Budget,
    BudgetAlert,
    BudgetSummary,
    Expense,
    ReconciliationResult,
)
from fintrack.domain.exceptions import InvalidBudgetError
from fintrack.utils.date_utils import is_within, ranges_overlap
from fintrack.utils.money import to_decimal


def validate_budget(budget: Budget) -> None:
    """
    Reject budgets that would produce meaningless reconciliation output.

    Raises:
        InvalidBudgetError: end date not after start date, negative amount,
            threshold outside [0, 100] or unknown category
    """
    if budget.end_date <= budget.start_date:
        raise InvalidBudgetError("End date must be after start date")
    if to_decimal(budget.amount) < 0:
        raise InvalidBudgetError("Budget amount cannot be negative")
    if not 0 <= budget.alert_threshold <= 100:
        raise InvalidBudgetError("Alert threshold must be between 0 and 100")
    if budget.category not in CATEGORIES:
        raise InvalidBudgetError(f"Unknown category: {budget.category}")


def matching_expenses(budget: Budget, expenses: Iterable[Expense]) -> List[Expense]:
    """Expenses in the budget's category dated within [start_date, end_date]"""
    return [
        e for e in expenses
        if e.category == budget.category and is_within(e.date, budget.start_date, budget.end_date)
    ]


def reconcile(budget: Budget, expenses: Iterable[Expense]) -> ReconciliationResult:
    """
    Compute actual spend for one budget and derive its metrics.

    Rules:
    - Match on category and inclusive date range
    - Sum with Decimal, no rounding mid-computation
    - percentage_used is clamped to 100 for display; is_over_budget and
      needs_alert use the unclamped ratio
    """
    validate_budget(budget)

    matched = matching_expenses(budget, expenses)
    budget_amount = to_decimal(budget.amount)
    actual_spent = sum((to_decimal(e.amount) for e in matched), Decimal("0"))

    raw_percentage = float(actual_spent / budget_amount * 100) if budget_amount > 0 else 0.0

    return ReconciliationResult(
        budget_id=budget.id,
        category=budget.category,
        budget_amount=budget_amount,
        actual_spent=actual_spent,
        remaining_amount=budget_amount - actual_spent,
        percentage_used=min(raw_percentage, 100.0),
        raw_percentage=raw_percentage,
        is_over_budget=actual_spent > budget_amount,
        needs_alert=raw_percentage >= budget.alert_threshold,
        alert_threshold=budget.alert_threshold,
        expense_count=len(matched),
    )


def reconcile_all(budgets: Iterable[Budget], expenses: Iterable[Expense]) -> List[ReconciliationResult]:
    """Reconcile every budget against the same expense collection, keeping budget order"""
    expense_list = list(expenses)
    return [reconcile(budget, expense_list) for budget in budgets]


def summarize(results: List[ReconciliationResult]) -> BudgetSummary:
    """
    Aggregate totals across reconciled budgets.

    overall_percentage_used is not clamped, unlike the
    per-budget percentage_used.
    """
    total_budgeted = sum((r.budget_amount for r in results), Decimal("0"))
    total_spent = sum((r.actual_spent for r in results), Decimal("0"))

    return BudgetSummary(
        total_budgeted=total_budgeted,
        total_spent=total_spent,
        total_remaining=total_budgeted - total_spent,
        overall_percentage_used=float(total_spent / total_budgeted * 100) if total_budgeted > 0 else 0.0,
        active_budget_count=len(results),
        over_budget_count=sum(1 for r in results if r.is_over_budget),
        alerts_needed=sum(1 for r in results if r.needs_alert),
    )


def derive_alerts(results: List[ReconciliationResult]) -> List[BudgetAlert]:
    """
    Turn reconciliation results into user-facing alerts, in input order.

    over_budget (high) takes priority over approaching_limit (medium); a
    budget never emits both.
    """
    alerts = []
    for r in results:
        if r.is_over_budget:
            overage = r.actual_spent - r.budget_amount
            alerts.append(
                BudgetAlert(
                    type="over_budget",
                    severity="high",
                    budget_id=r.budget_id,
                    category=r.category,
                    message=f"You've exceeded your {r.category} budget by ${overage:.2f}",
                    budget_amount=r.budget_amount,
                    actual_spent=r.actual_spent,
                    overage=overage,
                )
            )
        elif r.needs_alert:
            alerts.append(
                BudgetAlert(
                    type="approaching_limit",
                    severity="medium",
                    budget_id=r.budget_id,
                    category=r.category,
                    message=f"You've used {r.raw_percentage:.1f}% of your {r.category} budget",
                    budget_amount=r.budget_amount,
                    actual_spent=r.actual_spent,
                    percentage_used=r.raw_percentage,
                )
            )
    return alerts


def select_active_budgets(budgets: Iterable[Budget], as_of: date) -> List[Budget]:
    """Budgets flagged active whose date range contains as_of"""
    return [b for b in budgets if b.is_active and is_within(as_of, b.start_date, b.end_date)]


def find_overlapping(budgets: Iterable[Budget], candidate: Budget) -> Optional[Budget]:
    """
    First other active budget for the candidate's category sharing a day with it.

    Only one active budget per category may cover any given day. Inactive
    candidates never conflict.
    """
    if not candidate.is_active:
        return None
    for b in budgets:
        if b.id == candidate.id or not b.is_active or b.category != candidate.category:
            continue
        if ranges_overlap(b.start_date, b.end_date, candidate.start_date, candidate.end_date):
            return b
    return None
