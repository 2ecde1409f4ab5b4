"""Prometheus metrics for monitoring budget health and calculator usage"""

from typing import List
from prometheus_client import Counter, Histogram
from fintrack.domain.models import BudgetAlert

# Budget metrics
budgets_reconciled_counter = Counter(
    "fintrack_budgets_reconciled_total",
    "Budgets reconciled against expenses",
)

budget_alert_counter = Counter(
    "fintrack_budget_alerts_total",
    "Budget alerts raised",
    ["type"],  # over_budget | approaching_limit
)

# Calculator metrics
calculation_counter = Counter(
    "fintrack_calculations_total",
    "Financial calculator invocations",
    ["calculator", "outcome"],  # emi|sip|swp, computed|empty
)

# Service health
request_duration_histogram = Histogram(
    "http_request_duration_seconds",
    "HTTP request latency",
    ["method", "endpoint", "status"],
)


def record_reconciliations(count: int) -> None:
    budgets_reconciled_counter.inc(count)


def record_alerts(alerts: List[BudgetAlert]) -> None:
    """Count alerts by type for monitoring overspending trends"""
    for alert in alerts:
        budget_alert_counter.labels(type=alert.type).inc()


def record_calculation(calculator: str, computed: bool) -> None:
    outcome = "computed" if computed else "empty"
    calculation_counter.labels(calculator=calculator, outcome=outcome).inc()
