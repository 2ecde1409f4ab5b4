"""Domain models - pure Python dataclasses representing business entities"""

import uuid
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Dict, List, Optional


class Category(str, Enum):
    """Fixed spending categories shared by expenses and budgets"""

    FOOD_AND_DINING = "Food & Dining"
    TRANSPORTATION = "Transportation"
    ENTERTAINMENT = "Entertainment"
    SHOPPING = "Shopping"
    BILLS_AND_UTILITIES = "Bills & Utilities"
    HEALTHCARE = "Healthcare"
    EDUCATION = "Education"
    TRAVEL = "Travel"
    HOME_AND_GARDEN = "Home & Garden"
    PERSONAL_CARE = "Personal Care"
    GIFTS_AND_DONATIONS = "Gifts & Donations"
    INVESTMENT = "Investment"
    OTHER = "Other"


CATEGORIES: List[str] = [c.value for c in Category]


class BudgetPeriod(str, Enum):
    """Budget period label (informational, the date range is authoritative)"""

    WEEKLY = "weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    YEARLY = "yearly"


class RecurringPeriod(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"


@dataclass
class Expense:
    """Recorded expense owned by a user"""

    id: uuid.UUID
    user_id: str
    amount: Decimal
    category: str
    description: str
    date: date
    is_recurring: bool = False
    recurring_period: Optional[str] = None
    tags: List[str] = field(default_factory=list)
    receipt_url: Optional[str] = None


@dataclass
class Budget:
    """Spending cap for one category over an explicit date range"""

    id: uuid.UUID
    user_id: str
    category: str
    amount: Decimal
    period: str
    start_date: date
    end_date: date
    spent: Decimal = Decimal("0")  # Denormalized, recomputed by reconciliation
    alert_threshold: int = 80
    is_active: bool = True


@dataclass
class ReconciliationResult:
    """Actual spend vs cap for one budget"""

    budget_id: uuid.UUID
    category: str
    budget_amount: Decimal
    actual_spent: Decimal
    remaining_amount: Decimal
    percentage_used: float  # Clamped to 100 for display
    raw_percentage: float  # Unclamped, drives alert decisions
    is_over_budget: bool
    needs_alert: bool
    alert_threshold: int
    expense_count: int


@dataclass
class BudgetSummary:
    """Aggregate view across a set of reconciled budgets"""

    total_budgeted: Decimal
    total_spent: Decimal
    total_remaining: Decimal
    overall_percentage_used: float
    active_budget_count: int
    over_budget_count: int
    alerts_needed: int


@dataclass
class BudgetAlert:
    """Warning raised for an exceeded or nearly exhausted budget"""

    type: str  # "over_budget" or "approaching_limit"
    severity: str  # "high" or "medium"
    budget_id: uuid.UUID
    category: str
    message: str
    budget_amount: Decimal
    actual_spent: Decimal
    overage: Optional[Decimal] = None
    percentage_used: Optional[float] = None


@dataclass
class ExpenseSummary:
    """Spending totals over a period"""

    start_date: date
    end_date: date
    total_amount: Decimal
    average_per_day: Decimal
    transaction_count: int
    category_breakdown: Dict[str, Decimal]
    daily_spending: Dict[str, Decimal]


@dataclass
class YearlyAmortization:
    """Principal and interest repaid during one loan year"""

    year: int
    principal: int
    interest: int
    closing_balance: int


@dataclass
class EMIResult:
    monthly_payment: int
    total_payment: int
    total_interest: int
    principal: int
    yearly_breakdown: List[YearlyAmortization]


@dataclass
class SIPResult:
    future_value: int
    total_invested: int
    estimated_returns: int


@dataclass
class SWPDataPoint:
    """Running corpus balance and cumulative withdrawals at a sampled month"""

    month: int
    year: float
    balance: int
    withdrawn: int


@dataclass
class SWPResult:
    final_balance: int
    total_withdrawn: int
    total_returns_generated: int
    periodic_series: List[SWPDataPoint]
    depleted_at_month: Optional[int] = None
