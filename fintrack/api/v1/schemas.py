"""Pydantic schemas for API request/response validation"""

from pydantic import BaseModel, ConfigDict, Field
import datetime
from datetime import date
from decimal import Decimal
from typing import Dict, List, Optional, Union
from fintrack.domain.models import BudgetPeriod, Category, RecurringPeriod

CalculatorField = Optional[Union[float, str]]


# Expenses

class ExpenseCreate(BaseModel):
    """Request body for POST /v1/expenses"""

    model_config = ConfigDict(str_strip_whitespace=True)

    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2, description="Amount spent")
    category: Category
    description: str = Field(..., min_length=1, max_length=200)
    date: Optional[datetime.date] = Field(None, description="Defaults to today")
    is_recurring: bool = False
    recurring_period: Optional[RecurringPeriod] = None
    tags: List[str] = Field(default_factory=list)
    receipt_url: Optional[str] = None


class ExpenseUpdate(BaseModel):
    """Request body for PUT /v1/expenses/{expense_id}; omitted fields are unchanged"""

    model_config = ConfigDict(str_strip_whitespace=True)

    amount: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
    category: Optional[Category] = None
    description: Optional[str] = Field(None, min_length=1, max_length=200)
    date: Optional[datetime.date] = None
    is_recurring: Optional[bool] = None
    recurring_period: Optional[RecurringPeriod] = None
    tags: Optional[List[str]] = None
    receipt_url: Optional[str] = None


class ExpenseSchema(BaseModel):
    """Single expense"""

    id: str
    amount: float
    category: str
    description: str
    date: datetime.date
    is_recurring: bool
    recurring_period: Optional[str] = None
    tags: List[str]
    receipt_url: Optional[str] = None


class ExpenseTotals(BaseModel):
    total_amount: float
    count: int


class ExpenseListResponse(BaseModel):
    """Response for GET /v1/expenses"""

    expenses: List[ExpenseSchema]
    summary: ExpenseTotals


class ExpenseSummaryResponse(BaseModel):
    """Response for GET /v1/expenses/analytics/summary"""

    period: str
    start_date: date
    end_date: date
    total_amount: float
    average_per_day: float
    transaction_count: int
    category_breakdown: Dict[str, float]
    daily_spending: Dict[str, float]


class CategoriesResponse(BaseModel):
    categories: List[str]


# Budgets

class BudgetCreate(BaseModel):
    """Request body for POST /v1/budgets"""

    category: Category
    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=2, description="Spending cap")
    period: BudgetPeriod = BudgetPeriod.MONTHLY
    start_date: date
    end_date: date
    alert_threshold: Optional[int] = Field(None, ge=0, le=100, description="Percent used before alerting")


class BudgetUpdate(BaseModel):
    """Request body for PUT /v1/budgets/{budget_id}; omitted fields are unchanged"""

    category: Optional[Category] = None
    amount: Optional[Decimal] = Field(None, gt=0, max_digits=12, decimal_places=2)
    period: Optional[BudgetPeriod] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    alert_threshold: Optional[int] = Field(None, ge=0, le=100)
    is_active: Optional[bool] = None


class BudgetSchema(BaseModel):
    """Stored budget fields"""

    id: str
    category: str
    amount: float
    period: str
    start_date: date
    end_date: date
    spent: float
    alert_threshold: int
    is_active: bool


class BudgetWithMetrics(BudgetSchema):
    """Budget merged with its reconciled spending"""

    actual_spent: float
    remaining_amount: float
    percentage_used: float
    is_over_budget: bool
    needs_alert: bool
    expense_count: int


class BudgetDetailResponse(BudgetWithMetrics):
    """Response for GET /v1/budgets/{budget_id}"""

    expenses: List[ExpenseSchema]


class BudgetListResponse(BaseModel):
    budgets: List[BudgetWithMetrics]


class BudgetMetrics(BaseModel):
    """Per-budget analytics row"""

    budget_id: str
    category: str
    budget_amount: float
    actual_spent: float
    remaining_amount: float
    percentage_used: float
    is_over_budget: bool
    alert_threshold: int
    needs_alert: bool
    expense_count: int


class BudgetSummarySchema(BaseModel):
    total_budgeted: float
    total_spent: float
    total_remaining: float
    overall_percentage_used: float
    active_budget_count: int
    over_budget_count: int
    alerts_needed: int


class BudgetAnalyticsResponse(BaseModel):
    """Response for GET /v1/budgets/analytics/overview"""

    as_of: date
    summary: BudgetSummarySchema
    budgets: List[BudgetMetrics]


class BudgetAlertSchema(BaseModel):
    type: str
    severity: str
    budget_id: str
    category: str
    message: str
    budget_amount: float
    actual_spent: float
    overage: Optional[float] = None
    percentage_used: Optional[float] = None


class BudgetAlertsResponse(BaseModel):
    """Response for GET /v1/budgets/alerts"""

    alerts: List[BudgetAlertSchema]
    alert_count: int


# Calculators (fields accept numbers or decimal strings typed into a UI)

class EMIRequest(BaseModel):
    principal: CalculatorField = None
    annual_rate: CalculatorField = None
    years: CalculatorField = None


class SIPRequest(BaseModel):
    monthly_investment: CalculatorField = None
    annual_rate: CalculatorField = None
    years: CalculatorField = None


class SWPRequest(BaseModel):
    initial_corpus: CalculatorField = None
    monthly_withdrawal: CalculatorField = None
    annual_rate: CalculatorField = None
    years: CalculatorField = None


class YearlyAmortizationSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    year: int
    principal: int
    interest: int
    closing_balance: int


class EMIResultSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    monthly_payment: int
    total_payment: int
    total_interest: int
    principal: int
    yearly_breakdown: List[YearlyAmortizationSchema]


class SIPResultSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    future_value: int
    total_invested: int
    estimated_returns: int


class SWPDataPointSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    month: int
    year: float
    balance: int
    withdrawn: int


class SWPResultSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    final_balance: int
    total_withdrawn: int
    total_returns_generated: int
    periodic_series: List[SWPDataPointSchema]
    depleted_at_month: Optional[int] = None


class EMIResponse(BaseModel):
    """Response for POST /v1/calculators/emi; result is null until inputs are valid"""

    result: Optional[EMIResultSchema] = None


class SIPResponse(BaseModel):
    result: Optional[SIPResultSchema] = None


class SWPResponse(BaseModel):
    result: Optional[SWPResultSchema] = None
