"""Loan amortization and investment projection calculators (EMI, SIP, SWP)"""

import math
from decimal import Decimal, InvalidOperation
from typing import Optional, Union
from fintrack.domain.models import (
    EMIResult,
    SIPResult,
    SWPDataPoint,
    SWPResult,
    YearlyAmortization,
)
from fintrack.utils.money import round_whole

MONTHS_PER_YEAR = 12
BREAKDOWN_YEARS_CAP = 10
SWP_SAMPLE_INTERVAL = 6
MAX_TENURE_YEARS = 100

NumericInput = Union[int, float, str, Decimal, None]


def parse_amount(value: NumericInput) -> Optional[float]:
    """
    Parse a calculator field typed into a UI.

    Returns None for blanks, non-numeric text, NaN/infinity and negative
    values so callers can render an empty result instead of failing.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
        try:
            value = Decimal(value)
        except InvalidOperation:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number) or math.isinf(number) or number < 0:
        return None
    return number


def _finite(*values: float) -> bool:
    return all(math.isfinite(v) for v in values)


def monthly_rate(annual_rate_percent: float) -> float:
    return annual_rate_percent / 100 / MONTHS_PER_YEAR


def emi_payment(principal: float, rate: float, months: float) -> float:
    """
    Fixed monthly installment that amortizes principal over months.

    EMI = P * r * (1+r)^n / ((1+r)^n - 1), or P / n when r == 0
    """
    if rate == 0:
        return principal / months
    growth = (1 + rate) ** months
    return principal * rate * growth / (growth - 1)


def amortization_by_year(
    principal: float,
    rate: float,
    payment: float,
    years: float,
    max_years: int = BREAKDOWN_YEARS_CAP,
) -> list[YearlyAmortization]:
    """
    Simulate month-by-month repayment and total principal/interest per year.

    Covers floor(min(max_years, years)) years, stopping once the balance is
    paid off.
    """
    balance = principal
    breakdown = []

    for year in range(1, int(min(max_years, years)) + 1):
        yearly_principal = 0.0
        yearly_interest = 0.0

        for _ in range(MONTHS_PER_YEAR):
            if balance <= 0:
                break
            interest = balance * rate
            repaid = payment - interest
            yearly_principal += repaid
            yearly_interest += interest
            balance -= repaid

        breakdown.append(
            YearlyAmortization(
                year=year,
                principal=round_whole(yearly_principal),
                interest=round_whole(yearly_interest),
                closing_balance=max(0, round_whole(balance)),
            )
        )

        if balance <= 0:
            break

    return breakdown


def calculate_emi(
    principal: NumericInput,
    annual_rate: NumericInput,
    years: NumericInput,
    max_breakdown_years: int = BREAKDOWN_YEARS_CAP,
    max_years: float = MAX_TENURE_YEARS,
) -> Optional[EMIResult]:
    """
    Loan EMI with totals and a yearly amortization breakdown.

    Returns None when any input is invalid, principal/tenure is not positive,
    the tenure exceeds max_years or the figures overflow a float. A zero
    interest rate is valid and divides the principal evenly.
    """
    p = parse_amount(principal)
    r_annual = parse_amount(annual_rate)
    n_years = parse_amount(years)
    if p is None or r_annual is None or n_years is None:
        return None
    if p <= 0 or n_years <= 0 or n_years > max_years:
        return None

    r = monthly_rate(r_annual)
    n = n_years * MONTHS_PER_YEAR

    try:
        emi = emi_payment(p, r, n)
    except (OverflowError, ZeroDivisionError):
        return None
    total_payment = emi * n
    if not _finite(emi, total_payment):
        return None

    monthly_payment = round_whole(emi)
    total_payment_rounded = round_whole(total_payment)
    principal_rounded = round_whole(p)

    # Breakdown follows the installment as displayed (rounded)
    try:
        breakdown = amortization_by_year(p, r, monthly_payment, n_years, max_breakdown_years)
    except (OverflowError, ValueError):
        return None

    return EMIResult(
        monthly_payment=monthly_payment,
        total_payment=total_payment_rounded,
        total_interest=total_payment_rounded - principal_rounded,
        principal=principal_rounded,
        yearly_breakdown=breakdown,
    )


def calculate_sip(
    monthly_investment: NumericInput,
    annual_rate: NumericInput,
    years: NumericInput,
    max_years: float = MAX_TENURE_YEARS,
) -> Optional[SIPResult]:
    """
    Future value of a monthly contribution made at the start of each month.

    FV = P * ((1+r)^n - 1) / r * (1+r), or P * n when r == 0

    Returns None for invalid inputs, tenures beyond max_years and results
    too large for a float.
    """
    p = parse_amount(monthly_investment)
    r_annual = parse_amount(annual_rate)
    n_years = parse_amount(years)
    if p is None or r_annual is None or n_years is None:
        return None
    if p <= 0 or n_years <= 0 or n_years > max_years:
        return None

    r = monthly_rate(r_annual)
    n = n_years * MONTHS_PER_YEAR

    try:
        if r == 0:
            future_value = p * n
        else:
            future_value = p * (((1 + r) ** n - 1) / r) * (1 + r)
    except OverflowError:
        return None
    if not _finite(future_value, p * n):
        return None

    future_value_rounded = round_whole(future_value)
    total_invested = round_whole(p * n)

    return SIPResult(
        future_value=future_value_rounded,
        total_invested=total_invested,
        estimated_returns=future_value_rounded - total_invested,
    )


def calculate_swp(
    initial_corpus: NumericInput,
    monthly_withdrawal: NumericInput,
    annual_rate: NumericInput,
    years: NumericInput,
    sample_interval: int = SWP_SAMPLE_INTERVAL,
    max_years: float = MAX_TENURE_YEARS,
) -> Optional[SWPResult]:
    """
    Simulate a systematic withdrawal plan month by month.

    Each month the corpus grows first, then the withdrawal is taken, capped
    at the remaining balance. Once the corpus is exhausted no further
    withdrawals happen. The running balance is sampled every
    sample_interval months and at the last whole month of the tenure.
    Tenures beyond max_years and balances too large for a float yield None.
    """
    p = parse_amount(initial_corpus)
    withdrawal = parse_amount(monthly_withdrawal)
    r_annual = parse_amount(annual_rate)
    n_years = parse_amount(years)
    if p is None or withdrawal is None or r_annual is None or n_years is None:
        return None
    if p <= 0 or withdrawal <= 0 or n_years <= 0 or n_years > max_years:
        return None

    r = monthly_rate(r_annual)
    final_month = math.floor(n_years * MONTHS_PER_YEAR)

    balance = p
    total_withdrawn = 0.0
    depleted_at = None
    series = []

    month = 1
    while month <= final_month:
        if balance <= 0:
            break

        balance += balance * r
        if not math.isfinite(balance):
            return None

        actual_withdrawal = min(withdrawal, balance)
        balance -= actual_withdrawal
        total_withdrawn += actual_withdrawal
        if not math.isfinite(total_withdrawn):
            return None

        if balance <= 0 and depleted_at is None:
            depleted_at = month

        if month % sample_interval == 0 or month == final_month:
            series.append(
                SWPDataPoint(
                    month=month,
                    year=round(month / MONTHS_PER_YEAR, 1),
                    balance=max(0, round_whole(balance)),
                    withdrawn=round_whole(total_withdrawn),
                )
            )
        month += 1

    final_balance = max(0, round_whole(balance))
    returns = final_balance + total_withdrawn - p
    if not math.isfinite(returns):
        return None

    return SWPResult(
        final_balance=final_balance,
        total_withdrawn=round_whole(total_withdrawn),
        total_returns_generated=round_whole(returns),
        periodic_series=series,
        depleted_at_month=depleted_at,
    )
