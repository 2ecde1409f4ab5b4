"""Unit tests for EMI, SIP and SWP calculators"""

import pytest
from fintrack.domain.projections import (
    calculate_emi,
    calculate_sip,
    calculate_swp,
    emi_payment,
    parse_amount,
)


@pytest.mark.parametrize(
    "value,expected",
    [
        ("1000", 1000.0),
        (" 8.5 ", 8.5),
        (12, 12.0),
        (0, 0.0),
        ("0", 0.0),
        ("", None),
        (None, None),
        ("abc", None),
        ("1.2.3", None),
        ("-5", None),
        (-5, None),
        ("NaN", None),
        ("Infinity", None),
        (True, None),
    ],
)
def test_parse_amount(value, expected):
    assert parse_amount(value) == expected


def test_emi_reference_loan():
    """1,000,000 at 8.5% over 20 years -> 8,678 per month"""
    result = calculate_emi(1_000_000, 8.5, 20)

    assert result.monthly_payment == 8678
    assert result.principal == 1_000_000
    assert result.total_interest == result.total_payment - result.principal
    # Total is rounded from the unrounded EMI, so allow half a unit per month
    assert abs(result.total_payment - result.monthly_payment * 240) <= 120


def test_emi_accepts_decimal_strings():
    assert calculate_emi("1000000", "8.5", "20") == calculate_emi(1_000_000, 8.5, 20)


def test_emi_zero_rate_divides_principal_evenly():
    result = calculate_emi(120_000, 0, 1)

    assert emi_payment(120_000, 0.0, 12) == 10_000
    assert result.monthly_payment == 10_000
    assert result.total_payment == 120_000
    assert result.total_interest == 0
    assert len(result.yearly_breakdown) == 1
    assert result.yearly_breakdown[0].principal == 120_000
    assert result.yearly_breakdown[0].interest == 0
    assert result.yearly_breakdown[0].closing_balance == 0


def test_emi_yearly_breakdown_capped_at_ten_years():
    result = calculate_emi(1_000_000, 8.5, 20)

    assert [row.year for row in result.yearly_breakdown] == list(range(1, 11))
    first = result.yearly_breakdown[0]
    # Early years are interest-heavy
    assert first.interest > first.principal
    assert first.principal + first.interest == pytest.approx(8678 * 12, abs=2)
    balances = [row.closing_balance for row in result.yearly_breakdown]
    assert balances == sorted(balances, reverse=True)


def test_emi_breakdown_uses_whole_years_for_fractional_tenure():
    result = calculate_emi(100_000, 10, 2.5)

    assert len(result.yearly_breakdown) == 2


def test_emi_short_loan_pays_off():
    result = calculate_emi(50_000, 12, 2)

    assert len(result.yearly_breakdown) == 2
    assert result.yearly_breakdown[-1].closing_balance == 0
    # The displayed (rounded up) installment overpays by a few units in total
    total_principal = sum(row.principal for row in result.yearly_breakdown)
    assert total_principal == pytest.approx(50_000, abs=20)


@pytest.mark.parametrize(
    "principal,rate,years",
    [
        (0, 8.5, 20),
        (1_000_000, 8.5, 0),
        (-1, 8.5, 20),
        (1_000_000, -1, 20),
        ("abc", 8.5, 20),
        ("", "", ""),
        (None, 8.5, 20),
    ],
)
def test_emi_invalid_inputs_return_none(principal, rate, years):
    assert calculate_emi(principal, rate, years) is None


def test_sip_reference_plan():
    """5,000 a month at 12% for 10 years"""
    result = calculate_sip(5_000, 12, 10)

    assert result.total_invested == 600_000
    assert result.future_value > result.total_invested
    assert result.estimated_returns == result.future_value - result.total_invested
    assert result.future_value == pytest.approx(1_161_695, abs=1)


def test_sip_zero_rate():
    result = calculate_sip(1_000, 0, 2)

    assert result.future_value == 24_000
    assert result.total_invested == 24_000
    assert result.estimated_returns == 0


@pytest.mark.parametrize(
    "amount,rate,years",
    [(0, 12, 10), (5_000, 12, 0), (5_000, "x", 10), (-100, 12, 10)],
)
def test_sip_invalid_inputs_return_none(amount, rate, years):
    assert calculate_sip(amount, rate, years) is None


def test_swp_depletes_without_borrowing():
    """Requested 120,000 from a 100,000 corpus with no growth stops at 100,000"""
    result = calculate_swp(100_000, 10_000, 0, 1)

    assert result.final_balance == 0
    assert result.total_withdrawn == 100_000
    assert result.total_withdrawn < 10_000 * 12
    assert result.depleted_at_month == 10
    assert result.total_returns_generated == 0


def test_swp_depletes_with_growth():
    result = calculate_swp(100_000, 10_000, 12, 2)

    assert result.final_balance == 0
    assert 100_000 < result.total_withdrawn < 10_000 * 24
    assert result.depleted_at_month is not None
    assert result.total_returns_generated == result.total_withdrawn - 100_000


def test_swp_sustainable_withdrawal_is_never_short():
    """Growth of 10,000/month covers a 5,000 withdrawal for the whole term"""
    result = calculate_swp(1_000_000, 5_000, 12, 10)

    assert result.final_balance > 1_000_000
    assert result.total_withdrawn == 5_000 * 120
    assert result.depleted_at_month is None
    assert result.total_returns_generated == result.final_balance + result.total_withdrawn - 1_000_000


def test_swp_samples_every_six_months_and_final_month():
    result = calculate_swp(1_000_000, 5_000, 12, 1.25)

    assert [p.month for p in result.periodic_series] == [6, 12, 15]
    assert result.periodic_series[-1].withdrawn == 5_000 * 15
    assert result.periodic_series[-1].balance == result.final_balance
    assert result.periodic_series[1].year == 1.0


def test_swp_series_stops_after_depletion():
    result = calculate_swp(30_000, 10_000, 0, 2)

    # Corpus lasts 3 months, so no sample is ever reached
    assert result.periodic_series == []
    assert result.total_withdrawn == 30_000


@pytest.mark.parametrize(
    "corpus,withdrawal,rate,years",
    [(0, 1_000, 8, 5), (100_000, 0, 8, 5), (100_000, 1_000, 8, 0), (100_000, "", 8, 5)],
)
def test_swp_invalid_inputs_return_none(corpus, withdrawal, rate, years):
    assert calculate_swp(corpus, withdrawal, rate, years) is None


def test_swp_fractional_tenure_samples_last_whole_month():
    """0.1 years is 1.2 months: one withdrawal, sampled at month 1"""
    result = calculate_swp(1_000_000, 1_000, 0, "0.1")

    assert [p.month for p in result.periodic_series] == [1]
    assert result.periodic_series[0].withdrawn == 1_000
    assert result.final_balance == 999_000


@pytest.mark.parametrize(
    "calculator,args",
    [
        (calculate_emi, ("100000", "12", "100000")),  # tenure beyond the cap
        (calculate_emi, (1e308, 12, 30)),  # total payment overflows
        (calculate_emi, ("100000", "1e300", "10")),  # compounding overflows
        (calculate_sip, (1e308, "12", "10")),
        (calculate_sip, (5_000, "1e300", 10)),
        (calculate_sip, (5_000, 12, 101)),
        (calculate_swp, ("1000000", "1", "12", "100000")),
        (calculate_swp, (1e308, 1, 12, 1)),
    ],
)
def test_extreme_inputs_return_none(calculator, args):
    assert calculator(*args) is None


def test_tenure_cap_is_inclusive():
    assert calculate_emi(100_000, 12, 100) is not None
    assert calculate_emi(100_000, 12, 100.5) is None
    assert calculate_emi(100_000, 12, 150, max_years=200) is not None
