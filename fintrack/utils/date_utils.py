"""Date manipulation utilities"""

from datetime import date, timedelta


def period_start(period: str, as_of: date) -> date:
    """
    First day of a reporting period ending on as_of.

    week  -> the seven calendar days ending on as_of
    month -> first day of as_of's month
    year  -> January 1st of as_of's year
    Unknown periods fall back to month.
    """
    if period == "week":
        return as_of - timedelta(days=6)
    if period == "year":
        return date(as_of.year, 1, 1)
    return date(as_of.year, as_of.month, 1)


def is_within(day: date, start: date, end: date) -> bool:
    """True if day falls inside [start, end] (inclusive)"""
    return start <= day <= end


def ranges_overlap(start_a: date, end_a: date, start_b: date, end_b: date) -> bool:
    """True if two inclusive date ranges share at least one day"""
    return start_a <= end_b and end_a >= start_b


def days_in_range(start: date, end: date) -> int:
    """Number of calendar days in [start, end] (inclusive), at least 1"""
    return max(1, (end - start).days + 1)
