"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class InvalidBudgetError(DomainException):
    """Budget is malformed (bad date range, negative amount, unknown category)"""

    pass


class BudgetOverlapError(DomainException):
    """An active budget already covers this category in the requested date range"""

    pass


class InvalidExpenseError(DomainException):
    """Expense data is inconsistent (e.g. recurring without a period)"""

    pass
