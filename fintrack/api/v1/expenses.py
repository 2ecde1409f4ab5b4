"""/v1/expenses - expense CRUD and spending analytics"""

import logging
from datetime import date
from typing import Literal, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from sqlalchemy.orm import Session

from fintrack.api.v1.schemas import (
    CategoriesResponse,
    ExpenseCreate,
    ExpenseListResponse,
    ExpenseSchema,
    ExpenseSummaryResponse,
    ExpenseTotals,
    ExpenseUpdate,
)
from fintrack.api.dependencies import get_as_of, get_current_user_id, get_request_id, parse_resource_id
from fintrack.config import settings
from fintrack.infrastructure.database.session import get_db
from fintrack.infrastructure.database.repositories import ExpenseRepository, expense_to_domain
from fintrack.infrastructure.database.models import ExpenseRecord
from fintrack.domain.models import CATEGORIES, Category
from fintrack.domain.expenses import summarize_expenses, total_amount, validate_recurrence
from fintrack.domain.exceptions import InvalidExpenseError
from fintrack.utils.date_utils import period_start

router = APIRouter()


def to_expense_schema(record: ExpenseRecord) -> ExpenseSchema:
    expense = expense_to_domain(record)
    return ExpenseSchema(
        id=str(expense.id),
        amount=float(expense.amount),
        category=expense.category,
        description=expense.description,
        date=expense.date,
        is_recurring=expense.is_recurring,
        recurring_period=expense.recurring_period,
        tags=expense.tags,
        receipt_url=expense.receipt_url,
    )


@router.get("/expenses", response_model=ExpenseListResponse)
def list_expenses(
    category: Optional[Category] = Query(None),
    start_date: Optional[date] = Query(None),
    end_date: Optional[date] = Query(None),
    sort_order: Literal["asc", "desc"] = Query("desc"),
    limit: int = Query(settings.expense_list_limit, gt=0, le=500),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    List the caller's expenses, newest first by default.

    Filters are inclusive on both date bounds.
    """
    records = ExpenseRepository(db).list_expenses(
        user_id,
        category=category.value if category else None,
        start_date=start_date,
        end_date=end_date,
        descending=sort_order == "desc",
        limit=limit,
    )
    expenses = [to_expense_schema(r) for r in records]

    return ExpenseListResponse(
        expenses=expenses,
        summary=ExpenseTotals(
            total_amount=float(total_amount(expense_to_domain(r) for r in records)),
            count=len(expenses),
        ),
    )


@router.get("/expenses/categories", response_model=CategoriesResponse)
def list_categories():
    return CategoriesResponse(categories=CATEGORIES)


@router.get("/expenses/analytics/summary", response_model=ExpenseSummaryResponse)
def get_expense_summary(
    period: Literal["week", "month", "year"] = Query("month"),
    as_of: date = Depends(get_as_of),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    Spending totals from the start of the period through as_of.

    Returns:
        Category breakdown, daily spending and average per calendar day
    """
    start = period_start(period, as_of)
    records = ExpenseRepository(db).list_expenses(user_id, start_date=start, end_date=as_of)
    summary = summarize_expenses([expense_to_domain(r) for r in records], start, as_of)

    return ExpenseSummaryResponse(
        period=period,
        start_date=summary.start_date,
        end_date=summary.end_date,
        total_amount=float(summary.total_amount),
        average_per_day=float(summary.average_per_day),
        transaction_count=summary.transaction_count,
        category_breakdown={k: float(v) for k, v in summary.category_breakdown.items()},
        daily_spending={k: float(v) for k, v in summary.daily_spending.items()},
    )


@router.get("/expenses/{expense_id}", response_model=ExpenseSchema)
def get_expense(
    expense_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    expense = ExpenseRepository(db).get_expense(user_id, parse_resource_id(expense_id, "expense"))
    if not expense:
        raise HTTPException(status_code=404, detail="Expense not found")
    return to_expense_schema(expense)


@router.post("/expenses", response_model=ExpenseSchema, status_code=201)
def create_expense(
    request_body: ExpenseCreate,
    request: Request,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Record a new expense dated today unless a date is given"""
    request_id = get_request_id(request)
    recurring_period = request_body.recurring_period.value if request_body.recurring_period else None

    try:
        validate_recurrence(request_body.is_recurring, recurring_period)

        expense = ExpenseRepository(db).create_expense(
            user_id,
            amount=request_body.amount,
            category=request_body.category.value,
            description=request_body.description,
            date=request_body.date or date.today(),
            is_recurring=request_body.is_recurring,
            recurring_period=recurring_period if request_body.is_recurring else None,
            tags=request_body.tags,
            receipt_url=request_body.receipt_url,
        )
        db.commit()
        db.refresh(expense)
        return to_expense_schema(expense)

    except InvalidExpenseError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Create expense error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")


@router.put("/expenses/{expense_id}", response_model=ExpenseSchema)
def update_expense(
    expense_id: str,
    request_body: ExpenseUpdate,
    request: Request,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Apply a partial update to an expense"""
    request_id = get_request_id(request)
    repo = ExpenseRepository(db)
    expense = repo.get_expense(user_id, parse_resource_id(expense_id, "expense"))
    if not expense:
        raise HTTPException(status_code=404, detail="Expense not found")

    changes = request_body.model_dump(exclude_unset=True, exclude_none=True)
    if "category" in changes:
        changes["category"] = changes["category"].value
    if "recurring_period" in changes:
        changes["recurring_period"] = changes["recurring_period"].value

    is_recurring = changes.get("is_recurring", expense.is_recurring)
    if not is_recurring:
        changes["recurring_period"] = None

    try:
        validate_recurrence(is_recurring, changes.get("recurring_period", expense.recurring_period))
        repo.update_expense(expense, changes)
        db.commit()
        db.refresh(expense)
        return to_expense_schema(expense)

    except InvalidExpenseError as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Update expense error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")


@router.delete("/expenses/{expense_id}", status_code=204)
def delete_expense(
    expense_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    repo = ExpenseRepository(db)
    expense = repo.get_expense(user_id, parse_resource_id(expense_id, "expense"))
    if not expense:
        raise HTTPException(status_code=404, detail="Expense not found")

    repo.delete_expense(expense)
    db.commit()
    return Response(status_code=204)
