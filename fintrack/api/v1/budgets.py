"""/v1/budgets - budget CRUD, spending analytics and alerts"""

import time
import logging
from datetime import date
from typing import Optional
from fastapi import APIRouter, Depends, HTTPException, Query, Request, Response
from sqlalchemy.orm import Session

from fintrack.api.v1.schemas import (
    BudgetAlertSchema,
    BudgetAlertsResponse,
    BudgetAnalyticsResponse,
    BudgetCreate,
    BudgetDetailResponse,
    BudgetListResponse,
    BudgetMetrics,
    BudgetSummarySchema,
    BudgetUpdate,
    BudgetWithMetrics,
)
from fintrack.api.v1.expenses import to_expense_schema
from fintrack.api.dependencies import get_as_of, get_current_user_id, get_request_id, parse_resource_id
from fintrack.config import settings
from fintrack.infrastructure.database.session import get_db
from fintrack.infrastructure.database.repositories import (
    BudgetRepository,
    ExpenseRepository,
    budget_to_domain,
    expense_to_domain,
)
from fintrack.domain.models import Budget, Expense, ReconciliationResult
from fintrack.domain.budgets import (
    derive_alerts,
    find_overlapping,
    reconcile,
    reconcile_all,
    select_active_budgets,
    summarize,
    validate_budget,
)
from fintrack.domain.exceptions import BudgetOverlapError, InvalidBudgetError
from fintrack.infrastructure.observability.metrics import record_alerts, record_reconciliations
from fintrack.infrastructure.observability.logging import log_budget_alerts
from fintrack.utils.money import round_cents

router = APIRouter()


def _money(value) -> float:
    return float(round_cents(value))


def _load_expenses(db: Session, user_id: str) -> list[Expense]:
    return [expense_to_domain(r) for r in ExpenseRepository(db).list_expenses(user_id)]


def _with_metrics(budget: Budget, result: ReconciliationResult) -> dict:
    """Stored budget fields merged with reconciled metrics"""
    return dict(
        id=str(budget.id),
        category=budget.category,
        amount=_money(budget.amount),
        period=budget.period,
        start_date=budget.start_date,
        end_date=budget.end_date,
        spent=_money(budget.spent),
        alert_threshold=budget.alert_threshold,
        is_active=budget.is_active,
        actual_spent=_money(result.actual_spent),
        remaining_amount=_money(result.remaining_amount),
        percentage_used=result.percentage_used,
        is_over_budget=result.is_over_budget,
        needs_alert=result.needs_alert,
        expense_count=result.expense_count,
    )


def _to_metrics(result: ReconciliationResult) -> BudgetMetrics:
    return BudgetMetrics(
        budget_id=str(result.budget_id),
        category=result.category,
        budget_amount=_money(result.budget_amount),
        actual_spent=_money(result.actual_spent),
        remaining_amount=_money(result.remaining_amount),
        percentage_used=result.percentage_used,
        is_over_budget=result.is_over_budget,
        alert_threshold=result.alert_threshold,
        needs_alert=result.needs_alert,
        expense_count=result.expense_count,
    )


def _check_overlap(repo: BudgetRepository, user_id: str, candidate: Budget) -> None:
    active = [budget_to_domain(r) for r in repo.list_budgets(user_id, is_active=True)]
    if find_overlapping(active, candidate):
        raise BudgetOverlapError(f"Active budget already exists for {candidate.category} in this time period")


@router.get("/budgets", response_model=BudgetListResponse)
def list_budgets(
    is_active: Optional[bool] = Query(None),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    List budgets with actual spending recomputed from expenses.

    The stored `spent` field is returned as-is; `actual_spent` is authoritative.
    """
    budgets = [budget_to_domain(r) for r in BudgetRepository(db).list_budgets(user_id, is_active=is_active)]
    results = reconcile_all(budgets, _load_expenses(db, user_id))
    record_reconciliations(len(results))

    return BudgetListResponse(
        budgets=[BudgetWithMetrics(**_with_metrics(b, r)) for b, r in zip(budgets, results)]
    )


@router.get("/budgets/analytics/overview", response_model=BudgetAnalyticsResponse)
def get_budget_analytics(
    as_of: date = Depends(get_as_of),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    Summary and per-budget metrics for budgets active on as_of.

    Returns:
        Totals across active budgets plus one metrics row per budget
    """
    budgets = [budget_to_domain(r) for r in BudgetRepository(db).list_budgets(user_id)]
    active = select_active_budgets(budgets, as_of)
    results = reconcile_all(active, _load_expenses(db, user_id))
    record_reconciliations(len(results))
    summary = summarize(results)

    return BudgetAnalyticsResponse(
        as_of=as_of,
        summary=BudgetSummarySchema(
            total_budgeted=_money(summary.total_budgeted),
            total_spent=_money(summary.total_spent),
            total_remaining=_money(summary.total_remaining),
            overall_percentage_used=summary.overall_percentage_used,
            active_budget_count=summary.active_budget_count,
            over_budget_count=summary.over_budget_count,
            alerts_needed=summary.alerts_needed,
        ),
        budgets=[_to_metrics(r) for r in results],
    )


@router.get("/budgets/alerts", response_model=BudgetAlertsResponse)
def get_budget_alerts(
    request: Request,
    as_of: date = Depends(get_as_of),
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Over-budget and approaching-limit alerts for budgets active on as_of"""
    start_time = time.time()
    request_id = get_request_id(request)

    budgets = [budget_to_domain(r) for r in BudgetRepository(db).list_budgets(user_id)]
    active = select_active_budgets(budgets, as_of)
    results = reconcile_all(active, _load_expenses(db, user_id))
    alerts = derive_alerts(results)

    record_reconciliations(len(results))
    record_alerts(alerts)
    duration_ms = (time.time() - start_time) * 1000
    log_budget_alerts(request_id, user_id, len(active), len(alerts), duration_ms)

    return BudgetAlertsResponse(
        alerts=[
            BudgetAlertSchema(
                type=a.type,
                severity=a.severity,
                budget_id=str(a.budget_id),
                category=a.category,
                message=a.message,
                budget_amount=_money(a.budget_amount),
                actual_spent=_money(a.actual_spent),
                overage=_money(a.overage) if a.overage is not None else None,
                percentage_used=a.percentage_used,
            )
            for a in alerts
        ],
        alert_count=len(alerts),
    )


@router.get("/budgets/{budget_id}", response_model=BudgetDetailResponse)
def get_budget(
    budget_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Budget with metrics and the expenses counted against it, newest first"""
    record = BudgetRepository(db).get_budget(user_id, parse_resource_id(budget_id, "budget"))
    if not record:
        raise HTTPException(status_code=404, detail="Budget not found")

    budget = budget_to_domain(record)
    expense_records = ExpenseRepository(db).list_expenses(
        user_id,
        category=budget.category,
        start_date=budget.start_date,
        end_date=budget.end_date,
    )
    result = reconcile(budget, [expense_to_domain(r) for r in expense_records])

    return BudgetDetailResponse(
        **_with_metrics(budget, result),
        expenses=[to_expense_schema(r) for r in expense_records],
    )


@router.post("/budgets", response_model=BudgetWithMetrics, status_code=201)
def create_budget(
    request_body: BudgetCreate,
    request: Request,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """
    Create a budget.

    Rejects end dates not after the start date and overlapping active
    budgets for the same category.
    """
    request_id = get_request_id(request)
    repo = BudgetRepository(db)

    fields = dict(
        category=request_body.category.value,
        amount=request_body.amount,
        period=request_body.period.value,
        start_date=request_body.start_date,
        end_date=request_body.end_date,
        alert_threshold=(
            request_body.alert_threshold
            if request_body.alert_threshold is not None
            else settings.default_alert_threshold
        ),
    )

    try:
        candidate = Budget(id=None, user_id=user_id, **fields)
        validate_budget(candidate)
        _check_overlap(repo, user_id, candidate)

        record = repo.create_budget(user_id, **fields)
        db.commit()
        db.refresh(record)

    except (InvalidBudgetError, BudgetOverlapError) as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Create budget error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    budget = budget_to_domain(record)
    result = reconcile(budget, _load_expenses(db, user_id))
    return BudgetWithMetrics(**_with_metrics(budget, result))


@router.put("/budgets/{budget_id}", response_model=BudgetWithMetrics)
def update_budget(
    budget_id: str,
    request_body: BudgetUpdate,
    request: Request,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    """Apply a partial update, re-validating the resulting budget"""
    request_id = get_request_id(request)
    repo = BudgetRepository(db)
    record = repo.get_budget(user_id, parse_resource_id(budget_id, "budget"))
    if not record:
        raise HTTPException(status_code=404, detail="Budget not found")

    changes = request_body.model_dump(exclude_unset=True, exclude_none=True)
    for enum_field in ("category", "period"):
        if enum_field in changes:
            changes[enum_field] = changes[enum_field].value

    try:
        candidate = budget_to_domain(record)
        for name, value in changes.items():
            setattr(candidate, name, value)
        validate_budget(candidate)
        _check_overlap(repo, user_id, candidate)

        repo.update_budget(record, changes)
        db.commit()
        db.refresh(record)

    except (InvalidBudgetError, BudgetOverlapError) as e:
        db.rollback()
        raise HTTPException(status_code=400, detail=str(e))

    except Exception as e:
        db.rollback()
        logging.error(f"Update budget error: {e}", extra={"request_id": request_id})
        raise HTTPException(status_code=500, detail="Internal server error")

    budget = budget_to_domain(record)
    result = reconcile(budget, _load_expenses(db, user_id))
    return BudgetWithMetrics(**_with_metrics(budget, result))


@router.delete("/budgets/{budget_id}", status_code=204)
def delete_budget(
    budget_id: str,
    user_id: str = Depends(get_current_user_id),
    db: Session = Depends(get_db),
):
    repo = BudgetRepository(db)
    record = repo.get_budget(user_id, parse_resource_id(budget_id, "budget"))
    if not record:
        raise HTTPException(status_code=404, detail="Budget not found")

    repo.delete_budget(record)
    db.commit()
    return Response(status_code=204)
