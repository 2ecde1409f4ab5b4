"""Data access layer for expenses and budgets"""

import uuid
from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional
from sqlalchemy.orm import Session
from fintrack.infrastructure.database.models import ExpenseRecord, BudgetRecord
from fintrack.domain.models import Expense, Budget


def expense_to_domain(record: ExpenseRecord) -> Expense:
    """Map ORM row to domain dataclass"""
    return Expense(
        id=record.id,
        user_id=record.user_id,
        amount=Decimal(record.amount),
        category=record.category,
        description=record.description,
        date=record.date,
        is_recurring=record.is_recurring,
        recurring_period=record.recurring_period,
        tags=list(record.tags or []),
        receipt_url=record.receipt_url,
    )


def budget_to_domain(record: BudgetRecord) -> Budget:
    """Map ORM row to domain dataclass"""
    return Budget(
        id=record.id,
        user_id=record.user_id,
        category=record.category,
        amount=Decimal(record.amount),
        period=record.period,
        start_date=record.start_date,
        end_date=record.end_date,
        spent=Decimal(record.spent or 0),
        alert_threshold=record.alert_threshold,
        is_active=record.is_active,
    )


class ExpenseRepository:
    """Repository for user expenses"""

    def __init__(self, db: Session):
        self.db = db

    def create_expense(self, user_id: str, **fields: Any) -> ExpenseRecord:
        """Persist a new expense"""
        db_expense = ExpenseRecord(user_id=user_id, **fields)
        self.db.add(db_expense)
        self.db.flush()  # Get ID without committing
        return db_expense

    def get_expense(self, user_id: str, expense_id: uuid.UUID) -> Optional[ExpenseRecord]:
        """Fetch a single expense, scoped to its owner"""
        return (
            self.db.query(ExpenseRecord)
            .filter(ExpenseRecord.id == expense_id, ExpenseRecord.user_id == user_id)
            .first()
        )

    def list_expenses(
        self,
        user_id: str,
        category: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        descending: bool = True,
        limit: Optional[int] = None,
    ) -> List[ExpenseRecord]:
        """Fetch a user's expenses with optional category and inclusive date filters"""
        query = self.db.query(ExpenseRecord).filter(ExpenseRecord.user_id == user_id)

        if category:
            query = query.filter(ExpenseRecord.category == category)
        if start_date:
            query = query.filter(ExpenseRecord.date >= start_date)
        if end_date:
            query = query.filter(ExpenseRecord.date <= end_date)

        order = ExpenseRecord.date.desc() if descending else ExpenseRecord.date.asc()
        query = query.order_by(order)

        if limit:
            query = query.limit(limit)
        return query.all()

    def update_expense(self, db_expense: ExpenseRecord, changes: Dict[str, Any]) -> ExpenseRecord:
        """Apply field changes to an existing expense"""
        for name, value in changes.items():
            setattr(db_expense, name, value)
        self.db.flush()
        return db_expense

    def delete_expense(self, db_expense: ExpenseRecord) -> None:
        self.db.delete(db_expense)
        self.db.flush()


class BudgetRepository:
    """Repository for category budgets"""

    def __init__(self, db: Session):
        self.db = db

    def create_budget(self, user_id: str, **fields: Any) -> BudgetRecord:
        """Persist a new budget"""
        db_budget = BudgetRecord(user_id=user_id, **fields)
        self.db.add(db_budget)
        self.db.flush()
        return db_budget

    def get_budget(self, user_id: str, budget_id: uuid.UUID) -> Optional[BudgetRecord]:
        """Fetch a single budget, scoped to its owner"""
        return (
            self.db.query(BudgetRecord)
            .filter(BudgetRecord.id == budget_id, BudgetRecord.user_id == user_id)
            .first()
        )

    def list_budgets(self, user_id: str, is_active: Optional[bool] = None) -> List[BudgetRecord]:
        """Fetch a user's budgets, newest first"""
        query = self.db.query(BudgetRecord).filter(BudgetRecord.user_id == user_id)
        if is_active is not None:
            query = query.filter(BudgetRecord.is_active == is_active)
        return query.order_by(BudgetRecord.created_at.desc()).all()

    def update_budget(self, db_budget: BudgetRecord, changes: Dict[str, Any]) -> BudgetRecord:
        """Apply field changes to an existing budget"""
        for name, value in changes.items():
            setattr(db_budget, name, value)
        self.db.flush()
        return db_budget

    def delete_budget(self, db_budget: BudgetRecord) -> None:
        self.db.delete(db_budget)
        self.db.flush()
