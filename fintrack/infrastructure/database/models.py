"""SQLAlchemy ORM models for expenses and budgets"""

import uuid
from sqlalchemy import Column, Text, Boolean, Date, DateTime, Integer, Numeric, JSON, Uuid
from sqlalchemy.orm import declarative_base
from sqlalchemy.sql import func

Base = declarative_base()


class ExpenseRecord(Base):
    """Expense recorded by a user"""

    __tablename__ = "expense"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False, index=True)
    amount = Column(Numeric(12, 2), nullable=False)
    category = Column(Text, nullable=False, index=True)
    description = Column(Text, nullable=False)
    date = Column(Date, nullable=False)
    is_recurring = Column(Boolean, nullable=False, default=False)
    recurring_period = Column(Text, nullable=True)
    receipt_url = Column(Text, nullable=True)
    tags = Column(JSON, nullable=False, default=list)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())


class BudgetRecord(Base):
    """Category spending cap over a date range"""

    __tablename__ = "budget"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Text, nullable=False, index=True)
    category = Column(Text, nullable=False)
    amount = Column(Numeric(12, 2), nullable=False)
    period = Column(Text, nullable=False, default="monthly")
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    spent = Column(Numeric(12, 2), nullable=False, default=0)
    alert_threshold = Column(Integer, nullable=False, default=80)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now(), onupdate=func.now())
