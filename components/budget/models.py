"""Budget month, planned category and fixed expense models."""

import enum

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    Enum,
    ForeignKey,
    Integer,
    Numeric,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from components.core.database import Base, OwnedMixin, TimestampMixin


class BudgetStatus(str, enum.Enum):
    draft = "draft"
    closed = "closed"


class BudgetMonth(OwnedMixin, TimestampMixin, Base):
    """One calendar month's budget."""
    __tablename__ = "budget_months"
    __table_args__ = (
        UniqueConstraint("user_id", "year", "month", name="uq_budget_months_user_period"),
        CheckConstraint("month BETWEEN 1 AND 12", name="ck_budget_months_month"),
    )

    year = Column(Integer, nullable=False)
    month = Column(Integer, nullable=False)
    status = Column(Enum(BudgetStatus, name="budget_status"), nullable=False, default=BudgetStatus.draft)
    cloned_from = Column(Integer, ForeignKey("budget_months.id"), nullable=True)
    closed_at = Column(DateTime(timezone=True), nullable=True)

    categories = relationship("BudgetCategory", back_populates="budget_month", cascade="all, delete-orphan")
    fixed_expenses = relationship("FixedExpense", back_populates="budget_month", cascade="all, delete-orphan")

    @property
    def period(self):
        return (self.year, self.month)

    @property
    def is_closed(self) -> bool:
        return self.status == BudgetStatus.closed


class BudgetCategory(OwnedMixin, TimestampMixin, Base):
    """Planned amount for a category within a month."""
    __tablename__ = "budget_categories"
    __table_args__ = (
        UniqueConstraint("budget_month_id", "category_id", name="uq_budget_categories_month_category"),
        CheckConstraint("planned_amount >= 0", name="ck_budget_categories_planned"),
    )

    budget_month_id = Column(Integer, ForeignKey("budget_months.id"), nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=False)
    planned_amount = Column(Numeric(12, 2), nullable=False, default=0)

    budget_month = relationship("BudgetMonth", back_populates="categories")
    category = relationship("Category", back_populates="budget_categories")


class FixedExpense(OwnedMixin, TimestampMixin, Base):
    """Recurring bill scoped to one month."""
    __tablename__ = "fixed_expenses"
    __table_args__ = (
        CheckConstraint("due_day IS NULL OR due_day BETWEEN 1 AND 31", name="ck_fixed_expenses_due_day"),
    )

    budget_month_id = Column(Integer, ForeignKey("budget_months.id"), nullable=False, index=True)
    name = Column(String(100), nullable=False)
    amount = Column(Numeric(12, 2), nullable=False, default=0)
    due_day = Column(Integer, nullable=True)
    is_paid = Column(Boolean, nullable=False, default=False)

    budget_month = relationship("BudgetMonth", back_populates="fixed_expenses")
