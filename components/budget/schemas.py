"""Pydantic schemas for budget months and their line items."""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from components.budget.models import BudgetStatus
from components.category.schemas import CategoryBrief


class LifecycleStep(str, Enum):
    clone = "clone"
    edit = "edit"
    close = "close"
    closed = "closed"


class BudgetMonthCreate(BaseModel):
    year: int = Field(..., ge=2000, le=2100)
    month: int = Field(..., ge=1, le=12)


class BudgetMonthRead(BaseModel):
    id: int
    year: int
    month: int
    status: BudgetStatus
    cloned_from: Optional[int] = None
    closed_at: Optional[datetime] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class PlannedAmount(BaseModel):
    planned_amount: Decimal = Field(..., ge=0)


class BudgetCategoryRead(BaseModel):
    id: int
    budget_month_id: int
    category_id: int
    planned_amount: Decimal
    category: Optional[CategoryBrief] = None

    model_config = ConfigDict(from_attributes=True)


class FixedExpenseBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    amount: Decimal = Field(Decimal("0"), ge=0)
    due_day: Optional[int] = Field(None, ge=1, le=31)


class FixedExpenseCreate(FixedExpenseBase):
    is_paid: bool = False


class FixedExpenseUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    amount: Optional[Decimal] = Field(None, ge=0)
    due_day: Optional[int] = Field(None, ge=1, le=31)
    is_paid: Optional[bool] = None

    @field_validator("name", "amount", "is_paid")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("may be omitted but not set to null")
        return value


class FixedExpensePaid(BaseModel):
    is_paid: bool


class FixedExpenseRead(FixedExpenseBase):
    id: int
    budget_month_id: int
    is_paid: bool

    model_config = ConfigDict(from_attributes=True)


class CloseSummary(BaseModel):
    """Totals shown on the review screen before closing."""
    total_planned: Decimal
    total_fixed: Decimal
    total_card_budget: Decimal
    category_count: int
    fixed_expense_count: int


class CloseRequest(BaseModel):
    confirm: bool = False


class BudgetState(BaseModel):
    """Current month as seen by the lifecycle controller."""
    year: int
    month: int
    step: LifecycleStep
    has_prior_month: bool
    budget_month: Optional[BudgetMonthRead] = None
    categories: List[BudgetCategoryRead] = []
    fixed_expenses: List[FixedExpenseRead] = []
    summary: Optional[CloseSummary] = None
