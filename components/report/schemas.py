"""Pydantic schemas for plan performance reports."""

from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict

from components.transaction.schemas import TransactionRead


class CategoryLabel(BaseModel):
    key: str
    id: Optional[int] = None
    name: str
    icon: str
    color: str

    model_config = ConfigDict(from_attributes=True)


class CategoryPerformance(BaseModel):
    """One category of the planned-vs-actual report."""
    category: CategoryLabel
    planned: Decimal
    actual: Decimal
    is_over: bool
    transactions: List[TransactionRead] = []


class ReportTotals(BaseModel):
    total_planned: Decimal
    total_actual: Decimal
    difference: Decimal
    over_budget_count: int

    model_config = ConfigDict(from_attributes=True)


class MonthReport(BaseModel):
    budget_month_id: int
    year: int
    month: int
    categories: List[CategoryPerformance]
    totals: ReportTotals


class CategorySpend(BaseModel):
    category: CategoryLabel
    total: Decimal
    transactions: List[TransactionRead] = []


class CategoryBreakdown(BaseModel):
    """Dashboard view of a month's spending."""
    budget_month_id: int
    groups: List[CategorySpend]
    total_actual: Decimal
    pending_review_count: int
