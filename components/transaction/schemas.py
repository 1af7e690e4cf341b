"""Pydantic schemas for transactions and the review inbox."""

from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from components.category.schemas import CategoryBrief
from components.transaction.models import MERCHANT_MAX_LENGTH, Confidence, ImportSource


class InboxFilter(str, Enum):
    all = "all"
    needs_review = "needs_review"
    internal = "internal"


class TransactionCreate(BaseModel):
    amount: Decimal
    merchant: str = Field(..., min_length=1, max_length=MERCHANT_MAX_LENGTH)
    transaction_date: date
    category_id: Optional[int] = None
    confidence: Confidence = Confidence.low
    is_internal: bool = False
    source: ImportSource = ImportSource.manual
    external_id: Optional[str] = None
    budget_month_id: Optional[int] = None
    import_batch_id: Optional[int] = None


class TransactionUpdate(BaseModel):
    amount: Optional[Decimal] = None
    merchant: Optional[str] = Field(None, min_length=1, max_length=MERCHANT_MAX_LENGTH)
    transaction_date: Optional[date] = None
    category_id: Optional[int] = None
    confidence: Optional[Confidence] = None
    is_internal: Optional[bool] = None
    budget_month_id: Optional[int] = None

    @field_validator("amount", "merchant", "transaction_date", "confidence", "is_internal")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError("may be omitted but not set to null")
        return value


class Categorize(BaseModel):
    category_id: int
    confidence: Confidence = Confidence.high


class TransactionRead(BaseModel):
    id: int
    amount: Decimal
    merchant: str
    transaction_date: date
    category_id: Optional[int] = None
    confidence: Confidence
    needs_review: bool
    is_internal: bool
    source: ImportSource
    external_id: Optional[str] = None
    budget_month_id: Optional[int] = None
    import_batch_id: Optional[int] = None
    reviewed_at: Optional[datetime] = None
    category: Optional[CategoryBrief] = None

    model_config = ConfigDict(from_attributes=True)
