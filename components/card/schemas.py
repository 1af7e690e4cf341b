from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CreditCardBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    last_four: Optional[str] = Field(None, pattern=r"^\d{4}$")
    total_limit: Decimal = Field(Decimal("0"), ge=0)
    budget_limit: Decimal = Field(Decimal("0"), ge=0)


class CreditCardCreate(CreditCardBase):
    pass


class CreditCardUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    last_four: Optional[str] = Field(None, pattern=r"^\d{4}$")
    total_limit: Optional[Decimal] = Field(None, ge=0)
    budget_limit: Optional[Decimal] = Field(None, ge=0)
    is_active: Optional[bool] = None


class CreditCardRead(CreditCardBase):
    id: int
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
