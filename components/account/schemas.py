from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class BankAccountBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    bank_name: str = Field(..., min_length=1, max_length=100)
    agency: Optional[str] = None
    account_number: Optional[str] = None


class BankAccountCreate(BankAccountBase):
    pass


class BankAccountUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    bank_name: Optional[str] = Field(None, min_length=1, max_length=100)
    agency: Optional[str] = None
    account_number: Optional[str] = None
    is_active: Optional[bool] = None


class BankAccountRead(BankAccountBase):
    id: int
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
