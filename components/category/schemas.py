from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from components.category.models import DEFAULT_COLOR, DEFAULT_ICON


class CategoryBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    icon: str = DEFAULT_ICON
    color: str = DEFAULT_COLOR
    sort_order: int = 0


class CategoryCreate(CategoryBase):
    pass


class CategoryUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    icon: Optional[str] = None
    color: Optional[str] = None
    sort_order: Optional[int] = None
    is_active: Optional[bool] = None


class CategoryRead(CategoryBase):
    id: int
    is_active: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CategoryBrief(BaseModel):
    """Category fields embedded in budget and transaction rows."""
    id: int
    name: str
    icon: str
    color: str

    model_config = ConfigDict(from_attributes=True)
