"""Pydantic schemas for household accounts."""

from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from components.user.models import AppRole


class UserBase(BaseModel):
    login: str = Field(..., min_length=3, max_length=50)


class UserCreate(UserBase):
    password: str = Field(..., min_length=6)
    display_name: Optional[str] = None
    partner_name: Optional[str] = None
    email: Optional[str] = None


class ProfileUpdate(BaseModel):
    display_name: Optional[str] = None
    partner_name: Optional[str] = None
    email: Optional[str] = None
    password: Optional[str] = Field(None, min_length=6)


class User(UserBase):
    id: int
    display_name: Optional[str] = None
    partner_name: Optional[str] = None
    email: Optional[str] = None
    registration_date: date

    model_config = ConfigDict(from_attributes=True)


class UserWithToken(User):
    access_token: str
    token_type: str = "bearer"


class RoleCheck(BaseModel):
    role: AppRole
    granted: bool
