"""Household account endpoints."""

from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.init_db import get_db
from components.user.models import AppRole, User
from components.user.repository import UserRepository
from components.user import schemas
from restapi.endpoints.auth import get_current_user, require_role
from restapi.endpoints.helpers import action_errors

router = APIRouter(
    prefix="/users",
    tags=["users"],
    responses={404: {"description": "Not found"}},
)


@router.get("/me", response_model=schemas.User)
async def read_me(current_user: User = Depends(get_current_user)):
    """Profile of the signed-in household."""
    return current_user


@router.put("/me", response_model=schemas.User)
async def update_me(
    profile: schemas.ProfileUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Update display name, partner name, email or password."""
    async with action_errors(db, "update profile"):
        updated = await UserRepository(db).update_profile(current_user.id, profile)
    if updated is None:
        raise HTTPException(status_code=404, detail="User not found")
    return updated


@router.get("/me/roles/{role}", response_model=schemas.RoleCheck)
async def check_role(
    role: AppRole,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    granted = await UserRepository(db).has_role(current_user.id, role)
    return schemas.RoleCheck(role=role, granted=granted)


@router.get("/", response_model=List[schemas.User])
async def read_users(
    skip: int = Query(0, ge=0, description="Number of records to skip"),
    limit: int = Query(100, ge=1, le=100, description="Number of records to return"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(require_role(AppRole.admin))
):
    """List every household account (admins only)."""
    return await UserRepository(db).get_all(skip=skip, limit=limit)
