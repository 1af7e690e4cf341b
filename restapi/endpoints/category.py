"""Spending category endpoints."""

from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.init_db import get_db
from components.category.repository import CategoryRepository
from components.category import schemas
from components.user.models import User
from restapi.endpoints.auth import get_current_user
from restapi.endpoints.helpers import action_errors

router = APIRouter(
    prefix="/categories",
    tags=["categories"],
    responses={404: {"description": "Not found"}},
)


@router.get("/", response_model=List[schemas.CategoryRead])
async def list_categories(
    include_inactive: bool = Query(False, description="Also return deactivated categories"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Categories ordered by sort_order."""
    return await CategoryRepository(db).list(current_user.id, only_active=not include_inactive)


@router.post("/", response_model=schemas.CategoryRead, status_code=status.HTTP_201_CREATED)
async def create_category(
    category: schemas.CategoryCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    async with action_errors(db, "create category"):
        return await CategoryRepository(db).create(current_user, category)


@router.patch("/{category_id}", response_model=schemas.CategoryRead)
async def update_category(
    category_id: int,
    category: schemas.CategoryUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    async with action_errors(db, "update category"):
        updated = await CategoryRepository(db).update(current_user.id, category_id, category)
    if updated is None:
        raise HTTPException(status_code=404, detail="Category not found")
    return updated


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Deactivate a category. Past budgets and transactions keep pointing at it."""
    async with action_errors(db, "delete category"):
        deleted = await CategoryRepository(db).soft_delete(current_user.id, category_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Category not found")
