"""Credit card endpoints."""

from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.init_db import get_db
from components.card.repository import CreditCardRepository
from components.card import schemas
from components.user.models import User
from restapi.endpoints.auth import get_current_user
from restapi.endpoints.helpers import action_errors

router = APIRouter(
    prefix="/credit-cards",
    tags=["credit cards"],
    responses={404: {"description": "Not found"}},
)


@router.get("/", response_model=List[schemas.CreditCardRead])
async def list_cards(
    include_inactive: bool = Query(False),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return await CreditCardRepository(db).list(current_user.id, only_active=not include_inactive)


@router.post("/", response_model=schemas.CreditCardRead, status_code=status.HTTP_201_CREATED)
async def create_card(
    card: schemas.CreditCardCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    async with action_errors(db, "create credit card"):
        return await CreditCardRepository(db).create(current_user, card)


@router.patch("/{card_id}", response_model=schemas.CreditCardRead)
async def update_card(
    card_id: int,
    card: schemas.CreditCardUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Update a card; this is also where the monthly budget limit is edited."""
    async with action_errors(db, "update credit card"):
        updated = await CreditCardRepository(db).update(current_user.id, card_id, card)
    if updated is None:
        raise HTTPException(status_code=404, detail="Credit card not found")
    return updated


@router.delete("/{card_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_card(
    card_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    async with action_errors(db, "delete credit card"):
        deleted = await CreditCardRepository(db).soft_delete(current_user.id, card_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Credit card not found")
