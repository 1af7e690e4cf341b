"""Bank account endpoints."""

from typing import List
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.init_db import get_db
from components.account.repository import BankAccountRepository
from components.account import schemas
from components.user.models import User
from restapi.endpoints.auth import get_current_user
from restapi.endpoints.helpers import action_errors

router = APIRouter(
    prefix="/bank-accounts",
    tags=["bank accounts"],
    responses={404: {"description": "Not found"}},
)


@router.get("/", response_model=List[schemas.BankAccountRead])
async def list_accounts(
    include_inactive: bool = Query(False),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return await BankAccountRepository(db).list(current_user.id, only_active=not include_inactive)


@router.post("/", response_model=schemas.BankAccountRead, status_code=status.HTTP_201_CREATED)
async def create_account(
    account: schemas.BankAccountCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    async with action_errors(db, "create bank account"):
        return await BankAccountRepository(db).create(current_user, account)


@router.patch("/{account_id}", response_model=schemas.BankAccountRead)
async def update_account(
    account_id: int,
    account: schemas.BankAccountUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    async with action_errors(db, "update bank account"):
        updated = await BankAccountRepository(db).update(current_user.id, account_id, account)
    if updated is None:
        raise HTTPException(status_code=404, detail="Bank account not found")
    return updated


@router.delete("/{account_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_account(
    account_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    async with action_errors(db, "delete bank account"):
        deleted = await BankAccountRepository(db).soft_delete(current_user.id, account_id)
    if not deleted:
        raise HTTPException(status_code=404, detail="Bank account not found")
