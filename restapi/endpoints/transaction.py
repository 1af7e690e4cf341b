"""Transaction endpoints and the needs-review inbox."""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.init_db import get_db
from components.transaction.workflow import CategorizationWorkflow
from components.transaction import schemas
from components.user.models import User
from restapi.endpoints.auth import get_current_user
from restapi.endpoints.helpers import action_errors

router = APIRouter(
    prefix="/transactions",
    tags=["transactions"],
    responses={404: {"description": "Not found"}},
)


@router.get("/", response_model=List[schemas.TransactionRead])
async def list_transactions(
    filter: schemas.InboxFilter = Query(schemas.InboxFilter.all, description="all, needs_review or internal"),
    budget_month_id: Optional[int] = Query(None),
    limit: Optional[int] = Query(None, ge=1, le=1000),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Transactions newest first, narrowed by the inbox filter."""
    return await CategorizationWorkflow(db, current_user).inbox(filter, budget_month_id, limit)


@router.post("/", response_model=schemas.TransactionRead, status_code=status.HTTP_201_CREATED)
async def create_transaction(
    transaction: schemas.TransactionCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Store a transaction.

    It lands in the needs-review inbox unless it already has a category or
    is an internal transfer.
    """
    async with action_errors(db, "create transaction"):
        return await CategorizationWorkflow(db, current_user).add(transaction)


@router.get("/{transaction_id}", response_model=schemas.TransactionRead)
async def get_transaction(
    transaction_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    async with action_errors(db, "load transaction"):
        return await CategorizationWorkflow(db, current_user).get(transaction_id)


@router.patch("/{transaction_id}", response_model=schemas.TransactionRead)
async def update_transaction(
    transaction_id: int,
    transaction: schemas.TransactionUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    async with action_errors(db, "update transaction"):
        return await CategorizationWorkflow(db, current_user).update(
            transaction_id, transaction.model_dump(exclude_unset=True)
        )


@router.post("/{transaction_id}/categorize", response_model=schemas.TransactionRead)
async def categorize_transaction(
    transaction_id: int,
    body: schemas.Categorize,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Assign a category and take the transaction out of the inbox."""
    async with action_errors(db, "categorize transaction"):
        return await CategorizationWorkflow(db, current_user).categorize(
            transaction_id, body.category_id, body.confidence
        )


@router.post("/{transaction_id}/internal", response_model=schemas.TransactionRead)
async def mark_transaction_internal(
    transaction_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Flag a transfer between the couple's own accounts; it never counts as spending."""
    async with action_errors(db, "mark transaction internal"):
        return await CategorizationWorkflow(db, current_user).mark_internal(transaction_id)


@router.delete("/{transaction_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_transaction(
    transaction_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    async with action_errors(db, "delete transaction"):
        await CategorizationWorkflow(db, current_user).delete(transaction_id)
