"""Budget lifecycle endpoints: current month, planning, fixed expenses and closing."""

from datetime import date
from typing import List, Optional
from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.init_db import get_db
from components.budget.lifecycle import BudgetLifecycle
from components.budget.repository import BudgetRepository
from components.budget import schemas
from components.user.models import User
from restapi.endpoints.auth import get_current_user
from restapi.endpoints.helpers import action_errors

router = APIRouter(
    prefix="/budget",
    tags=["budget"],
    responses={404: {"description": "Not found"}},
)


@router.get("/current", response_model=schemas.BudgetState)
async def get_current_budget(
    as_of_date: Optional[date] = Query(None, description="Reference date (defaults to today)"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    State of the current calendar month.

    The step is derived from what is stored:
    - clone: no month yet, or a draft without categories
    - edit: a draft with planned categories
    - closed: the month was closed
    """
    return await BudgetLifecycle(db, current_user).load(as_of_date)


@router.post("/current/clone", response_model=schemas.BudgetState, status_code=status.HTTP_201_CREATED)
async def clone_current_budget(
    as_of_date: Optional[date] = Query(None, description="Reference date (defaults to today)"),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Copy the most recent earlier month into the current one, or start it empty."""
    lifecycle = BudgetLifecycle(db, current_user)
    async with action_errors(db, "clone budget month"):
        await lifecycle.clone(as_of_date)
    return await lifecycle.load(as_of_date)


@router.get("/months", response_model=List[schemas.BudgetMonthRead])
async def list_months(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return await BudgetRepository(db).list_months(current_user.id)


@router.post("/months", response_model=schemas.BudgetMonthRead, status_code=status.HTTP_201_CREATED)
async def create_month(
    month: schemas.BudgetMonthCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    async with action_errors(db, "create budget month"):
        return await BudgetLifecycle(db, current_user).create_month(month.year, month.month)


@router.get("/months/{month_id}", response_model=schemas.BudgetMonthRead)
async def get_month(
    month_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    budget_month = await BudgetRepository(db).get_month(current_user.id, month_id)
    if budget_month is None:
        raise HTTPException(status_code=404, detail="Budget month not found")
    return budget_month


@router.get("/months/{month_id}/categories", response_model=List[schemas.BudgetCategoryRead])
async def list_planned_categories(
    month_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return await BudgetRepository(db).list_categories(current_user.id, month_id)


@router.put("/months/{month_id}/categories/{category_id}", response_model=schemas.BudgetCategoryRead)
async def set_planned_amount(
    month_id: int,
    category_id: int,
    planned: schemas.PlannedAmount,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Create or update the planned amount of one category."""
    async with action_errors(db, "save planned amount"):
        return await BudgetLifecycle(db, current_user).set_planned_amount(
            month_id, category_id, planned.planned_amount
        )


@router.delete("/categories/{planned_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_planned_category(
    planned_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    async with action_errors(db, "remove planned category"):
        await BudgetLifecycle(db, current_user).remove_planned(planned_id)


@router.get("/months/{month_id}/fixed-expenses", response_model=List[schemas.FixedExpenseRead])
async def list_fixed_expenses(
    month_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Fixed expenses by due day, undated ones last."""
    return await BudgetRepository(db).list_fixed_expenses(current_user.id, month_id)


@router.post(
    "/months/{month_id}/fixed-expenses",
    response_model=schemas.FixedExpenseRead,
    status_code=status.HTTP_201_CREATED,
)
async def add_fixed_expense(
    month_id: int,
    expense: schemas.FixedExpenseCreate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    async with action_errors(db, "add fixed expense"):
        return await BudgetLifecycle(db, current_user).add_fixed_expense(month_id, expense)


@router.patch("/fixed-expenses/{expense_id}", response_model=schemas.FixedExpenseRead)
async def update_fixed_expense(
    expense_id: int,
    expense: schemas.FixedExpenseUpdate,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    async with action_errors(db, "update fixed expense"):
        return await BudgetLifecycle(db, current_user).update_fixed_expense(
            expense_id, expense.model_dump(exclude_unset=True)
        )


@router.put("/fixed-expenses/{expense_id}/paid", response_model=schemas.FixedExpenseRead)
async def set_fixed_expense_paid(
    expense_id: int,
    paid: schemas.FixedExpensePaid,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    async with action_errors(db, "toggle fixed expense"):
        return await BudgetLifecycle(db, current_user).update_fixed_expense(
            expense_id, {"is_paid": paid.is_paid}
        )


@router.delete("/fixed-expenses/{expense_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_fixed_expense(
    expense_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    async with action_errors(db, "delete fixed expense"):
        await BudgetLifecycle(db, current_user).delete_fixed_expense(expense_id)


@router.get("/months/{month_id}/summary", response_model=schemas.CloseSummary)
async def get_close_summary(
    month_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Totals for the review screen shown before closing."""
    async with action_errors(db, "load budget summary"):
        return await BudgetLifecycle(db, current_user).summary(month_id)


@router.post("/months/{month_id}/close", response_model=schemas.BudgetMonthRead)
async def close_month(
    month_id: int,
    request: schemas.CloseRequest,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Close the month. This cannot be undone.

    The request must carry ``confirm: true``; an unconfirmed or repeated
    close is rejected.
    """
    async with action_errors(db, "close budget month"):
        return await BudgetLifecycle(db, current_user).close(month_id, request.confirm)
