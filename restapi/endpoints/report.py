"""Planned-vs-actual report endpoints."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.init_db import get_db
from components.report.service import ReportService
from components.report import schemas
from components.user.models import User
from restapi.endpoints.auth import get_current_user
from restapi.endpoints.helpers import action_errors

router = APIRouter(
    prefix="/reports",
    tags=["reports"],
    responses={404: {"description": "Not found"}},
)


@router.get("/{month_id}", response_model=schemas.MonthReport)
async def get_month_report(
    month_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Planned vs actual per category for one budget month.

    Returns for each category:
    - Planned amount (0 for spending without a plan)
    - Actual spending, summed as absolute amounts
    - Whether the category went over its plan
    - The transactions behind the actual amount

    Internal transfers are excluded.
    """
    async with action_errors(db, "build report"):
        return await ReportService(db).get_month_report(current_user.id, month_id)


@router.get("/{month_id}/by-category", response_model=schemas.CategoryBreakdown)
async def get_category_breakdown(
    month_id: int,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Spending grouped by category, with the number of transactions still to review."""
    async with action_errors(db, "build category breakdown"):
        return await ReportService(db).get_category_breakdown(current_user.id, month_id)
