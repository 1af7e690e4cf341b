"""Repository for budget months, planned categories and fixed expenses."""

from decimal import Decimal
from typing import List, Optional

from sqlalchemy import and_, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from components.budget.models import BudgetCategory, BudgetMonth, BudgetStatus, FixedExpense
from components.budget import schemas
from components.core.cache import query_cache
from components.core.exceptions import InvalidTransitionError, NotFoundError
from components.core.security import require_user
from components.core.utils import get_logger, utcnow

logger = get_logger("budget.repository")

MONTHS_GROUP = "budget_months"


class BudgetRepository:
    """Repository for budget month operations."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    # Budget months

    async def list_months(self, user_id: int) -> List[schemas.BudgetMonthRead]:
        """All months of the household, newest first."""

        async def load():
            result = await self.session.execute(
                select(BudgetMonth)
                .where(BudgetMonth.user_id == user_id)
                .order_by(BudgetMonth.year.desc(), BudgetMonth.month.desc())
            )
            return [schemas.BudgetMonthRead.model_validate(row) for row in result.scalars().all()]

        return await query_cache.get_or_load(MONTHS_GROUP, user_id, None, load)

    async def get_month(self, user_id: int, month_id: int) -> Optional[BudgetMonth]:
        result = await self.session.execute(
            select(BudgetMonth).where(BudgetMonth.id == month_id, BudgetMonth.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_by_period(self, user_id: int, year: int, month: int) -> Optional[BudgetMonth]:
        result = await self.session.execute(
            select(BudgetMonth).where(
                BudgetMonth.user_id == user_id,
                BudgetMonth.year == year,
                BudgetMonth.month == month,
            )
        )
        return result.scalar_one_or_none()

    async def get_latest_before(self, user_id: int, year: int, month: int) -> Optional[BudgetMonth]:
        """Most recent month strictly earlier than (year, month)."""
        result = await self.session.execute(
            select(BudgetMonth)
            .where(
                BudgetMonth.user_id == user_id,
                or_(
                    BudgetMonth.year < year,
                    and_(BudgetMonth.year == year, BudgetMonth.month < month),
                ),
            )
            .order_by(BudgetMonth.year.desc(), BudgetMonth.month.desc())
            .limit(1)
        )
        return result.scalar_one_or_none()

    async def create_month(self, user, year: int, month: int) -> BudgetMonth:
        """Create an empty draft month."""
        owner = require_user(user)
        db_month = BudgetMonth(user_id=owner.id, year=year, month=month, status=BudgetStatus.draft)
        self.session.add(db_month)
        await self.session.commit()
        await self.session.refresh(db_month)
        query_cache.invalidate(MONTHS_GROUP, owner.id)
        return db_month

    async def clone_previous_month(self, user, year: int, month: int) -> int:
        """
        Copy the most recent earlier month into (year, month).

        Planned categories and fixed expenses are duplicated with their
        amounts and due days; fixed expenses start unpaid. An existing empty
        draft for the target period is reused. Returns the new month's id.
        """
        owner = require_user(user)
        source = await self.get_latest_before(owner.id, year, month)
        if source is None:
            raise NotFoundError("Previous budget month")

        target = await self.get_by_period(owner.id, year, month)
        if target is None:
            target = BudgetMonth(user_id=owner.id, year=year, month=month, status=BudgetStatus.draft)
            self.session.add(target)
            await self.session.flush()
        elif target.is_closed or await self.count_categories(target.id):
            raise InvalidTransitionError(f"Budget month {year}-{month:02d} is already planned")

        target.cloned_from = source.id

        result = await self.session.execute(
            select(BudgetCategory).where(BudgetCategory.budget_month_id == source.id)
        )
        for planned in result.scalars().all():
            self.session.add(BudgetCategory(
                user_id=owner.id,
                budget_month_id=target.id,
                category_id=planned.category_id,
                planned_amount=planned.planned_amount,
            ))

        result = await self.session.execute(
            select(FixedExpense).where(FixedExpense.budget_month_id == source.id)
        )
        for expense in result.scalars().all():
            self.session.add(FixedExpense(
                user_id=owner.id,
                budget_month_id=target.id,
                name=expense.name,
                amount=expense.amount,
                due_day=expense.due_day,
                is_paid=False,
            ))

        await self.session.commit()
        query_cache.invalidate(MONTHS_GROUP, owner.id)
        logger.info(f"Cloned budget month {source.year}-{source.month:02d} into {year}-{month:02d} for user {owner.id}")
        return target.id

    async def close_month(self, user_id: int, month_id: int) -> BudgetMonth:
        db_month = await self.get_month(user_id, month_id)
        if db_month is None:
            raise NotFoundError("Budget month", month_id)
        if db_month.is_closed:
            raise InvalidTransitionError(f"Budget month {month_id} is already closed")

        db_month.status = BudgetStatus.closed
        db_month.closed_at = utcnow()
        await self.session.commit()
        await self.session.refresh(db_month)
        query_cache.invalidate(MONTHS_GROUP, user_id)
        return db_month

    # Planned categories
    # Plan lines and fixed expenses are only flushed; the caller commits them
    # together with their audit entry.

    async def count_categories(self, month_id: int) -> int:
        result = await self.session.execute(
            select(func.count(BudgetCategory.id)).where(BudgetCategory.budget_month_id == month_id)
        )
        return result.scalar() or 0

    async def list_categories(self, user_id: int, month_id: int) -> List[BudgetCategory]:
        result = await self.session.execute(
            select(BudgetCategory)
            .options(selectinload(BudgetCategory.category))
            .where(BudgetCategory.user_id == user_id, BudgetCategory.budget_month_id == month_id)
            .order_by(BudgetCategory.id)
        )
        return list(result.scalars().all())

    async def get_planned(self, user_id: int, month_id: int, category_id: int) -> Optional[BudgetCategory]:
        result = await self.session.execute(
            select(BudgetCategory)
            .options(selectinload(BudgetCategory.category))
            .where(
                BudgetCategory.user_id == user_id,
                BudgetCategory.budget_month_id == month_id,
                BudgetCategory.category_id == category_id,
            )
        )
        return result.scalar_one_or_none()

    async def get_planned_by_id(self, user_id: int, planned_id: int) -> Optional[BudgetCategory]:
        result = await self.session.execute(
            select(BudgetCategory)
            .options(selectinload(BudgetCategory.category))
            .where(BudgetCategory.id == planned_id, BudgetCategory.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def create_planned(self, user, month_id: int, category_id: int, amount: Decimal) -> BudgetCategory:
        owner = require_user(user)
        planned = BudgetCategory(
            user_id=owner.id,
            budget_month_id=month_id,
            category_id=category_id,
            planned_amount=amount,
        )
        self.session.add(planned)
        await self.session.flush()
        return await self.get_planned_by_id(owner.id, planned.id)

    async def update_planned(self, planned: BudgetCategory, amount: Decimal) -> BudgetCategory:
        planned.planned_amount = amount
        await self.session.flush()
        return await self.get_planned_by_id(planned.user_id, planned.id)

    async def delete_planned(self, planned: BudgetCategory) -> None:
        await self.session.delete(planned)
        await self.session.flush()

    # Fixed expenses

    async def list_fixed_expenses(self, user_id: int, month_id: int) -> List[FixedExpense]:
        """Fixed expenses by due day, undated ones last."""
        result = await self.session.execute(
            select(FixedExpense)
            .where(FixedExpense.user_id == user_id, FixedExpense.budget_month_id == month_id)
            .order_by(FixedExpense.due_day.is_(None), FixedExpense.due_day, FixedExpense.id)
        )
        return list(result.scalars().all())

    async def get_fixed_expense(self, user_id: int, expense_id: int) -> Optional[FixedExpense]:
        result = await self.session.execute(
            select(FixedExpense).where(FixedExpense.id == expense_id, FixedExpense.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def create_fixed_expense(self, user, month_id: int, expense: schemas.FixedExpenseCreate) -> FixedExpense:
        owner = require_user(user)
        db_expense = FixedExpense(user_id=owner.id, budget_month_id=month_id, **expense.model_dump())
        self.session.add(db_expense)
        await self.session.flush()
        await self.session.refresh(db_expense)
        return db_expense

    async def update_fixed_expense(self, db_expense: FixedExpense, changes: dict) -> FixedExpense:
        for field, value in changes.items():
            setattr(db_expense, field, value)
        await self.session.flush()
        await self.session.refresh(db_expense)
        return db_expense

    async def delete_fixed_expense(self, db_expense: FixedExpense) -> None:
        await self.session.delete(db_expense)
        await self.session.flush()
