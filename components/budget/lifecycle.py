"""Budget lifecycle controller: clone, edit and close the current month."""

from datetime import date
from decimal import Decimal
from typing import Iterable, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from components.audit.models import AuditAction
from components.audit.repository import AuditRepository, snapshot
from components.budget.models import BudgetCategory, BudgetMonth, FixedExpense
from components.budget.repository import BudgetRepository
from components.budget import schemas
from components.budget.schemas import LifecycleStep
from components.card.repository import CreditCardRepository
from components.category.repository import CategoryRepository
from components.core.exceptions import InvalidTransitionError, NotFoundError
from components.core.security import require_user
from components.core.utils import get_logger

logger = get_logger("budget.lifecycle")

ZERO = Decimal("0")


def derive_step(budget_month: Optional[BudgetMonth], category_count: int) -> LifecycleStep:
    """Recompute the ritual step from persisted state alone."""
    if budget_month is None:
        return LifecycleStep.clone
    if budget_month.is_closed:
        return LifecycleStep.closed
    if category_count > 0:
        return LifecycleStep.edit
    return LifecycleStep.clone


def has_prior_month(months: Iterable, year: int, month: int) -> bool:
    """True if any month sorts before (year, month)."""
    return any((m.year, m.month) < (year, month) for m in months)


class BudgetLifecycle:
    """Drives the Day 1 ritual for one household."""

    def __init__(self, session: AsyncSession, user):
        self.session = session
        self.user = user
        self.budgets = BudgetRepository(session)
        self.categories = CategoryRepository(session)
        self.cards = CreditCardRepository(session)
        self.audit = AuditRepository(session)

    @property
    def user_id(self) -> int:
        return require_user(self.user).id

    async def _month(self, month_id: int) -> BudgetMonth:
        budget_month = await self.budgets.get_month(self.user_id, month_id)
        if budget_month is None:
            raise NotFoundError("Budget month", month_id)
        return budget_month

    async def load(self, today: Optional[date] = None) -> schemas.BudgetState:
        """State of the current calendar month, including the derived step."""
        today = today or date.today()
        months = await self.budgets.list_months(self.user_id)
        budget_month = await self.budgets.get_by_period(self.user_id, today.year, today.month)

        state = schemas.BudgetState(
            year=today.year,
            month=today.month,
            step=LifecycleStep.clone,
            has_prior_month=has_prior_month(months, today.year, today.month),
        )
        if budget_month is None:
            return state

        planned = await self.budgets.list_categories(self.user_id, budget_month.id)
        expenses = await self.budgets.list_fixed_expenses(self.user_id, budget_month.id)
        state.step = derive_step(budget_month, len(planned))
        state.budget_month = schemas.BudgetMonthRead.model_validate(budget_month)
        state.categories = [schemas.BudgetCategoryRead.model_validate(p) for p in planned]
        state.fixed_expenses = [schemas.FixedExpenseRead.model_validate(e) for e in expenses]
        state.summary = await self._summarize(planned, expenses)
        return state

    async def clone(self, today: Optional[date] = None) -> BudgetMonth:
        """
        Leave the clone step for the current month.

        Copies the most recent earlier month when one exists, otherwise
        creates an empty draft. The decision reads the store directly,
        never the cached month list.
        """
        today = today or date.today()
        user = require_user(self.user)
        source = await self.budgets.get_latest_before(user.id, today.year, today.month)

        if source is not None:
            month_id = await self.budgets.clone_previous_month(user, today.year, today.month)
            return await self._month(month_id)

        existing = await self.budgets.get_by_period(user.id, today.year, today.month)
        if existing is not None:
            if existing.is_closed:
                raise InvalidTransitionError(f"Budget month {existing.id} is already closed")
            return existing
        logger.info(f"No prior month for user {user.id}; creating empty draft {today.year}-{today.month:02d}")
        return await self.budgets.create_month(user, today.year, today.month)

    async def create_month(self, year: int, month: int) -> BudgetMonth:
        return await self.budgets.create_month(require_user(self.user), year, month)

    async def set_planned_amount(self, month_id: int, category_id: int, amount: Decimal) -> BudgetCategory:
        """
        Create the plan line for the category, or update it by id.

        When the other partner inserts the same line first, the insert is
        rolled back and their row is updated instead (last write wins).
        """
        user_id = self.user_id
        budget_month = await self._month(month_id)
        if await self.categories.get_by_id(user_id, category_id) is None:
            raise NotFoundError("Category", category_id)

        planned = await self.budgets.get_planned(user_id, month_id, category_id)
        if planned is None:
            try:
                planned = await self.budgets.create_planned(self.user, month_id, category_id, amount)
            except IntegrityError:
                await self.session.rollback()
                budget_month = await self.budgets.get_month(user_id, month_id)
                planned = await self.budgets.get_planned(user_id, month_id, category_id)
                if budget_month is None or planned is None:
                    raise
                logger.info(f"Plan line for category {category_id} in month {month_id} was created concurrently")
            else:
                await self.audit.record(
                    user_id, "budget_category", planned.id, AuditAction.create, budget_month,
                    new_values=snapshot(planned, schemas.BudgetCategoryRead),
                )
                return planned

        old_values = snapshot(planned, schemas.BudgetCategoryRead)
        planned = await self.budgets.update_planned(planned, amount)
        await self.audit.record(
            user_id, "budget_category", planned.id, AuditAction.update, budget_month,
            old_values=old_values, new_values=snapshot(planned, schemas.BudgetCategoryRead),
        )
        return planned

    async def remove_planned(self, planned_id: int) -> None:
        planned = await self.budgets.get_planned_by_id(self.user_id, planned_id)
        if planned is None:
            raise NotFoundError("Budget category", planned_id)
        budget_month = await self._month(planned.budget_month_id)
        old_values = snapshot(planned, schemas.BudgetCategoryRead)
        await self.budgets.delete_planned(planned)
        await self.audit.record(
            self.user_id, "budget_category", planned_id, AuditAction.delete, budget_month,
            old_values=old_values,
        )

    async def add_fixed_expense(self, month_id: int, expense: schemas.FixedExpenseCreate) -> FixedExpense:
        budget_month = await self._month(month_id)
        db_expense = await self.budgets.create_fixed_expense(self.user, month_id, expense)
        await self.audit.record(
            self.user_id, "fixed_expense", db_expense.id, AuditAction.create, budget_month,
            new_values=snapshot(db_expense, schemas.FixedExpenseRead),
        )
        return db_expense

    async def update_fixed_expense(self, expense_id: int, changes: dict) -> FixedExpense:
        db_expense = await self.budgets.get_fixed_expense(self.user_id, expense_id)
        if db_expense is None:
            raise NotFoundError("Fixed expense", expense_id)
        budget_month = await self._month(db_expense.budget_month_id)
        old_values = snapshot(db_expense, schemas.FixedExpenseRead)
        db_expense = await self.budgets.update_fixed_expense(db_expense, changes)
        await self.audit.record(
            self.user_id, "fixed_expense", expense_id, AuditAction.update, budget_month,
            old_values=old_values, new_values=snapshot(db_expense, schemas.FixedExpenseRead),
        )
        return db_expense

    async def delete_fixed_expense(self, expense_id: int) -> None:
        db_expense = await self.budgets.get_fixed_expense(self.user_id, expense_id)
        if db_expense is None:
            raise NotFoundError("Fixed expense", expense_id)
        budget_month = await self._month(db_expense.budget_month_id)
        old_values = snapshot(db_expense, schemas.FixedExpenseRead)
        await self.budgets.delete_fixed_expense(db_expense)
        await self.audit.record(
            self.user_id, "fixed_expense", expense_id, AuditAction.delete, budget_month,
            old_values=old_values,
        )

    async def summary(self, month_id: int) -> schemas.CloseSummary:
        await self._month(month_id)
        planned = await self.budgets.list_categories(self.user_id, month_id)
        expenses = await self.budgets.list_fixed_expenses(self.user_id, month_id)
        return await self._summarize(planned, expenses)

    async def _summarize(self, planned, expenses) -> schemas.CloseSummary:
        cards = await self.cards.list(self.user_id)
        return schemas.CloseSummary(
            total_planned=sum((p.planned_amount for p in planned), ZERO),
            total_fixed=sum((e.amount for e in expenses), ZERO),
            total_card_budget=sum((c.budget_limit for c in cards), ZERO),
            category_count=len(planned),
            fixed_expense_count=len(expenses),
        )

    async def close(self, month_id: int, confirm: bool) -> BudgetMonth:
        """Close the month; irreversible, so the caller must confirm."""
        if not confirm:
            raise InvalidTransitionError("Closing a budget month must be confirmed")
        budget_month = await self.budgets.close_month(self.user_id, month_id)
        logger.info(f"Closed budget month {budget_month.year}-{budget_month.month:02d} for user {self.user_id}")
        return budget_month
