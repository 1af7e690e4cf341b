"""Builds reports from freshly fetched rows of one budget month."""

from sqlalchemy.ext.asyncio import AsyncSession

from components.budget.repository import BudgetRepository
from components.core.exceptions import NotFoundError
from components.report import aggregator
from components.report import schemas
from components.transaction.repository import TransactionRepository
from components.transaction.schemas import TransactionRead


class ReportService:
    """Service for plan performance reports."""

    def __init__(self, session: AsyncSession):
        self.budgets = BudgetRepository(session)
        self.transactions = TransactionRepository(session)

    async def _month(self, user_id: int, month_id: int):
        budget_month = await self.budgets.get_month(user_id, month_id)
        if budget_month is None:
            raise NotFoundError("Budget month", month_id)
        return budget_month

    async def get_month_report(self, user_id: int, month_id: int) -> schemas.MonthReport:
        """
        Planned vs actual for every category of the month.

        Internal transfers never count as spending.
        """
        budget_month = await self._month(user_id, month_id)
        planned = await self.budgets.list_categories(user_id, month_id)
        spent = await self.transactions.list(user_id, budget_month_id=month_id, is_internal=False)

        lines = aggregator.build_report(planned, spent)
        return schemas.MonthReport(
            budget_month_id=budget_month.id,
            year=budget_month.year,
            month=budget_month.month,
            categories=[
                schemas.CategoryPerformance(
                    category=schemas.CategoryLabel.model_validate(line.label),
                    planned=line.planned,
                    actual=line.actual,
                    is_over=line.is_over,
                    transactions=[TransactionRead.model_validate(tx) for tx in line.transactions],
                )
                for line in lines
            ],
            totals=schemas.ReportTotals.model_validate(aggregator.report_totals(lines)),
        )

    async def get_category_breakdown(self, user_id: int, month_id: int) -> schemas.CategoryBreakdown:
        await self._month(user_id, month_id)
        spent = await self.transactions.list(user_id, budget_month_id=month_id, is_internal=False)
        groups = aggregator.category_breakdown(spent)
        return schemas.CategoryBreakdown(
            budget_month_id=month_id,
            groups=[
                schemas.CategorySpend(
                    category=schemas.CategoryLabel.model_validate(group.label),
                    total=group.total,
                    transactions=[TransactionRead.model_validate(tx) for tx in group.transactions],
                )
                for group in groups
            ],
            total_actual=sum((group.total for group in groups), aggregator.ZERO),
            pending_review_count=await self.transactions.count_pending(user_id, month_id),
        )
