"""Review inbox: categorize transactions or flag them as internal transfers."""

from typing import Iterable, List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from components.audit.models import AuditAction
from components.audit.repository import AuditRepository, snapshot
from components.budget.repository import BudgetRepository
from components.category.repository import CategoryRepository
from components.core.exceptions import NotFoundError
from components.core.security import require_user
from components.core.utils import get_logger, utcnow
from components.transaction.models import Confidence, Transaction
from components.transaction.repository import TransactionRepository
from components.transaction.schemas import InboxFilter, TransactionCreate, TransactionRead

logger = get_logger("transaction.workflow")


def matches_filter(transaction, inbox_filter: InboxFilter) -> bool:
    if inbox_filter == InboxFilter.needs_review:
        return bool(transaction.needs_review)
    if inbox_filter == InboxFilter.internal:
        return bool(transaction.is_internal)
    return True


def filter_transactions(transactions: Iterable, inbox_filter: InboxFilter = InboxFilter.all) -> List:
    """Apply an inbox filter to rows that were already fetched."""
    return [tx for tx in transactions if matches_filter(tx, inbox_filter)]


class CategorizationWorkflow:
    """Reduces the household's needs-review inbox to zero."""

    def __init__(self, session: AsyncSession, user):
        self.user = user
        self.transactions = TransactionRepository(session)
        self.categories = CategoryRepository(session)
        self.budgets = BudgetRepository(session)
        self.audit = AuditRepository(session)

    @property
    def user_id(self) -> int:
        return require_user(self.user).id

    async def inbox(
        self,
        inbox_filter: InboxFilter = InboxFilter.all,
        budget_month_id: Optional[int] = None,
        limit: Optional[int] = None,
    ) -> List[Transaction]:
        rows = await self.transactions.list(self.user_id, budget_month_id=budget_month_id)
        rows = filter_transactions(rows, inbox_filter)
        return rows[:limit] if limit else rows

    async def get(self, transaction_id: int) -> Transaction:
        db_transaction = await self.transactions.get_by_id(self.user_id, transaction_id)
        if db_transaction is None:
            raise NotFoundError("Transaction", transaction_id)
        return db_transaction

    async def add(self, transaction: TransactionCreate) -> Transaction:
        if transaction.category_id is not None:
            await self._check_category(transaction.category_id)
        if transaction.budget_month_id is not None:
            await self._month(transaction.budget_month_id)
        db_transaction = await self.transactions.create(self.user, transaction)
        await self._record(db_transaction, AuditAction.create, new_values=snapshot(db_transaction, TransactionRead))
        return db_transaction

    async def categorize(
        self,
        transaction_id: int,
        category_id: int,
        confidence: Confidence = Confidence.high,
    ) -> Transaction:
        db_transaction = await self.get(transaction_id)
        await self._check_category(category_id)
        return await self._apply(db_transaction, {
            "category_id": category_id,
            "confidence": confidence,
            "needs_review": False,
            "reviewed_at": utcnow(),
        })

    async def mark_internal(self, transaction_id: int) -> Transaction:
        db_transaction = await self.get(transaction_id)
        return await self._apply(db_transaction, {
            "is_internal": True,
            "needs_review": False,
            "reviewed_at": utcnow(),
        })

    async def update(self, transaction_id: int, changes: dict) -> Transaction:
        """Generic edit; re-derives needs_review when category or internal flag change."""
        db_transaction = await self.get(transaction_id)
        if changes.get("category_id") is not None:
            await self._check_category(changes["category_id"])
        if changes.get("budget_month_id") is not None:
            await self._month(changes["budget_month_id"])

        if "category_id" in changes or "is_internal" in changes:
            category_id = changes.get("category_id", db_transaction.category_id)
            is_internal = changes.get("is_internal", db_transaction.is_internal)
            resolved = category_id is not None or bool(is_internal)
            changes["needs_review"] = not resolved
            if resolved and db_transaction.needs_review:
                changes["reviewed_at"] = utcnow()
        return await self._apply(db_transaction, changes)

    async def delete(self, transaction_id: int) -> None:
        db_transaction = await self.get(transaction_id)
        old_values = snapshot(db_transaction, TransactionRead)
        await self.transactions.delete(db_transaction)
        await self._record(db_transaction, AuditAction.delete, old_values=old_values)

    async def _apply(self, db_transaction: Transaction, changes: dict) -> Transaction:
        old_values = snapshot(db_transaction, TransactionRead)
        db_transaction = await self.transactions.update(db_transaction, changes)
        await self._record(
            db_transaction, AuditAction.update,
            old_values=old_values, new_values=snapshot(db_transaction, TransactionRead),
        )
        logger.info(
            f"Transaction {db_transaction.id} updated: category={db_transaction.category_id} "
            f"internal={db_transaction.is_internal} needs_review={db_transaction.needs_review}"
        )
        return db_transaction

    async def _record(self, db_transaction: Transaction, action: AuditAction, **values) -> None:
        budget_month = None
        if db_transaction.budget_month_id is not None:
            budget_month = await self.budgets.get_month(self.user_id, db_transaction.budget_month_id)
        await self.audit.record(self.user_id, "transaction", db_transaction.id, action, budget_month, **values)

    async def _check_category(self, category_id: int) -> None:
        if await self.categories.get_by_id(self.user_id, category_id) is None:
            raise NotFoundError("Category", category_id)

    async def _month(self, month_id: int) -> None:
        if await self.budgets.get_month(self.user_id, month_id) is None:
            raise NotFoundError("Budget month", month_id)
