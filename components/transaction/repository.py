"""Repository for transaction operations."""

from typing import List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from components.budget.repository import BudgetRepository
from components.core.security import require_user
from components.transaction.models import Transaction
from components.transaction.schemas import TransactionCreate


class TransactionRepository:
    """Repository for transaction operations.

    Writes are flushed, not committed: the caller commits them with the
    audit entry or import batch they belong to.
    """

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    async def list(
        self,
        user_id: int,
        budget_month_id: Optional[int] = None,
        is_internal: Optional[bool] = None,
        limit: Optional[int] = None,
    ) -> List[Transaction]:
        """Transactions newest first, with their category embedded."""
        query = (
            select(Transaction)
            .options(selectinload(Transaction.category))
            .where(Transaction.user_id == user_id)
        )
        if budget_month_id is not None:
            query = query.where(Transaction.budget_month_id == budget_month_id)
        if is_internal is not None:
            query = query.where(Transaction.is_internal.is_(is_internal))
        query = query.order_by(Transaction.transaction_date.desc(), Transaction.id.desc())
        if limit:
            query = query.limit(limit)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def get_by_id(self, user_id: int, transaction_id: int) -> Optional[Transaction]:
        result = await self.session.execute(
            select(Transaction)
            .options(selectinload(Transaction.category))
            .where(Transaction.id == transaction_id, Transaction.user_id == user_id)
            .execution_options(populate_existing=True)
        )
        return result.scalar_one_or_none()

    async def create(self, user, transaction: TransactionCreate) -> Transaction:
        """
        Insert a transaction.

        needs_review is derived from the row: it stays set until the
        transaction has a category or is marked internal. Without an explicit
        budget month the row joins the month of its transaction_date.
        """
        owner = require_user(user)
        values = transaction.model_dump()
        if values["budget_month_id"] is None:
            tx_date = values["transaction_date"]
            budget_month = await BudgetRepository(self.session).get_by_period(owner.id, tx_date.year, tx_date.month)
            if budget_month is not None:
                values["budget_month_id"] = budget_month.id

        db_transaction = Transaction(user_id=owner.id, **values)
        db_transaction.needs_review = not db_transaction.is_resolved
        self.session.add(db_transaction)
        await self.session.flush()
        return await self.get_by_id(owner.id, db_transaction.id)

    async def add_all(self, user, transactions: List[TransactionCreate]) -> int:
        """Bulk insert used by imports; returns the number of rows flushed."""
        owner = require_user(user)
        for transaction in transactions:
            db_transaction = Transaction(user_id=owner.id, **transaction.model_dump())
            db_transaction.needs_review = not db_transaction.is_resolved
            self.session.add(db_transaction)
        await self.session.flush()
        return len(transactions)

    async def update(self, db_transaction: Transaction, changes: dict) -> Transaction:
        for field, value in changes.items():
            setattr(db_transaction, field, value)
        await self.session.flush()
        return await self.get_by_id(db_transaction.user_id, db_transaction.id)

    async def delete(self, db_transaction: Transaction) -> None:
        await self.session.delete(db_transaction)
        await self.session.flush()

    async def count_for_batch(self, user_id: int, batch_id: int) -> int:
        result = await self.session.execute(
            select(func.count(Transaction.id)).where(
                Transaction.user_id == user_id,
                Transaction.import_batch_id == batch_id,
            )
        )
        return result.scalar() or 0

    async def count_pending(self, user_id: int, budget_month_id: int) -> int:
        result = await self.session.execute(
            select(func.count(Transaction.id)).where(
                Transaction.user_id == user_id,
                Transaction.budget_month_id == budget_month_id,
                Transaction.needs_review.is_(True),
            )
        )
        return result.scalar() or 0
