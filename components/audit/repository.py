"""Repository for the audit trail of budget and transaction writes."""

from typing import List, Optional, Type

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from components.audit.models import AuditAction, AuditLog
from components.budget.models import BudgetMonth


def snapshot(row, schema: Type[BaseModel]) -> dict:
    """JSON-safe column values of a row, without embedded relations."""
    return schema.model_validate(row).model_dump(mode="json", exclude={"category"})


class AuditRepository:
    """Repository for audit log operations."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    async def record(
        self,
        user_id: int,
        entity_type: str,
        entity_id: int,
        action: AuditAction,
        budget_month: Optional[BudgetMonth] = None,
        old_values: Optional[dict] = None,
        new_values: Optional[dict] = None,
    ) -> AuditLog:
        """
        Add one audit entry and commit it with the flushed change it describes.

        The change and its entry land together or not at all. Writes into a
        closed month are flagged.
        """
        entry = AuditLog(
            user_id=user_id,
            entity_type=entity_type,
            entity_id=entity_id,
            action=action,
            old_values=old_values,
            new_values=new_values,
            edited_after_close=budget_month is not None and budget_month.is_closed,
        )
        self.session.add(entry)
        await self.session.commit()
        return entry

    async def list(
        self,
        user_id: int,
        edited_after_close: Optional[bool] = None,
        limit: int = 100,
    ) -> List[AuditLog]:
        query = select(AuditLog).where(AuditLog.user_id == user_id)
        if edited_after_close is not None:
            query = query.where(AuditLog.edited_after_close.is_(edited_after_close))
        query = query.order_by(AuditLog.created_at.desc(), AuditLog.id.desc()).limit(limit)
        result = await self.session.execute(query)
        return list(result.scalars().all())
