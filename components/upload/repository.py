"""Repository for import batch operations."""

from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.security import require_user
from components.transaction.models import ImportSource
from components.upload.models import ImportBatch, ImportStatus


class ImportBatchRepository:
    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    async def list(self, user_id: int, limit: int = 50) -> List[ImportBatch]:
        result = await self.session.execute(
            select(ImportBatch)
            .where(ImportBatch.user_id == user_id)
            .order_by(ImportBatch.created_at.desc(), ImportBatch.id.desc())
            .limit(limit)
        )
        return list(result.scalars().all())

    async def get_by_id(self, user_id: int, batch_id: int) -> Optional[ImportBatch]:
        result = await self.session.execute(
            select(ImportBatch).where(ImportBatch.id == batch_id, ImportBatch.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_by_hash(self, user_id: int, file_hash: str) -> Optional[ImportBatch]:
        result = await self.session.execute(
            select(ImportBatch).where(ImportBatch.user_id == user_id, ImportBatch.file_hash == file_hash)
        )
        return result.scalar_one_or_none()

    async def create(self, user, file_hash: str, file_name: str, source_type: ImportSource) -> ImportBatch:
        """Add a processing batch; it is committed by ``save`` or ``finish``."""
        owner = require_user(user)
        batch = ImportBatch(
            user_id=owner.id,
            file_hash=file_hash,
            file_name=file_name,
            source_type=source_type,
            status=ImportStatus.processing,
        )
        self.session.add(batch)
        await self.session.flush()
        return batch

    async def save(self, batch: ImportBatch) -> ImportBatch:
        await self.session.commit()
        await self.session.refresh(batch)
        return batch

    async def finish(
        self,
        batch: ImportBatch,
        status: ImportStatus,
        transaction_count: int,
        error_message: Optional[str] = None,
    ) -> ImportBatch:
        batch.status = status
        batch.transaction_count = transaction_count
        batch.error_message = error_message
        await self.session.commit()
        await self.session.refresh(batch)
        return batch
