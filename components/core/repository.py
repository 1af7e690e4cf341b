"""Base repository for soft-deleted reference entities."""

from typing import Any, List, Optional, Type

from pydantic import BaseModel
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.cache import query_cache
from components.core.security import require_user


class SoftDeleteRepository:
    """CRUD for rows that are deactivated instead of deleted.

    Subclasses set ``model``, ``read_schema``, ``group`` (the cache query
    group) and ``order_column``, the name of the column listings sort on.
    """

    model: Any = None
    read_schema: Type[BaseModel] = None
    group: str = ""
    order_column: str = "id"

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    async def list(self, user_id: int, only_active: bool = True) -> List[BaseModel]:
        """List the household's rows, active ones only unless asked otherwise."""

        async def load() -> List[BaseModel]:
            query = select(self.model).where(self.model.user_id == user_id)
            if only_active:
                query = query.where(self.model.is_active.is_(True))
            query = query.order_by(getattr(self.model, self.order_column), self.model.id)
            result = await self.session.execute(query)
            return [self.read_schema.model_validate(row) for row in result.scalars().all()]

        return await query_cache.get_or_load(self.group, user_id, ("only_active", only_active), load)

    async def get_by_id(self, user_id: int, entity_id: int) -> Optional[Any]:
        result = await self.session.execute(
            select(self.model).where(self.model.id == entity_id, self.model.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def create(self, user, data: BaseModel) -> Any:
        owner = require_user(user)
        row = self.model(**data.model_dump(), user_id=owner.id)
        self.session.add(row)
        await self.session.commit()
        await self.session.refresh(row)
        query_cache.invalidate(self.group, owner.id)
        return row

    async def update(self, user_id: int, entity_id: int, data: BaseModel) -> Optional[Any]:
        row = await self.get_by_id(user_id, entity_id)
        if row is None:
            return None
        for field, value in data.model_dump(exclude_unset=True).items():
            setattr(row, field, value)
        await self.session.commit()
        await self.session.refresh(row)
        query_cache.invalidate(self.group, user_id)
        return row

    async def soft_delete(self, user_id: int, entity_id: int) -> bool:
        row = await self.get_by_id(user_id, entity_id)
        if row is None:
            return False
        row.is_active = False
        await self.session.commit()
        query_cache.invalidate(self.group, user_id)
        return True
