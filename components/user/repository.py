"""Repository for user operations."""

from datetime import date
from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from components.user.models import AppRole, User, UserRole
from components.user.schemas import ProfileUpdate, UserCreate
from components.core.security import get_password_hash


class UserRepository:
    """Repository for user operations."""

    def __init__(self, session: AsyncSession):
        """Initialize repository with database session."""
        self.session = session

    async def create(self, user: UserCreate, role: AppRole = AppRole.user) -> User:
        """Create a new household account and grant it a role."""
        db_user = User(
            login=user.login,
            password=get_password_hash(user.password),
            display_name=user.display_name,
            partner_name=user.partner_name,
            email=user.email,
            registration_date=date.today(),
        )
        self.session.add(db_user)
        await self.session.flush()
        self.session.add(UserRole(user_id=db_user.id, role=role))
        await self.session.commit()
        await self.session.refresh(db_user)
        return db_user

    async def get_by_id(self, user_id: int) -> Optional[User]:
        """Get user by ID."""
        result = await self.session.execute(
            select(User).where(User.id == user_id)
        )
        return result.scalar_one_or_none()

    async def get_by_login(self, login: str) -> Optional[User]:
        """Get user by login."""
        result = await self.session.execute(
            select(User).where(User.login == login)
        )
        return result.scalar_one_or_none()

    async def get_all(self, skip: int = 0, limit: int = 100) -> List[User]:
        query = select(User).order_by(User.id).offset(skip).limit(limit)
        result = await self.session.execute(query)
        return list(result.scalars().all())

    async def update_profile(self, user_id: int, profile: ProfileUpdate) -> Optional[User]:
        """Update the profile fields that were sent."""
        db_user = await self.get_by_id(user_id)
        if not db_user:
            return None

        changes = profile.model_dump(exclude_unset=True)
        password = changes.pop("password", None)
        for field, value in changes.items():
            setattr(db_user, field, value)
        if password:
            db_user.password = get_password_hash(password)

        await self.session.commit()
        await self.session.refresh(db_user)
        return db_user

    async def exists(self, login: str) -> bool:
        """Check if user with given login exists."""
        result = await self.session.execute(
            select(User.id).where(User.login == login)
        )
        return result.scalar_one_or_none() is not None

    async def has_role(self, user_id: int, role: AppRole) -> bool:
        """Authorization check against user_roles."""
        result = await self.session.execute(
            select(UserRole.id).where(UserRole.user_id == user_id, UserRole.role == role)
        )
        return result.first() is not None

    async def grant_role(self, user_id: int, role: AppRole) -> None:
        if await self.has_role(user_id, role):
            return
        self.session.add(UserRole(user_id=user_id, role=role))
        await self.session.commit()
