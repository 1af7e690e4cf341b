"""User model for the database."""

import enum

from sqlalchemy import Column, Integer, String, Date, DateTime, Enum, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from components.core.database import Base
from components.core.utils import utcnow


class AppRole(str, enum.Enum):
    admin = "admin"
    user = "user"


class User(Base):
    """Household account; one login shared by both partners."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    login = Column(String(50), unique=True, nullable=False)
    password = Column(String(255), nullable=False)  # Hashed password
    display_name = Column(String(100), nullable=True)
    partner_name = Column(String(100), nullable=True)
    email = Column(String(255), nullable=True)
    registration_date = Column(Date, nullable=False)

    roles = relationship("UserRole", back_populates="user", cascade="all, delete-orphan")


class UserRole(Base):
    """Role granted to a household account."""
    __tablename__ = "user_roles"
    __table_args__ = (UniqueConstraint("user_id", "role", name="uq_user_roles_user_role"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    role = Column(Enum(AppRole, name="app_role"), nullable=False, default=AppRole.user)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)

    user = relationship("User", back_populates="roles")
