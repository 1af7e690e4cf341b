"""Category model for the database."""

from sqlalchemy import Boolean, Column, Integer, String
from sqlalchemy.orm import relationship

from components.core.database import Base, OwnedMixin

DEFAULT_ICON = "circle-dot"
DEFAULT_COLOR = "bg-gray-500"


class Category(OwnedMixin, Base):
    """Spending label; deactivated rather than deleted while referenced."""
    __tablename__ = "categories"

    name = Column(String(100), nullable=False)
    icon = Column(String(50), nullable=False, default=DEFAULT_ICON)
    color = Column(String(50), nullable=False, default=DEFAULT_COLOR)
    sort_order = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)

    budget_categories = relationship("BudgetCategory", back_populates="category")
    transactions = relationship("Transaction", back_populates="category")
