"""Credit card model for the database."""

from sqlalchemy import Boolean, Column, Numeric, String

from components.core.database import Base, OwnedMixin


class CreditCard(OwnedMixin, Base):
    """Household credit card with its monthly budget limit."""
    __tablename__ = "credit_cards"

    name = Column(String(100), nullable=False)
    last_four = Column(String(4), nullable=True)
    total_limit = Column(Numeric(12, 2), nullable=False, default=0)
    budget_limit = Column(Numeric(12, 2), nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
