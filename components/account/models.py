"""Bank account model for the database."""

from sqlalchemy import Boolean, Column, String

from components.core.database import Base, OwnedMixin


class BankAccount(OwnedMixin, Base):
    __tablename__ = "bank_accounts"

    name = Column(String(100), nullable=False)
    bank_name = Column(String(100), nullable=False)
    agency = Column(String(20), nullable=True)
    account_number = Column(String(30), nullable=True)
    is_active = Column(Boolean, nullable=False, default=True)
