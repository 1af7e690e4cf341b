"""Transaction model for the database."""

import enum

from sqlalchemy import Boolean, Column, Date, DateTime, Enum, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import relationship

from components.core.database import Base, OwnedMixin, TimestampMixin

MERCHANT_MAX_LENGTH = 255


class Confidence(str, enum.Enum):
    high = "high"
    medium = "medium"
    low = "low"


class ImportSource(str, enum.Enum):
    ofx = "ofx"
    print = "print"
    manual = "manual"


class Transaction(OwnedMixin, TimestampMixin, Base):
    """A single financial movement; negative amounts are outflows."""
    __tablename__ = "transactions"

    amount = Column(Numeric(12, 2), nullable=False)
    merchant = Column(String(MERCHANT_MAX_LENGTH), nullable=False)
    transaction_date = Column(Date, nullable=False, index=True)
    category_id = Column(Integer, ForeignKey("categories.id"), nullable=True)
    confidence = Column(Enum(Confidence, name="confidence_level"), nullable=False, default=Confidence.low)
    needs_review = Column(Boolean, nullable=False, default=True)
    is_internal = Column(Boolean, nullable=False, default=False)
    source = Column(Enum(ImportSource, name="import_source"), nullable=False, default=ImportSource.manual)
    external_id = Column(String(100), nullable=True)
    budget_month_id = Column(Integer, ForeignKey("budget_months.id"), nullable=True, index=True)
    import_batch_id = Column(Integer, ForeignKey("import_batches.id"), nullable=True, index=True)
    reviewed_at = Column(DateTime(timezone=True), nullable=True)

    category = relationship("Category", back_populates="transactions")
    budget_month = relationship("BudgetMonth")
    import_batch = relationship("ImportBatch", back_populates="transactions")

    @property
    def is_resolved(self) -> bool:
        return self.category_id is not None or bool(self.is_internal)
