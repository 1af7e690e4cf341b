"""Import batch model for the database."""

import enum

from sqlalchemy import Column, Enum, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import relationship

from components.core.database import Base, OwnedMixin
from components.transaction.models import ImportSource


class ImportStatus(str, enum.Enum):
    processing = "processing"
    completed = "completed"
    failed = "failed"


class ImportBatch(OwnedMixin, Base):
    """One file-import run; file_hash makes re-imports idempotent."""
    __tablename__ = "import_batches"
    __table_args__ = (UniqueConstraint("user_id", "file_hash", name="uq_import_batches_user_hash"),)

    file_hash = Column(String(64), nullable=False, index=True)
    file_name = Column(String(255), nullable=False)
    source_type = Column(Enum(ImportSource, name="import_source"), nullable=False)
    status = Column(Enum(ImportStatus, name="import_status"), nullable=False, default=ImportStatus.processing)
    transaction_count = Column(Integer, nullable=False, default=0)
    error_message = Column(Text, nullable=True)

    transactions = relationship("Transaction", back_populates="import_batch")
