"""Audit log model for the database."""

import enum

from sqlalchemy import Boolean, Column, Enum, Integer, JSON, String

from components.core.database import Base, OwnedMixin


class AuditAction(str, enum.Enum):
    create = "create"
    update = "update"
    delete = "delete"


class AuditLog(OwnedMixin, Base):
    """One write to a budget line item or transaction."""
    __tablename__ = "audit_log"

    entity_type = Column(String(50), nullable=False)
    entity_id = Column(Integer, nullable=False)
    action = Column(Enum(AuditAction, name="audit_action"), nullable=False)
    old_values = Column(JSON, nullable=True)
    new_values = Column(JSON, nullable=True)
    edited_after_close = Column(Boolean, nullable=False, default=False)
