from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict

from components.audit.models import AuditAction


class AuditLogRead(BaseModel):
    id: int
    entity_type: str
    entity_id: int
    action: AuditAction
    old_values: Optional[Dict[str, Any]] = None
    new_values: Optional[Dict[str, Any]] = None
    edited_after_close: bool
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
