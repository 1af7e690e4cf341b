from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from components.transaction.models import ImportSource
from components.upload.models import ImportStatus


class ImportBatchRead(BaseModel):
    id: int
    file_hash: str
    file_name: str
    source_type: ImportSource
    status: ImportStatus
    transaction_count: int
    error_message: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ImportResult(ImportBatchRead):
    duplicate: bool = False


class ImportBatchFinish(BaseModel):
    """Sent by the external parser when it is done with a batch."""
    status: ImportStatus
    error_message: Optional[str] = None
