"""Audit log endpoints."""

from typing import List, Optional
from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.init_db import get_db
from components.audit.repository import AuditRepository
from components.audit import schemas
from components.user.models import User
from restapi.endpoints.auth import get_current_user

router = APIRouter(
    prefix="/audit-log",
    tags=["audit"],
)


@router.get("/", response_model=List[schemas.AuditLogRead])
async def list_audit_log(
    edited_after_close: Optional[bool] = Query(None, description="Only edits made after the month was closed"),
    limit: int = Query(100, ge=1, le=500),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return await AuditRepository(db).list(current_user.id, edited_after_close, limit)
