"""Statement import endpoints."""

from typing import List
from fastapi import APIRouter, Depends, File, Form, UploadFile
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.init_db import get_db
from components.transaction.models import ImportSource
from components.upload.repository import ImportBatchRepository
from components.upload.service import ImportService
from components.upload import schemas
from components.user.models import User
from restapi.endpoints.auth import get_current_user
from restapi.endpoints.helpers import action_errors

router = APIRouter(
    prefix="/imports",
    tags=["imports"],
    responses={404: {"description": "Not found"}},
)


@router.post("/", response_model=schemas.ImportResult)
async def upload_statement(
    file: UploadFile = File(...),
    source_type: ImportSource = Form(ImportSource.manual),
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """
    Upload a statement file.

    A file that was uploaded before is not processed again; the earlier
    batch is returned with ``duplicate`` set.

    Manual CSV files must have the following columns:
    - date: YYYY-MM-DD, DD.MM.YYYY or DD/MM/YYYY
    - merchant: cannot be empty
    - amount: decimal number

    OFX files and card-statement prints stay in ``processing`` until the
    external parser finishes them.
    """
    content = await file.read()
    async with action_errors(db, "import file"):
        batch, duplicate = await ImportService(db, current_user).register(file.filename, content, source_type)
    return schemas.ImportResult(
        **schemas.ImportBatchRead.model_validate(batch).model_dump(),
        duplicate=duplicate,
    )


@router.get("/", response_model=List[schemas.ImportBatchRead])
async def list_imports(
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    return await ImportBatchRepository(db).list(current_user.id)


@router.patch("/{batch_id}", response_model=schemas.ImportBatchRead)
async def finish_import(
    batch_id: int,
    body: schemas.ImportBatchFinish,
    db: AsyncSession = Depends(get_db),
    current_user: User = Depends(get_current_user)
):
    """Mark a batch completed or failed once its transactions are stored."""
    async with action_errors(db, "finish import"):
        return await ImportService(db, current_user).finish(batch_id, body.status, body.error_message)
