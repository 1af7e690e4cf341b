"""Helpers shared by the endpoint modules."""

from contextlib import asynccontextmanager

from fastapi import HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from components.core.exceptions import BudgetAppError, NotFoundError
from components.core.utils import get_logger

logger = get_logger("api")


@asynccontextmanager
async def action_errors(db: AsyncSession, action: str):
    """
    Report a failed action the same way whatever went wrong.

    Missing rows are a 404; authentication, lifecycle and store failures
    all become one generic 400 for the action. The session is rolled back
    so the caller can retry.
    """
    try:
        yield
    except NotFoundError as exc:
        await db.rollback()
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc)) from exc
    except (BudgetAppError, SQLAlchemyError) as exc:
        await db.rollback()
        logger.exception(f"Action '{action}' failed")
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Could not complete action: {action}",
        ) from exc
