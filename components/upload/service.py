"""File imports: duplicate detection by content hash and manual CSV parsing."""

import hashlib
import io
from datetime import date, datetime
from decimal import Decimal, InvalidOperation
from typing import Dict, List, Optional, Tuple

import pandas as pd
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from components.budget.repository import BudgetRepository
from components.core.exceptions import NotFoundError
from components.core.security import require_user
from components.core.utils import get_logger
from components.transaction.models import MERCHANT_MAX_LENGTH, Confidence, ImportSource
from components.transaction.repository import TransactionRepository
from components.transaction.schemas import TransactionCreate
from components.upload.models import ImportBatch, ImportStatus
from components.upload.repository import ImportBatchRepository

logger = get_logger("upload")

REQUIRED_COLUMNS = ("date", "merchant", "amount")
DATE_FORMATS = ("%Y-%m-%d", "%d.%m.%Y", "%d/%m/%Y")


def file_hash(content: bytes) -> str:
    return hashlib.sha256(content).hexdigest()


def parse_date(value: str) -> Optional[date]:
    """Parse ISO, DD.MM.YYYY or DD/MM/YYYY dates."""
    for fmt in DATE_FORMATS:
        try:
            return datetime.strptime(value.strip(), fmt).date()
        except ValueError:
            continue
    return None


def parse_manual_csv(content: bytes) -> Tuple[List[dict], List[str]]:
    """
    Read a manual CSV export with date, merchant and amount columns.

    Every row is validated before anything is returned; the second element
    lists the problems found, one message per bad row.
    """
    try:
        frame = pd.read_csv(io.BytesIO(content), dtype=str, keep_default_na=False)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as exc:
        return [], [f"Could not read CSV: {exc}"]

    frame.columns = [str(column).strip().lower() for column in frame.columns]
    missing = [column for column in REQUIRED_COLUMNS if column not in frame.columns]
    if missing:
        return [], [f"CSV file must contain {', '.join(REQUIRED_COLUMNS)} columns (missing {', '.join(missing)})"]

    rows, errors = [], []
    for row_num, record in enumerate(frame.to_dict(orient="records"), start=2):  # header is row 1
        tx_date = parse_date(record["date"])
        if tx_date is None:
            errors.append(f"Row {row_num}: invalid date '{record['date']}'")
            continue
        merchant = record["merchant"].strip()
        if not merchant:
            errors.append(f"Row {row_num}: merchant cannot be empty")
            continue
        if len(merchant) > MERCHANT_MAX_LENGTH:
            errors.append(f"Row {row_num}: merchant is longer than {MERCHANT_MAX_LENGTH} characters")
            continue
        try:
            amount = Decimal(record["amount"].strip())
        except InvalidOperation:
            errors.append(f"Row {row_num}: invalid amount '{record['amount']}'")
            continue
        rows.append({"transaction_date": tx_date, "merchant": merchant, "amount": amount})
    return rows, errors


class ImportService:
    """Registers uploaded files and turns manual CSVs into transactions."""

    def __init__(self, session: AsyncSession, user):
        self.user = user
        self.batches = ImportBatchRepository(session)
        self.transactions = TransactionRepository(session)
        self.budgets = BudgetRepository(session)

    async def register(self, file_name: str, content: bytes, source_type: ImportSource) -> Tuple[ImportBatch, bool]:
        """
        Record an uploaded file. Returns the batch and whether it was a duplicate.

        Identical content is never processed twice: the existing batch is
        returned instead. A manual batch is committed together with its
        transactions, so an interrupted import leaves nothing behind.
        """
        owner = require_user(self.user)
        digest = file_hash(content)
        existing = await self.batches.get_by_hash(owner.id, digest)
        if existing is not None:
            logger.info(f"Skipping duplicate import of {file_name} (batch {existing.id})")
            return existing, True

        batch = await self.batches.create(owner, digest, file_name[:255], source_type)
        logger.info(f"Registered import batch {batch.id}: {file_name} ({source_type.value})")
        if source_type == ImportSource.manual:
            return await self._import_manual(batch, content), False
        return await self.batches.save(batch), False

    async def _import_manual(self, batch: ImportBatch, content: bytes) -> ImportBatch:
        rows, errors = parse_manual_csv(content)

        months: Dict[Tuple[int, int], Optional[int]] = {}
        transactions = []
        for row in rows:
            period = (row["transaction_date"].year, row["transaction_date"].month)
            if period not in months:
                budget_month = await self.budgets.get_by_period(batch.user_id, *period)
                months[period] = budget_month.id if budget_month else None
            try:
                transactions.append(TransactionCreate(
                    **row,
                    confidence=Confidence.low,
                    source=ImportSource.manual,
                    budget_month_id=months[period],
                    import_batch_id=batch.id,
                ))
            except ValidationError as exc:
                errors.append(f"{row['merchant'][:40]} on {row['transaction_date']}: {exc.errors()[0]['msg']}")

        if errors:
            logger.warning(f"Import batch {batch.id} failed with {len(errors)} errors")
            return await self.batches.finish(batch, ImportStatus.failed, 0, "; ".join(errors))

        count = await self.transactions.add_all(self.user, transactions)
        logger.info(f"Import batch {batch.id} completed with {count} transactions")
        return await self.batches.finish(batch, ImportStatus.completed, count)

    async def finish(self, batch_id: int, status: ImportStatus, error_message: Optional[str] = None) -> ImportBatch:
        """Close a batch filled by the external parser; the count comes from stored rows."""
        owner = require_user(self.user)
        batch = await self.batches.get_by_id(owner.id, batch_id)
        if batch is None:
            raise NotFoundError("Import batch", batch_id)
        count = await self.transactions.count_for_batch(owner.id, batch_id)
        return await self.batches.finish(batch, status, count, error_message)
