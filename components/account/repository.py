"""Repository for bank account operations."""

from components.account.models import BankAccount
from components.account.schemas import BankAccountRead
from components.core.repository import SoftDeleteRepository


class BankAccountRepository(SoftDeleteRepository):
    model = BankAccount
    read_schema = BankAccountRead
    group = "bank_accounts"
    order_column = "created_at"
