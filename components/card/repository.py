"""Repository for credit card operations."""

from components.card.models import CreditCard
from components.card.schemas import CreditCardRead
from components.core.repository import SoftDeleteRepository


class CreditCardRepository(SoftDeleteRepository):
    model = CreditCard
    read_schema = CreditCardRead
    group = "credit_cards"
    order_column = "created_at"
