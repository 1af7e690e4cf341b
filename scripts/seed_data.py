"""Script to seed a demo household into the database."""

from datetime import date
from decimal import Decimal
import asyncio

from components.core.init_db import db_manager
from components.core.utils import get_logger, setup_logging
from components.budget.lifecycle import BudgetLifecycle
from components.budget.schemas import FixedExpenseCreate
from components.card.repository import CreditCardRepository
from components.card.schemas import CreditCardCreate
from components.account.repository import BankAccountRepository
from components.account.schemas import BankAccountCreate
from components.category.repository import CategoryRepository
from components.category.schemas import CategoryCreate
from components.transaction.schemas import TransactionCreate
from components.transaction.workflow import CategorizationWorkflow
from components.user.models import AppRole
from components.user.repository import UserRepository
from components.user.schemas import UserCreate

logger = get_logger("seed")

CATEGORIES = [
    ("Groceries", "shopping-cart", "bg-green-500", Decimal("1500.00")),
    ("Restaurants", "utensils", "bg-orange-500", Decimal("600.00")),
    ("Transport", "car", "bg-blue-500", Decimal("400.00")),
    ("Health", "heart-pulse", "bg-red-500", Decimal("300.00")),
    ("Leisure", "party-popper", "bg-purple-500", Decimal("250.00")),
]

FIXED_EXPENSES = [
    ("Rent", Decimal("2500.00"), 5),
    ("Internet", Decimal("120.00"), 10),
    ("Electricity", Decimal("180.00"), 15),
    ("Gym", Decimal("90.00"), None),
]


async def seed_data(login: str = "household", password: str = "password123"):
    """Seed an admin household with categories, cards and the current month's plan."""
    await db_manager.create_tables()

    async with db_manager.get_db() as db:
        users = UserRepository(db)
        user = await users.get_by_login(login)
        if user is not None:
            logger.info(f"Household '{login}' already exists, nothing to seed")
            return

        user = await users.create(UserCreate(
            login=login,
            password=password,
            display_name="Alex",
            partner_name="Sam",
        ))
        await users.grant_role(user.id, AppRole.admin)

        categories = CategoryRepository(db)
        created = []
        for sort_order, (name, icon, color, _) in enumerate(CATEGORIES):
            created.append(await categories.create(user, CategoryCreate(
                name=name, icon=icon, color=color, sort_order=sort_order,
            )))

        await CreditCardRepository(db).create(user, CreditCardCreate(
            name="Household Visa", last_four="4242",
            total_limit=Decimal("8000.00"), budget_limit=Decimal("3000.00"),
        ))
        await BankAccountRepository(db).create(user, BankAccountCreate(
            name="Joint checking", bank_name="First Bank", agency="0001", account_number="12345-6",
        ))

        today = date.today()
        lifecycle = BudgetLifecycle(db, user)
        budget_month = await lifecycle.create_month(today.year, today.month)
        for category, (_, _, _, planned) in zip(created, CATEGORIES):
            await lifecycle.set_planned_amount(budget_month.id, category.id, planned)
        for name, amount, due_day in FIXED_EXPENSES:
            await lifecycle.add_fixed_expense(budget_month.id, FixedExpenseCreate(
                name=name, amount=amount, due_day=due_day,
            ))

        workflow = CategorizationWorkflow(db, user)
        await workflow.add(TransactionCreate(
            amount=Decimal("-182.40"), merchant="Supermarket", transaction_date=today,
            category_id=created[0].id,
        ))
        await workflow.add(TransactionCreate(
            amount=Decimal("-64.90"), merchant="Pizza place", transaction_date=today,
        ))
        await workflow.add(TransactionCreate(
            amount=Decimal("-1000.00"), merchant="Transfer to savings", transaction_date=today,
            is_internal=True,
        ))

        logger.info(f"Seeded household '{login}' with budget month {today.year}-{today.month:02d}")


if __name__ == "__main__":
    setup_logging("INFO")
    asyncio.run(seed_data())
