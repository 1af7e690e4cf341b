"""Repository for category operations."""

from components.category.models import Category
from components.category.schemas import CategoryRead
from components.core.repository import SoftDeleteRepository


class CategoryRepository(SoftDeleteRepository):
    model = Category
    read_schema = CategoryRead
    group = "categories"
    order_column = "sort_order"
