"""
Planned-vs-actual aggregation.

Pure functions over already-fetched rows: transactions expose ``amount``,
``category_id``, ``is_internal`` and an optional ``category``; plan lines
expose ``category_id``, ``planned_amount`` and ``category``. Money is summed
as Decimal.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Iterable, List, Optional, Union

from components.category.models import DEFAULT_COLOR, DEFAULT_ICON

ZERO = Decimal("0")
UNCATEGORIZED = "uncategorized"


@dataclass(frozen=True)
class CategoryLabel:
    key: str
    id: Optional[int]
    name: str
    icon: str
    color: str


UNCATEGORIZED_LABEL = CategoryLabel(
    key=UNCATEGORIZED, id=None, name="Uncategorized", icon=DEFAULT_ICON, color=DEFAULT_COLOR,
)


@dataclass
class CategoryGroup:
    label: CategoryLabel
    total: Decimal = ZERO
    transactions: List = field(default_factory=list)


@dataclass
class ReportLine:
    label: CategoryLabel
    planned: Decimal
    actual: Decimal
    transactions: List = field(default_factory=list)

    @property
    def is_over(self) -> bool:
        return self.actual > self.planned


@dataclass(frozen=True)
class ReportTotals:
    total_planned: Decimal
    total_actual: Decimal
    difference: Decimal
    over_budget_count: int


def to_decimal(value: Union[Decimal, int, float, str, None]) -> Decimal:
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def label_for(category, category_id: Optional[int]) -> CategoryLabel:
    if category_id is None:
        return UNCATEGORIZED_LABEL
    if category is None:
        return CategoryLabel(key=str(category_id), id=category_id, name=f"Category {category_id}",
                             icon=DEFAULT_ICON, color=DEFAULT_COLOR)
    return CategoryLabel(key=str(category_id), id=category_id, name=category.name,
                         icon=category.icon or DEFAULT_ICON, color=category.color or DEFAULT_COLOR)


def group_by_category(transactions: Iterable) -> Dict[str, CategoryGroup]:
    """Sum |amount| of non-internal transactions per category key."""
    groups: Dict[str, CategoryGroup] = {}
    for tx in transactions:
        if tx.is_internal:
            continue
        label = label_for(getattr(tx, "category", None), tx.category_id)
        group = groups.get(label.key)
        if group is None:
            group = groups[label.key] = CategoryGroup(label=label)
        group.total += abs(to_decimal(tx.amount))
        group.transactions.append(tx)
    return groups


def category_breakdown(transactions: Iterable) -> List[CategoryGroup]:
    """Dashboard view: one entry per spending group, uncategorized last."""
    groups = group_by_category(transactions)
    return sorted(groups.values(), key=lambda g: g.label.key == UNCATEGORIZED)


def build_report(planned_rows: Iterable, transactions: Iterable) -> List[ReportLine]:
    """
    Report view: every planned category, then any spending without a plan.

    Planned categories with no spending report actual = 0. Unplanned groups
    are appended with planned = 0 so actual totals cover every non-internal
    transaction.
    """
    groups = group_by_category(transactions)
    lines: List[ReportLine] = []
    for planned in planned_rows:
        label = label_for(getattr(planned, "category", None), planned.category_id)
        group = groups.pop(label.key, None)
        lines.append(ReportLine(
            label=label,
            planned=to_decimal(planned.planned_amount),
            actual=group.total if group else ZERO,
            transactions=group.transactions if group else [],
        ))
    for group in sorted(groups.values(), key=lambda g: g.label.key == UNCATEGORIZED):
        lines.append(ReportLine(label=group.label, planned=ZERO, actual=group.total,
                                transactions=group.transactions))
    return lines


def report_totals(lines: Iterable[ReportLine]) -> ReportTotals:
    lines = list(lines)
    total_planned = sum((line.planned for line in lines), ZERO)
    total_actual = sum((line.actual for line in lines), ZERO)
    return ReportTotals(
        total_planned=total_planned,
        total_actual=total_actual,
        difference=total_actual - total_planned,
        over_budget_count=sum(1 for line in lines if line.is_over),
    )
