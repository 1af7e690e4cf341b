"""Planned-vs-actual aggregation over in-memory rows."""

from decimal import Decimal
from types import SimpleNamespace

from components.report.aggregator import (
    UNCATEGORIZED,
    build_report,
    category_breakdown,
    group_by_category,
    report_totals,
)


def _category(category_id, name):
    return SimpleNamespace(id=category_id, name=name, icon="tag", color="bg-blue-500")


GROCERIES = _category(1, "Groceries")
LEISURE = _category(2, "Leisure")
HEALTH = _category(3, "Health")


def _tx(amount, category=None, is_internal=False):
    return SimpleNamespace(
        amount=Decimal(amount),
        category_id=category.id if category else None,
        category=category,
        is_internal=is_internal,
    )


def _plan(category, amount):
    return SimpleNamespace(category_id=category.id, category=category, planned_amount=Decimal(amount))


TRANSACTIONS = [
    _tx("-120.10", GROCERIES),
    _tx("-80.20", GROCERIES),
    _tx("-45.00", LEISURE),
    _tx("-19.99"),
    _tx("-1000.00", GROCERIES, is_internal=True),
    _tx("25.00", LEISURE),
]


def test_group_by_category_sums_absolute_amounts_without_internal() -> None:
    groups = group_by_category(TRANSACTIONS)
    assert set(groups) == {"1", "2", UNCATEGORIZED}
    assert groups["1"].total == Decimal("200.30")
    assert len(groups["1"].transactions) == 2
    assert groups["2"].total == Decimal("70.00")

    uncategorized = groups[UNCATEGORIZED].label
    assert uncategorized.name == "Uncategorized"
    assert uncategorized.icon == "circle-dot"
    assert uncategorized.color == "bg-gray-500"
    assert uncategorized.id is None


def test_breakdown_lists_uncategorized_last() -> None:
    groups = category_breakdown([_tx("-5"), _tx("-10", HEALTH)])
    assert [g.label.key for g in groups] == ["3", UNCATEGORIZED]


def test_report_keeps_planned_categories_without_spending() -> None:
    lines = build_report([_plan(GROCERIES, "150"), _plan(HEALTH, "300")], TRANSACTIONS)
    by_name = {line.label.name: line for line in lines}

    assert by_name["Groceries"].actual == Decimal("200.30")
    assert by_name["Groceries"].is_over
    assert by_name["Health"].actual == Decimal("0")
    assert not by_name["Health"].is_over

    # spending without a plan follows the planned rows
    assert [line.label.name for line in lines] == ["Groceries", "Health", "Leisure", "Uncategorized"]
    assert by_name["Leisure"].planned == Decimal("0")


def test_report_actual_matches_non_internal_spending() -> None:
    lines = build_report([_plan(GROCERIES, "150")], TRANSACTIONS)
    expected = sum(abs(tx.amount) for tx in TRANSACTIONS if not tx.is_internal)
    assert sum(line.actual for line in lines) == expected


def test_exact_plan_is_not_over() -> None:
    lines = build_report([_plan(LEISURE, "70.00")], [_tx("-45.00", LEISURE), _tx("-25.00", LEISURE)])
    assert lines[0].actual == lines[0].planned
    assert not lines[0].is_over


def test_report_totals() -> None:
    lines = build_report([_plan(GROCERIES, "150"), _plan(HEALTH, "300")], TRANSACTIONS)
    totals = report_totals(lines)
    assert totals.total_planned == Decimal("450")
    assert totals.total_actual == Decimal("290.29")
    assert totals.difference == Decimal("-159.71")
    assert totals.over_budget_count == 3
    assert report_totals(build_report([_plan(GROCERIES, "150"), _plan(HEALTH, "300")], TRANSACTIONS)) == totals


def test_decimal_sums_do_not_drift() -> None:
    lines = build_report([], [_tx("-0.10", GROCERIES) for _ in range(3)])
    assert lines[0].actual == Decimal("0.30")
