"""Reports computed through the API from stored budget months and transactions."""

from decimal import Decimal

HTTP_200_OK = 200
HTTP_404_NOT_FOUND = 404


def _setup_month(client, auth_headers, make_month, make_category, planned="500"):
    march = make_month(2025, 3)
    groceries = make_category("Groceries", icon="shopping-cart", color="bg-green-500")
    client.put(
        f"/budget/months/{march['id']}/categories/{groceries['id']}",
        json={"planned_amount": planned},
        headers=auth_headers,
    )
    return march, groceries


def _report(client, auth_headers, month_id):
    response = client.get(f"/reports/{month_id}", headers=auth_headers)
    assert response.status_code == HTTP_200_OK, response.text
    return response.json()


def test_spending_under_plan(client, auth_headers, make_month, make_category, make_transaction) -> None:
    march, groceries = _setup_month(client, auth_headers, make_month, make_category)
    make_transaction(amount="-200", category_id=groceries["id"], transaction_date="2025-03-03")

    report = _report(client, auth_headers, march["id"])
    assert len(report["categories"]) == 1
    row = report["categories"][0]
    assert row["category"]["name"] == "Groceries"
    assert row["category"]["icon"] == "shopping-cart"
    assert Decimal(row["planned"]) == Decimal("500")
    assert Decimal(row["actual"]) == Decimal("200")
    assert row["is_over"] is False
    assert len(row["transactions"]) == 1


def test_spending_over_plan(client, auth_headers, make_month, make_category, make_transaction) -> None:
    march, groceries = _setup_month(client, auth_headers, make_month, make_category)
    make_transaction(amount="-600", category_id=groceries["id"], transaction_date="2025-03-03")

    report = _report(client, auth_headers, march["id"])
    row = report["categories"][0]
    assert Decimal(row["actual"]) == Decimal("600")
    assert row["is_over"] is True
    assert report["totals"]["over_budget_count"] == 1
    assert Decimal(report["totals"]["difference"]) == Decimal("100")


def test_internal_transfers_do_not_count(client, auth_headers, make_month, make_category, make_transaction) -> None:
    march, groceries = _setup_month(client, auth_headers, make_month, make_category)
    make_transaction(amount="-200", category_id=groceries["id"], transaction_date="2025-03-03")
    make_transaction(amount="-900", category_id=groceries["id"], transaction_date="2025-03-04", is_internal=True)
    transfer = make_transaction(amount="-1500", transaction_date="2025-03-05")
    client.post(f"/transactions/{transfer['id']}/internal", headers=auth_headers)

    report = _report(client, auth_headers, march["id"])
    assert [row["category"]["name"] for row in report["categories"]] == ["Groceries"]
    assert Decimal(report["categories"][0]["actual"]) == Decimal("200")
    assert Decimal(report["totals"]["total_actual"]) == Decimal("200")

    breakdown = client.get(f"/reports/{march['id']}/by-category", headers=auth_headers).json()
    assert Decimal(breakdown["total_actual"]) == Decimal("200")


def test_planned_category_without_spending(client, auth_headers, make_month, make_category, make_transaction) -> None:
    march, _ = _setup_month(client, auth_headers, make_month, make_category)
    make_transaction(amount="-30", transaction_date="2025-03-08")

    report = _report(client, auth_headers, march["id"])
    planned_row, uncategorized = report["categories"]
    assert Decimal(planned_row["actual"]) == Decimal("0")
    assert planned_row["is_over"] is False
    assert uncategorized["category"]["key"] == "uncategorized"
    assert Decimal(uncategorized["planned"]) == Decimal("0")
    assert Decimal(report["totals"]["total_actual"]) == Decimal("30")


def test_breakdown_counts_pending_review(client, auth_headers, make_month, make_category, make_transaction) -> None:
    march, groceries = _setup_month(client, auth_headers, make_month, make_category)
    make_transaction(amount="-12.50", transaction_date="2025-03-01")
    make_transaction(amount="-7.50", transaction_date="2025-03-02")
    make_transaction(amount="-40", category_id=groceries["id"], transaction_date="2025-03-02")

    breakdown = client.get(f"/reports/{march['id']}/by-category", headers=auth_headers).json()
    assert breakdown["pending_review_count"] == 2
    assert [g["category"]["name"] for g in breakdown["groups"]] == ["Groceries", "Uncategorized"]
    assert Decimal(breakdown["groups"][1]["total"]) == Decimal("20")
    assert Decimal(breakdown["total_actual"]) == Decimal("60")


def test_report_for_unknown_month(client, auth_headers) -> None:
    assert client.get("/reports/42", headers=auth_headers).status_code == HTTP_404_NOT_FOUND
    assert client.get("/reports/42/by-category", headers=auth_headers).status_code == HTTP_404_NOT_FOUND
