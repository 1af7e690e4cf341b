"""Audit trail of budget and transaction writes, including edits after close."""

from decimal import Decimal

HTTP_200_OK = 200


def _audit(client, auth_headers, **params):
    response = client.get("/audit-log/", params=params, headers=auth_headers)
    assert response.status_code == HTTP_200_OK, response.text
    return response.json()


def test_planned_amount_changes_are_recorded(client, auth_headers, make_month, make_category) -> None:
    march = make_month(2025, 3)
    groceries = make_category("Groceries")
    url = f"/budget/months/{march['id']}/categories/{groceries['id']}"
    client.put(url, json={"planned_amount": "100"}, headers=auth_headers)
    client.put(url, json={"planned_amount": "150"}, headers=auth_headers)

    update, create = _audit(client, auth_headers)
    assert create["entity_type"] == "budget_category"
    assert create["action"] == "create"
    assert create["old_values"] is None
    assert update["action"] == "update"
    assert update["entity_id"] == create["entity_id"]
    assert Decimal(update["old_values"]["planned_amount"]) == Decimal("100")
    assert Decimal(update["new_values"]["planned_amount"]) == Decimal("150")
    assert "category" not in update["new_values"]
    assert update["edited_after_close"] is False


def test_edits_after_close_are_flagged(client, auth_headers, make_month, make_category, make_transaction) -> None:
    march = make_month(2025, 3)
    groceries = make_category("Groceries")
    url = f"/budget/months/{march['id']}/categories/{groceries['id']}"
    client.put(url, json={"planned_amount": "100"}, headers=auth_headers)
    tx = make_transaction(transaction_date="2025-03-12")

    client.post(f"/budget/months/{march['id']}/close", json={"confirm": True}, headers=auth_headers)
    client.put(url, json={"planned_amount": "120"}, headers=auth_headers)
    client.post(f"/transactions/{tx['id']}/categorize", json={"category_id": groceries["id"]}, headers=auth_headers)

    flagged = _audit(client, auth_headers, edited_after_close=True)
    assert [(e["entity_type"], e["action"]) for e in flagged] == [
        ("transaction", "update"),
        ("budget_category", "update"),
    ]
    assert flagged[0]["old_values"]["needs_review"] is True
    assert flagged[0]["new_values"]["needs_review"] is False

    unflagged = _audit(client, auth_headers, edited_after_close=False)
    assert {(e["entity_type"], e["action"]) for e in unflagged} == {
        ("budget_category", "create"),
        ("transaction", "create"),
    }


def test_deletes_keep_old_values(client, auth_headers, make_month) -> None:
    march = make_month(2025, 3)
    expense = client.post(
        f"/budget/months/{march['id']}/fixed-expenses",
        json={"name": "Rent", "amount": "1000", "due_day": 5},
        headers=auth_headers,
    ).json()
    client.delete(f"/budget/fixed-expenses/{expense['id']}", headers=auth_headers)

    latest = _audit(client, auth_headers, limit=1)[0]
    assert latest["entity_type"] == "fixed_expense"
    assert latest["action"] == "delete"
    assert latest["old_values"]["name"] == "Rent"
    assert latest["new_values"] is None


def test_audit_log_is_private_to_household(client, auth_headers, register, make_month, make_category) -> None:
    march = make_month(2025, 3)
    groceries = make_category("Groceries")
    client.put(
        f"/budget/months/{march['id']}/categories/{groceries['id']}",
        json={"planned_amount": "10"},
        headers=auth_headers,
    )
    other = register("neighbours")
    assert _audit(client, other) == []
    assert len(_audit(client, auth_headers)) == 1
