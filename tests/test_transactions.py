"""Transaction review workflow: inbox filters, categorizing and internal transfers."""

from types import SimpleNamespace

from sqlalchemy.exc import SQLAlchemyError

from components.audit.repository import AuditRepository
from components.transaction.schemas import InboxFilter
from components.transaction.workflow import filter_transactions

HTTP_200_OK = 200
HTTP_204_NO_CONTENT = 204
HTTP_400_BAD_REQUEST = 400
HTTP_404_NOT_FOUND = 404
HTTP_422_UNPROCESSABLE = 422


def test_filter_transactions_is_a_pure_predicate() -> None:
    rows = [
        SimpleNamespace(id=1, needs_review=True, is_internal=False),
        SimpleNamespace(id=2, needs_review=False, is_internal=True),
        SimpleNamespace(id=3, needs_review=False, is_internal=False),
    ]
    assert [r.id for r in filter_transactions(rows)] == [1, 2, 3]
    assert [r.id for r in filter_transactions(rows, InboxFilter.needs_review)] == [1]
    assert [r.id for r in filter_transactions(rows, InboxFilter.internal)] == [2]
    assert len(rows) == 3


def test_needs_review_derived_on_create(make_category, make_transaction) -> None:
    groceries = make_category("Groceries")

    pending = make_transaction()
    assert pending["needs_review"] is True
    assert pending["confidence"] == "low"

    categorized = make_transaction(category_id=groceries["id"])
    assert categorized["needs_review"] is False
    assert categorized["category"]["name"] == "Groceries"

    internal = make_transaction(is_internal=True)
    assert internal["needs_review"] is False


def test_categorize_resolves_transaction(client, auth_headers, make_category, make_transaction) -> None:
    groceries = make_category("Groceries")
    tx = make_transaction(amount="-54.30", merchant="Supermarket")

    response = client.post(
        f"/transactions/{tx['id']}/categorize",
        json={"category_id": groceries["id"]},
        headers=auth_headers,
    )
    assert response.status_code == HTTP_200_OK, response.text
    result = response.json()
    assert result["category_id"] == groceries["id"]
    assert result["needs_review"] is False
    assert result["confidence"] == "high"
    assert result["reviewed_at"] is not None
    assert result["category"]["icon"] == "circle-dot"


def test_categorize_with_unknown_category_leaves_transaction_pending(client, auth_headers, make_transaction) -> None:
    tx = make_transaction()
    response = client.post(f"/transactions/{tx['id']}/categorize", json={"category_id": 999}, headers=auth_headers)
    assert response.status_code == HTTP_404_NOT_FOUND

    current = client.get(f"/transactions/{tx['id']}", headers=auth_headers).json()
    assert current["needs_review"] is True
    assert current["category_id"] is None


def test_mark_internal(client, auth_headers, make_transaction) -> None:
    tx = make_transaction(merchant="Transfer to savings", amount="-1000")
    response = client.post(f"/transactions/{tx['id']}/internal", headers=auth_headers)
    assert response.status_code == HTTP_200_OK, response.text
    result = response.json()
    assert result["is_internal"] is True
    assert result["needs_review"] is False
    assert result["category_id"] is None
    assert result["reviewed_at"] is not None


def test_inbox_filters_and_newest_first(client, auth_headers, make_category, make_transaction) -> None:
    groceries = make_category("Groceries")
    oldest = make_transaction(transaction_date="2025-03-01")
    internal = make_transaction(transaction_date="2025-03-05", is_internal=True)
    newest = make_transaction(transaction_date="2025-03-20", category_id=groceries["id"])

    def ids(**params):
        response = client.get("/transactions/", params=params, headers=auth_headers)
        assert response.status_code == HTTP_200_OK
        return [row["id"] for row in response.json()]

    assert ids() == [newest["id"], internal["id"], oldest["id"]]
    assert ids(filter="needs_review") == [oldest["id"]]
    assert ids(filter="internal") == [internal["id"]]
    assert ids(limit=2) == [newest["id"], internal["id"]]


def test_transaction_joins_budget_month_of_its_date(client, auth_headers, make_month, make_transaction) -> None:
    march = make_month(2025, 3)
    in_march = make_transaction(transaction_date="2025-03-10")
    in_april = make_transaction(transaction_date="2025-04-02")

    assert in_march["budget_month_id"] == march["id"]
    assert in_april["budget_month_id"] is None

    response = client.get("/transactions/", params={"budget_month_id": march["id"]}, headers=auth_headers)
    assert [row["id"] for row in response.json()] == [in_march["id"]]


def test_update_rederives_needs_review(client, auth_headers, make_category, make_transaction) -> None:
    groceries = make_category("Groceries")
    tx = make_transaction(category_id=groceries["id"])

    response = client.patch(f"/transactions/{tx['id']}", json={"category_id": None}, headers=auth_headers)
    assert response.json()["needs_review"] is True

    response = client.patch(f"/transactions/{tx['id']}", json={"merchant": "Farmers market"}, headers=auth_headers)
    assert response.json()["merchant"] == "Farmers market"
    assert response.json()["needs_review"] is True

    response = client.patch(f"/transactions/{tx['id']}", json={"category_id": groceries["id"]}, headers=auth_headers)
    assert response.json()["needs_review"] is False
    assert response.json()["reviewed_at"] is not None


def test_update_rejects_null_for_required_fields(client, auth_headers, make_transaction) -> None:
    tx = make_transaction()
    for field in ("amount", "merchant", "transaction_date", "confidence", "is_internal"):
        response = client.patch(f"/transactions/{tx['id']}", json={field: None}, headers=auth_headers)
        assert response.status_code == HTTP_422_UNPROCESSABLE, field

    current = client.get(f"/transactions/{tx['id']}", headers=auth_headers).json()
    assert current["merchant"] == "Corner shop"
    assert current["is_internal"] is False


def test_categorize_is_undone_when_audit_write_fails(
    client, auth_headers, make_category, make_transaction, monkeypatch
) -> None:
    groceries = make_category("Groceries")
    tx = make_transaction()

    async def broken_record(self, *args, **kwargs):
        raise SQLAlchemyError("audit table unavailable")

    monkeypatch.setattr(AuditRepository, "record", broken_record)
    response = client.post(
        f"/transactions/{tx['id']}/categorize",
        json={"category_id": groceries["id"]},
        headers=auth_headers,
    )
    assert response.status_code == HTTP_400_BAD_REQUEST
    monkeypatch.undo()

    current = client.get(f"/transactions/{tx['id']}", headers=auth_headers).json()
    assert current["needs_review"] is True
    assert current["category_id"] is None
    assert [e["action"] for e in client.get("/audit-log/", headers=auth_headers).json()] == ["create"]


def test_delete_transaction(client, auth_headers, make_transaction) -> None:
    tx = make_transaction()
    assert client.delete(f"/transactions/{tx['id']}", headers=auth_headers).status_code == HTTP_204_NO_CONTENT
    assert client.get(f"/transactions/{tx['id']}", headers=auth_headers).status_code == HTTP_404_NOT_FOUND


def test_transactions_are_private_to_household(client, register, make_transaction) -> None:
    tx = make_transaction()
    other = register("neighbours")
    assert client.get("/transactions/", headers=other).json() == []
    response = client.post(f"/transactions/{tx['id']}/internal", headers=other)
    assert response.status_code == HTTP_404_NOT_FOUND
