"""Categories, credit cards and bank accounts: soft delete and cached listing."""

import asyncio
from decimal import Decimal

import pytest

from components.account.repository import BankAccountRepository
from components.card.repository import CreditCardRepository
from components.category.repository import CategoryRepository
from components.core.cache import QueryCache

HTTP_200_OK = 200
HTTP_201_CREATED = 201
HTTP_204_NO_CONTENT = 204
HTTP_404_NOT_FOUND = 404


def test_categories_ordered_by_sort_order(client, auth_headers, make_category) -> None:
    make_category("Leisure", sort_order=3)
    make_category("Groceries", sort_order=1)
    make_category("Transport", sort_order=2)

    names = [c["name"] for c in client.get("/categories/", headers=auth_headers).json()]
    assert names == ["Groceries", "Transport", "Leisure"]


def test_category_defaults(make_category) -> None:
    category = make_category("Misc")
    assert category["icon"] == "circle-dot"
    assert category["color"] == "bg-gray-500"
    assert category["is_active"] is True


def test_soft_delete_hides_category_but_keeps_row(client, auth_headers, make_category) -> None:
    groceries = make_category("Groceries")
    make_category("Leisure")
    # prime the cached listing
    assert len(client.get("/categories/", headers=auth_headers).json()) == 2

    response = client.delete(f"/categories/{groceries['id']}", headers=auth_headers)
    assert response.status_code == HTTP_204_NO_CONTENT

    active = client.get("/categories/", headers=auth_headers).json()
    assert [c["name"] for c in active] == ["Leisure"]

    everything = client.get("/categories/", params={"include_inactive": True}, headers=auth_headers).json()
    assert {c["name"]: c["is_active"] for c in everything} == {"Groceries": False, "Leisure": True}


def test_update_category_refreshes_listing(client, auth_headers, make_category) -> None:
    groceries = make_category("Groceries")
    client.get("/categories/", headers=auth_headers)

    response = client.patch(f"/categories/{groceries['id']}", json={"name": "Food"}, headers=auth_headers)
    assert response.status_code == HTTP_200_OK
    assert response.json()["icon"] == "circle-dot"
    assert [c["name"] for c in client.get("/categories/", headers=auth_headers).json()] == ["Food"]


def test_unknown_category(client, auth_headers) -> None:
    assert client.patch("/categories/99", json={"name": "x"}, headers=auth_headers).status_code == HTTP_404_NOT_FOUND
    assert client.delete("/categories/99", headers=auth_headers).status_code == HTTP_404_NOT_FOUND


def test_categories_are_private_to_household(client, register, make_category) -> None:
    make_category("Groceries")
    other = register("neighbours")
    assert client.get("/categories/", headers=other).json() == []


def test_credit_card_lifecycle(client, auth_headers) -> None:
    response = client.post(
        "/credit-cards/",
        json={"name": "Visa", "last_four": "4242", "total_limit": "8000", "budget_limit": "3000"},
        headers=auth_headers,
    )
    assert response.status_code == HTTP_201_CREATED, response.text
    card = response.json()

    response = client.patch(f"/credit-cards/{card['id']}", json={"budget_limit": "2500"}, headers=auth_headers)
    assert Decimal(response.json()["budget_limit"]) == Decimal("2500")

    assert client.delete(f"/credit-cards/{card['id']}", headers=auth_headers).status_code == HTTP_204_NO_CONTENT
    assert client.get("/credit-cards/", headers=auth_headers).json() == []


def test_bank_account_lifecycle(client, auth_headers) -> None:
    response = client.post(
        "/bank-accounts/",
        json={"name": "Joint", "bank_name": "First Bank", "agency": "0001"},
        headers=auth_headers,
    )
    assert response.status_code == HTTP_201_CREATED, response.text
    account = response.json()

    listed = client.get("/bank-accounts/", headers=auth_headers).json()
    assert [a["id"] for a in listed] == [account["id"]]

    assert client.delete(f"/bank-accounts/{account['id']}", headers=auth_headers).status_code == HTTP_204_NO_CONTENT
    listed = client.get("/bank-accounts/", params={"include_inactive": True}, headers=auth_headers).json()
    assert listed[0]["is_active"] is False


@pytest.mark.parametrize("repository", [CategoryRepository, CreditCardRepository, BankAccountRepository])
def test_listings_sort_on_a_mapped_column(repository) -> None:
    assert isinstance(repository.order_column, str)
    assert repository.order_column in repository.model.__table__.c


def test_cards_listed_oldest_first(client, auth_headers) -> None:
    ids = []
    for name, last_four in (("Visa", "4242"), ("Master", "5555")):
        response = client.post(
            "/credit-cards/",
            json={"name": name, "last_four": last_four, "total_limit": "1000", "budget_limit": "500"},
            headers=auth_headers,
        )
        assert response.status_code == HTTP_201_CREATED, response.text
        ids.append(response.json()["id"])

    response = client.get("/credit-cards/", headers=auth_headers)
    assert response.status_code == HTTP_200_OK, response.text
    assert [c["id"] for c in response.json()] == ids


def test_query_cache_invalidates_only_its_group() -> None:
    cache = QueryCache()
    calls = []

    async def loader():
        calls.append(1)
        return len(calls)

    async def scenario():
        assert await cache.get_or_load("categories", 1, None, loader) == 1
        assert await cache.get_or_load("categories", 1, None, loader) == 1
        assert await cache.get_or_load("credit_cards", 1, None, loader) == 2
        cache.invalidate("categories", 1)
        assert await cache.get_or_load("categories", 1, None, loader) == 3
        assert await cache.get_or_load("credit_cards", 1, None, loader) == 2

    asyncio.run(scenario())


def test_disabled_query_cache_always_loads() -> None:
    cache = QueryCache(enabled=False)
    calls = []

    async def loader():
        calls.append(1)
        return len(calls)

    async def scenario():
        await cache.get_or_load("categories", 1, None, loader)
        await cache.get_or_load("categories", 1, None, loader)

    asyncio.run(scenario())
    assert len(calls) == 2
