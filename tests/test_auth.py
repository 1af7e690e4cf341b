"""Registration, login, profile and role checks."""

from fastapi.testclient import TestClient

HTTP_200_OK = 200
HTTP_201_CREATED = 201
HTTP_400_BAD_REQUEST = 400
HTTP_401_UNAUTHORIZED = 401
HTTP_403_FORBIDDEN = 403


def test_health(client: TestClient) -> None:
    response = client.get("/health_check/")
    assert response.status_code == HTTP_200_OK
    assert response.json()["status"] == "healthy"


def test_register_and_login(client, register) -> None:
    register("couple", "secret123")

    response = client.post("/auth/login", data={"username": "couple", "password": "secret123"})
    assert response.status_code == HTTP_200_OK, response.text
    body = response.json()
    assert body["login"] == "couple"
    assert body["partner_name"] == "Sam"
    assert body["token_type"] == "bearer"

    me = client.get("/users/me", headers={"Authorization": f"Bearer {body['access_token']}"})
    assert me.json()["id"] == body["id"]


def test_duplicate_login_is_rejected(client, register) -> None:
    register("couple")
    response = client.post("/auth/register", json={"login": "couple", "password": "another1"})
    assert response.status_code == HTTP_400_BAD_REQUEST


def test_wrong_password(client, register) -> None:
    register("couple", "secret123")
    response = client.post("/auth/login", data={"username": "couple", "password": "nope123"})
    assert response.status_code == HTTP_401_UNAUTHORIZED


def test_writes_require_authentication(client) -> None:
    assert client.post("/categories/", json={"name": "Groceries"}).status_code == HTTP_401_UNAUTHORIZED
    response = client.get("/budget/current", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == HTTP_401_UNAUTHORIZED


def test_update_profile(client, auth_headers) -> None:
    response = client.put("/users/me", json={"partner_name": "Robin"}, headers=auth_headers)
    assert response.status_code == HTTP_200_OK
    assert response.json()["partner_name"] == "Robin"
    assert response.json()["display_name"] == "Alex"


def test_registration_grants_user_role_only(client, auth_headers) -> None:
    assert client.get("/users/me/roles/user", headers=auth_headers).json() == {"role": "user", "granted": True}
    assert client.get("/users/me/roles/admin", headers=auth_headers).json() == {"role": "admin", "granted": False}
    assert client.get("/users/", headers=auth_headers).status_code == HTTP_403_FORBIDDEN
