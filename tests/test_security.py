"""Password hashing, tokens and the acting-user guard."""

from types import SimpleNamespace

import pytest

from components.core.exceptions import AuthenticationError
from components.core.security import (
    create_access_token,
    get_password_hash,
    require_user,
    verify_password,
    verify_token,
)


def test_password_hash_roundtrip() -> None:
    hashed = get_password_hash("secret123")
    assert verify_password("secret123", hashed)
    assert not verify_password("secret124", hashed)
    assert get_password_hash("secret123") != hashed


def test_token_carries_subject() -> None:
    token = create_access_token({"sub": "7"})
    assert verify_token(token)["sub"] == "7"
    assert verify_token(token + "x") is None


def test_require_user_aborts_without_identity() -> None:
    with pytest.raises(AuthenticationError):
        require_user(None)
    with pytest.raises(AuthenticationError):
        require_user(SimpleNamespace(id=None))
    user = SimpleNamespace(id=3)
    assert require_user(user) is user
