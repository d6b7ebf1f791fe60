from __future__ import annotations

import pytest

from docshop.services.errors import (
    AdminConfirmationRequiredError,
    ConflictError,
    InvalidCredentialsError,
    NotFoundError,
    ValidationError,
)
from docshop.services.session_service import decode_token
from docshop.services.user_service import UserService


def test_register_then_authenticate_as_user(store):
    svc = UserService(store)
    created = svc.register("A", "a@x.com", "pw")

    assert created["username"] == "a"
    assert created["role"] == "user"
    assert "passwordHash" not in created

    result = svc.authenticate("a@x.com", "pw", False)
    assert result.user["role"] == "user"
    principal = decode_token(result.token)
    assert principal is not None
    assert principal.id == created["id"]
    assert principal.role == "user"
    assert principal.name == "A"


def test_authenticate_by_username(store):
    svc = UserService(store)
    svc.register("Bob", "bob@example.com", "pw")
    assert svc.authenticate("bob", "pw").user["email"] == "bob@example.com"


def test_register_duplicate_email_conflicts_without_growing_registry(store):
    svc = UserService(store)
    svc.register("A", "a@x.com", "pw")
    size = len(store.load()["users"])

    with pytest.raises(ConflictError):
        svc.register("Other", "a@x.com", "pw2")

    assert len(store.load()["users"]) == size


@pytest.mark.parametrize("name,email,password", [("", "a@x.com", "pw"), ("A", "", "pw"), ("A", "a@x.com", "")])
def test_register_requires_all_fields(store, name, email, password):
    with pytest.raises(ValidationError):
        UserService(store).register(name, email, password)


def test_derived_username_collision_gets_suffix(store):
    svc = UserService(store)
    first = svc.register("One", "sam@one.com", "pw")
    second = svc.register("Two", "sam@two.com", "pw")
    third = svc.register("Three", "sam@three.com", "pw")

    assert (first["username"], second["username"], third["username"]) == ("sam", "sam2", "sam3")
    assert svc.authenticate("sam2", "pw").user["email"] == "sam@two.com"


def test_account_codes_are_unique(store):
    svc = UserService(store)
    codes = {svc.register(f"U{i}", f"u{i}@x.com", "pw")["ndck"] for i in range(5)}
    assert len(codes) == 5
    assert all(c.startswith("AC-") and len(c) == 11 for c in codes)


def test_wrong_password_and_unknown_login_fail(store):
    svc = UserService(store)
    svc.register("A", "a@x.com", "pw")
    with pytest.raises(InvalidCredentialsError):
        svc.authenticate("a@x.com", "nope")
    with pytest.raises(InvalidCredentialsError):
        svc.authenticate("ghost@x.com", "pw")
    with pytest.raises(InvalidCredentialsError):
        svc.authenticate("", "pw")


def test_admin_requires_explicit_confirmation(store, admin_password):
    svc = UserService(store)
    with pytest.raises(AdminConfirmationRequiredError):
        svc.authenticate("bahana@local", admin_password, False)

    result = svc.authenticate("bahana@local", admin_password, True)
    assert result.user["role"] == "admin"


def test_admin_wrong_password_is_invalid_credentials_not_confirmation(store):
    with pytest.raises(InvalidCredentialsError):
        UserService(store).authenticate("bahana", "wrong", False)


def test_profile_exposes_unlocked_items(store):
    svc = UserService(store)
    created = svc.register("A", "a@x.com", "pw")
    profile = svc.get_profile(created["id"])
    assert profile["unlockedItemIds"] == []
    assert profile["ndck"] == created["ndck"]

    with pytest.raises(NotFoundError):
        svc.get_profile("missing")


@pytest.mark.parametrize(
    "name,email,password",
    [("A", 5, "pw"), (["A"], "a@x.com", "pw"), ("A", "a@x.com", 123), (None, None, None)],
)
def test_register_rejects_non_text_fields(store, name, email, password):
    with pytest.raises(ValidationError):
        UserService(store).register(name, email, password)


@pytest.mark.parametrize("login,password", [(5, "pw"), ({"a": 1}, "pw"), ("a@x.com", 5), ("a@x.com", None)])
def test_authenticate_rejects_non_text_fields(store, login, password):
    svc = UserService(store)
    svc.register("A", "a@x.com", "pw")
    with pytest.raises(InvalidCredentialsError):
        svc.authenticate(login, password)


def test_email_must_look_like_an_address(store):
    with pytest.raises(ValidationError):
        UserService(store).register("A", "no-at-sign", "pw")


def test_registration_cannot_take_over_admin_username_login(store, admin_password):
    svc = UserService(store)
    with pytest.raises(ValidationError):
        svc.register("Mallory", "bahana", "pw")

    result = svc.authenticate("bahana", admin_password, as_admin=True)
    assert result.user["role"] == "admin"
    assert len(store.load()["users"]) == 1
