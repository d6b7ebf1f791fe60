from __future__ import annotations

import pytest

from docshop.repositories.json_storage import find_record
from docshop.services.errors import NotFoundError
from docshop.services.notification_service import NotificationService, push_notification
from docshop.services.user_service import UserService


@pytest.fixture()
def alice(store) -> str:
    return UserService(store).register("Alice", "alice@x.com", "pw")["id"]


def _seed_notes(store, user_id, stamps):
    with store.transaction() as db:
        user = find_record(db["users"], user_id)
        for n, stamp in enumerate(stamps):
            note = push_notification(user, f"msg {n}")
            note["createdAt"] = stamp


def test_list_is_newest_first(store, alice):
    _seed_notes(store, alice, [300, 100, 200])
    notes = NotificationService(store).list(alice)
    assert [n["createdAt"] for n in notes] == [300, 200, 100]


def test_unread_count_and_mark_all_read(store, alice):
    svc = NotificationService(store)
    _seed_notes(store, alice, [1, 2])
    assert svc.unread_count(alice) == 2

    assert svc.mark_all_read(alice) == 2
    assert svc.unread_count(alice) == 0
    assert all(n["read"] for n in svc.list(alice))
    assert svc.mark_all_read(alice) == 0


def test_push_prepends_unread_message():
    user = {"id": "u1"}
    push_notification(user, "first")
    push_notification(user, "second")
    assert [n["message"] for n in user["notifications"]] == ["second", "first"]
    assert not any(n["read"] for n in user["notifications"])


def test_unknown_user(store):
    with pytest.raises(NotFoundError):
        NotificationService(store).unread_count("ghost")
