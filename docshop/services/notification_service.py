"""Per-user notification mailbox."""
from __future__ import annotations

import logging

from docshop.core.codes import new_id, now_ms
from docshop.repositories.json_storage import JsonStore, find_record, get_store
from docshop.services.errors import NotFoundError

logger = logging.getLogger(__name__)


def push_notification(user: dict, message: str) -> dict:
    """Prepend a message to an in-memory user record; the caller owns the save."""
    note = {"id": new_id(), "message": message, "read": False, "createdAt": now_ms()}
    user.setdefault("notifications", []).insert(0, note)
    return note


class NotificationService:
    """Read/clear side of the mailbox; writes come from the order engine."""

    def __init__(self, store: JsonStore | None = None) -> None:
        self.store = store or get_store()

    def _user(self, db: dict, user_id: str) -> dict:
        user = find_record(db["users"], user_id)
        if not user:
            raise NotFoundError("Không tìm thấy người dùng")
        return user

    def list(self, user_id: str) -> list[dict]:
        user = self._user(self.store.read(), user_id)
        return sorted(user.get("notifications") or [], key=lambda n: n.get("createdAt") or 0, reverse=True)

    def unread_count(self, user_id: str) -> int:
        user = self._user(self.store.read(), user_id)
        return sum(1 for n in user.get("notifications") or [] if not n.get("read"))

    def mark_all_read(self, user_id: str) -> int:
        with self.store.transaction() as db:
            user = self._user(db, user_id)
            flipped = 0
            for note in user.get("notifications") or []:
                if not note.get("read"):
                    note["read"] = True
                    flipped += 1
        logger.debug("Marked %d notifications read for %s", flipped, user_id)
        return flipped
