"""
JSON-file persistence adapter.

The whole dataset (users, items, orders, settings) lives in one document that
is read and rewritten wholesale. Mutations go through JsonStore.transaction(),
which serializes load -> mutate -> save under a process-wide lock, and every
save replaces the file atomically (temp file + rename).
"""

from __future__ import annotations

from contextlib import contextmanager
from functools import lru_cache
from pathlib import Path
from typing import Iterator
import json
import logging
import os
import tempfile
import threading

from docshop.core.codes import account_code
from docshop.core.config import get_settings
from docshop.core.security import hash_password
from docshop.domain.catalog import CATEGORIES, ITEMS_PER_SUBSECTION, SUBSECTIONS, random_price
from docshop.domain.users import ROLE_ADMIN
from docshop.services.errors import PersistenceError

logger = logging.getLogger(__name__)

ADMIN_USER_ID = "u-admin"


def build_seed() -> dict:
    """Initial dataset: catalog cross-product, one admin account, no orders."""
    settings = get_settings()
    items = []
    next_id = 1
    for category in CATEGORIES:
        for sub in SUBSECTIONS:
            for i in range(1, ITEMS_PER_SUBSECTION + 1):
                items.append(
                    {
                        "id": str(next_id),
                        "category": category,
                        "sub": sub["key"],
                        "subName": sub["name"],
                        "title": f"{sub['name']} {i} – {category}",
                        "price": random_price(),
                        "filePath": None,
                    }
                )
                next_id += 1
    return {
        "users": [
            {
                "id": ADMIN_USER_ID,
                "username": settings.admin_username,
                "email": settings.admin_email,
                "name": "Administrator",
                "role": ROLE_ADMIN,
                "passwordHash": hash_password(settings.admin_password),
                "ndck": account_code(),
                "notifications": [],
                "unlockedItemIds": [],
            }
        ],
        "items": items,
        "orders": [],
        "settings": {
            "momoName": settings.payment_name,
            "momoPhone": settings.payment_phone,
            "momoQrTemplate": settings.payment_qr_template,
        },
    }


def db_defaults(db: dict) -> dict:
    db.setdefault("users", [])
    db.setdefault("items", [])
    db.setdefault("orders", [])
    db.setdefault("settings", {})
    return db


def find_record(records: list[dict], record_id: str | None) -> dict | None:
    if not record_id:
        return None
    for record in records:
        if record.get("id") == record_id:
            return record
    return None


class JsonStore:
    """Whole-document store backed by a single JSON file."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self._lock = threading.RLock()

    def load(self) -> dict:
        with self._lock:
            if not self.path.exists():
                db = build_seed()
                self.save(db)
                logger.info("Seeded new store at %s (%d items)", self.path, len(db["items"]))
                return db
        try:
            with self.path.open("r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, ValueError) as exc:
            logger.error("Failed to read store %s", self.path, exc_info=True)
            raise PersistenceError("Không đọc được dữ liệu") from exc
        if not isinstance(data, dict):
            logger.error("Store %s does not hold a JSON object", self.path)
            raise PersistenceError("Không đọc được dữ liệu")
        return db_defaults(data)

    def read(self) -> dict:
        """Snapshot for read-only callers; does not wait for writers."""
        return self.load()

    def save(self, db: dict) -> None:
        directory = self.path.parent
        tmp_name = None
        try:
            directory.mkdir(parents=True, exist_ok=True)
            payload = json.dumps(db, ensure_ascii=False, indent=2)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", suffix=".tmp", dir=directory)
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self.path)
            tmp_name = None
        except (OSError, TypeError, ValueError) as exc:
            logger.error("Failed to write store %s", self.path, exc_info=True)
            raise PersistenceError("Không lưu được dữ liệu") from exc
        finally:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)

    @contextmanager
    def transaction(self) -> Iterator[dict]:
        """Load, yield for mutation, save. Nothing is written if the body raises."""
        with self._lock:
            db = self.load()
            yield db
            self.save(db)


@lru_cache
def get_store() -> JsonStore:
    return JsonStore(get_settings().data_file)
