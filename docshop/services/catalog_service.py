"""Catalog lookups and admin item uploads."""
from __future__ import annotations

import logging

from docshop.core.codes import new_id
from docshop.domain.catalog import CATEGORIES, SUBSECTIONS, parse_price, random_price, subsection_name
from docshop.repositories.json_storage import JsonStore, find_record, get_store
from docshop.services.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


class CatalogService:
    """Read accessor over reference lists and items; admin-only add_item."""

    def __init__(self, store: JsonStore | None = None) -> None:
        self.store = store or get_store()

    def reference(self) -> dict:
        return {"categories": list(CATEGORIES), "subs": [dict(s) for s in SUBSECTIONS]}

    def list_items(self, category: str | None = None, sub: str | None = None) -> list[dict]:
        items = self.store.read()["items"]
        if category:
            items = [i for i in items if i.get("category") == category]
        if sub:
            items = [i for i in items if i.get("sub") == sub]
        return items

    def get_item(self, item_id: str) -> dict:
        item = find_record(self.store.read()["items"], item_id)
        if not item:
            raise NotFoundError("Không tìm thấy tài liệu")
        return item

    def add_item(self, category: str, sub: str, title: str, price=None, file_ref: str | None = None) -> dict:
        category = (category or "").strip()
        sub = (sub or "").strip()
        title = (title or "").strip()
        if not file_ref:
            raise ValidationError("Thiếu file")
        if not category or not sub or not title:
            raise ValidationError("Thiếu thông tin")
        item = {
            "id": new_id(),
            "category": category,
            "sub": sub,
            "subName": subsection_name(sub),
            "title": title,
            "price": parse_price(price) or random_price(),
            "filePath": file_ref,
        }
        with self.store.transaction() as db:
            db["items"].append(item)
        logger.info("Added item %s (%s / %s)", item["id"], category, sub)
        return item
