"""Fixed catalog reference data (categories, subsections) and price helpers."""
from __future__ import annotations

import secrets

from docshop.core.config import get_settings

SUBSECTIONS = (
    {"key": "lythuyet", "name": "Lý thuyết"},
    {"key": "video", "name": "Video bài giảng"},
    {"key": "tracnghiem", "name": "Trắc nghiệm"},
    {"key": "detuluyen", "name": "Đề tự luyện"},
    {"key": "dechinhthuc", "name": "Đề chính thức các năm"},
)

CATEGORIES = (
    "y học thể dục thể thao",
    "sức khỏe cộng đồng",
    "nhi",
    "điều trị nội",
    "dược lâm sàng",
    "ung bướu",
    "tâm lý y học 2",
    "sản phụ khoa",
    "nhiễm",
    "dịch tễ học",
    "chấn thương chỉnh hình",
    "chẩn đoán hình ảnh",
)

ITEMS_PER_SUBSECTION = 2


def subsection_name(key: str | None) -> str:
    """Display name for a subsection key; unknown keys are returned as-is."""
    for sub in SUBSECTIONS:
        if sub["key"] == key:
            return sub["name"]
    return key or ""


def random_price() -> int:
    """Random multiple of the configured step within [price_min, price_max]."""
    settings = get_settings()
    steps = (settings.price_max - settings.price_min) // settings.price_step
    return settings.price_min + secrets.randbelow(steps + 1) * settings.price_step


def parse_price(value) -> int | None:
    """Positive integer price or None when absent/malformed."""
    if value is None or isinstance(value, bool):
        return None
    try:
        price = int(str(value).strip())
    except (TypeError, ValueError):
        return None
    return price if price > 0 else None
