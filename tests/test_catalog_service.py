from __future__ import annotations

import pytest

from docshop.domain.catalog import parse_price, subsection_name
from docshop.services.catalog_service import CatalogService
from docshop.services.errors import NotFoundError, ValidationError


def test_reference_lists(store):
    ref = CatalogService(store).reference()
    assert len(ref["categories"]) == 12
    assert [s["key"] for s in ref["subs"]][:2] == ["lythuyet", "video"]


def test_filters_use_and_semantics(store):
    svc = CatalogService(store)
    assert len(svc.list_items()) == 120
    assert len(svc.list_items(category="nhi")) == 10
    assert len(svc.list_items(sub="video")) == 24
    both = svc.list_items(category="nhi", sub="video")
    assert len(both) == 2
    assert all(i["category"] == "nhi" and i["sub"] == "video" for i in both)
    assert svc.list_items(category="không có") == []


def test_add_item_resolves_subsection_and_price(store):
    svc = CatalogService(store)
    item = svc.add_item("nhi", "video", "Bài mới", "45000", "/uploads/a.pdf")
    assert item["subName"] == "Video bài giảng"
    assert item["price"] == 45000
    assert svc.get_item(item["id"])["filePath"] == "/uploads/a.pdf"

    unknown = svc.add_item("nhi", "custom-sub", "Khác", None, "/uploads/b.pdf")
    assert unknown["subName"] == "custom-sub"
    assert 10000 <= unknown["price"] <= 100000


@pytest.mark.parametrize("price", [None, "", "abc", "-5", "0"])
def test_add_item_defaults_bad_price(store, price):
    item = CatalogService(store).add_item("nhi", "video", "T", price, "/uploads/a.pdf")
    assert item["price"] > 0


def test_add_item_validation(store):
    svc = CatalogService(store)
    with pytest.raises(ValidationError):
        svc.add_item("nhi", "video", "T", 1, None)
    with pytest.raises(ValidationError):
        svc.add_item("", "video", "T", 1, "/uploads/a.pdf")
    assert len(svc.list_items()) == 120


def test_get_item_missing(store):
    with pytest.raises(NotFoundError):
        CatalogService(store).get_item("nope")


def test_helpers():
    assert subsection_name("tracnghiem") == "Trắc nghiệm"
    assert subsection_name("zzz") == "zzz"
    assert parse_price(" 20000 ") == 20000
    assert parse_price(True) is None
