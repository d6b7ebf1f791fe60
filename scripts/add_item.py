#!/usr/bin/env python3
"""
Add a catalog item directly to the JSON store.

Usage:
  python scripts/add_item.py --category nhi --sub lythuyet --title "Bai 1" --file /uploads/bai1.pdf [--price 50000]
"""
from __future__ import annotations

import argparse
import sys

from docshop.domain.catalog import CATEGORIES, SUBSECTIONS
from docshop.services.catalog_service import CatalogService


def main() -> None:
    ap = argparse.ArgumentParser(description="Add a catalog item")
    ap.add_argument("--category", required=True, help="Category name")
    ap.add_argument("--sub", required=True, help="Subsection key (e.g. lythuyet)")
    ap.add_argument("--title", required=True, help="Item title")
    ap.add_argument("--file", required=True, help="Stored file reference (e.g. /uploads/x.pdf)")
    ap.add_argument("--price", help="Price in VND (default: random)")
    args = ap.parse_args()

    if args.category not in CATEGORIES:
        print(f"Warning: '{args.category}' is not one of the reference categories")
    if args.sub not in {s["key"] for s in SUBSECTIONS}:
        print(f"Warning: '{args.sub}' is not a known subsection key")

    item = CatalogService().add_item(args.category, args.sub, args.title, args.price, args.file)
    print("OK: item added")
    print(f"  ID: {item['id']}")
    print(f"  Title: {item['title']}")
    print(f"  Price: {item['price']}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
