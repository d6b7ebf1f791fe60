#!/usr/bin/env python3
"""
Approve a reported order from the command line and print its activation code.

Usage:
  python scripts/approve_order.py --order <order-id>
  python scripts/approve_order.py --list
"""
from __future__ import annotations

import argparse
import sys

from docshop.services.order_service import OrderService


def main() -> None:
    ap = argparse.ArgumentParser(description="Approve a reported order")
    group = ap.add_mutually_exclusive_group(required=True)
    group.add_argument("--order", help="Order id to approve")
    group.add_argument("--list", action="store_true", help="List reported orders without acknowledging them")
    args = ap.parse_args()

    svc = OrderService()
    if args.list:
        for order in svc.list_pending(acknowledge=False):
            user = order.get("user") or {}
            item = order.get("item") or {}
            print(f"{order['id']}  {user.get('email', '?'):<30} {order['price']:>8}  {item.get('title', '?')}")
        return

    result = svc.approve(args.order.strip())
    print("OK: order approved")
    print(f"  Order: {result.order_id}")
    print(f"  Activation code: {result.activation_code}")


if __name__ == "__main__":
    try:
        main()
    except Exception as exc:  # pragma: no cover - CLI
        sys.stderr.write(f"Error: {exc}\n")
        raise SystemExit(1)
