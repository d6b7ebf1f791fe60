"""
Order lifecycle: create -> report payment -> admin approval -> one-time
activation that unlocks the item for the order's owner.

Status only moves forward (new -> reported -> approved). Activation does not
change the status; it flips activationUsed exactly once. Every check runs
before the in-memory dataset is touched, so a failed call never persists a
partial change.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable
import logging

from docshop.core.codes import activation_code, new_id, normalize_code, now_ms, unique_code
from docshop.domain.orders import (
    ORDER_STATUS_APPROVED,
    ORDER_STATUS_NEW,
    ORDER_STATUS_REPORTED,
    can_transition,
    short_id,
)
from docshop.domain.users import ROLE_ADMIN, public_user
from docshop.repositories.json_storage import JsonStore, find_record, get_store
from docshop.services.errors import (
    AlreadyUsedError,
    ForbiddenError,
    InvalidCodeError,
    InvalidTransitionError,
    NotApprovedError,
    NotFoundError,
)
from docshop.services.notification_service import push_notification

logger = logging.getLogger(__name__)

ORDER_NOT_FOUND = "Không tìm thấy đơn"


@dataclass
class ApproveResult:
    order_id: str
    activation_code: str


@dataclass
class ActivateResult:
    item_id: str


class OrderService:
    """State machine over the orders collection of the JSON store."""

    def __init__(self, store: JsonStore | None = None) -> None:
        self.store = store or get_store()

    # -------------------------------------- helpers --------------------------------------
    def _owned_order(self, db: dict, order_id: str, user_id: str) -> dict:
        order = find_record(db["orders"], order_id)
        # Someone else's order is reported as missing, not forbidden.
        if not order or order.get("userId") != user_id:
            raise NotFoundError(ORDER_NOT_FOUND)
        return order

    def _user(self, db: dict, user_id: str) -> dict:
        user = find_record(db["users"], user_id)
        if not user:
            raise NotFoundError("Không tìm thấy người dùng")
        return user

    # -------------------------------------- user side --------------------------------------
    def create(self, user_id: str, item_id: str) -> dict:
        with self.store.transaction() as db:
            item = find_record(db["items"], item_id)
            if not item:
                raise NotFoundError("Không tìm thấy tài liệu")
            self._user(db, user_id)
            order = {
                "id": new_id(),
                "userId": user_id,
                "itemId": item["id"],
                "price": item["price"],
                "status": ORDER_STATUS_NEW,
                "reportedAt": None,
                "approvedAt": None,
                "activationCode": None,
                "activationUsed": False,
                "activatedAt": None,
                "seenByAdmin": False,
                "createdAt": now_ms(),
            }
            db["orders"].append(order)
        logger.info("Order %s created by %s for item %s", order["id"], user_id, item_id)
        return dict(order)

    def report(self, order_id: str, user_id: str) -> dict:
        """Owner reports a manual payment; re-surfaces the order to admins."""
        with self.store.transaction() as db:
            order = self._owned_order(db, order_id, user_id)
            if not can_transition(order.get("status"), ORDER_STATUS_REPORTED):
                raise InvalidTransitionError("Đơn đã được duyệt")
            order["status"] = ORDER_STATUS_REPORTED
            order["reportedAt"] = now_ms()
            order["seenByAdmin"] = False
        logger.info("Order %s reported as paid", order_id)
        return dict(order)

    def list_for_user(self, user_id: str) -> list[dict]:
        db = self.store.read()
        orders = [o for o in db["orders"] if o.get("userId") == user_id]
        orders.sort(key=lambda o: o.get("createdAt") or 0, reverse=True)
        return [{**o, "item": find_record(db["items"], o.get("itemId"))} for o in orders]

    def activate(self, code: str, user_id: str) -> ActivateResult:
        value = normalize_code(code)
        with self.store.transaction() as db:
            order = None
            if value:
                order = next(
                    (o for o in db["orders"] if o.get("activationCode") == value and o.get("userId") == user_id),
                    None,
                )
            if not order:
                logger.info("Invalid activation attempt by %s", user_id)
                raise InvalidCodeError("Mã không hợp lệ")
            if order.get("activationUsed"):
                raise AlreadyUsedError("Mã đã được sử dụng")
            if order.get("status") != ORDER_STATUS_APPROVED:
                raise NotApprovedError("Đơn chưa được duyệt")
            user = self._user(db, user_id)
            order["activationUsed"] = True
            order["activatedAt"] = now_ms()
            unlocked = user.setdefault("unlockedItemIds", [])
            if order["itemId"] not in unlocked:
                unlocked.append(order["itemId"])
        logger.info("Order %s activated; item %s unlocked for %s", order["id"], order["itemId"], user_id)
        return ActivateResult(item_id=order["itemId"])

    def is_unlocked(self, user_id: str, item_id: str) -> bool:
        user = find_record(self.store.read()["users"], user_id)
        if not user:
            return False
        return user.get("role") == ROLE_ADMIN or item_id in (user.get("unlockedItemIds") or [])

    def download_path(self, user_id: str, item_id: str) -> str:
        """Stored file reference of an item the user is entitled to."""
        item = find_record(self.store.read()["items"], item_id)
        if not item:
            raise NotFoundError("Không tìm thấy tài liệu")
        if not self.is_unlocked(user_id, item_id):
            raise ForbiddenError("Tài liệu chưa được kích hoạt")
        if not item.get("filePath"):
            raise NotFoundError("Tài liệu chưa có file")
        return item["filePath"]

    # -------------------------------------- admin side --------------------------------------
    def pending_count(self) -> int:
        return len(self._pending(self.store.read(), unseen_only=True))

    def _pending(self, db: dict, unseen_only: bool) -> list[dict]:
        return [
            o
            for o in db["orders"]
            if o.get("status") == ORDER_STATUS_REPORTED and not (unseen_only and o.get("seenByAdmin"))
        ]

    def _join_pending(self, db: dict, orders: Iterable[dict]) -> list[dict]:
        joined = []
        for o in orders:
            user = find_record(db["users"], o.get("userId"))
            joined.append(
                {
                    **o,
                    "user": public_user(user) if user else None,
                    "item": find_record(db["items"], o.get("itemId")),
                }
            )
        joined.sort(key=lambda o: o.get("reportedAt") or 0, reverse=True)
        return joined

    def list_pending(self, acknowledge: bool = True, unseen_only: bool = False) -> list[dict]:
        """
        Reported orders, most recently reported first.

        With acknowledge=True the returned orders are marked seenByAdmin in the
        same write. unseen_only=True limits the view to orders not yet seen, so
        an order shows up there once per report.
        """
        if not acknowledge:
            db = self.store.read()
            return self._join_pending(db, self._pending(db, unseen_only))
        with self.store.transaction() as db:
            pending = self._pending(db, unseen_only)
            # snapshot before flagging so callers see what was new
            result = self._join_pending(db, pending)
            for o in pending:
                o["seenByAdmin"] = True
        return result

    def acknowledge_pending(self, order_ids: Iterable[str]) -> int:
        wanted = set(order_ids or ())
        with self.store.transaction() as db:
            flagged = 0
            for o in db["orders"]:
                if o.get("id") in wanted and o.get("status") == ORDER_STATUS_REPORTED and not o.get("seenByAdmin"):
                    o["seenByAdmin"] = True
                    flagged += 1
        return flagged

    def approve(self, order_id: str) -> ApproveResult:
        with self.store.transaction() as db:
            order = find_record(db["orders"], order_id)
            if not order:
                raise NotFoundError(ORDER_NOT_FOUND)
            if not can_transition(order.get("status"), ORDER_STATUS_APPROVED):
                raise InvalidTransitionError(
                    "Đơn đã được duyệt" if order.get("status") == ORDER_STATUS_APPROVED else "Đơn chưa báo thanh toán"
                )
            user = self._user(db, order["userId"])
            code = unique_code(activation_code, {o.get("activationCode") for o in db["orders"]})
            order["status"] = ORDER_STATUS_APPROVED
            order["approvedAt"] = now_ms()
            order["activationCode"] = code
            order["seenByAdmin"] = True
            push_notification(
                user,
                f"Đơn hàng {short_id(order['id'])} đã được duyệt. Mã kích hoạt: {code}",
            )
        logger.info("Order %s approved", order_id)
        return ApproveResult(order_id=order["id"], activation_code=code)
