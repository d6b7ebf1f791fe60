"""
Manual payment display: transfer note, hosted QR link and a locally rendered
QR image for an order.
"""
from __future__ import annotations

import io
from urllib.parse import quote

import qrcode

from docshop.domain.orders import short_id
from docshop.repositories.json_storage import JsonStore, find_record, get_store
from docshop.services.errors import NotFoundError


def transfer_note(order: dict, account_code: str) -> str:
    """Text the buyer puts in the transfer: "<account code> <short order id>"."""
    return f"{account_code or ''} {short_id(order.get('id', ''))}".strip()


class PaymentService:
    def __init__(self, store: JsonStore | None = None) -> None:
        self.store = store or get_store()

    def settings(self) -> dict:
        return dict(self.store.read().get("settings") or {})

    def qr_url(self, order: dict, account_code: str) -> str:
        template = self.settings().get("momoQrTemplate") or ""
        return template + quote(transfer_note(order, account_code))

    def qr_payload(self, order: dict, account_code: str) -> str:
        settings = self.settings()
        lines = [
            f"{settings.get('momoName', '')} - {settings.get('momoPhone', '')}",
            f"{order.get('price', '')} VND",
            transfer_note(order, account_code),
        ]
        return "\n".join(lines)

    def qr_png(self, order_id: str, user_id: str) -> bytes:
        """PNG QR with the payment details of one of the user's orders."""
        db = self.store.read()
        order = find_record(db["orders"], order_id)
        user = find_record(db["users"], user_id)
        if not order or not user or order.get("userId") != user_id:
            raise NotFoundError("Không tìm thấy đơn")
        qr = qrcode.QRCode(version=None, error_correction=qrcode.constants.ERROR_CORRECT_M, box_size=8, border=4)
        qr.add_data(self.qr_payload(order, user.get("ndck") or ""))
        qr.make(fit=True)
        img = qr.make_image(fill_color="black", back_color="white")
        buf = io.BytesIO()
        img.save(buf, format="PNG")
        return buf.getvalue()
