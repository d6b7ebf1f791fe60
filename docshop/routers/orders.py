from __future__ import annotations

from fastapi import APIRouter, Request
from fastapi.responses import Response

from docshop.core.rate_limiter import rate_limit_key
from docshop.routers.state import order_service, payment_service, user_service
from docshop.services.session_service import current_principal

router = APIRouter(prefix="/api", tags=["orders"])


@router.post("/order")
def create_order(request: Request, payload: dict):
    principal = current_principal(request)
    order = order_service(request).create(principal.id, payload.get("itemId"))
    profile = user_service(request).get_profile(principal.id)
    order["paymentQrUrl"] = payment_service(request).qr_url(order, profile.get("ndck") or "")
    return order


@router.get("/order/{order_id}/qr")
def order_qr(order_id: str, request: Request):
    principal = current_principal(request)
    png = payment_service(request).qr_png(order_id, principal.id)
    return Response(png, media_type="image/png")


@router.post("/order/{order_id}/confirm")
def confirm_payment(order_id: str, request: Request):
    principal = current_principal(request)
    order_service(request).report(order_id, principal.id)
    return {"ok": True}


@router.get("/my-orders")
def my_orders(request: Request):
    principal = current_principal(request)
    return order_service(request).list_for_user(principal.id)


@router.post("/activate")
def activate(request: Request, payload: dict):
    principal = current_principal(request)
    rate_limit_key("orders:activate", principal.id, limit=10, window_seconds=300)
    result = order_service(request).activate(payload.get("code"), principal.id)
    return {"ok": True, "itemId": result.item_id}
