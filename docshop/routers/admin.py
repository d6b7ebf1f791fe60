from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, File, Form, Request, UploadFile

from docshop.routers.state import catalog_service, order_service, upload_service
from docshop.services.errors import ServiceError, ValidationError
from docshop.services.session_service import require_admin

router = APIRouter(prefix="/api/admin", tags=["admin"])


@router.get("/pending-count")
def pending_count(request: Request):
    require_admin(request)
    return {"pending": order_service(request).pending_count()}


@router.get("/pending")
def pending(request: Request, ack: bool = True, unseen: bool = False):
    """Reported orders; by default viewing them clears the admin badge."""
    require_admin(request)
    return order_service(request).list_pending(acknowledge=ack, unseen_only=unseen)


@router.post("/pending/ack")
def acknowledge(request: Request, payload: dict):
    require_admin(request)
    ids = payload.get("orderIds") or []
    if not isinstance(ids, list):
        raise ValidationError("orderIds must be a list")
    return {"ok": True, "acknowledged": order_service(request).acknowledge_pending(ids)}


@router.post("/orders/{order_id}/approve")
def approve(order_id: str, request: Request):
    require_admin(request)
    result = order_service(request).approve(order_id)
    return {"ok": True, "activationCode": result.activation_code}


@router.post("/upload")
async def upload(
    request: Request,
    category: str = Form(""),
    sub: str = Form(""),
    title: str = Form(""),
    price: Optional[str] = Form(None),
    file: Optional[UploadFile] = File(None),
):
    require_admin(request)
    if not file or not file.filename:
        raise ValidationError("Thiếu file")
    if not category.strip() or not sub.strip() or not title.strip():
        raise ValidationError("Thiếu thông tin")
    data = await file.read()
    uploads = upload_service(request)
    file_ref = uploads.store(file.filename, data)
    try:
        return catalog_service(request).add_item(category, sub, title, price, file_ref)
    except ServiceError:
        uploads.discard(file_ref)
        raise
