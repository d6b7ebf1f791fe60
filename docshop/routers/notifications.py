from __future__ import annotations

from fastapi import APIRouter, Request

from docshop.routers.state import notification_service
from docshop.services.session_service import current_principal

router = APIRouter(prefix="/api/notifications", tags=["notifications"])


@router.get("/count")
def unread_count(request: Request):
    principal = current_principal(request)
    return {"unread": notification_service(request).unread_count(principal.id)}


@router.get("")
def list_notifications(request: Request):
    principal = current_principal(request)
    return notification_service(request).list(principal.id)


@router.post("/read-all")
def read_all(request: Request):
    principal = current_principal(request)
    notification_service(request).mark_all_read(principal.id)
    return {"ok": True}
