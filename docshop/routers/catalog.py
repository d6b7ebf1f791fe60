from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Request
from fastapi.responses import FileResponse

from docshop.routers.state import catalog_service, order_service, payment_service, upload_service
from docshop.services.session_service import current_principal

router = APIRouter(prefix="/api", tags=["catalog"])


@router.get("/catalog")
def catalog(request: Request):
    return catalog_service(request).reference()


@router.get("/items")
def items(request: Request, category: Optional[str] = None, sub: Optional[str] = None):
    return catalog_service(request).list_items(category=category, sub=sub)


@router.get("/settings")
def payment_settings(request: Request):
    return payment_service(request).settings()


@router.get("/items/{item_id}/download")
def download(item_id: str, request: Request):
    principal = current_principal(request)
    file_ref = order_service(request).download_path(principal.id, item_id)
    path = upload_service(request).resolve(file_ref)
    return FileResponse(path, filename=path.name)
