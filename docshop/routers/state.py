"""Accessors for services attached to app.state by the application factory."""
from __future__ import annotations

from fastapi import Request

from docshop.services.catalog_service import CatalogService
from docshop.services.notification_service import NotificationService
from docshop.services.order_service import OrderService
from docshop.services.payment_service import PaymentService
from docshop.services.upload_service import UploadService
from docshop.services.user_service import UserService


def _state_attr(request: Request, name: str):
    svc = getattr(getattr(request.app, "state", None), name, None)
    if not svc:
        raise RuntimeError(f"{name} is not configured")
    return svc


def catalog_service(request: Request) -> CatalogService:
    return _state_attr(request, "catalog_service")


def user_service(request: Request) -> UserService:
    return _state_attr(request, "user_service")


def order_service(request: Request) -> OrderService:
    return _state_attr(request, "order_service")


def notification_service(request: Request) -> NotificationService:
    return _state_attr(request, "notification_service")


def upload_service(request: Request) -> UploadService:
    return _state_attr(request, "upload_service")


def payment_service(request: Request) -> PaymentService:
    return _state_attr(request, "payment_service")
