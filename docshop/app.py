from __future__ import annotations

import logging
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

from docshop.core.config import get_settings
from docshop.core.log import configure_logging
from docshop.repositories.json_storage import JsonStore, get_store
from docshop.routers import admin as admin_router
from docshop.routers import auth as auth_router
from docshop.routers import catalog as catalog_router
from docshop.routers import notifications as notifications_router
from docshop.routers import orders as orders_router
from docshop.services.catalog_service import CatalogService
from docshop.services.errors import ServiceError
from docshop.services.notification_service import NotificationService
from docshop.services.order_service import OrderService
from docshop.services.payment_service import PaymentService
from docshop.services.upload_service import UploadService
from docshop.services.user_service import UserService

logger = logging.getLogger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Inject baseline security headers (anti clickjacking, nosniff, referrer policy)."""

    def __init__(self, app, *, enforce_hsts: bool) -> None:
        super().__init__(app)
        self._enforce_hsts = enforce_hsts

    async def dispatch(self, request, call_next):
        response = await call_next(request)
        response.headers.setdefault("X-Frame-Options", "DENY")
        response.headers.setdefault("X-Content-Type-Options", "nosniff")
        response.headers.setdefault("Referrer-Policy", "no-referrer-when-downgrade")
        if self._enforce_hsts:
            response.headers.setdefault("Strict-Transport-Security", "max-age=31536000; includeSubDomains")
        return response


def _error_response(request: Request, err: ServiceError) -> JSONResponse:
    if err.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, err.message)
    return JSONResponse({"ok": False, "error": err.code, "message": err.message}, status_code=err.status_code)


def create_app(store: JsonStore | None = None, uploads_dir: str | Path | None = None) -> FastAPI:
    """Build the API bound to a store (defaults to the configured data file)."""
    settings = get_settings()
    configure_logging()
    store = store or get_store()

    app = FastAPI(title="Docshop API")
    app.state.store = store
    app.state.catalog_service = CatalogService(store)
    app.state.user_service = UserService(store)
    app.state.order_service = OrderService(store)
    app.state.notification_service = NotificationService(store)
    app.state.payment_service = PaymentService(store)
    app.state.upload_service = UploadService(uploads_dir)

    allowed_cors = set()
    if settings.app_env != "prod":
        allowed_cors.update(
            {
                "http://localhost:3000",
                "http://127.0.0.1:3000",
                "http://localhost:5173",
                "http://127.0.0.1:5173",
            }
        )
    if allowed_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=sorted(allowed_cors),
            allow_credentials=True,
            allow_methods=["GET", "POST", "OPTIONS"],
            allow_headers=["*"],
        )
    app.add_middleware(SecurityHeadersMiddleware, enforce_hsts=settings.app_env == "prod")
    app.add_exception_handler(ServiceError, _error_response)

    app.include_router(catalog_router.router)
    app.include_router(auth_router.router)
    app.include_router(orders_router.router)
    app.include_router(notifications_router.router)
    app.include_router(admin_router.router)
    return app
