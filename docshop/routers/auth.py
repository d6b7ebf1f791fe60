from __future__ import annotations

from fastapi import APIRouter, Request

from docshop.core.rate_limiter import rate_limit_ip
from docshop.routers.state import user_service
from docshop.services.session_service import current_principal

router = APIRouter(prefix="/api", tags=["auth"])


@router.post("/register")
def register(request: Request, payload: dict):
    rate_limit_ip(request, "auth:register", limit=10, window_seconds=300)
    user_service(request).register(payload.get("name"), payload.get("email"), payload.get("password"))
    return {"ok": True}


@router.post("/login")
def login(request: Request, payload: dict):
    """Admins must send asAdmin=true to get a session."""
    rate_limit_ip(request, "auth:login", limit=20, window_seconds=300)
    result = user_service(request).authenticate(
        payload.get("login"),
        payload.get("password"),
        bool(payload.get("asAdmin")),
    )
    return {"token": result.token, "user": result.user}


@router.get("/me")
def me(request: Request):
    principal = current_principal(request)
    return user_service(request).get_profile(principal.id)
