"""Session helpers (issue bearer tokens, resolve the current principal)."""
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import Request
from jose import JWTError, jwt

from docshop.core.config import get_settings
from docshop.domain.users import ROLE_ADMIN
from docshop.services.errors import ForbiddenError, UnauthenticatedError

BEARER_PREFIX = "Bearer "


@dataclass(frozen=True)
class Principal:
    """Already-authenticated caller as carried by the token."""

    id: str
    role: str
    name: str

    @property
    def is_admin(self) -> bool:
        return self.role == ROLE_ADMIN


def issue_token(user: dict) -> str:
    settings = get_settings()
    ttl = max(60, settings.session_ttl_seconds)
    claims = {
        "id": user["id"],
        "role": user.get("role"),
        "name": user.get("name"),
        "exp": datetime.now(timezone.utc) + timedelta(seconds=ttl),
    }
    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def decode_token(token: str | None) -> Optional[Principal]:
    if not token:
        return None
    settings = get_settings()
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None
    if not payload.get("id"):
        return None
    return Principal(id=payload["id"], role=payload.get("role") or "", name=payload.get("name") or "")


def _bearer_token(request: Request) -> str:
    header = request.headers.get("authorization") or ""
    if header.startswith(BEARER_PREFIX):
        return header[len(BEARER_PREFIX) :].strip()
    return ""


def current_principal(request: Request) -> Principal:
    token = _bearer_token(request)
    if not token:
        raise UnauthenticatedError("Unauthenticated")
    principal = decode_token(token)
    if not principal:
        raise UnauthenticatedError("Invalid token")
    return principal


def require_admin(request: Request) -> Principal:
    principal = current_principal(request)
    if not principal.is_admin:
        raise ForbiddenError("Admin only")
    return principal
