"""User roles and username derivation."""
from __future__ import annotations

from typing import Container

ROLE_USER = "user"
ROLE_ADMIN = "admin"


def username_from_email(email: str, taken: Container[str] = ()) -> str:
    """Email local-part, suffixed with 2, 3, ... while it collides with taken."""
    base = (email or "").split("@", 1)[0].strip() or "user"
    candidate = base
    suffix = 2
    while candidate in taken:
        candidate = f"{base}{suffix}"
        suffix += 1
    return candidate


def public_user(user: dict) -> dict:
    """User fields safe to expose outside the store (no credential hash)."""
    return {
        "id": user.get("id"),
        "username": user.get("username"),
        "email": user.get("email"),
        "name": user.get("name"),
        "role": user.get("role"),
        "ndck": user.get("ndck"),
    }
