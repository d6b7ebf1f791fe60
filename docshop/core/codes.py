"""
Identifier and human-readable code generators.

Account and activation codes avoid visually ambiguous symbols (0/O, 1/I).
"""

from __future__ import annotations

import secrets
import time
import uuid
from typing import Callable, Container

CODE_ALPHABET = "ABCDEFGHJKLMNPQRSTUVWXYZ23456789"
ACCOUNT_CODE_PREFIX = "AC-"
ACCOUNT_CODE_LENGTH = 8
ACTIVATION_CODE_LENGTH = 12
MAX_CODE_ATTEMPTS = 32


def generate_code(length: int = 10) -> str:
    return "".join(secrets.choice(CODE_ALPHABET) for _ in range(length))


def account_code() -> str:
    return ACCOUNT_CODE_PREFIX + generate_code(ACCOUNT_CODE_LENGTH)


def activation_code() -> str:
    return generate_code(ACTIVATION_CODE_LENGTH)


def unique_code(factory: Callable[[], str], taken: Container[str]) -> str:
    """Draw from factory until the value is not already taken."""
    for _ in range(MAX_CODE_ATTEMPTS):
        value = factory()
        if value not in taken:
            return value
    raise RuntimeError("Could not generate a unique code")


def normalize_code(value: str | None) -> str:
    if not isinstance(value, str):
        return ""
    return value.strip().upper()


def new_id() -> str:
    return str(uuid.uuid4())


def now_ms() -> int:
    return int(time.time() * 1000)
