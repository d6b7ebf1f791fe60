"""In-process fixed-window limits for login, registration and code redemption."""
from __future__ import annotations

import threading
import time
from typing import Callable, Dict, Tuple

from fastapi import Request

from docshop.services.errors import RateLimitedError


class _RateLimiter:
    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._hits: Dict[str, Tuple[int, float]] = {}
        self._lock = threading.Lock()
        self._clock = clock

    def hit(self, key: str, limit: int, window_seconds: int) -> bool:
        """Count one hit; False once the key is over its limit for the window."""
        now = self._clock()
        with self._lock:
            expired = [k for k, (_, reset) in self._hits.items() if now > reset]
            for k in expired:
                del self._hits[k]
            count, reset = self._hits.get(key, (0, now + window_seconds))
            count += 1
            self._hits[key] = (count, reset)
            return count <= limit

    def __len__(self) -> int:
        return len(self._hits)

    def clear(self) -> None:
        with self._lock:
            self._hits.clear()


_limiter = _RateLimiter()


def _client_ip(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    if request.client and request.client.host:
        return request.client.host
    return "unknown"


def rate_limit_key(scope: str, key: str, *, limit: int, window_seconds: int) -> None:
    if not _limiter.hit(f"{scope}:{key}", limit, window_seconds):
        raise RateLimitedError("Quá nhiều yêu cầu. Vui lòng thử lại sau.")


def rate_limit_ip(request: Request, scope: str, *, limit: int, window_seconds: int) -> None:
    rate_limit_key(scope, _client_ip(request), limit=limit, window_seconds=window_seconds)


def reset_limits() -> None:
    _limiter.clear()
