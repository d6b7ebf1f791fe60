from __future__ import annotations

import pytest

from docshop.core import rate_limiter
from docshop.core.rate_limiter import _RateLimiter
from docshop.services.errors import RateLimitedError


def test_limit_applies_within_window_and_resets_after():
    now = [1000.0]
    limiter = _RateLimiter(clock=lambda: now[0])

    assert [limiter.hit("login:1.2.3.4", 2, 60) for _ in range(3)] == [True, True, False]
    now[0] += 61
    assert limiter.hit("login:1.2.3.4", 2, 60) is True


def test_expired_keys_are_dropped():
    now = [1000.0]
    limiter = _RateLimiter(clock=lambda: now[0])
    for i in range(50):
        limiter.hit(f"login:10.0.0.{i}", 5, 60)
    assert len(limiter) == 50

    now[0] += 61
    limiter.hit("login:10.0.1.1", 5, 60)
    assert len(limiter) == 1


def test_rate_limit_key_raises_when_exceeded():
    rate_limiter.rate_limit_key("orders:activate", "u1", limit=1, window_seconds=60)
    with pytest.raises(RateLimitedError):
        rate_limiter.rate_limit_key("orders:activate", "u1", limit=1, window_seconds=60)
    rate_limiter.rate_limit_key("orders:activate", "u2", limit=1, window_seconds=60)
