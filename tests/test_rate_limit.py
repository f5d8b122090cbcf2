# tests/test_rate_limit.py
"""Tests for the fixed-window attempt limiter."""

from __future__ import annotations

import time
from concurrent.futures import ThreadPoolExecutor

import pytest

from kridart.services.rate_limit import FixedWindowRateLimiter


def test_allows_up_to_cap_then_rejects() -> None:
    limiter = FixedWindowRateLimiter(3, 60)
    assert [limiter.allow("1.2.3.4") for _ in range(4)] == [True, True, True, False]


def test_keys_are_independent() -> None:
    limiter = FixedWindowRateLimiter(1, 60)
    assert limiter.allow("a")
    assert not limiter.allow("a")
    assert limiter.allow("b")


def test_new_window_after_expiry() -> None:
    limiter = FixedWindowRateLimiter(1, 1)
    assert limiter.allow("k")
    assert not limiter.allow("k")

    time.sleep(1.1)

    assert limiter.allow("k")
    assert not limiter.allow("k")


def test_retry_after_reports_time_to_reset() -> None:
    limiter = FixedWindowRateLimiter(1, 900)
    assert limiter.retry_after("k") == 0

    limiter.allow("k")
    limiter.allow("k")

    assert 890 <= limiter.retry_after("k") <= 900


def test_reset_forgets_every_window() -> None:
    limiter = FixedWindowRateLimiter(1, 60)
    limiter.allow("a")
    limiter.allow("b")

    limiter.reset()

    assert limiter.allow("a")
    assert limiter.allow("b")


def test_concurrent_attempts_never_exceed_cap() -> None:
    limiter = FixedWindowRateLimiter(10, 60)

    with ThreadPoolExecutor(max_workers=16) as pool:
        results = list(pool.map(lambda _: limiter.allow("10.0.0.1"), range(200)))

    assert results.count(True) == 10


def test_exposes_configuration() -> None:
    limiter = FixedWindowRateLimiter(100, 900)
    assert limiter.max_requests == 100
    assert limiter.window_seconds == 900


@pytest.mark.parametrize(
    "kwargs",
    [
        {"max_requests": 0, "window_seconds": 60},
        {"max_requests": 1, "window_seconds": 0},
    ],
)
def test_invalid_configuration_refused(kwargs: dict) -> None:
    with pytest.raises(ValueError):
        FixedWindowRateLimiter(**kwargs)
