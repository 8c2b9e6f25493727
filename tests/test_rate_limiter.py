"""
Pure unit tests for app/core/rate_limiter.py.

The memory path runs with the Redis client set to None; the Redis path uses
MockRedis. Time is frozen with unittest.mock.patch to test window sliding
without sleeping.
"""

import time
import uuid
from unittest.mock import patch

import pytest
from fastapi import HTTPException

from tests.mocks.redis_mock import MockRedis


def _uid() -> str:
    return f"rl_test_{uuid.uuid4().hex}"


def _with_null_redis(monkeypatch):
    from app.integrations import redis_client as rc
    monkeypatch.setattr(rc, "client", None)


# ---------------------------------------------------------------------------
# Memory path
# ---------------------------------------------------------------------------


def test_requests_under_limit_pass(monkeypatch):
    _with_null_redis(monkeypatch)
    from app.config import settings
    from app.core.rate_limiter import check_rate_limit

    uid = _uid()
    for _ in range(settings.rate_limit_max_requests):
        check_rate_limit(uid)  # no exception


def test_request_exceeding_limit_raises_429(monkeypatch):
    _with_null_redis(monkeypatch)
    from app.config import settings
    from app.core.rate_limiter import check_rate_limit

    uid = _uid()
    for _ in range(settings.rate_limit_max_requests):
        check_rate_limit(uid)

    with pytest.raises(HTTPException) as exc:
        check_rate_limit(uid)
    assert exc.value.status_code == 429


def test_limits_are_per_identifier(monkeypatch):
    _with_null_redis(monkeypatch)
    from app.config import settings
    from app.core.rate_limiter import check_rate_limit

    uid = _uid()
    for _ in range(settings.rate_limit_max_requests):
        check_rate_limit(uid)

    check_rate_limit(_uid())  # a different user is unaffected


def test_new_window_allows_requests_again(monkeypatch):
    _with_null_redis(monkeypatch)
    from app.config import settings
    from app.core.rate_limiter import check_rate_limit

    uid = _uid()
    for _ in range(settings.rate_limit_max_requests):
        check_rate_limit(uid)

    future_time = time.time() + settings.rate_limit_request_window_sec + 1
    with patch("app.core.rate_limiter.time") as mock_time:
        mock_time.time.return_value = future_time
        check_rate_limit(uid)  # should not raise in the new window


def test_cleanup_removes_idle_users(monkeypatch):
    _with_null_redis(monkeypatch)
    from app.config import settings
    from app.core.rate_limiter import _cleanup_all_limits, _rate_limits

    uid = _uid()
    _rate_limits[uid] = [time.time() - settings.rate_limit_request_window_sec - 5]

    _cleanup_all_limits(time.time())

    assert uid not in _rate_limits


# ---------------------------------------------------------------------------
# Redis path
# ---------------------------------------------------------------------------


def test_redis_counter_enforces_limit(mock_redis, monkeypatch):
    from app.config import settings
    from app.core.rate_limiter import check_rate_limit

    monkeypatch.setattr(settings, "rate_limit_max_requests", 2)
    uid = _uid()
    check_rate_limit(uid)
    check_rate_limit(uid)

    with pytest.raises(HTTPException) as exc:
        check_rate_limit(uid)
    assert exc.value.status_code == 429
    assert mock_redis.ttl(f"rate_limit:{uid}") > 0


def test_redis_failure_falls_back_to_memory(monkeypatch):
    from app.core.rate_limiter import _rate_limits, check_rate_limit
    from app.integrations import redis_client as rc

    monkeypatch.setattr(rc, "client", MockRedis(fail=True))
    uid = _uid()
    check_rate_limit(uid)

    assert len(_rate_limits[uid]) == 1
