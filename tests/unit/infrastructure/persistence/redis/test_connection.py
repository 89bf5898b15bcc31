"""
Tests for the shared Redis connection pool.

Covers:
- Pool created once and reused
- Configuration from arguments and environment (REDIS_DB included)
- Unparsable REDIS_* settings are reported by name
- PING retry with exponential backoff
- health_check() never raises
- close_connections() resets the pool
"""

import threading
from unittest.mock import MagicMock, patch

import pytest
from redis.exceptions import ConnectionError, RedisError, TimeoutError

import src.infrastructure.persistence.redis.connection as connection
from src.infrastructure.persistence.redis.connection import (
    close_connections,
    get_redis_client,
    health_check,
)

MODULE = "src.infrastructure.persistence.redis.connection"


@pytest.fixture(autouse=True)
def reset_pool():
    connection._redis_pool = None
    yield
    connection._redis_pool = None


@pytest.fixture
def pool_class():
    with patch(f"{MODULE}.ConnectionPool") as pool_class:
        yield pool_class


@pytest.fixture
def client():
    with patch(f"{MODULE}.Redis") as redis_class:
        redis_client = MagicMock()
        redis_client.ping.return_value = True
        redis_class.return_value = redis_client
        yield redis_client


@pytest.fixture
def no_sleep():
    with patch(f"{MODULE}.time.sleep") as sleep:
        yield sleep


@pytest.fixture
def clean_env(monkeypatch):
    for name in (
        "REDIS_HOST",
        "REDIS_PORT",
        "REDIS_DB",
        "REDIS_MAX_CONNECTIONS",
        "REDIS_TIMEOUT",
        "REDIS_RETRY_ATTEMPTS",
    ):
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


# ============================================================================
# POOL CREATION
# ============================================================================


def test_pool_is_created_once(pool_class, client, clean_env):
    first = get_redis_client()
    second = get_redis_client()

    assert pool_class.call_count == 1
    assert first is client
    assert second is client


def test_default_configuration(pool_class, client, clean_env):
    get_redis_client()

    kwargs = pool_class.call_args.kwargs
    assert kwargs["host"] == "localhost"
    assert kwargs["port"] == 6379
    assert kwargs["db"] == 0
    assert kwargs["max_connections"] == 10
    assert kwargs["socket_timeout"] == 5
    assert kwargs["socket_keepalive"] is True
    assert kwargs["decode_responses"] is True


def test_configuration_from_environment(pool_class, client, clean_env):
    clean_env.setenv("REDIS_HOST", "redis.internal")
    clean_env.setenv("REDIS_PORT", "6380")
    clean_env.setenv("REDIS_DB", "2")
    clean_env.setenv("REDIS_MAX_CONNECTIONS", "25")
    clean_env.setenv("REDIS_TIMEOUT", "3")

    get_redis_client()

    kwargs = pool_class.call_args.kwargs
    assert kwargs["host"] == "redis.internal"
    assert kwargs["port"] == 6380
    assert kwargs["db"] == 2
    assert kwargs["max_connections"] == 25
    assert kwargs["socket_connect_timeout"] == 3


def test_arguments_override_environment(pool_class, client, clean_env):
    clean_env.setenv("REDIS_DB", "2")

    get_redis_client(host="cache", port=7000, db=0)

    kwargs = pool_class.call_args.kwargs
    assert (kwargs["host"], kwargs["port"], kwargs["db"]) == ("cache", 7000, 0)


def test_unparsable_environment_setting_is_named(pool_class, client, clean_env):
    clean_env.setenv("REDIS_PORT", "six-three-seven-nine")

    with pytest.raises(ValueError, match="REDIS_PORT"):
        get_redis_client()

    pool_class.assert_not_called()


def test_blank_environment_setting_uses_default(pool_class, client, clean_env):
    clean_env.setenv("REDIS_DB", "")

    get_redis_client()

    assert pool_class.call_args.kwargs["db"] == 0


def test_pool_creation_is_thread_safe(client, clean_env):
    created = []

    def make_pool(**kwargs):
        created.append(kwargs)
        return MagicMock()

    with patch(f"{MODULE}.ConnectionPool", side_effect=make_pool):
        threads = [threading.Thread(target=get_redis_client) for _ in range(10)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

    assert len(created) == 1


# ============================================================================
# RETRY
# ============================================================================


def test_ping_is_retried_with_backoff(pool_class, client, no_sleep, clean_env):
    clean_env.setenv("REDIS_RETRY_ATTEMPTS", "4")
    client.ping.side_effect = [
        ConnectionError("refused"),
        TimeoutError("timeout"),
        ConnectionError("refused"),
        True,
    ]

    assert get_redis_client() is client
    assert [c.args[0] for c in no_sleep.call_args_list] == [1, 2, 4]


def test_raises_after_all_attempts(pool_class, client, no_sleep, clean_env):
    client.ping.side_effect = ConnectionError("refused")

    with pytest.raises(RedisError, match="after 3 attempts"):
        get_redis_client()

    assert client.ping.call_count == 3


# ============================================================================
# HEALTH CHECK
# ============================================================================


def test_health_check_true_on_ping():
    with patch(f"{MODULE}.get_redis_client") as get_client:
        get_client.return_value.ping.return_value = True

        assert health_check() is True


@pytest.mark.parametrize(
    "failure", [RedisError("down"), RuntimeError("unexpected")]
)
def test_health_check_false_on_error(failure):
    with patch(f"{MODULE}.get_redis_client", side_effect=failure):
        assert health_check() is False


def test_health_check_false_when_ping_falsy():
    with patch(f"{MODULE}.get_redis_client") as get_client:
        get_client.return_value.ping.return_value = False

        assert health_check() is False


# ============================================================================
# SHUTDOWN
# ============================================================================


def test_close_connections_disconnects_and_resets_pool():
    pool = MagicMock()
    connection._redis_pool = pool

    close_connections()

    pool.disconnect.assert_called_once()
    assert connection._redis_pool is None


def test_close_connections_is_idempotent():
    close_connections()
    close_connections()

    assert connection._redis_pool is None


def test_close_connections_resets_pool_when_disconnect_fails():
    pool = MagicMock()
    pool.disconnect.side_effect = RedisError("broken pipe")
    connection._redis_pool = pool

    close_connections()

    assert connection._redis_pool is None
