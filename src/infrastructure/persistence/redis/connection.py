"""
Redis Connection Pool Management.

Provides a shared connection pool for the application store with a PING
check and retry logic.

Responsibility:
    - Manage one Redis connection pool per process
    - Verify connectivity with PING, retrying with exponential backoff
    - Health check for the API /health endpoint
    - Pool shutdown

Architecture Notes:
    - Infrastructure Layer (external dependency on Redis)
    - Singleton pool guarded by threading.Lock (Celery threads, uvicorn workers)
    - Environment-based configuration

Configuration (environment):
    - REDIS_HOST (default "localhost"), REDIS_PORT (default 6379)
    - REDIS_DB (default 0)
    - REDIS_MAX_CONNECTIONS (default 10)
    - REDIS_TIMEOUT seconds (default 5)
    - REDIS_RETRY_ATTEMPTS (default 3), backoff 1s, 2s, 4s ...
    An integer setting that does not parse raises ValueError naming it.

Examples:
    >>> client = get_redis_client()
    >>> client.hgetall("application:3fa85f64-5717-4562-b3fc-2c963f66afa6")
    >>>
    >>> if health_check():
    ...     print("Redis is healthy")
    >>>
    >>> close_connections()
"""

import logging
import os
import threading
import time
from typing import Optional

from redis import ConnectionPool, Redis
from redis.exceptions import ConnectionError, RedisError, TimeoutError

# Configure logger for this module
logger = logging.getLogger(__name__)

# Process-wide connection pool
_redis_pool: Optional[ConnectionPool] = None
_pool_lock = threading.Lock()


def _env_int(name: str, default: int) -> int:
    """Read an integer setting, naming the variable when it does not parse."""
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def _pool_settings(
    host: Optional[str],
    port: Optional[int],
    db: Optional[int],
    max_connections: Optional[int],
    timeout: Optional[int],
) -> dict:
    """Merge explicit arguments over REDIS_* environment settings."""
    return {
        "host": host or os.getenv("REDIS_HOST", "localhost"),
        "port": port or _env_int("REDIS_PORT", 6379),
        "db": db if db is not None else _env_int("REDIS_DB", 0),
        "max_connections": max_connections or _env_int("REDIS_MAX_CONNECTIONS", 10),
        "timeout": timeout or _env_int("REDIS_TIMEOUT", 5),
    }


def _ping_until_ready(client: Redis, attempts: int) -> None:
    """
    PING the application store, backing off 1s, 2s, 4s ... between attempts.

    Raises:
        RedisError: If no attempt gets an answer
    """
    last_error: Optional[Exception] = None

    for attempt in range(1, attempts + 1):
        try:
            client.ping()
            logger.debug(f"Application store reachable (attempt {attempt})")
            return
        except (ConnectionError, TimeoutError) as e:
            last_error = e
            if attempt == attempts:
                break
            delay = 2 ** (attempt - 1)
            logger.warning(
                f"Application store unreachable (attempt {attempt}/{attempts}): "
                f"{e}. Retrying in {delay}s..."
            )
            time.sleep(delay)

    logger.error(f"Application store unreachable after {attempts} attempts: {last_error}")
    raise RedisError(
        f"Failed to connect to Redis after {attempts} attempts. "
        f"Last error: {last_error}"
    )


def get_redis_client(
    host: Optional[str] = None,
    port: Optional[int] = None,
    db: Optional[int] = None,
    max_connections: Optional[int] = None,
    timeout: Optional[int] = None,
) -> Redis:
    """
    Get a client for the application store, backed by the shared pool.

    The pool is created on the first call; later calls reuse it and ignore
    the connection arguments. Every call PINGs before returning, so the
    repository fails fast instead of on its first MULTI/EXEC.

    Args:
        host: Redis hostname (default from env: REDIS_HOST or "localhost")
        port: Redis port (default from env: REDIS_PORT or 6379)
        db: Database holding application records (default from env: REDIS_DB or 0)
        max_connections: Max pool size (default from env: REDIS_MAX_CONNECTIONS or 10)
        timeout: Socket timeout in seconds (default from env: REDIS_TIMEOUT or 5)

    Returns:
        Redis client with decode_responses=True (str values, not bytes)

    Raises:
        ValueError: If a REDIS_* integer setting does not parse
        RedisError: If PING fails on every attempt
    """
    global _redis_pool

    if _redis_pool is None:
        settings = _pool_settings(host, port, db, max_connections, timeout)
        with _pool_lock:
            if _redis_pool is None:
                logger.info(
                    "Creating application store pool: "
                    + ", ".join(f"{key}={value}" for key, value in settings.items())
                )
                _redis_pool = ConnectionPool(
                    host=settings["host"],
                    port=settings["port"],
                    db=settings["db"],
                    max_connections=settings["max_connections"],
                    socket_timeout=settings["timeout"],
                    socket_connect_timeout=settings["timeout"],
                    socket_keepalive=True,
                    decode_responses=True,
                )

    client = Redis(connection_pool=_redis_pool)
    _ping_until_ready(client, _env_int("REDIS_RETRY_ATTEMPTS", 3))
    return client


def health_check() -> bool:
    """
    Report whether the application store answers PING (used by /health).

    Returns:
        True if Redis answers PING, False on any error (never raises)
    """
    try:
        if get_redis_client().ping():
            logger.debug("Application store health check: OK")
            return True

        logger.warning("Application store health check: PING returned False")
        return False

    except RedisError as e:
        logger.warning(f"Application store health check failed: {e}")
        return False

    except Exception as e:
        logger.error(f"Unexpected error in application store health check: {e}")
        return False


def close_connections() -> None:
    """Disconnect the shared pool and reset it (API shutdown, idempotent)."""
    global _redis_pool

    with _pool_lock:
        if _redis_pool is None:
            logger.debug("Application store pool already closed or not initialized")
            return

        logger.info("Closing application store pool")
        try:
            _redis_pool.disconnect()
        except RedisError as e:
            logger.error(f"Error closing application store pool: {e}")
        finally:
            _redis_pool = None
