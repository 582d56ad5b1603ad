from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

import psycopg
from psycopg.conninfo import make_conninfo
from psycopg_pool import ConnectionPool

from receipt_worker.config.settings import Settings

APPLICATION_NAME = "receipt_worker"

_pool: ConnectionPool | None = None


def build_conninfo(settings: Settings) -> str:
    """Connection string from DATABASE_URL, or from the individual DB_* settings."""
    if settings.database_url:
        return settings.database_url
    return make_conninfo(
        host=settings.db_host,
        port=settings.db_port,
        dbname=settings.db_database,
        user=settings.db_username,
        password=settings.db_password,
    )


def init_pool(settings: Settings) -> None:
    """Open the global connection pool.

    A worker run handles one batch sequentially, so the pool stays small.
    Checkouts wait at most db_pool_timeout_seconds before PoolTimeout.
    """
    global _pool  # noqa: PLW0603
    _pool = ConnectionPool(
        build_conninfo(settings),
        min_size=1,
        max_size=settings.db_pool_max_size,
        timeout=settings.db_pool_timeout_seconds,
        kwargs={"application_name": APPLICATION_NAME},
        name=APPLICATION_NAME,
        open=True,
    )


def close_pool() -> None:
    """Close the global connection pool. Safe to call when it was never opened."""
    global _pool  # noqa: PLW0603
    if _pool is not None:
        _pool.close()
        _pool = None


@contextmanager
def get_connection() -> Generator[psycopg.Connection[Any], None, None]:
    """Yield a pooled connection. Caller manages commit/rollback."""
    if _pool is None:
        raise RuntimeError("Connection pool not initialized. Call init_pool() first.")
    with _pool.connection() as conn:
        yield conn
