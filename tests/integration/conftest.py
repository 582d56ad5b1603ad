import os
import uuid
from collections.abc import Callable, Generator
from pathlib import Path
from typing import Any

import psycopg
import pytest

from receipt_worker.config.settings import Settings
from receipt_worker.database.connection import close_pool, get_connection, init_pool

SCHEMA_PATH = Path(__file__).with_name("schema.sql")


def _test_settings() -> Settings:
    os.environ.setdefault("DB_DATABASE", "receipts_test")
    return Settings(max_job_attempts=3, batch_size=10)


@pytest.fixture(scope="session")
def test_settings() -> Settings:
    return _test_settings()


@pytest.fixture(scope="session")
def integration_pool(test_settings: Settings) -> Generator[None, None, None]:
    try:
        init_pool(test_settings)
        with get_connection() as conn:
            conn.execute(SCHEMA_PATH.read_text(encoding="utf-8"))
            conn.commit()
    except Exception as e:
        close_pool()
        pytest.skip(
            f"PostgreSQL test DB not available: {e}. "
            "Set DB_* or DATABASE_URL to point at a disposable database"
        )
    try:
        yield
    finally:
        close_pool()


@pytest.fixture
def clean_queue(integration_pool: None) -> Generator[None, None, None]:
    """Start from empty tables so leases only see rows seeded by the test."""

    def _truncate() -> None:
        with get_connection() as conn:
            conn.execute("TRUNCATE receipt_queue_dlq, receipt_queue, receipts")
            conn.commit()

    _truncate()
    yield
    _truncate()


@pytest.fixture
def db_conn(clean_queue: None) -> Generator[psycopg.Connection[Any], None, None]:
    with get_connection() as conn:
        yield conn


@pytest.fixture
def seed_receipt(
    db_conn: psycopg.Connection[Any],
) -> Callable[..., str]:
    def _seed(status: str = "uploaded") -> str:
        receipt_id = str(uuid.uuid4())
        db_conn.execute(
            "INSERT INTO receipts (id, status) VALUES (%s::uuid, %s)",
            (receipt_id, status),
        )
        db_conn.commit()
        return receipt_id

    return _seed


@pytest.fixture
def seed_job(
    db_conn: psycopg.Connection[Any],
    seed_receipt: Callable[..., str],
) -> Callable[..., int]:
    def _seed(
        receipt_id: str | None = None,
        image_key: str = "u1/receipt.jpg",
        attempts: int = 0,
    ) -> int:
        target = receipt_id if receipt_id is not None else seed_receipt()
        with db_conn.cursor() as cur:
            cur.execute(
                """
                INSERT INTO receipt_queue (receipt_id, image_key, attempts)
                VALUES (%s::uuid, %s, %s)
                RETURNING id
                """,
                (target, image_key, attempts),
            )
            row = cur.fetchone()
            assert row is not None
        db_conn.commit()
        return int(row[0])

    return _seed
