from typing import Any

import psycopg
from psycopg.rows import dict_row

from receipt_worker.database.connection import get_connection
from receipt_worker.database.models import DeadLetterRecord, JobRecord

_JOB_COLUMNS = """
    id, receipt_id, image_key, processed, attempts,
    enqueued_at, last_error, processor, processed_at
"""


def max_attempts_reason(max_attempts: int) -> str:
    return f"Max attempts ({max_attempts}) exceeded"


def _to_job(row: dict[str, Any]) -> JobRecord:
    return JobRecord(
        id=row["id"],
        receipt_id=str(row["receipt_id"]),
        image_key=row["image_key"],
        attempts=row["attempts"],
        processed=row["processed"],
        enqueued_at=row["enqueued_at"],
        last_error=row["last_error"],
        processor=row["processor"],
        processed_at=row["processed_at"],
    )


class JobRepository:
    """Database operations for the receipt_queue and receipt_queue_dlq tables."""

    def __init__(self, max_attempts: int, batch_size: int) -> None:
        self._max_attempts = max_attempts
        self._batch_size = batch_size

    @property
    def max_attempts(self) -> int:
        return self._max_attempts

    def lease_batch(self, conn: psycopg.Connection[Any]) -> list[JobRecord]:
        """Lease up to batch_size pending jobs using SELECT FOR UPDATE SKIP LOCKED.

        Attempts are incremented in the same transaction as the selection, so a
        worker that crashes after leasing still consumes one attempt. Returned
        records carry the post-increment attempts value.
        """
        with conn.cursor(row_factory=dict_row) as cur:
            cur.execute(
                f"""
                SELECT {_JOB_COLUMNS}
                FROM receipt_queue
                WHERE processed = FALSE
                  AND attempts < %s
                ORDER BY enqueued_at, id
                LIMIT %s
                FOR UPDATE SKIP LOCKED
                """,
                (self._max_attempts, self._batch_size),
            )
            rows = cur.fetchall()

        if not rows:
            conn.commit()
            return []

        conn.execute(
            """
            UPDATE receipt_queue
            SET attempts = attempts + 1
            WHERE id = ANY(%s)
            """,
            ([row["id"] for row in rows],),
        )
        conn.commit()

        jobs = [_to_job(row) for row in rows]
        for job in jobs:
            job.attempts += 1
        return jobs

    def dead_letter_exhausted(self, conn: psycopg.Connection[Any]) -> list[int]:
        """Move unprocessed jobs that already used every attempt to receipt_queue_dlq.

        A worker that dies after leasing a job on its last attempt leaves the
        row at attempts = max_attempts, which lease_batch never selects again.
        Returns the moved job IDs.
        """
        with conn.cursor() as cur:
            cur.execute(
                """
                WITH exhausted AS (
                    DELETE FROM receipt_queue
                    WHERE id IN (
                        SELECT id
                        FROM receipt_queue
                        WHERE processed = FALSE
                          AND attempts >= %s
                        FOR UPDATE SKIP LOCKED
                    )
                    RETURNING id, receipt_id, image_key, attempts, last_error
                )
                INSERT INTO receipt_queue_dlq
                    (job_id, receipt_id, image_key, attempts, last_error, reason)
                SELECT id, receipt_id, image_key, attempts, last_error, %s
                FROM exhausted
                RETURNING job_id
                """,
                (self._max_attempts, max_attempts_reason(self._max_attempts)),
            )
            moved = [row[0] for row in cur.fetchall()]
        conn.commit()
        return moved

    def mark_done(self, job_id: int, processor: str) -> None:
        """Mark a job processed. A job already processed is left untouched."""
        with get_connection() as conn:
            conn.execute(
                """
                UPDATE receipt_queue
                SET processed = TRUE, processor = %s,
                    processed_at = NOW(), last_error = NULL
                WHERE id = %s AND processed = FALSE
                """,
                (processor, job_id),
            )
            conn.commit()

    def record_failure(self, job_id: int, error: str) -> int | None:
        """Store the failure message and return the job's current attempts.

        Returns None if the job no longer exists.
        """
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE receipt_queue
                    SET last_error = %s
                    WHERE id = %s
                    RETURNING attempts
                    """,
                    (error, job_id),
                )
                row = cur.fetchone()
            conn.commit()

        if row is None:
            return None
        attempts: int = row[0]
        return attempts

    def move_to_dead_letter(self, job_id: int, reason: str) -> None:
        """Copy an exhausted job into receipt_queue_dlq and drop it from the queue."""
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    INSERT INTO receipt_queue_dlq
                        (job_id, receipt_id, image_key, attempts, last_error, reason)
                    SELECT id, receipt_id, image_key, attempts, last_error, %s
                    FROM receipt_queue
                    WHERE id = %s AND processed = FALSE
                    """,
                    (reason, job_id),
                )
                cur.execute(
                    "DELETE FROM receipt_queue WHERE id = %s AND processed = FALSE",
                    (job_id,),
                )
            conn.commit()

    def find_by_id(self, job_id: int) -> JobRecord | None:
        """Find a job by ID. Useful for tests."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    f"SELECT {_JOB_COLUMNS} FROM receipt_queue WHERE id = %s",
                    (job_id,),
                )
                row = cur.fetchone()

        if row is None:
            return None
        return _to_job(row)

    def find_dead_letter(self, job_id: int) -> DeadLetterRecord | None:
        """Find the dead-letter entry for a job, if it was moved there."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT job_id, receipt_id, image_key, attempts,
                           last_error, reason, moved_at
                    FROM receipt_queue_dlq
                    WHERE job_id = %s
                    """,
                    (job_id,),
                )
                row = cur.fetchone()

        if row is None:
            return None
        return DeadLetterRecord(
            job_id=row["job_id"],
            receipt_id=str(row["receipt_id"]),
            image_key=row["image_key"],
            attempts=row["attempts"],
            reason=row["reason"],
            last_error=row["last_error"],
            moved_at=row["moved_at"],
        )
