from dataclasses import dataclass

from receipt_worker.database.connection import get_connection
from receipt_worker.database.models import JobRecord
from receipt_worker.database.repositories.job_repository import JobRepository
from receipt_worker.logging.logger import Log
from receipt_worker.worker.job_runner import JobRunner


@dataclass(frozen=True)
class BatchResult:
    """Outcome counts of one batch."""

    succeeded: int = 0
    failed: int = 0

    @property
    def total(self) -> int:
        return self.succeeded + self.failed

    def to_dict(self) -> dict[str, int]:
        return {"processed": self.succeeded, "failed": self.failed, "total": self.total}


class Worker:
    """Processes one batch per call: lease -> run each job in order.

    There is no internal timer; the host decides how often run_batch is called.
    """

    def __init__(self, job_repo: JobRepository, job_runner: JobRunner) -> None:
        self._job_repo = job_repo
        self._job_runner = job_runner

    def run_batch(self) -> BatchResult:
        jobs = self._try_lease_batch()
        if not jobs:
            Log.info("No jobs available")
            return BatchResult()

        Log.info(f"Leased {len(jobs)} jobs")
        succeeded = failed = 0
        for job in jobs:
            if self._job_runner.run(job):
                succeeded += 1
            else:
                failed += 1

        result = BatchResult(succeeded=succeeded, failed=failed)
        Log.info(
            f"Batch complete: {result.succeeded} succeeded, "
            f"{result.failed} failed, {result.total} total"
        )
        return result

    def _try_lease_batch(self) -> list[JobRecord]:
        """Dead-letter exhausted jobs, then lease the next batch. Gracefully handle DB errors."""
        try:
            with get_connection() as conn:
                moved = self._job_repo.dead_letter_exhausted(conn)
                if moved:
                    Log.warning(
                        f"Moved {len(moved)} exhausted jobs to dead letter: {moved}"
                    )
                return self._job_repo.lease_batch(conn)
        except Exception as exc:
            Log.warning(f"Database error while leasing, will retry next run: {exc}")
            return []
