from receipt_worker.config.settings import Settings
from receipt_worker.database.models import JobRecord
from receipt_worker.database.repositories.job_repository import (
    JobRepository,
    max_attempts_reason,
)
from receipt_worker.logging.logger import Log
from receipt_worker.processor.processor import Processor


class JobRunner:
    """Run one job, catch exceptions, and apply retry/dead-letter logic."""

    def __init__(
        self,
        processor: Processor,
        job_repo: JobRepository,
        settings: Settings,
    ) -> None:
        self._processor = processor
        self._job_repo = job_repo
        self._settings = settings

    def run(self, job: JobRecord) -> bool:
        """Execute a single job. Returns True on success; never raises."""
        Log.info(
            f"Running job {job.id} for receipt {job.receipt_id} (attempt {job.attempts})"
        )
        try:
            self._processor.process(job)
            self._job_repo.mark_done(job.id, self._settings.processor_version)
        except Exception as exc:
            self._handle_failure(job, exc)
            return False
        Log.info(
            f"Job {job.id} completed successfully",
            job_id=job.id,
            receipt_id=job.receipt_id,
        )
        return True

    def _handle_failure(self, job: JobRecord, exc: Exception) -> None:
        """Record last_error; dead-letter the job once attempts reach the maximum."""
        Log.exception(
            f"Job {job.id} failed: {exc}", job_id=job.id, receipt_id=job.receipt_id
        )
        try:
            attempts = self._job_repo.record_failure(job.id, str(exc))
            if attempts is None:
                attempts = job.attempts
            max_attempts = self._job_repo.max_attempts
            if attempts >= max_attempts:
                self._job_repo.move_to_dead_letter(job.id, max_attempts_reason(max_attempts))
                Log.warning(
                    f"Job {job.id} for receipt {job.receipt_id} moved to dead letter "
                    f"after {attempts} attempts"
                )
            else:
                Log.warning(
                    f"Job {job.id} will be retried ({attempts}/{max_attempts} attempts used)"
                )
        except Exception as mark_exc:
            Log.error(f"Failed to record failure for job {job.id}: {mark_exc}")
