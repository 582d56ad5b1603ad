from typing import Any

from receipt_worker.config.settings import Settings
from receipt_worker.database.connection import close_pool, init_pool
from receipt_worker.database.repositories.job_repository import JobRepository
from receipt_worker.logging.logger import Log
from receipt_worker.processor.processor import build_processor
from receipt_worker.worker.job_runner import JobRunner
from receipt_worker.worker.worker import BatchResult, Worker


def run_once(settings: Settings) -> BatchResult:
    """Build dependencies -> open pool -> process one batch -> close pool and clients."""
    processor = build_processor(settings)
    try:
        init_pool(settings)
        try:
            job_repo = JobRepository(settings.max_job_attempts, settings.batch_size)
            job_runner = JobRunner(processor, job_repo, settings)
            return Worker(job_repo, job_runner).run_batch()
        finally:
            close_pool()
    finally:
        processor.close()


def handler(event: dict[str, Any], context: object) -> dict[str, int]:
    """Scheduled-trigger entry point. Returns the batch counts."""
    _ = context
    settings = Settings()
    Log.configure(settings.log_level)
    Log.debug(f"Worker invoked with event {event}")
    return run_once(settings).to_dict()


def main() -> None:
    """Entry point: run a single batch and exit."""
    settings = Settings()
    Log.configure(settings.log_level)
    result = run_once(settings)
    Log.info(f"Processed {result.succeeded}/{result.total} receipts")


if __name__ == "__main__":
    main()
