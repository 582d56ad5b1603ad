import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import psycopg
import pytest

from receipt_worker.config.settings import Settings
from receipt_worker.database.repositories.job_repository import JobRepository
from receipt_worker.database.repositories.receipt_repository import ReceiptRepository
from receipt_worker.processor.processor import build_processor
from receipt_worker.worker.job_runner import JobRunner
from receipt_worker.worker.worker import Worker

IMAGE_KEY = "u1/receipt.jpg"


@pytest.fixture
def worker_settings(test_settings: Settings) -> Settings:
    return test_settings.model_copy(
        update={
            "ocr_engine": "example",
            "source_bucket": "images",
            "artifact_bucket": "artifacts",
            "processor_version": "v-test",
        }
    )


@pytest.fixture
def files_root(tmp_path: Path) -> Path:
    image = tmp_path / "images" / IMAGE_KEY
    image.parent.mkdir(parents=True)
    image.write_bytes(b"\xff\xd8\xff\xe0receipt")
    return tmp_path


def _make_worker(settings: Settings, files_root: Path) -> Worker:
    job_repo = JobRepository(settings.max_job_attempts, settings.batch_size)
    runner = JobRunner(build_processor(settings, files_root=files_root), job_repo, settings)
    return Worker(job_repo, runner)


@pytest.mark.integration
class TestWorkerEndToEnd:
    def test_processes_queued_receipt(
        self,
        seed_receipt: Callable[..., str],
        seed_job: Callable[..., int],
        worker_settings: Settings,
        files_root: Path,
    ) -> None:
        receipt_id = seed_receipt()
        job_id = seed_job(receipt_id=receipt_id, image_key=IMAGE_KEY)

        result = _make_worker(worker_settings, files_root).run_batch()

        assert result.to_dict() == {"processed": 1, "failed": 0, "total": 1}
        receipt = ReceiptRepository().find_by_id(receipt_id)
        assert receipt is not None
        assert receipt.status == "ocr_done"
        assert receipt.merchant == "Mart"
        assert receipt.total == 12.72
        assert receipt.subtotal == 12.0
        assert receipt.tax == 0.72
        assert receipt.raw_ocr is not None
        assert receipt.raw_ocr["artifact_key"] == f"ocr/{receipt_id}.json"
        assert receipt.raw_ocr["extracted_date"] == "2025-03-12"
        assert receipt.raw_ocr["reconciled_total"] == 12.72

        artifact = json.loads((files_root / "artifacts" / "ocr" / f"{receipt_id}.json").read_text())
        assert artifact["receipt_id"] == receipt_id
        assert artifact["processor_version"] == "v-test"
        assert "Blocks" in artifact["textract_response"]

        job = JobRepository(3, 10).find_by_id(job_id)
        assert job is not None
        assert job.processed is True
        assert job.processor == "v-test"

    def test_replayed_job_leaves_finished_receipt_alone(
        self,
        seed_receipt: Callable[..., str],
        seed_job: Callable[..., int],
        db_conn: psycopg.Connection[Any],
        worker_settings: Settings,
        files_root: Path,
    ) -> None:
        receipt_id = seed_receipt(status="ocr_done")
        db_conn.execute(
            "UPDATE receipts SET merchant = 'Original' WHERE id = %s::uuid", (receipt_id,)
        )
        db_conn.commit()
        job_id = seed_job(receipt_id=receipt_id, image_key=IMAGE_KEY)

        result = _make_worker(worker_settings, files_root).run_batch()

        assert result.succeeded == 1
        receipt = ReceiptRepository().find_by_id(receipt_id)
        assert receipt is not None
        assert receipt.merchant == "Original"
        job = JobRepository(3, 10).find_by_id(job_id)
        assert job is not None
        assert job.processed is True

    def test_failing_job_is_dead_lettered_after_max_attempts(
        self,
        seed_job: Callable[..., int],
        worker_settings: Settings,
        files_root: Path,
    ) -> None:
        job_id = seed_job(image_key="u1/missing.jpg")
        worker = _make_worker(worker_settings, files_root)
        repo = JobRepository(3, 10)

        for attempt in range(1, 3):
            assert worker.run_batch().failed == 1
            job = repo.find_by_id(job_id)
            assert job is not None
            assert job.attempts == attempt
            assert job.last_error is not None

        assert worker.run_batch().failed == 1
        assert repo.find_by_id(job_id) is None
        dead = repo.find_dead_letter(job_id)
        assert dead is not None
        assert dead.attempts == 3
        assert dead.reason == "Max attempts (3) exceeded"
        assert worker.run_batch().total == 0

    def test_job_abandoned_on_last_attempt_is_dead_lettered(
        self,
        seed_job: Callable[..., int],
        worker_settings: Settings,
        files_root: Path,
    ) -> None:
        job_id = seed_job(image_key=IMAGE_KEY, attempts=worker_settings.max_job_attempts)
        repo = JobRepository(worker_settings.max_job_attempts, 10)

        result = _make_worker(worker_settings, files_root).run_batch()

        assert result.total == 0
        assert repo.find_by_id(job_id) is None
        dead = repo.find_dead_letter(job_id)
        assert dead is not None
        assert dead.attempts == worker_settings.max_job_attempts

    def test_one_bad_job_does_not_block_the_batch(
        self,
        seed_job: Callable[..., int],
        worker_settings: Settings,
        files_root: Path,
    ) -> None:
        seed_job(image_key="u1/missing.jpg")
        seed_job(image_key=IMAGE_KEY)

        result = _make_worker(worker_settings, files_root).run_batch()

        assert result.to_dict() == {"processed": 1, "failed": 1, "total": 2}
