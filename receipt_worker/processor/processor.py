from pathlib import Path

from receipt_worker.config.settings import Settings
from receipt_worker.database.models import JobRecord
from receipt_worker.database.repositories.receipt_repository import ReceiptRepository
from receipt_worker.extraction.extractor import FieldExtractor
from receipt_worker.logging.logger import Log
from receipt_worker.ocr.factory import TextDetectorFactory
from receipt_worker.processor.image_loader import ImageLoader
from receipt_worker.processor.pipeline import PipelineContext, PipelineStep
from receipt_worker.processor.receipt_writer import ReceiptWriter
from receipt_worker.processor.steps import (
    DetectTextStep,
    ExtractFieldsStep,
    LoadImageStep,
    PersistResultStep,
)
from receipt_worker.storage.artifact_store import ArtifactStore
from receipt_worker.storage.factory import ObjectStoreFactory
from receipt_worker.storage.local_adapter import LocalObjectStore
from receipt_worker.storage.remote_client import RemoteStorageClient


class Processor:
    """Runs the receipt pipeline for one job.

    Pipeline: load image -> detect text -> extract + reconcile -> persist.
    Exceptions propagate to the caller, which owns retry handling.
    """

    def __init__(
        self,
        steps: list[PipelineStep],
        remote_client: RemoteStorageClient | None = None,
    ) -> None:
        self._steps = steps
        self._remote_client = remote_client

    def process(self, job: JobRecord) -> PipelineContext:
        Log.info(f"Processing receipt {job.receipt_id} for job {job.id} ({job.image_key})")
        context = PipelineContext(job=job)
        for step in self._steps:
            context = step.run(context)
        return context

    def close(self) -> None:
        """Release the HTTP client held by the image loader."""
        if self._remote_client is not None:
            self._remote_client.close()


def build_processor(
    settings: Settings,
    files_root: Path | None = None,
) -> Processor:
    """Build a Processor with all required adapters.

    *files_root* forces a local object store rooted there (tests, local runs).
    """
    object_store = (
        LocalObjectStore(root=files_root)
        if files_root is not None
        else ObjectStoreFactory.create(settings)
    )
    remote_client = RemoteStorageClient(
        service_key=settings.remote_storage_service_key,
        timeout_seconds=settings.remote_storage_timeout_seconds,
    )
    image_loader = ImageLoader(
        object_store=object_store,
        remote_client=remote_client,
        source_bucket=settings.source_bucket,
        remote_url_marker=settings.remote_storage_url_marker,
    )
    receipt_writer = ReceiptWriter(
        artifact_store=ArtifactStore(
            object_store=object_store,
            bucket=settings.artifact_bucket,
            processor_version=settings.processor_version,
        ),
        receipt_repo=ReceiptRepository(),
    )
    return Processor(
        steps=[
            LoadImageStep(image_loader),
            DetectTextStep(TextDetectorFactory.create(settings)),
            ExtractFieldsStep(FieldExtractor()),
            PersistResultStep(receipt_writer),
        ],
        remote_client=remote_client,
    )
