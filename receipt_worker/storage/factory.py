from pathlib import Path

from receipt_worker.config.settings import Settings
from receipt_worker.storage.base import BaseObjectStore
from receipt_worker.storage.local_adapter import LocalObjectStore
from receipt_worker.storage.s3_adapter import S3ObjectStore


class ObjectStoreFactory:
    """Creates the object storage adapter selected in settings."""

    BACKENDS: tuple[str, ...] = ("s3", "local")

    @classmethod
    def create(cls, settings: Settings) -> BaseObjectStore:
        backend = settings.storage_backend.lower()
        if backend == "s3":
            return S3ObjectStore(region=settings.aws_region)
        if backend == "local":
            return LocalObjectStore(root=Path(settings.local_storage_root))
        raise ValueError(
            f"Unknown storage backend '{backend}'. Choose from: {list(cls.BACKENDS)}"
        )
