from datetime import datetime, timezone
from typing import Any

from receipt_worker.logging.logger import Log
from receipt_worker.storage.base import BaseObjectStore


def artifact_key(receipt_id: str) -> str:
    """Deterministic artifact location for a receipt."""
    return f"ocr/{receipt_id}.json"


class ArtifactStore:
    """Writes the raw OCR response for a receipt as a durable JSON artifact."""

    def __init__(
        self,
        object_store: BaseObjectStore,
        bucket: str,
        processor_version: str,
    ) -> None:
        self._object_store = object_store
        self._bucket = bucket
        self._processor_version = processor_version

    def store(self, receipt_id: str, ocr_response: dict[str, Any]) -> str:
        """Upload the artifact and return its key. Repeating the call overwrites it."""
        key = artifact_key(receipt_id)
        payload = {
            "receipt_id": receipt_id,
            "textract_response": ocr_response,
            "processed_at": datetime.now(timezone.utc).isoformat(),
            "processor_version": self._processor_version,
        }
        self._object_store.put_json(self._bucket, key, payload)
        Log.info(f"Stored OCR artifact for receipt {receipt_id} at {key}")
        return key
