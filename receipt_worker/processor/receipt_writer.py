from typing import Any

from receipt_worker.database.repositories.receipt_repository import (
    ReceiptRepository,
    to_cents,
)
from receipt_worker.extraction.models import ExtractedFields
from receipt_worker.logging.logger import Log
from receipt_worker.storage.artifact_store import ArtifactStore


def build_raw_ocr(artifact_key: str, fields: ExtractedFields) -> dict[str, Any]:
    """JSONB payload for receipts.raw_ocr."""
    raw_ocr: dict[str, Any] = {
        "artifact_key": artifact_key,
        "confidence": fields.ocr_confidence,
        "extracted_date": fields.receipt_date,
    }
    if fields.reconciled:
        raw_ocr["reconciled_total"] = to_cents(fields.total)
    return raw_ocr


class ReceiptWriter:
    """Persists one receipt's OCR result idempotently.

    The artifact upload always runs and simply overwrites an earlier copy.
    The receipt update only applies while the receipt is not yet ocr_done,
    so replaying a finished job changes nothing.
    """

    def __init__(
        self,
        artifact_store: ArtifactStore,
        receipt_repo: ReceiptRepository,
    ) -> None:
        self._artifact_store = artifact_store
        self._receipt_repo = receipt_repo

    def write(
        self,
        receipt_id: str,
        ocr_response: dict[str, Any],
        fields: ExtractedFields,
    ) -> bool:
        """Store the artifact, then update the receipt. Returns whether the update applied."""
        key = self._artifact_store.store(receipt_id, ocr_response)
        applied = self._receipt_repo.apply_ocr_result(
            receipt_id, fields, build_raw_ocr(key, fields)
        )
        if applied:
            Log.info(f"Receipt {receipt_id} updated to ocr_done")
        else:
            Log.info(f"Receipt {receipt_id} already processed, update skipped")
        return applied
