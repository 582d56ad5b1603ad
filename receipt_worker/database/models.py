from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass
class JobRecord:
    """Represents a row from the receipt_queue table."""

    id: int
    receipt_id: str
    image_key: str
    attempts: int
    processed: bool = False
    enqueued_at: datetime | None = None
    last_error: str | None = None
    processor: str | None = None
    processed_at: datetime | None = None


@dataclass
class DeadLetterRecord:
    """Represents a row from the receipt_queue_dlq table."""

    job_id: int
    receipt_id: str
    image_key: str
    attempts: int
    reason: str
    last_error: str | None = None
    moved_at: datetime | None = None


@dataclass
class ReceiptRecord:
    """Subset of the receipts table touched by the OCR worker."""

    id: str
    status: str
    merchant: str | None = None
    total: float | None = None
    subtotal: float | None = None
    tax: float | None = None
    tax_rate: float | None = None
    raw_ocr: dict[str, Any] | None = None
    updated_at: datetime | None = None
