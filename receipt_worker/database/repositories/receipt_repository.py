from typing import Any

from psycopg.rows import dict_row
from psycopg.types.json import Jsonb

from receipt_worker.database.connection import get_connection
from receipt_worker.database.models import ReceiptRecord
from receipt_worker.extraction.models import ExtractedFields

OCR_DONE_STATUS = "ocr_done"


def to_cents(value: float | None) -> float | None:
    """Money as stored: rounded to whole cents."""
    return round(value, 2) if value is not None else None


class ReceiptRepository:
    """Database operations for the receipts table."""

    def apply_ocr_result(
        self,
        receipt_id: str,
        fields: ExtractedFields,
        raw_ocr: dict[str, Any],
    ) -> bool:
        """Write derived fields unless the receipt is already in ocr_done.

        Args:
            receipt_id: Target receipt ID.
            fields: Extracted and reconciled fields.
            raw_ocr: JSONB-ready artifact pointer and metadata.

        Returns:
            True if the row was updated, False if it was already processed
            (or does not exist).
        """
        with get_connection() as conn:
            with conn.cursor() as cur:
                cur.execute(
                    """
                    UPDATE receipts
                    SET merchant = %s,
                        total = %s,
                        subtotal = %s,
                        tax = %s,
                        tax_rate = %s,
                        raw_ocr = %s,
                        status = %s,
                        updated_at = NOW()
                    WHERE id = %s
                      AND status IS DISTINCT FROM %s
                    """,
                    (
                        fields.vendor,
                        to_cents(fields.total),
                        to_cents(fields.subtotal),
                        to_cents(fields.tax),
                        fields.tax_rate,
                        Jsonb(raw_ocr),
                        OCR_DONE_STATUS,
                        receipt_id,
                        OCR_DONE_STATUS,
                    ),
                )
                applied = cur.rowcount > 0
            conn.commit()
        return applied

    def find_by_id(self, receipt_id: str) -> ReceiptRecord | None:
        """Find a receipt by ID. Useful for tests."""
        with get_connection() as conn:
            with conn.cursor(row_factory=dict_row) as cur:
                cur.execute(
                    """
                    SELECT id, status, merchant, total, subtotal, tax, tax_rate,
                           raw_ocr, updated_at
                    FROM receipts
                    WHERE id = %s
                    """,
                    (receipt_id,),
                )
                row = cur.fetchone()

        if row is None:
            return None
        return ReceiptRecord(
            id=str(row["id"]),
            status=row["status"],
            merchant=row["merchant"],
            total=float(row["total"]) if row["total"] is not None else None,
            subtotal=float(row["subtotal"]) if row["subtotal"] is not None else None,
            tax=float(row["tax"]) if row["tax"] is not None else None,
            tax_rate=float(row["tax_rate"]) if row["tax_rate"] is not None else None,
            raw_ocr=row["raw_ocr"],
            updated_at=row["updated_at"],
        )
