from receipt_worker.extraction.confidence import aggregate_confidence
from receipt_worker.extraction.dates import extract_date
from receipt_worker.extraction.models import ExtractedFields
from receipt_worker.extraction.reconciliation import reconcile
from receipt_worker.extraction.taxes import extract_taxes
from receipt_worker.extraction.totals import extract_total
from receipt_worker.extraction.vendor import extract_vendor
from receipt_worker.logging.logger import Log
from receipt_worker.ocr.models import OcrDocument


class FieldExtractor:
    """Runs every field extractor over a document and reconciles the totals."""

    def extract(self, document: OcrDocument) -> ExtractedFields:
        lines = document.lines
        taxes = extract_taxes(lines)
        reconciliation = reconcile(taxes.subtotal, taxes.tax, extract_total(lines))

        fields = ExtractedFields(
            vendor=extract_vendor(lines),
            total=reconciliation.total,
            subtotal=taxes.subtotal,
            tax=taxes.tax,
            tax_rate=taxes.tax_rate,
            receipt_date=extract_date(lines),
            ocr_confidence=aggregate_confidence(document.line_blocks),
            reconciled=reconciliation.reconciled,
        )
        Log.debug(
            f"Extracted fields from {len(lines)} lines: vendor={fields.vendor!r} "
            f"total={fields.total} reconciled={fields.reconciled}"
        )
        return fields
