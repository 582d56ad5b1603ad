from receipt_worker.extraction.amounts import find_amounts, parse_amount
from receipt_worker.extraction.extractor import FieldExtractor
from receipt_worker.extraction.models import ExtractedFields, Reconciliation
from receipt_worker.extraction.reconciliation import reconcile

__all__ = [
    "ExtractedFields",
    "FieldExtractor",
    "Reconciliation",
    "find_amounts",
    "parse_amount",
    "reconcile",
]
