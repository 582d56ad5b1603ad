from collections.abc import Callable

import pytest

from receipt_worker.database.repositories.receipt_repository import ReceiptRepository
from receipt_worker.extraction.models import ExtractedFields


def _fields(vendor: str = "Mart", total: float = 12.72) -> ExtractedFields:
    return ExtractedFields(
        vendor=vendor, total=total, subtotal=12.0, tax=0.72, tax_rate=0.06,
        receipt_date="2025-03-12", ocr_confidence=0.95, reconciled=True,
    )


@pytest.mark.integration
class TestApplyOcrResult:
    def test_first_apply_updates_receipt(self, seed_receipt: Callable[..., str]) -> None:
        receipt_id = seed_receipt()
        repo = ReceiptRepository()

        assert repo.apply_ocr_result(receipt_id, _fields(), {"artifact_key": "k"}) is True

        record = repo.find_by_id(receipt_id)
        assert record is not None
        assert record.status == "ocr_done"
        assert record.merchant == "Mart"
        assert record.total == 12.72
        assert record.tax_rate == 0.06
        assert record.raw_ocr == {"artifact_key": "k"}

    def test_second_apply_is_a_no_op(self, seed_receipt: Callable[..., str]) -> None:
        receipt_id = seed_receipt()
        repo = ReceiptRepository()
        repo.apply_ocr_result(receipt_id, _fields(), {"artifact_key": "k"})
        before = repo.find_by_id(receipt_id)

        applied = repo.apply_ocr_result(receipt_id, _fields("Other", 99.0), {"artifact_key": "x"})

        assert applied is False
        assert repo.find_by_id(receipt_id) == before

    def test_missing_receipt_is_not_applied(self, seed_receipt: Callable[..., str]) -> None:
        seed_receipt()

        applied = ReceiptRepository().apply_ocr_result(
            "00000000-0000-0000-0000-000000000000", _fields(), {}
        )

        assert applied is False
