from collections.abc import Callable

import pytest

from receipt_worker.ocr.models import LINE_BLOCK, OcrBlock, OcrDocument


def make_document(lines: list[str], confidence: float | None = 95.0) -> OcrDocument:
    """Build an OcrDocument with one PAGE block followed by LINE blocks."""
    blocks = [OcrBlock(block_type="PAGE", confidence=99.0)]
    blocks.extend(
        OcrBlock(block_type=LINE_BLOCK, text=text, confidence=confidence) for text in lines
    )
    raw = {
        "Blocks": [
            {"BlockType": b.block_type, "Text": b.text, "Confidence": b.confidence}
            for b in blocks
        ]
    }
    return OcrDocument(blocks=blocks, raw_response=raw)


@pytest.fixture()
def grocery_lines() -> list[str]:
    """A small, consistent grocery receipt."""
    return [
        "SUPERSTORE MART INC.",
        "Subtotal 12.00",
        "Tax 6% 0.72",
        "Total 12.72",
    ]


@pytest.fixture()
def grocery_document(grocery_lines: list[str]) -> OcrDocument:
    return make_document(grocery_lines)


@pytest.fixture()
def image_bytes() -> bytes:
    """Minimal JPEG header bytes; OCR adapters are mocked in tests."""
    return b"\xff\xd8\xff\xe0\x00\x10JFIF\x00receipt"


@pytest.fixture()
def document_factory() -> Callable[..., OcrDocument]:
    """Expose make_document to tests without importing conftest."""
    return make_document
