"""Example text detection adapter.

Use this module as a reference when implementing new OCR adapters.
Implement BaseTextDetector and register the engine in TextDetectorFactory.
"""

from typing import Any, ClassVar

from receipt_worker.ocr.base import BaseTextDetector
from receipt_worker.ocr.models import LINE_BLOCK, OcrBlock, OcrDocument


class ExampleTextDetector(BaseTextDetector):
    """Example adapter that returns a fixed receipt regardless of the image.

    No network calls. Useful for local development, tests, and as a template
    for building real OCR adapters.
    """

    DEFAULT_LINES: ClassVar[list[str]] = [
        "SUPERSTORE MART INC.",
        "12/03/2025 14:22",
        "Milk 2L 4.50",
        "Bread 7.50",
        "Subtotal 12.00",
        "Tax 6% 0.72",
        "Total 12.72",
    ]

    def __init__(self, lines: list[str] | None = None, confidence: float = 98.0) -> None:
        self._lines = lines if lines is not None else list(self.DEFAULT_LINES)
        self._confidence = confidence

    def detect(self, image_bytes: bytes) -> OcrDocument:
        _ = image_bytes
        raw_blocks: list[dict[str, Any]] = [
            {"BlockType": LINE_BLOCK, "Text": text, "Confidence": self._confidence}
            for text in self._lines
        ]
        blocks = [
            OcrBlock(block_type=LINE_BLOCK, text=text, confidence=self._confidence)
            for text in self._lines
        ]
        return OcrDocument(blocks=blocks, raw_response={"Blocks": raw_blocks})
