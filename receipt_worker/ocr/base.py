from abc import ABC, abstractmethod

from receipt_worker.ocr.models import OcrDocument


class BaseTextDetector(ABC):
    """Contract for all OCR text detection adapters."""

    @abstractmethod
    def detect(self, image_bytes: bytes) -> OcrDocument:
        """Detect text lines in a receipt image.

        Args:
            image_bytes: Raw image content (JPEG, PNG, ...).

        Returns:
            OcrDocument with ordered blocks and the provider's raw response.

        Raises:
            OcrError: if detection fails for any reason.
        """
