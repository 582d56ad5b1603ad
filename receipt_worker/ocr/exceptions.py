class OcrError(Exception):
    """Raised when text detection fails."""


class OcrNetworkError(OcrError):
    """Raised when the OCR service call fails due to network/infrastructure issues."""
