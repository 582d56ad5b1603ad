class ProcessorError(Exception):
    """Base exception for all processor-related errors."""


class ImageDownloadError(ProcessorError):
    """Raised when a receipt image cannot be fetched from storage."""


class PipelineStateError(ProcessorError):
    """Raised when a step runs before the context data it needs is set."""
