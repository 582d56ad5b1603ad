class StorageError(Exception):
    """Base exception for object storage failures."""


class ObjectNotFoundError(StorageError):
    """Raised when the requested object does not exist."""


class InvalidStorageUrlError(StorageError):
    """Raised when a remote storage URL cannot be mapped to bucket and path."""
