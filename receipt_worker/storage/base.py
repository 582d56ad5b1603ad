from abc import ABC, abstractmethod
from typing import Any


class BaseObjectStore(ABC):
    """Contract for bucket/key object storage adapters."""

    @abstractmethod
    def get_bytes(self, bucket: str, key: str) -> bytes:
        """Read an object.

        Raises:
            ObjectNotFoundError: if the object does not exist.
            StorageError: on any other failure.
        """

    @abstractmethod
    def put_json(self, bucket: str, key: str, payload: dict[str, Any]) -> None:
        """Write *payload* as a JSON object, replacing any previous version.

        Raises:
            StorageError: if the write fails.
        """
