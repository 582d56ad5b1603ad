import json
from pathlib import Path
from typing import Any

from receipt_worker.storage.base import BaseObjectStore
from receipt_worker.storage.exceptions import ObjectNotFoundError, StorageError


def object_path(root: Path, bucket: str, key: str) -> Path:
    """Build path to an object: {root}/{bucket}/{key}"""
    return root / bucket / key


class LocalObjectStore(BaseObjectStore):
    """Stores objects as files under a root directory, one folder per bucket."""

    DEFAULT_ROOT = Path("/app/files")

    def __init__(self, root: Path | None = None) -> None:
        self._root = root if root is not None else self.DEFAULT_ROOT

    def get_bytes(self, bucket: str, key: str) -> bytes:
        path = object_path(self._root, bucket, key)
        if not path.is_file():
            raise ObjectNotFoundError(f"File not found: {path}")
        try:
            return path.read_bytes()
        except OSError as exc:
            raise StorageError(f"Failed to read {path}: {exc}") from exc

    def put_json(self, bucket: str, key: str, payload: dict[str, Any]) -> None:
        path = object_path(self._root, bucket, key)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(json.dumps(payload, default=str), encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"Failed to write {path}: {exc}") from exc
