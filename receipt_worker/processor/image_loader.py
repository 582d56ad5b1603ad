from receipt_worker.logging.logger import Log
from receipt_worker.processor.exceptions import ImageDownloadError
from receipt_worker.storage.base import BaseObjectStore
from receipt_worker.storage.exceptions import StorageError
from receipt_worker.storage.remote_client import RemoteStorageClient


class ImageLoader:
    """Resolves a job's image key to a storage backend and reads its bytes.

    Keys containing the remote storage URL marker are downloaded from the
    external storage service; anything else is an object key in the source
    bucket.
    """

    def __init__(
        self,
        object_store: BaseObjectStore,
        remote_client: RemoteStorageClient,
        source_bucket: str,
        remote_url_marker: str,
    ) -> None:
        self._object_store = object_store
        self._remote_client = remote_client
        self._source_bucket = source_bucket
        self._remote_url_marker = remote_url_marker

    def is_remote(self, image_key: str) -> bool:
        return bool(self._remote_url_marker) and self._remote_url_marker in image_key

    def load(self, image_key: str) -> bytes:
        """Read image bytes for *image_key*.

        Raises:
            ImageDownloadError: if the image cannot be read from either backend.
        """
        try:
            if self.is_remote(image_key):
                data = self._remote_client.download(image_key)
            else:
                Log.info(f"Downloading s3://{self._source_bucket}/{image_key}")
                data = self._object_store.get_bytes(self._source_bucket, image_key)
        except StorageError as exc:
            raise ImageDownloadError(f"Failed to download image: {exc}") from exc

        if not data:
            raise ImageDownloadError(f"Image {image_key} is empty")
        return data
