import re

import httpx

from receipt_worker.logging.logger import Log
from receipt_worker.storage.exceptions import (
    InvalidStorageUrlError,
    ObjectNotFoundError,
    StorageError,
)

_PUBLIC_OBJECT_RE = re.compile(
    r"^(?P<origin>https?://[^/]+)/.*?/object/public/(?P<bucket>[^/]+)/(?P<path>.+)$"
)


def parse_public_url(url: str) -> tuple[str, str, str]:
    """Split a public storage URL into (origin, bucket, path).

    Raises:
        InvalidStorageUrlError: if the URL has no ``/object/public/<bucket>/<path>`` part.
    """
    match = _PUBLIC_OBJECT_RE.match(url)
    if match is None:
        raise InvalidStorageUrlError(f"Invalid storage URL format: {url}")
    return match.group("origin"), match.group("bucket"), match.group("path")


class RemoteStorageClient:
    """Downloads receipt images stored in an external storage service.

    With a service key the object is fetched through the authenticated
    ``/storage/v1/object/<bucket>/<path>`` endpoint; without one the public URL
    is used as-is.
    """

    def __init__(
        self,
        *,
        service_key: str,
        timeout_seconds: int,
        client: httpx.Client | None = None,
    ) -> None:
        self._service_key = service_key
        self._client = client if client is not None else httpx.Client(
            timeout=timeout_seconds
        )

    def download(self, url: str) -> bytes:
        origin, bucket, path = parse_public_url(url)
        Log.info(f"Downloading from remote storage bucket={bucket} path={path}")
        if self._service_key:
            target = f"{origin}/storage/v1/object/{bucket}/{path}"
            headers = {
                "Authorization": f"Bearer {self._service_key}",
                "apikey": self._service_key,
            }
        else:
            target, headers = url, {}

        try:
            response = self._client.get(target, headers=headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            if exc.response.status_code == 404:
                raise ObjectNotFoundError(f"{bucket}/{path} not found") from exc
            raise StorageError(f"Remote storage download failed: {exc}") from exc
        except httpx.HTTPError as exc:
            raise StorageError(f"Remote storage download failed: {exc}") from exc
        return response.content

    def close(self) -> None:
        self._client.close()
