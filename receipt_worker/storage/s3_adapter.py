import json
from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from receipt_worker.storage.base import BaseObjectStore
from receipt_worker.storage.exceptions import ObjectNotFoundError, StorageError

_MISSING_CODES = frozenset({"NoSuchKey", "NoSuchBucket", "404"})


class S3ObjectStore(BaseObjectStore):
    """Object storage on AWS S3."""

    def __init__(self, *, region: str, client: Any | None = None) -> None:
        self._client = client if client is not None else boto3.client(
            "s3", region_name=region
        )

    def get_bytes(self, bucket: str, key: str) -> bytes:
        try:
            response = self._client.get_object(Bucket=bucket, Key=key)
            body: bytes = response["Body"].read()
        except ClientError as exc:
            code = exc.response.get("Error", {}).get("Code", "")
            if code in _MISSING_CODES:
                raise ObjectNotFoundError(f"s3://{bucket}/{key} not found") from exc
            raise StorageError(f"S3 read of s3://{bucket}/{key} failed: {exc}") from exc
        except BotoCoreError as exc:
            raise StorageError(f"S3 read of s3://{bucket}/{key} failed: {exc}") from exc
        return body

    def put_json(self, bucket: str, key: str, payload: dict[str, Any]) -> None:
        try:
            self._client.put_object(
                Bucket=bucket,
                Key=key,
                Body=json.dumps(payload, default=str).encode("utf-8"),
                ContentType="application/json",
            )
        except (ClientError, BotoCoreError) as exc:
            raise StorageError(f"S3 write of s3://{bucket}/{key} failed: {exc}") from exc
