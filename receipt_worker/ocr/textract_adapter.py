from typing import Any

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from receipt_worker.logging.logger import Log
from receipt_worker.ocr.base import BaseTextDetector
from receipt_worker.ocr.exceptions import OcrError, OcrNetworkError
from receipt_worker.ocr.models import OcrBlock, OcrDocument


class TextractAdapter(BaseTextDetector):
    """Detects text with AWS Textract DetectDocumentText."""

    def __init__(self, *, region: str, client: Any | None = None) -> None:
        self._client = client if client is not None else boto3.client(
            "textract", region_name=region
        )

    def detect(self, image_bytes: bytes) -> OcrDocument:
        if not image_bytes:
            raise OcrError("Cannot run text detection on an empty image")
        Log.info(f"Calling Textract with {len(image_bytes)} bytes")
        try:
            response: dict[str, Any] = self._client.detect_document_text(
                Document={"Bytes": image_bytes}
            )
        except ClientError as exc:
            raise OcrError(f"Textract rejected the request: {exc}") from exc
        except BotoCoreError as exc:
            raise OcrNetworkError(f"Textract call failed: {exc}") from exc

        blocks = [self._to_block(raw) for raw in response.get("Blocks", [])]
        return OcrDocument(blocks=blocks, raw_response=response)

    @staticmethod
    def _to_block(raw: dict[str, Any]) -> OcrBlock:
        confidence = raw.get("Confidence")
        return OcrBlock(
            block_type=str(raw.get("BlockType", "")),
            text=str(raw.get("Text", "")).strip(),
            confidence=float(confidence) if confidence is not None else None,
        )
