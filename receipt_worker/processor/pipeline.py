from abc import ABC, abstractmethod
from dataclasses import dataclass

from receipt_worker.database.models import JobRecord
from receipt_worker.extraction.models import ExtractedFields
from receipt_worker.ocr.models import OcrDocument


@dataclass(slots=True)
class PipelineContext:
    job: JobRecord
    image_bytes: bytes = b""
    ocr_document: OcrDocument | None = None
    fields: ExtractedFields | None = None
    receipt_updated: bool = False

    @property
    def receipt_id(self) -> str:
        return self.job.receipt_id


class PipelineStep(ABC):
    @abstractmethod
    def run(self, context: PipelineContext) -> PipelineContext:
        raise NotImplementedError
