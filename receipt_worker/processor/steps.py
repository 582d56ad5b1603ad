from receipt_worker.extraction.extractor import FieldExtractor
from receipt_worker.logging.logger import Log
from receipt_worker.ocr.base import BaseTextDetector
from receipt_worker.processor.exceptions import PipelineStateError
from receipt_worker.processor.image_loader import ImageLoader
from receipt_worker.processor.pipeline import PipelineContext, PipelineStep
from receipt_worker.processor.receipt_writer import ReceiptWriter


class LoadImageStep(PipelineStep):
    def __init__(self, image_loader: ImageLoader) -> None:
        self._image_loader = image_loader

    def run(self, context: PipelineContext) -> PipelineContext:
        context.image_bytes = self._image_loader.load(context.job.image_key)
        Log.info(
            f"Loaded {len(context.image_bytes)} bytes for receipt {context.receipt_id}"
        )
        return context


class DetectTextStep(PipelineStep):
    def __init__(self, text_detector: BaseTextDetector) -> None:
        self._text_detector = text_detector

    def run(self, context: PipelineContext) -> PipelineContext:
        context.ocr_document = self._text_detector.detect(context.image_bytes)
        Log.info(
            f"Detected {len(context.ocr_document.lines)} lines "
            f"({len(context.ocr_document.blocks)} blocks) for receipt {context.receipt_id}"
        )
        return context


class ExtractFieldsStep(PipelineStep):
    def __init__(self, field_extractor: FieldExtractor) -> None:
        self._field_extractor = field_extractor

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.ocr_document is None:
            raise PipelineStateError("PipelineContext.ocr_document must be set before extraction")
        fields = self._field_extractor.extract(context.ocr_document)
        context.fields = fields
        Log.info(
            f"Receipt {context.receipt_id}: vendor={fields.vendor!r} total={fields.total} "
            f"subtotal={fields.subtotal} tax={fields.tax} date={fields.receipt_date} "
            f"confidence={fields.ocr_confidence:.2f} reconciled={fields.reconciled}"
        )
        return context


class PersistResultStep(PipelineStep):
    def __init__(self, receipt_writer: ReceiptWriter) -> None:
        self._receipt_writer = receipt_writer

    def run(self, context: PipelineContext) -> PipelineContext:
        if context.ocr_document is None or context.fields is None:
            raise PipelineStateError(
                "PipelineContext.ocr_document and fields must be set before persist"
            )
        context.receipt_updated = self._receipt_writer.write(
            context.receipt_id,
            context.ocr_document.raw_response,
            context.fields,
        )
        return context
