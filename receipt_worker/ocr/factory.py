from receipt_worker.config.settings import Settings
from receipt_worker.ocr.base import BaseTextDetector
from receipt_worker.ocr.example_adapter import ExampleTextDetector
from receipt_worker.ocr.textract_adapter import TextractAdapter


class TextDetectorFactory:
    """Creates the OCR adapter selected in settings."""

    ENGINES: tuple[str, ...] = ("textract", "example")

    @classmethod
    def create(cls, settings: Settings) -> BaseTextDetector:
        engine = settings.ocr_engine.lower()
        if engine == "textract":
            return TextractAdapter(region=settings.aws_region)
        if engine == "example":
            return ExampleTextDetector()
        raise ValueError(
            f"Unknown OCR engine '{engine}'. Choose from: {list(cls.ENGINES)}"
        )
