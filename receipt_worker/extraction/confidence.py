from receipt_worker.ocr.models import OcrBlock

DEFAULT_CONFIDENCE = 0.85


def aggregate_confidence(line_blocks: list[OcrBlock]) -> float:
    """Mean line confidence as a ratio in [0, 1].

    Confidences arrive on a 0-100 scale. Lines without a confidence, or
    reporting 0, are ignored; with none at all the document is assumed acceptable.
    """
    ratios = [b.confidence / 100 for b in line_blocks if b.confidence]
    if not ratios:
        return DEFAULT_CONFIDENCE
    mean = sum(ratios) / len(ratios)
    return min(1.0, max(0.0, mean))
