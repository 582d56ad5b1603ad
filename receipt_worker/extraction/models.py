from dataclasses import dataclass


@dataclass(frozen=True)
class TaxEntry:
    """One tax-like line: the amount and explicit rate found around it."""

    amount: float | None = None
    rate: float | None = None


@dataclass(frozen=True)
class TaxSummary:
    """Combined output of the tax/subtotal scan."""

    subtotal: float | None = None
    tax: float | None = None
    tax_rate: float | None = None
    entries: tuple[TaxEntry, ...] = ()


@dataclass(frozen=True)
class Reconciliation:
    """Authoritative total decided from (subtotal, tax, total)."""

    total: float | None
    reconciled: bool


@dataclass(frozen=True)
class ExtractedFields:
    """Structured fields extracted from one receipt's OCR lines."""

    vendor: str
    total: float | None = None
    subtotal: float | None = None
    tax: float | None = None
    tax_rate: float | None = None
    receipt_date: str | None = None
    ocr_confidence: float = 0.0
    reconciled: bool = False
