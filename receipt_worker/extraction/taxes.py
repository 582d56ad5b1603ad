import re
from collections.abc import Iterable

from receipt_worker.extraction.amounts import find_percentages, first_amount
from receipt_worker.extraction.models import TaxEntry, TaxSummary
from receipt_worker.extraction.totals import is_subtotal_line, is_total_line, labelled_amount

TAX_KEYWORDS = (
    "TAX",
    "VAT",
    "GST",
    "IVA",
    "SALES TAX",
    "SERVICE CHARGE",
    "LEVY",
    "SURCHARGE",
    "INCLUDED",
)
_TAX_RE = re.compile(
    r"\b(?:" + "|".join(re.escape(k) for k in TAX_KEYWORDS) + r")\b",
    re.IGNORECASE,
)


def is_tax_line(line: str) -> bool:
    return _TAX_RE.search(line) is not None


def extract_subtotal(lines: list[str]) -> float | None:
    for index, line in enumerate(lines):
        if is_subtotal_line(line):
            return labelled_amount(lines, index)
    return None


def extract_tax_entries(lines: list[str]) -> list[TaxEntry]:
    """One entry per tax-like line, reading the line and then its neighbours."""
    entries: list[TaxEntry] = []
    for index, line in enumerate(lines):
        if not is_tax_line(line):
            continue
        window = _neighbourhood(lines, index)
        entries.append(
            TaxEntry(
                amount=_first_of(first_amount(candidate) for candidate in window),
                rate=_first_of(_first_rate(candidate) for candidate in window),
            )
        )
    return entries


def extract_taxes(lines: list[str]) -> TaxSummary:
    subtotal = extract_subtotal(lines)
    entries = extract_tax_entries(lines)

    amounts = [entry.amount for entry in entries if entry.amount is not None]
    tax = round(sum(amounts), 2) if amounts else None

    rate = _first_of(entry.rate for entry in entries)
    if rate is None and tax is not None and subtotal is not None and subtotal > 0:
        rate = round(tax / subtotal, 4)

    return TaxSummary(subtotal=subtotal, tax=tax, tax_rate=rate, entries=tuple(entries))


def _neighbourhood(lines: list[str], index: int) -> list[str]:
    # Own line first, then the line below (amount printed under the label),
    # then the line above. Labelled neighbours own their amounts.
    window = [lines[index]]
    for neighbour in (index + 1, index - 1):
        if 0 <= neighbour < len(lines) and not _is_labelled(lines[neighbour]):
            window.append(lines[neighbour])
    return window


def _is_labelled(line: str) -> bool:
    return is_tax_line(line) or is_total_line(line) or is_subtotal_line(line)


def _first_rate(line: str) -> float | None:
    rates = find_percentages(line)
    return rates[0] if rates else None


def _first_of(values: Iterable[float | None]) -> float | None:
    for value in values:
        if value is not None:
            return value
    return None
