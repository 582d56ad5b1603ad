import re

from receipt_worker.extraction.amounts import find_amounts, first_amount

_SUBTOTAL_RE = re.compile(r"SUB[\s\-]?TOT", re.IGNORECASE)
_TOTAL_RE = re.compile(r"TOTAL", re.IGNORECASE)


def is_subtotal_line(line: str) -> bool:
    return _SUBTOTAL_RE.search(line) is not None


def is_total_line(line: str) -> bool:
    return _TOTAL_RE.search(line) is not None and not is_subtotal_line(line)


def extract_total(lines: list[str]) -> float | None:
    """Find the receipt total.

    The first labelled TOTAL line wins, reading the amount from that line or
    the one below it. Without a labelled total, the largest amount on the
    receipt is used, preferring amounts above the subtotal.
    """
    subtotal_hint: float | None = None
    for index, line in enumerate(lines):
        if is_subtotal_line(line):
            if subtotal_hint is None:
                subtotal_hint = first_amount(line)
            continue
        if not is_total_line(line):
            continue
        total = labelled_amount(lines, index)
        if total is not None:
            return total
    return largest_amount(lines, above=subtotal_hint)


def labelled_amount(lines: list[str], index: int) -> float | None:
    """First amount on ``lines[index]``, falling back to the following line."""
    amount = first_amount(lines[index])
    if amount is None and index + 1 < len(lines):
        amount = first_amount(lines[index + 1])
    return amount


def largest_amount(lines: list[str], above: float | None = None) -> float | None:
    amounts = [a for line in lines for a in find_amounts(line) if a > 0]
    if not amounts:
        return None
    if above is not None:
        larger = [a for a in amounts if a > above]
        if larger:
            return max(larger)
    return max(amounts)
