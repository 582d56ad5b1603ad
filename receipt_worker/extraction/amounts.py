"""Monetary amount parsing for OCR text.

Receipts print amounts with either ``.`` or ``,`` as the decimal mark. The
parser treats the mark in front of a trailing two-digit group as the decimal
separator and drops the other one as thousands grouping, so ``1.234,56`` and
``1,234.56`` both become ``1234.56``. A token without a two-digit decimal
group (``1.234``) is not an amount.
"""

import math
import re

_NON_NUMERIC_RE = re.compile(r"[^\d.,\-]")
_DECIMAL_GROUP_RE = re.compile(r"([.,])\d{2}$")

# Digit run ending in a two-digit decimal group, not glued to further digits
# or a percent sign, so dates like 12.10.2024 and rates like 8.25% never match.
_AMOUNT_TOKEN_RE = re.compile(r"(?<![\d.,])-?\d[\d.,]*[.,]\d{2}(?![.,]?\d)(?!\s?%)")
_PERCENT_RE = re.compile(r"(?<![\d.,])(\d{1,3}(?:[.,]\d+)?)\s?%")

_THOUSANDS_FOR = {".": ",", ",": "."}


def parse_amount(token: str) -> float | None:
    """Parse a raw numeric-looking token into a float amount.

    Returns None when the token has no two-digit decimal group or does not
    convert to a finite number.
    """
    cleaned = _NON_NUMERIC_RE.sub("", token)
    match = _DECIMAL_GROUP_RE.search(cleaned)
    if match is None:
        return None

    decimal_mark = match.group(1)
    cleaned = cleaned.replace(_THOUSANDS_FOR[decimal_mark], "")
    if decimal_mark == ",":
        cleaned = cleaned.replace(",", ".")

    try:
        value = float(cleaned)
    except ValueError:
        return None
    if not math.isfinite(value):
        return None
    return value


def find_amounts(line: str) -> list[float]:
    """Return every monetary amount in *line*, left to right."""
    amounts: list[float] = []
    for match in _AMOUNT_TOKEN_RE.finditer(line):
        value = parse_amount(match.group(0))
        if value is not None:
            amounts.append(value)
    return amounts


def first_amount(line: str) -> float | None:
    amounts = find_amounts(line)
    return amounts[0] if amounts else None


def find_percentages(line: str) -> list[float]:
    """Return percentages in *line* as ratios (``6%`` -> ``0.06``)."""
    rates: list[float] = []
    for match in _PERCENT_RE.finditer(line):
        try:
            rates.append(float(match.group(1).replace(",", ".")) / 100)
        except ValueError:
            continue
    return rates
