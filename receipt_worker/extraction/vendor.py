import re

UNKNOWN_VENDOR = "Unknown Vendor"

_VENDOR_WINDOW = 5
_NOISE_RE = re.compile(
    r"\b(?:SUPERSTORE|SUPERCENTER|STORE)\b|\b(?:INC|LLC|CO)\.",
    re.IGNORECASE,
)
_SEPARATOR_RE = re.compile(r"[\s\-]+")


def extract_vendor(lines: list[str]) -> str:
    """Vendor name from the first printed line, with retail-suffix noise removed."""
    candidates = [line.strip() for line in lines if line.strip()][:_VENDOR_WINDOW]
    if not candidates:
        return UNKNOWN_VENDOR
    return clean_vendor_name(candidates[0]) or UNKNOWN_VENDOR


def clean_vendor_name(raw: str) -> str:
    stripped = _NOISE_RE.sub(" ", raw)
    collapsed = _SEPARATOR_RE.sub(" ", stripped).strip().upper()
    return " ".join(_capitalize(word) for word in collapsed.split(" ") if word)


def _capitalize(word: str) -> str:
    return word[0] + word[1:].lower()
