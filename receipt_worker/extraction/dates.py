import re
from collections.abc import Callable

_SEP = r"[/\-.]"

# Each rule maps regex groups to (year, month, day).
_DATE_RULES: list[tuple[re.Pattern[str], Callable[[tuple[str, ...]], tuple[int, int, int]]]] = [
    (
        re.compile(rf"(?<!\d)(\d{{1,2}}){_SEP}(\d{{1,2}}){_SEP}(\d{{4}})(?!\d)"),
        lambda g: (int(g[2]), int(g[1]), int(g[0])),
    ),
    (
        re.compile(rf"(?<!\d)(\d{{1,2}}){_SEP}(\d{{1,2}}){_SEP}(\d{{2}})(?!\d)"),
        lambda g: (2000 + int(g[2]), int(g[1]), int(g[0])),
    ),
    (
        re.compile(rf"(?<!\d)(\d{{4}}){_SEP}(\d{{1,2}}){_SEP}(\d{{1,2}})(?!\d)"),
        lambda g: (int(g[0]), int(g[1]), int(g[2])),
    ),
]


def extract_date(lines: list[str]) -> str | None:
    """Return the first plausible receipt date as ``YYYY-MM-DD``."""
    for line in lines:
        for pattern, to_ymd in _DATE_RULES:
            match = pattern.search(line)
            if match is None:
                continue
            year, month, day = to_ymd(match.groups())
            if not is_plausible(month, day):
                continue
            return f"{year:04d}-{month:02d}-{day:02d}"
    return None


def is_plausible(month: int, day: int) -> bool:
    return 1 <= month <= 12 and 1 <= day <= 31
