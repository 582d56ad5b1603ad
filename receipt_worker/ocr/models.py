from dataclasses import dataclass, field
from typing import Any

LINE_BLOCK = "LINE"


@dataclass(frozen=True)
class OcrBlock:
    """Single detected block (page, line or word)."""

    block_type: str
    text: str = ""
    confidence: float | None = None  # 0-100 scale, as reported by the service


@dataclass(frozen=True)
class OcrDocument:
    """Text detection output for one image."""

    blocks: list[OcrBlock] = field(default_factory=list)
    raw_response: dict[str, Any] = field(default_factory=dict)

    @property
    def line_blocks(self) -> list[OcrBlock]:
        return [b for b in self.blocks if b.block_type == LINE_BLOCK]

    @property
    def lines(self) -> list[str]:
        """Text of LINE blocks in reading order."""
        return [b.text for b in self.line_blocks]
