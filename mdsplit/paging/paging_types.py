"""Data structures for slide pagination."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple

from ..models import ContentUnit, SourceSpan
from ..text import count_lines, trim_trailing_blank_lines


@dataclass(frozen=True, slots=True)
class RenderedFragment:
    """Text produced for one content unit.

    Args:
        unit: Unit the text was produced for.
        text: Markdown text, ending with a blank line.
    """

    unit: ContentUnit
    text: str

    @property
    def line_count(self) -> int:
        """Return the number of line breaks in the text."""

        return count_lines(self.text)

    @property
    def fell_back(self) -> bool:
        return False


@dataclass(frozen=True, slots=True)
class Rendered(RenderedFragment):
    """Fragment serialized by the document model provider."""


@dataclass(frozen=True, slots=True)
class FallbackExtracted(RenderedFragment):
    """Fragment rebuilt from the unit's raw source lines.

    Args:
        spans: Line-aligned byte spans the text was copied from, in order.
        reason: Message of the render fault that triggered the fallback.
    """

    spans: Tuple[SourceSpan, ...] = ()
    reason: str = ""

    @property
    def fell_back(self) -> bool:
        return True


@dataclass(slots=True)
class Page:
    """A slide being filled with fragments.

    Args:
        index: 1-based slide number.
        parts: Text parts in append order.
        line_count: Running total of line breaks across parts.
    """

    index: int
    parts: List[str] = field(default_factory=list)
    line_count: int = 0

    @property
    def is_empty(self) -> bool:
        return not self.parts

    def fits(self, *, lines: int, budget: int) -> bool:
        """Return True when ``lines`` more lines stay within ``budget``.

        An empty page accepts anything, so oversized units still get a page.
        """

        return self.is_empty or self.line_count + lines <= budget

    def append(self, text: str) -> None:
        self.parts.append(text)
        self.line_count += count_lines(text)

    def text(self) -> str:
        """Return the page body with trailing blank lines collapsed."""

        return trim_trailing_blank_lines("".join(self.parts))


@dataclass(frozen=True, slots=True)
class TableChunk:
    """A rebuilt table holding the header plus a run of data rows.

    Args:
        table: New table unit (original header, sliced body).
        part: 1-based part number within the source table.
        last: True for the final chunk.
        row_count: Number of data rows carried.
    """

    table: ContentUnit
    part: int
    last: bool
    row_count: int

    def continuation_note(self) -> str:
        """Return the italic marker placed under the chunk.

        Example:
            >>> from mdsplit.models import ContentUnit
            >>> TableChunk(ContentUnit("table"), part=2, last=False, row_count=3).continuation_note()
            '_Table continued (part 2)_\\n'
        """

        suffix = ", end" if self.last else ""
        return f"_Table continued (part {self.part}{suffix})_\n"
