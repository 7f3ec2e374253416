"""
Typed containers for parsed Markdown content.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Iterator, Tuple


TABLE_KIND = "table"
PARAGRAPH_KIND = "paragraph"
REFERENCE_KIND = "reference"


@dataclass(frozen=True, slots=True, order=True)
class SourceSpan:
    """Half-open byte range into the original document.

    Attributes:
        start: Offset of the first byte.
        stop: Offset one past the last byte.
    """

    start: int
    stop: int

    def union(self, other: SourceSpan) -> SourceSpan:
        """Return the smallest span covering both spans.

        Example:
            >>> SourceSpan(4, 9).union(SourceSpan(0, 5))
            SourceSpan(start=0, stop=9)
        """

        return SourceSpan(min(self.start, other.start), max(self.stop, other.stop))


@dataclass(frozen=True, slots=True)
class ContentUnit:
    """One node of the parsed document tree.

    Units are immutable and shared; code that needs a different shape (for
    example a table holding only some rows) builds a new unit instead.

    Attributes:
        kind: Markdown node type, e.g. ``"paragraph"`` or ``"table"``, or
            ``"reference"`` for source lines no block claimed.
        span: Byte span in the source, when the parser reported one.
        children: Ordered child units.
        markup: Markup characters (``"#"``, ``"```"``, ``"-"`` ...).
        info: Fence info string or list item number.
        content: Raw text for leaf nodes (inline, fence, code, html).
        tag: HTML tag the node maps to (``"h2"``, ``"th"`` ...).
        attrs: Node attributes as sorted key/value pairs.
        hidden: True for paragraphs inside tight lists.
    """

    kind: str
    span: SourceSpan | None = None
    children: Tuple[ContentUnit, ...] = ()
    markup: str = ""
    info: str = ""
    content: str = ""
    tag: str = ""
    attrs: Tuple[tuple[str, str], ...] = ()
    hidden: bool = False

    @property
    def is_table(self) -> bool:
        return self.kind == TABLE_KIND

    @property
    def is_paragraph(self) -> bool:
        return self.kind == PARAGRAPH_KIND

    def attr(self, name: str, default: str = "") -> str:
        """Return an attribute value, or ``default`` when missing."""

        for key, value in self.attrs:
            if key == name:
                return value
        return default

    def child(self, kind: str) -> ContentUnit | None:
        """Return the first direct child of the given kind."""

        for item in self.children:
            if item.kind == kind:
                return item
        return None

    def descendants(self) -> Iterator[ContentUnit]:
        """Yield every unit below this one, depth first, in document order."""

        for item in self.children:
            yield item
            yield from item.descendants()


@dataclass(frozen=True, slots=True)
class Document:
    """Parsed document: the raw source plus its top-level units."""

    source: bytes
    units: Tuple[ContentUnit, ...] = field(default_factory=tuple)

    def __len__(self) -> int:
        return len(self.units)


def iter_kinds(units: Iterable[ContentUnit]) -> list[str]:
    """Return the kinds of the given units, in order.

    Example:
        >>> iter_kinds([ContentUnit("heading"), ContentUnit("paragraph")])
        ['heading', 'paragraph']
    """

    return [unit.kind for unit in units]
