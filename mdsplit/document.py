"""
Parse Markdown bytes into an immutable tree of ContentUnits.
"""

from __future__ import annotations

from functools import lru_cache
from typing import List, Sequence

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode

from .models import REFERENCE_KIND, ContentUnit, Document, SourceSpan

_CONTAINER_KINDS = frozenset({"blockquote", "list_item"})


@lru_cache(maxsize=1)
def build_parser() -> MarkdownIt:
    """Return the shared CommonMark parser with GFM tables enabled."""

    md = MarkdownIt("commonmark")
    md.enable(["table", "strikethrough"])
    return md


def line_offsets(source: bytes) -> List[int]:
    """Return the byte offset at which every source line starts.

    The list carries one extra entry for the end of the document so that a
    line range ``[a, b)`` maps to ``offsets[a]:offsets[b]``.

    Example:
        >>> line_offsets(b"# a\\n\\nbody")
        [0, 4, 5, 9]
    """

    offsets = [0]
    for line in source.splitlines(keepends=True):
        offsets.append(offsets[-1] + len(line))
    return offsets


def _span(line_map: Sequence[int] | None, offsets: Sequence[int]) -> SourceSpan | None:
    """Translate a parser line range into a byte span."""

    if not line_map:
        return None
    last = len(offsets) - 1
    start, stop = (min(max(value, 0), last) for value in line_map)
    return SourceSpan(offsets[start], offsets[max(start, stop)])


def _has_text(line: bytes, marker: bytes) -> bool:
    """Return True when a line holds more than quote prefixes and a list marker.

    Example:
        >>> _has_text(b"> >\\n", b"")
        False
        >>> _has_text(b"  1.\\n", b"1.")
        False
        >>> _has_text(b"- [d]: /url\\n", b"-")
        True
    """

    text = line.lstrip(b" \t>")
    if marker and text.startswith(marker):
        text = text[len(marker) :]
    return bool(text.strip())


def _unclaimed_units(
    *,
    data: bytes,
    offsets: Sequence[int],
    lines: range,
    blocks: Sequence[SyntaxTreeNode],
    marker: bytes = b"",
) -> List[ContentUnit]:
    """Return verbatim units for non-blank lines that no block claims.

    markdown-it files link reference definitions away in its env without a
    token, so their lines belong to no node. Each run of such lines becomes
    one ``reference`` unit.

    Args:
        data: Raw source bytes.
        offsets: Line start offsets from ``line_offsets``.
        lines: Line indices owned by the parent.
        blocks: Child nodes of the parent.
        marker: List item marker to ignore on the parent's lines.
    Returns:
        Units in source order.
    """

    claimed = set()
    for block in blocks:
        if block.map:
            claimed.update(range(*block.map))
    last = len(offsets) - 1
    units: List[ContentUnit] = []
    run: List[int] = []
    for index in [*lines, None]:
        if (
            index is not None
            and index < last
            and index not in claimed
            and _has_text(data[offsets[index] : offsets[index + 1]], marker)
        ):
            run.append(index)
            continue
        if run:
            span = SourceSpan(offsets[run[0]], offsets[run[-1] + 1])
            raw = data[span.start : span.stop].decode("utf-8", errors="replace")
            units.append(ContentUnit(kind=REFERENCE_KIND, span=span, content=raw))
            run = []
    return units


def _merge_by_span(
    blocks: Sequence[ContentUnit], extra: Sequence[ContentUnit]
) -> tuple[ContentUnit, ...]:
    """Slot ``extra`` units in among ``blocks`` by source position."""

    pending = list(extra)
    merged: List[ContentUnit] = []
    for block in blocks:
        while pending and block.span is not None and pending[0].span.start < block.span.start:
            merged.append(pending.pop(0))
        merged.append(block)
    merged.extend(pending)
    return tuple(merged)


def _convert(node: SyntaxTreeNode, data: bytes, offsets: Sequence[int]) -> ContentUnit:
    """Copy a markdown-it syntax node (and its block children) into a unit."""

    if node.type == "inline":
        children: tuple[ContentUnit, ...] = ()
    else:
        children = tuple(_convert(child, data, offsets) for child in node.children)
    if node.type in _CONTAINER_KINDS and node.map:
        marker = f"{node.info or ''}{node.markup or ''}" if node.type == "list_item" else ""
        loose = _unclaimed_units(
            data=data,
            offsets=offsets,
            lines=range(*node.map),
            blocks=node.children,
            marker=marker.encode(),
        )
        children = _merge_by_span(children, loose)
    attrs = tuple(sorted((str(key), str(value)) for key, value in node.attrs.items()))
    return ContentUnit(
        kind=node.type,
        span=_span(node.map, offsets),
        children=children,
        markup=node.markup or "",
        info=node.info or "",
        content=node.content or "",
        tag=node.tag or "",
        attrs=attrs,
        hidden=bool(node.hidden),
    )


def parse_markdown(data: bytes) -> Document:
    """Parse raw Markdown bytes into a Document.

    Args:
        data: UTF-8 encoded Markdown. Undecodable bytes are replaced.
    Returns:
        Document holding the source and its top-level units in order. Lines
        no block claims (link reference definitions) become ``reference``
        units so they reach the output.

    Example:
        >>> [unit.kind for unit in parse_markdown(b"# Hi\\n\\ntext").units]
        ['heading', 'paragraph']
        >>> [unit.kind for unit in parse_markdown(b"[a]\\n\\n[a]: /url\\n").units]
        ['paragraph', 'reference']
    """

    text = data.decode("utf-8", errors="replace")
    tokens = build_parser().parse(text)
    root = SyntaxTreeNode(tokens)
    offsets = line_offsets(data)
    blocks = tuple(_convert(child, data, offsets) for child in root.children)
    loose = _unclaimed_units(
        data=data,
        offsets=offsets,
        lines=range(len(offsets) - 1),
        blocks=root.children,
    )
    return Document(source=data, units=_merge_by_span(blocks, loose))
