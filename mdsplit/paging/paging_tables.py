"""Split tables that are too tall for one slide."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import List, Sequence

from ..markdown_render import render_markdown
from ..models import ContentUnit, SourceSpan
from .paging_constants import CONTINUATION_NOTE_LINES, _debug
from .paging_render import RenderFn, render_unit
from .paging_types import TableChunk


@dataclass(frozen=True, slots=True)
class _TableParts:
    """Header and data rows pulled out of a source table."""

    table: ContentUnit
    head: ContentUnit
    rows: Sequence[ContentUnit]


def _header_span(*, table: ContentUnit, rows: Sequence[ContentUnit]) -> SourceSpan | None:
    """Return the span of the header rows plus the delimiter row.

    Args:
        table: Source table.
        rows: Source data rows.
    Returns:
        Span from the table start up to the first body line, when known.
    """

    body = table.child("tbody")
    body_start = None
    if body is not None and body.span is not None:
        body_start = body.span.start
    elif rows and rows[0].span is not None:
        body_start = rows[0].span.start
    if table.span is None or body_start is None:
        return None
    return SourceSpan(table.span.start, body_start)


def table_parts(table: ContentUnit) -> _TableParts | None:
    """Return the header and data rows of a table, or None without a header.

    Example:
        >>> table_parts(ContentUnit("table")) is None
        True
    """

    head = table.child("thead")
    if head is None or not head.children:
        return None
    body = table.child("tbody")
    rows = body.children if body is not None else ()
    header_span = _header_span(table=table, rows=rows)
    if header_span is not None:
        head = replace(head, span=header_span)
    return _TableParts(table=table, head=head, rows=rows)


def _rebuild_table(*, parts: _TableParts, rows: Sequence[ContentUnit]) -> ContentUnit:
    """Build a new table unit from the header and a run of rows.

    The source table is left untouched; the new unit shares only immutable
    header and row units with it.
    """

    children = [parts.head]
    if rows:
        children.append(ContentUnit(kind="tbody", children=tuple(rows), tag="tbody"))
    return ContentUnit(
        kind=parts.table.kind,
        children=tuple(children),
        markup=parts.table.markup,
        tag=parts.table.tag,
        attrs=parts.table.attrs,
    )


def chunk_size(*, budget: int, reserved: int) -> int:
    """Return how many data rows fit beside the reserved lines.

    Example:
        >>> chunk_size(budget=40, reserved=4)
        36
        >>> chunk_size(budget=2, reserved=4)
        1
    """

    return max(1, budget - reserved)


def split_table_rows(
    *,
    parts: _TableParts,
    budget: int,
    source: bytes,
    render: RenderFn = render_markdown,
) -> List[TableChunk]:
    """Cut a table's rows into chunks that each fit one slide.

    Args:
        parts: Header and rows of the source table.
        budget: Max lines per slide.
        source: Original document bytes.
        render: Provider render function.
    Returns:
        TableChunks in row order.
    """

    header_only = _rebuild_table(parts=parts, rows=())
    reserved = (
        render_unit(unit=header_only, source=source, render=render).line_count
        + CONTINUATION_NOTE_LINES
    )
    size = chunk_size(budget=budget, reserved=reserved)
    rows = list(parts.rows)
    chunks: List[TableChunk] = []
    for start in range(0, len(rows), size):
        run = rows[start : start + size]
        chunks.append(
            TableChunk(
                table=_rebuild_table(parts=parts, rows=run),
                part=len(chunks) + 1,
                last=start + size >= len(rows),
                row_count=len(run),
            )
        )
    return chunks


def table_pages(
    *,
    table: ContentUnit,
    budget: int,
    source: bytes,
    render: RenderFn = render_markdown,
) -> List[str] | None:
    """Return slide texts for an oversized table, or None to leave it whole.

    Each slide holds the original header, a run of rows, and a continuation
    note naming its part.

    Args:
        table: Table unit that does not fit one slide.
        budget: Max lines per slide.
        source: Original document bytes.
        render: Provider render function.
    Returns:
        Slide texts in order, or None when the table has no usable header
        or no data rows.
    """

    parts = table_parts(table)
    if parts is None or not parts.rows:
        _debug(msg="table without header or rows left unsplit")
        return None
    pages: List[str] = []
    for chunk in split_table_rows(parts=parts, budget=budget, source=source, render=render):
        fragment = render_unit(unit=chunk.table, source=source, render=render)
        pages.append(fragment.text + chunk.continuation_note())
    _debug(msg=f"table split into {len(pages)} parts of up to {budget} lines")
    return pages
