"""
Serialize ContentUnits back to Markdown text.

Only the block kinds produced by the CommonMark + GFM table parser are
supported. Anything else raises ``RenderError`` so callers can fall back to
the raw source.
"""

from __future__ import annotations

from typing import Callable, Dict, List, Sequence

from .errors import RenderError
from .models import REFERENCE_KIND, ContentUnit

_ALIGN_MARKERS = {
    "text-align:left": ":---",
    "text-align:right": "---:",
    "text-align:center": ":---:",
}

_SETEXT_UNDERLINES = {1: "=", 2: "-"}


def _inline_text(unit: ContentUnit) -> str:
    """Return the raw inline text of a paragraph, heading, or table cell."""

    inline = unit.child("inline")
    if inline is None:
        raise RenderError(unit.kind, "missing inline content")
    return inline.content


def _render_paragraph(unit: ContentUnit) -> str:
    return f"{_inline_text(unit)}\n"


def _render_heading(unit: ContentUnit) -> str:
    """Render ATX style unless the text spans lines.

    Single-line setext headings are normalized to ``#`` markers. Multi-line
    ones keep their setext underline, since ATX cannot hold a line break.
    """

    try:
        level = int(unit.tag.lstrip("h"))
    except ValueError as exc:
        raise RenderError(unit.kind, f"bad heading tag {unit.tag!r}") from exc
    text = _inline_text(unit)
    if "\n" not in text:
        return f"{'#' * level} {text}\n"
    if level > 2:
        raise RenderError(unit.kind, "multi-line ATX heading")
    underline = _SETEXT_UNDERLINES[level]
    return f"{text}\n{underline * 3}\n"


def _row_cells(row: ContentUnit) -> List[str]:
    """Return the inline text of every cell in a table row.

    The parser drops the backslash from ``\\|`` inside cells, so pipes are
    escaped again here to keep the column count.
    """

    if row.kind != "tr":
        raise RenderError("table", f"unexpected row node {row.kind!r}")
    cells: List[str] = []
    for cell in row.children:
        if cell.kind not in {"th", "td"}:
            raise RenderError("table", f"unexpected cell node {cell.kind!r}")
        inline = cell.child("inline")
        text = inline.content.strip() if inline is not None else ""
        cells.append(text.replace("|", "\\|"))
    return cells


def _row_line(cells: Sequence[str]) -> str:
    return "| " + " | ".join(cells) + " |"


def _delimiter_line(header: ContentUnit) -> str:
    """Return the ``| --- | :-: |`` row matching the header's alignment."""

    markers = [
        _ALIGN_MARKERS.get(cell.attr("style"), "---") for cell in header.children
    ]
    return _row_line(markers)


def _render_table(unit: ContentUnit) -> str:
    """Render a pipe table: header rows, delimiter row, body rows.

    Args:
        unit: Table unit with ``thead`` and optional ``tbody`` children.
    Returns:
        Table text, one row per line.
    """

    head = unit.child("thead")
    if head is None or not head.children:
        raise RenderError(unit.kind, "missing header row")
    body = unit.child("tbody")
    lines = [_row_line(_row_cells(row)) for row in head.children]
    lines.insert(1, _delimiter_line(head.children[0]))
    rows = body.children if body is not None else ()
    lines.extend(_row_line(_row_cells(row)) for row in rows)
    return "\n".join(lines) + "\n"


def _indent_item(marker: str, body: str) -> str:
    """Hang ``body`` under a list marker, indenting continuation lines."""

    lines = body.rstrip("\n").split("\n")
    if not lines or lines == [""]:
        return marker
    pad = " " * (len(marker) + 1)
    rest = [f"{pad}{line}" if line else "" for line in lines[1:]]
    return "\n".join([f"{marker} {lines[0]}", *rest])


def _render_list(unit: ContentUnit) -> str:
    """Render bullet and ordered lists, keeping tight lists tight."""

    ordered = unit.kind == "ordered_list"
    try:
        start = int(unit.attr("start", "1")) if ordered else 1
    except ValueError as exc:
        raise RenderError(unit.kind, "bad list start") from exc
    tight = all(
        child.hidden
        for item in unit.children
        for child in item.children
        if child.is_paragraph
    )
    items: List[str] = []
    for offset, item in enumerate(unit.children):
        if item.kind != "list_item":
            raise RenderError(unit.kind, f"unexpected item node {item.kind!r}")
        if ordered:
            marker = f"{start + offset}{item.markup or '.'}"
        else:
            marker = item.markup or unit.markup or "-"
        items.append(_indent_item(marker, _render_blocks(item.children, tight=tight)))
    separator = "\n" if tight else "\n\n"
    return separator.join(items) + "\n"


def _render_blockquote(unit: ContentUnit) -> str:
    body = _render_blocks(unit.children, tight=False).rstrip("\n")
    lines = [f"> {line}" if line else ">" for line in body.split("\n")]
    return "\n".join(lines) + "\n"


def _render_fence(unit: ContentUnit) -> str:
    fence = unit.markup or "```"
    body = unit.content
    if body and not body.endswith("\n"):
        body += "\n"
    return f"{fence}{unit.info}\n{body}{fence}\n"


def _render_code_block(unit: ContentUnit) -> str:
    lines = unit.content.rstrip("\n").split("\n")
    return "\n".join(f"    {line}" if line else "" for line in lines) + "\n"


def _render_hr(unit: ContentUnit) -> str:
    return "---\n"


def _render_html(unit: ContentUnit) -> str:
    return unit.content if unit.content.endswith("\n") else f"{unit.content}\n"


def _render_reference(unit: ContentUnit) -> str:
    """Return source lines no block claimed (link reference definitions), verbatim."""

    return unit.content if unit.content.endswith("\n") else f"{unit.content}\n"


_RENDERERS: Dict[str, Callable[[ContentUnit], str]] = {
    "paragraph": _render_paragraph,
    "heading": _render_heading,
    "table": _render_table,
    "bullet_list": _render_list,
    "ordered_list": _render_list,
    "blockquote": _render_blockquote,
    "fence": _render_fence,
    "code_block": _render_code_block,
    "hr": _render_hr,
    "html_block": _render_html,
    REFERENCE_KIND: _render_reference,
}


def _render_block(unit: ContentUnit) -> str:
    renderer = _RENDERERS.get(unit.kind)
    if renderer is None:
        raise RenderError(unit.kind, "unsupported node")
    return renderer(unit)


def _render_blocks(units: Sequence[ContentUnit], *, tight: bool) -> str:
    """Render sibling blocks, separated by blank lines unless ``tight``.

    Unclaimed source lines nested in a container carry its prefixes (``> ``,
    indentation), so they raise and the whole container falls back to source.
    """

    for unit in units:
        if unit.kind == REFERENCE_KIND:
            raise RenderError(unit.kind, "definition inside a container block")
    separator = "" if tight else "\n"
    return separator.join(_render_block(unit) for unit in units)


def render_markdown(unit: ContentUnit, source: bytes) -> str:
    """Serialize one content unit back to Markdown.

    Args:
        unit: Unit to render (top level or reconstructed).
        source: Original document bytes. This renderer rebuilds text from the
            unit itself; the argument completes the provider call signature.
    Returns:
        Markdown text ending in a newline.
    Raises:
        RenderError: The unit (or a descendant) has an unsupported shape.

    Example:
        >>> from mdsplit.models import ContentUnit
        >>> heading = ContentUnit("heading", tag="h2", children=(ContentUnit("inline", content="Hi"),))
        >>> render_markdown(heading, b"")
        '## Hi\\n'
    """

    return _render_block(unit)
