"""Render content units, falling back to raw source text on faults."""

from __future__ import annotations

from typing import Callable, List

from ..errors import RenderError
from ..markdown_render import render_markdown
from ..models import ContentUnit, SourceSpan
from ..text import ensure_block_spacing, expand_to_lines, wrap_words
from .paging_constants import FALLBACK_WRAP_WIDTH, _debug
from .paging_types import FallbackExtracted, Rendered, RenderedFragment

RenderFn = Callable[[ContentUnit, bytes], str]


def _try_render(
    *, unit: ContentUnit, source: bytes, render: RenderFn
) -> str | RenderError:
    """Return rendered text, or the fault that prevented rendering.

    Args:
        unit: Unit to render.
        source: Original document bytes.
        render: Provider render function.
    Returns:
        Rendered text, or a RenderError describing the fault.
    """

    try:
        text = render(unit, source)
    except RenderError as exc:
        return exc
    if not text.strip():
        return RenderError(unit.kind, "empty rendering")
    return text


def source_segments(*, unit: ContentUnit, source: bytes) -> List[SourceSpan]:
    """Return the line-aligned source spans covering a unit and its subtree.

    Spans that overlap or touch are merged, so a unit parsed straight from
    the document yields one span. A rebuilt unit (such as a table chunk)
    yields one span per disjoint run of source lines.

    Args:
        unit: Unit to locate in the source.
        source: Original document bytes.
    Returns:
        Sorted, merged spans.

    Example:
        >>> from mdsplit.models import ContentUnit, SourceSpan
        >>> row = ContentUnit("tr", span=SourceSpan(10, 15))
        >>> source_segments(unit=ContentUnit("table", span=SourceSpan(0, 4), children=(row,)), source=b"| a |\\n|-|\\n| b |\\n")
        [SourceSpan(start=0, stop=6), SourceSpan(start=10, stop=16)]
    """

    spans = sorted(
        expand_to_lines(source, item.span)
        for item in (unit, *unit.descendants())
        if item.span is not None
    )
    merged: List[SourceSpan] = []
    for span in spans:
        if merged and span.start <= merged[-1].stop:
            merged[-1] = merged[-1].union(span)
        else:
            merged.append(span)
    return merged


def extract_fallback(
    *, unit: ContentUnit, source: bytes, reason: str, wrap_width: int = FALLBACK_WRAP_WIDTH
) -> FallbackExtracted:
    """Rebuild a unit's text from the source lines it was parsed from.

    Paragraphs are reflowed with a greedy word wrap.

    Args:
        unit: Unit whose rendering failed.
        source: Original document bytes.
        reason: Fault message, kept on the fragment.
        wrap_width: Character width for paragraph reflow.
    Returns:
        FallbackExtracted fragment.
    """

    spans = source_segments(unit=unit, source=source)
    raw = "".join(
        source[span.start : span.stop].decode("utf-8", errors="replace")
        for span in spans
    )
    if not raw.strip():
        return FallbackExtracted(unit=unit, text="", spans=tuple(spans), reason=reason)
    if unit.is_paragraph:
        raw = wrap_words(raw, wrap_width)
    return FallbackExtracted(
        unit=unit,
        text=ensure_block_spacing(raw),
        spans=tuple(spans),
        reason=reason,
    )


def render_unit(
    *,
    unit: ContentUnit,
    source: bytes,
    render: RenderFn = render_markdown,
) -> RenderedFragment:
    """Render one unit; never raises for render faults.

    Args:
        unit: Unit to render.
        source: Original document bytes.
        render: Provider render function.
    Returns:
        ``Rendered`` on success, ``FallbackExtracted`` otherwise.

    Example:
        >>> from mdsplit.models import ContentUnit
        >>> hr = ContentUnit("hr")
        >>> render_unit(unit=hr, source=b"---\\n").text
        '---\\n\\n'
    """

    outcome = _try_render(unit=unit, source=source, render=render)
    if isinstance(outcome, RenderError):
        _debug(msg=f"fallback for {unit.kind}: {outcome}")
        return extract_fallback(unit=unit, source=source, reason=str(outcome))
    return Rendered(unit=unit, text=ensure_block_spacing(outcome))
