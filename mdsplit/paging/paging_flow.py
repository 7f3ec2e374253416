"""Pagination flow: walk top-level units and fill slides in order."""

from __future__ import annotations

from typing import Callable, List, Protocol

from ..markdown_render import render_markdown
from ..models import ContentUnit, Document
from .paging_constants import _debug
from .paging_paragraphs import split_paragraph_lines
from .paging_render import RenderFn, render_unit
from .paging_tables import table_pages
from .paging_types import Page, RenderedFragment

EmitFn = Callable[[int, str], object]


class _ProgressTracker(Protocol):
    """Protocol for per-unit progress updates."""

    def update(self, n: int | float = 1) -> object:
        """Advance the progress tracker by ``n``."""


class Paginator:
    """Accumulate rendered units into slides and hand full slides to ``emit``.

    Slides are numbered from 1 without gaps. A slide is handed over once and
    never reopened; empty slides are never emitted.
    """

    def __init__(
        self,
        *,
        budget: int,
        emit: EmitFn,
        source: bytes,
        render: RenderFn = render_markdown,
    ) -> None:
        """Create a paginator for one document.

        Args:
            budget: Max lines per slide; must be positive.
            emit: Called as ``emit(index, text)`` for each finished slide.
            source: Original document bytes.
            render: Provider render function.
        """

        if budget < 1:
            raise ValueError(f"budget must be positive, got {budget}")
        self.budget = budget
        self.emit = emit
        self.source = source
        self.render = render
        self.page = Page(index=1)
        self.emitted = 0

    def _flush(self) -> None:
        """Emit the current slide if it has content and start the next one."""

        if self.page.is_empty:
            return
        _debug(msg=f"slide {self.page.index}: {self.page.line_count} lines")
        self.emit(self.page.index, self.page.text())
        self.emitted += 1
        self.page = Page(index=self.page.index + 1)

    def _emit_whole(self, texts: List[str]) -> None:
        """Emit each text as a slide of its own, after the pending slide."""

        self._flush()
        for text in texts:
            self.page.append(text)
            self._flush()

    def _chunked(self, *, unit: ContentUnit, fragment: RenderedFragment) -> List[str] | None:
        """Return chunk slide texts when the unit must be split, else None."""

        if fragment.line_count <= self.budget:
            return None
        if unit.is_table:
            return table_pages(
                table=unit, budget=self.budget, source=self.source, render=self.render
            )
        if unit.is_paragraph:
            _debug(msg=f"paragraph of {fragment.line_count} lines split")
            return split_paragraph_lines(fragment.text, budget=self.budget)
        return None

    def feed(self, unit: ContentUnit) -> None:
        """Place one top-level unit.

        Args:
            unit: Next unit in document order.
        """

        fragment = render_unit(unit=unit, source=self.source, render=self.render)
        chunks = self._chunked(unit=unit, fragment=fragment)
        if chunks is not None:
            self._emit_whole(chunks)
            return
        if not self.page.fits(lines=fragment.line_count, budget=self.budget):
            self._flush()
        self.page.append(fragment.text)

    def finish(self) -> int:
        """Emit the last slide and return how many slides were emitted."""

        self._flush()
        return self.emitted


def paginate(
    *,
    document: Document,
    budget: int,
    emit: EmitFn,
    render: RenderFn = render_markdown,
    progress: _ProgressTracker | None = None,
) -> int:
    """Split a parsed document into slides.

    Args:
        document: Parsed document.
        budget: Max lines per slide.
        emit: Called as ``emit(index, text)`` for each slide, in order.
        render: Provider render function.
        progress: Optional tracker advanced once per top-level unit.
    Returns:
        Number of slides emitted.

    Example:
        >>> from mdsplit.document import parse_markdown
        >>> slides = {}
        >>> paginate(document=parse_markdown(b"# A\\n\\nB"), budget=40, emit=slides.__setitem__)
        1
        >>> slides[1]
        '# A\\n\\nB\\n'
    """

    paginator = Paginator(
        budget=budget, emit=emit, source=document.source, render=render
    )
    for unit in document.units:
        paginator.feed(unit)
        if progress is not None:
            progress.update(1)
    return paginator.finish()
