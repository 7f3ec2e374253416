"""Split a Markdown document into slide files."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import List

from tqdm import tqdm

from ..document import parse_markdown
from ..errors import SplitError
from ..markdown_render import render_markdown
from ..models import iter_kinds
from .paging_constants import _debug
from .paging_flow import paginate
from .paging_render import RenderFn
from .paging_settings import ResolvedOptions, SplitOptions, resolve_options
from .paging_writer import SlideWriter

__all__ = [
    "SplitOptions",
    "read_input",
    "split_file",
    "split_markdown",
]


def read_input(path: Path | None) -> bytes:
    """Read Markdown from ``path``, or from stdin when ``path`` is None.

    Args:
        path: Input file, or None for standard input.
    Returns:
        Raw bytes.
    Raises:
        SplitError: The input could not be read.
    """

    try:
        if path is None:
            return sys.stdin.buffer.read()
        return Path(path).read_bytes()
    except OSError as exc:
        source = "stdin" if path is None else str(path)
        raise SplitError(f"read input {source}", exc) from exc


def _split_resolved(
    *,
    data: bytes,
    options: ResolvedOptions,
    render: RenderFn,
    show_progress: bool,
) -> List[Path]:
    """Paginate ``data`` with already resolved options.

    Args:
        data: Markdown bytes.
        options: Resolved options.
        render: Provider render function.
        show_progress: Whether to draw a tqdm bar over top-level blocks.
    Returns:
        Paths of the slides written, in order.
    """

    document = parse_markdown(data)
    _debug(msg=f"parsed {len(document)} blocks: {iter_kinds(document.units)}")
    writer = SlideWriter(out_dir=options.out_dir)
    writer.ensure_dir()
    progress = (
        tqdm(total=len(document), desc="Splitting blocks", unit="block")
        if show_progress and len(document)
        else None
    )
    try:
        paginate(
            document=document,
            budget=options.max_height,
            emit=writer,
            render=render,
            progress=progress,
        )
    finally:
        if progress is not None:
            progress.close()
    return list(writer.written)


def split_markdown(
    data: bytes,
    options: SplitOptions | None = None,
    *,
    render: RenderFn = render_markdown,
    show_progress: bool = False,
) -> List[Path]:
    """Split Markdown bytes into ``slide-<N>.md`` files.

    Args:
        data: Markdown bytes.
        options: Caller options; defaults apply to unset fields.
        render: Provider render function.
        show_progress: Whether to draw a progress bar.
    Returns:
        Paths of the slides written, in order.
    Raises:
        SplitError: The output directory or a slide could not be written.
        ValueError: Unknown theme or template size.

    Example:
        >>> split_markdown(b"# Title", SplitOptions(out_dir=Path("out")))  # doctest: +SKIP
        [PosixPath('out/slide-1.md')]
    """

    resolved = resolve_options(options or SplitOptions())
    return _split_resolved(
        data=data, options=resolved, render=render, show_progress=show_progress
    )


def split_file(
    path: Path | None,
    options: SplitOptions | None = None,
    *,
    show_progress: bool = False,
) -> List[Path]:
    """Read ``path`` (or stdin) and split it into slide files.

    Options are resolved before the input is read, so a bad template fails
    without consuming stdin.
    """

    resolved = resolve_options(options or SplitOptions())
    data = read_input(path)
    return _split_resolved(
        data=data,
        options=resolved,
        render=render_markdown,
        show_progress=show_progress,
    )
