"""
Command line entry point: split a Markdown file into slide files.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Sequence

from .errors import SplitError
from .paging.builder import split_file
from .paging.paging_settings import (
    DEFAULT_DPI,
    DEFAULT_FONT_SIZE,
    TEMPLATE_SIZES,
    THEMES,
    SplitOptions,
)


def _parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    """Return CLI arguments for the splitter."""

    parser = argparse.ArgumentParser(
        prog="mdsplit",
        description="Split a Markdown file into slide-sized Markdown files.",
    )
    parser.add_argument(
        "--in",
        dest="input",
        type=Path,
        default=None,
        help="Markdown input file, or stdin when omitted.",
    )
    parser.add_argument(
        "--out",
        type=Path,
        default=Path("."),
        help="Output directory for the slide files (created if missing).",
    )
    parser.add_argument(
        "--max-height",
        type=int,
        default=0,
        help="Maximum slide height in lines (default 40). Overridden by --template-size.",
    )
    parser.add_argument(
        "--max-width",
        type=int,
        default=0,
        help="Maximum slide width in pixels. Overridden by --template-size.",
    )
    parser.add_argument("--theme", choices=THEMES, default="light", help="Slide theme.")
    parser.add_argument(
        "--template-size",
        choices=sorted(TEMPLATE_SIZES),
        default="",
        help="Predefined slide size.",
    )
    parser.add_argument(
        "--font-size", type=int, default=DEFAULT_FONT_SIZE, help="Font size in points."
    )
    parser.add_argument("--dpi", type=int, default=DEFAULT_DPI, help="DPI for rendering.")
    parser.add_argument(
        "--progress",
        action="store_true",
        help="Show a progress bar while splitting.",
    )
    return parser.parse_args(argv)


def main(argv: Sequence[str] | None = None) -> None:
    """Split the input and report how many slides were written.

    Example:
        >>> main(["--in", "README.md", "--out", "slides"])  # doctest: +SKIP
        Wrote 3 slides to slides
    """

    args = _parse_args(argv)
    options = SplitOptions(
        out_dir=args.out,
        max_height=args.max_height,
        max_width=args.max_width,
        theme=args.theme,
        template_size=args.template_size,
        font_size=args.font_size,
        dpi=args.dpi,
    )
    try:
        written = split_file(args.input, options, show_progress=args.progress)
    except (SplitError, ValueError) as exc:
        raise SystemExit(f"Error splitting Markdown: {exc}") from exc
    print(f"Wrote {len(written)} slides to {args.out}")


if __name__ == "__main__":
    main()
