"""Configuration records and template presets for slide splitting."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Tuple

from reportlab.lib.pagesizes import A4, landscape
from reportlab.lib.units import inch

from .paging_constants import DEFAULT_MAX_HEIGHT

DEFAULT_FONT_SIZE = 12
DEFAULT_DPI = 96
LINE_LEADING = 1.2
THEMES = ("light", "dark")

_CARD = (3.5 * inch, 6.0 * inch)
TEMPLATE_SIZES: Dict[str, Tuple[float, float]] = {
    "card": _CARD,
    "horizontal-card": landscape(_CARD),
    "presentation": (13.333 * inch, 7.5 * inch),
    "a4": A4,
}


@dataclass(slots=True)
class SplitOptions:
    """Options as supplied by the caller, possibly with unset fields.

    Only ``max_height`` drives pagination. Width, theme, font size and DPI are
    carried through unchanged; a template size fills height and width from
    its page geometry.

    Example:
        >>> SplitOptions().max_height
        0
    """

    out_dir: Path = Path(".")
    max_height: int = 0
    max_width: int = 0
    theme: str = "light"
    template_size: str = ""
    font_size: int = DEFAULT_FONT_SIZE
    dpi: int = DEFAULT_DPI


@dataclass(frozen=True, slots=True)
class ResolvedOptions:
    """Fully populated options for one run."""

    out_dir: Path
    max_height: int
    max_width: int
    theme: str
    template_size: str
    font_size: int
    dpi: int


def template_geometry(*, name: str, font_size: int, dpi: int) -> Tuple[int, int]:
    """Return (lines, pixel width) for a named template.

    Args:
        name: Key in ``TEMPLATE_SIZES``.
        font_size: Font size in points.
        dpi: Display resolution used to convert points to pixels.
    Returns:
        Tuple of (max lines per slide, max width in pixels).

    Example:
        >>> template_geometry(name="a4", font_size=12, dpi=96)
        (58, 794)
    """

    width_pt, height_pt = TEMPLATE_SIZES[name]
    lines = max(1, int(height_pt / (font_size * LINE_LEADING)))
    width_px = int(round(width_pt / inch * dpi))
    return lines, width_px


def resolve_options(options: SplitOptions) -> ResolvedOptions:
    """Resolve defaults and template presets once, before splitting.

    Args:
        options: Caller supplied options.
    Returns:
        ResolvedOptions with every field populated.
    Raises:
        ValueError: Unknown theme or template size.

    Example:
        >>> resolve_options(SplitOptions(max_height=0)).max_height
        40
    """

    if options.theme not in THEMES:
        raise ValueError(f"Unknown theme: {options.theme!r}")
    template = options.template_size.strip().lower()
    if template and template not in TEMPLATE_SIZES:
        raise ValueError(f"Unknown template size: {options.template_size!r}")
    font_size = options.font_size if options.font_size > 0 else DEFAULT_FONT_SIZE
    dpi = options.dpi if options.dpi > 0 else DEFAULT_DPI
    max_height = options.max_height if options.max_height > 0 else DEFAULT_MAX_HEIGHT
    max_width = max(0, options.max_width)
    if template:
        max_height, max_width = template_geometry(
            name=template, font_size=font_size, dpi=dpi
        )
    return ResolvedOptions(
        out_dir=Path(options.out_dir),
        max_height=max_height,
        max_width=max_width,
        theme=options.theme,
        template_size=template,
        font_size=font_size,
        dpi=dpi,
    )
