"""Split paragraphs that are too tall for one slide."""

from __future__ import annotations

from typing import List

from ..text import content_lines


def split_paragraph_lines(text: str, *, budget: int) -> List[str]:
    """Group a paragraph's lines into slide texts of at most ``budget`` lines.

    Trailing empty lines are dropped first. No continuation marker is added.

    Args:
        text: Rendered paragraph text.
        budget: Max lines per slide.
    Returns:
        Slide texts in order, each ending with a newline.

    Example:
        >>> split_paragraph_lines("a\\nb\\nc\\n\\n", budget=2)
        ['a\\nb\\n', 'c\\n']
    """

    lines = content_lines(text)
    size = max(1, budget)
    return [
        "\n".join(lines[start : start + size]) + "\n"
        for start in range(0, len(lines), size)
    ]
