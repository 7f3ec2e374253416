"""
Small, focused text helpers for line accounting and wrapping.
"""

from __future__ import annotations

from typing import List

from .models import SourceSpan


BLOCK_SEPARATOR = "\n\n"


def count_lines(text: str) -> int:
    """Return the number of line breaks in ``text``.

    Example:
        >>> count_lines("# Title\\n\\n")
        2
    """

    return text.count("\n")


def ensure_block_spacing(text: str) -> str:
    """Make ``text`` end with exactly one blank line after its last line.

    Text that already ends with a blank line is left untouched.

    Example:
        >>> ensure_block_spacing("para")
        'para\\n\\n'
        >>> ensure_block_spacing("para\\n")
        'para\\n\\n'
        >>> ensure_block_spacing("para\\n\\n")
        'para\\n\\n'
    """

    if text.endswith(BLOCK_SEPARATOR):
        return text
    if text.endswith("\n"):
        return text + "\n"
    return text + BLOCK_SEPARATOR


def wrap_words(text: str, width: int) -> str:
    """Greedy word wrap: fill each line until the next word would overflow.

    Words longer than ``width`` sit alone on their own line. Existing line
    breaks are treated as ordinary whitespace.

    Example:
        >>> wrap_words("one two three four", 9)
        'one two\\nthree\\nfour'
    """

    lines: List[str] = []
    current = ""
    for word in text.split():
        if not current:
            current = word
        elif len(current) + 1 + len(word) > width:
            lines.append(current)
            current = word
        else:
            current = f"{current} {word}"
    if current:
        lines.append(current)
    return "\n".join(lines)


def expand_to_lines(source: bytes, span: SourceSpan) -> SourceSpan:
    """Grow ``span`` outward so it starts and stops on line boundaries.

    The returned stop includes the terminating newline when there is one.

    Example:
        >>> expand_to_lines(b"ab\\ncd\\nef", SourceSpan(4, 5))
        SourceSpan(start=3, stop=6)
    """

    start = max(0, min(span.start, len(source)))
    stop = max(start, min(span.stop, len(source)))
    line_start = source.rfind(b"\n", 0, start) + 1
    if stop > line_start and source[stop - 1 : stop] == b"\n":
        return SourceSpan(line_start, stop)
    newline = source.find(b"\n", stop)
    line_stop = len(source) if newline == -1 else newline + 1
    return SourceSpan(line_start, line_stop)


def content_lines(text: str) -> List[str]:
    """Split ``text`` into lines, dropping trailing empty ones.

    Example:
        >>> content_lines("a\\nb\\n\\n")
        ['a', 'b']
    """

    lines = text.split("\n")
    while lines and not lines[-1].strip():
        lines.pop()
    return lines


def trim_trailing_blank_lines(text: str) -> str:
    """Collapse trailing blank lines so non-empty text ends in one newline.

    Example:
        >>> trim_trailing_blank_lines("a\\n\\n\\n")
        'a\\n'
    """

    stripped = text.rstrip("\n")
    return f"{stripped}\n" if stripped else ""
