"""Shared constants for slide pagination."""

from __future__ import annotations

import os

DEFAULT_MAX_HEIGHT = 40
FALLBACK_WRAP_WIDTH = 80
# Lines reserved below a table chunk for the continuation note itself; the
# blank separator line is counted with the rendered header.
CONTINUATION_NOTE_LINES = 1
SLIDE_PREFIX = "slide"
SLIDE_EXTENSION = "md"
DEBUG_SPLIT = os.getenv("DEBUG_SPLIT", "0") not in {
    "",
    "0",
    "false",
    "False",
}


def _debug(*, msg: str) -> None:
    """Print pagination debug output when enabled.

    Args:
        msg: Message to print.
    Returns:
        None.
    """

    if DEBUG_SPLIT:
        print(msg)
