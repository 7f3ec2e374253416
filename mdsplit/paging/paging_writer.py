"""Write finished slides to disk."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from ..errors import SplitError
from .paging_constants import SLIDE_EXTENSION, SLIDE_PREFIX


def slide_name(*, index: int, prefix: str = SLIDE_PREFIX, extension: str = SLIDE_EXTENSION) -> str:
    """Return the file name for a slide.

    Example:
        >>> slide_name(index=3)
        'slide-3.md'
    """

    return f"{prefix}-{index}.{extension}"


@dataclass(slots=True)
class SlideWriter:
    """Persist slides as ``<prefix>-<N>.<extension>`` files in ``out_dir``.

    The directory is created on first use. Any I/O failure raises
    ``SplitError`` and stops the run.

    Args:
        out_dir: Destination directory.
        prefix: File name prefix.
        extension: File extension without the dot.
        written: Paths written so far, in order.
    """

    out_dir: Path
    prefix: str = SLIDE_PREFIX
    extension: str = SLIDE_EXTENSION
    written: List[Path] = field(default_factory=list)
    _ready: bool = False

    def ensure_dir(self) -> None:
        """Create the output directory (and parents) once."""

        if self._ready:
            return
        try:
            self.out_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise SplitError(f"create output directory {self.out_dir}", exc) from exc
        self._ready = True

    def __call__(self, index: int, text: str) -> Path:
        """Write one slide.

        Args:
            index: 1-based slide number.
            text: Slide Markdown.
        Returns:
            Path of the written file.
        """

        self.ensure_dir()
        name = slide_name(index=index, prefix=self.prefix, extension=self.extension)
        path = self.out_dir / name
        try:
            path.write_bytes(text.encode("utf-8"))
        except OSError as exc:
            raise SplitError(f"write {name}", exc) from exc
        self.written.append(path)
        return path
