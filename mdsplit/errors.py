"""Exceptions raised while splitting Markdown into slides."""

from __future__ import annotations


class RenderError(Exception):
    """A content unit could not be serialized back to Markdown.

    Always absorbed by the resilient renderer; never reaches callers of the
    pagination engine.

    Args:
        kind: Node kind that failed to render.
        reason: Short description of the fault.
    """

    def __init__(self, kind: str, reason: str) -> None:
        super().__init__(f"cannot render {kind}: {reason}")
        self.kind = kind
        self.reason = reason


class SplitError(RuntimeError):
    """Fatal run-level failure (reading input or writing slides).

    Args:
        operation: What was being attempted, e.g. ``"write slide-3.md"``.
        cause: Underlying exception.

    Example:
        >>> str(SplitError("read input", OSError("denied")))
        'read input: denied'
    """

    def __init__(self, operation: str, cause: BaseException) -> None:
        super().__init__(f"{operation}: {cause}")
        self.operation = operation
        self.cause = cause
