from typing import Dict, List

import pytest

from mdsplit.errors import RenderError
from mdsplit.markdown_render import render_markdown
from mdsplit.models import ContentUnit


class SlideSink:
    """Collect emitted slides in memory."""

    def __init__(self) -> None:
        self.slides: Dict[int, str] = {}
        self.order: List[int] = []

    def __call__(self, index: int, text: str) -> None:
        assert index not in self.slides, f"slide {index} emitted twice"
        self.slides[index] = text
        self.order.append(index)

    def texts(self) -> List[str]:
        return [self.slides[index] for index in self.order]


def failing_render(*kinds: str):
    """Return a render function that faults for the given kinds."""

    def render(unit: ContentUnit, source: bytes) -> str:
        if unit.kind in kinds:
            raise RenderError(unit.kind, "forced failure")
        return render_markdown(unit, source)

    return render


@pytest.fixture
def sink() -> SlideSink:
    return SlideSink()


def line_count(text: str) -> int:
    return text.count("\n")
