import pytest
from conftest import SlideSink, failing_render, line_count

from mdsplit.document import parse_markdown
from mdsplit.paging.paging_flow import Paginator, paginate

LINE = "This is a line of text.\n"


def _split(source: str, budget: int, sink: SlideSink, **kwargs) -> int:
    return paginate(
        document=parse_markdown(source.encode()), budget=budget, emit=sink, **kwargs
    )


def test_simple_split_breaks_before_overflowing_heading(sink):
    count = _split("# Page 1\n\nSome content.\n\n# Page 2\n\nMore content.", 5, sink)
    assert count == 2
    assert sink.texts() == [
        "# Page 1\n\nSome content.\n",
        "# Page 2\n\nMore content.\n",
    ]


def test_long_table_gets_its_own_pages(sink):
    source = "| Header 1 | Header 2 |\n|---|---|\n" + "| a | b |\n" * 50
    assert _split(source, 40, sink) == 2
    first, second = sink.texts()
    header = "| Header 1 | Header 2 |\n| --- | --- |\n"
    assert first.startswith(header) and second.startswith(header)
    assert first.count("| a | b |") + second.count("| a | b |") == 50
    assert "part 1" in first
    assert "part 2" in second


def test_long_paragraph_splits_by_lines(sink):
    assert _split(LINE * 100, 40, sink) == 3
    assert sink.texts() == [LINE * 40, LINE * 40, LINE * 20]


def test_empty_document_emits_nothing(sink):
    assert _split("", 40, sink) == 0
    assert sink.slides == {}


def test_faulting_unit_still_lands_on_a_page(sink):
    words = " ".join(f"token{i}" for i in range(40))
    count = _split(
        f"# Heading\n\n{words}\n",
        40,
        sink,
        render=failing_render("paragraph"),
    )
    assert count == 1
    (text,) = sink.texts()
    assert text.startswith("# Heading\n\n")
    body = text[len("# Heading\n\n") :].rstrip("\n").split("\n")
    assert all(len(line) <= 80 for line in body)
    assert " ".join(body) == words


def test_paragraph_split_flushes_pending_page_first(sink):
    source = "# Title\n\n" + LINE * 10
    assert _split(source, 4, sink) == 4
    texts = sink.texts()
    assert texts[0] == "# Title\n"
    assert texts[1:] == [LINE * 4, LINE * 4, LINE * 2]


def test_oversized_list_sits_alone_unsplit(sink):
    items = "".join(f"- item {i}\n" for i in range(10))
    source = f"intro\n\n{items}\noutro\n"
    assert _split(source, 4, sink) == 3
    intro, listing, outro = sink.texts()
    assert intro == "intro\n"
    assert listing == items
    assert outro == "outro\n"


def test_pages_are_numbered_without_gaps_and_respect_budget(sink):
    parts = [f"## Section {i}\n\nParagraph {i} text.\n" for i in range(12)]
    table = "| k | v |\n|---|---|\n" + "".join(f"| {i} | x |\n" for i in range(25))
    source = "\n".join(parts[:6]) + "\n" + table + "\n" + "\n".join(parts[6:])
    count = _split(source, 10, sink)
    assert sink.order == list(range(1, count + 1))
    for text in sink.texts():
        assert text.strip()
        assert line_count(text) <= 10


def test_same_input_gives_identical_pages():
    source = "# A\n\n" + LINE * 30 + "\n| x |\n|---|\n" + "| 1 |\n" * 30
    first, second = SlideSink(), SlideSink()
    _split(source, 12, first)
    _split(source, 12, second)
    assert first.slides == second.slides


def test_progress_is_advanced_per_block(sink):
    class Counter:
        total = 0

        def update(self, n=1):
            self.total += n

    counter = Counter()
    _split("a\n\nb\n\nc\n", 40, sink, progress=counter)
    assert counter.total == 3


def test_paginator_rejects_non_positive_budget(sink):
    with pytest.raises(ValueError):
        Paginator(budget=0, emit=sink, source=b"")


def test_reference_definitions_reach_the_pages(sink):
    assert _split("See [docs][d].\n\n[d]: https://example.com\n", 40, sink) == 1
    assert sink.texts() == ["See [docs][d].\n\n[d]: https://example.com\n"]
