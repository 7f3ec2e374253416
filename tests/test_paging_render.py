from conftest import failing_render

from mdsplit.document import parse_markdown
from mdsplit.paging.paging_render import render_unit, source_segments
from mdsplit.paging.paging_types import FallbackExtracted, Rendered

LONG_PARAGRAPH = " ".join(f"word{i}" for i in range(60))


def test_successful_render_is_tagged_and_spaced():
    document = parse_markdown(b"# Title\n")
    fragment = render_unit(unit=document.units[0], source=document.source)
    assert isinstance(fragment, Rendered)
    assert not fragment.fell_back
    assert fragment.text == "# Title\n\n"
    assert fragment.line_count == 2


def test_paragraph_fault_falls_back_to_wrapped_source():
    document = parse_markdown(f"{LONG_PARAGRAPH}\n".encode())
    fragment = render_unit(
        unit=document.units[0],
        source=document.source,
        render=failing_render("paragraph"),
    )
    assert isinstance(fragment, FallbackExtracted)
    assert fragment.fell_back
    assert "forced failure" in fragment.reason
    body = fragment.text.rstrip("\n").split("\n")
    assert len(body) > 1
    assert all(len(line) <= 80 for line in body)
    assert " ".join(body) == LONG_PARAGRAPH
    assert fragment.text.endswith("\n\n")


def test_non_paragraph_fault_copies_source_verbatim():
    source = b"Intro.\n\n- one\n-   two\n"
    document = parse_markdown(source)
    fragment = render_unit(
        unit=document.units[1],
        source=document.source,
        render=failing_render("bullet_list"),
    )
    assert isinstance(fragment, FallbackExtracted)
    assert fragment.text == "- one\n-   two\n\n"


def test_empty_rendering_counts_as_fault():
    document = parse_markdown(b"Hello there.\n")
    fragment = render_unit(
        unit=document.units[0],
        source=document.source,
        render=lambda unit, source: "  \n",
    )
    assert isinstance(fragment, FallbackExtracted)
    assert fragment.text == "Hello there.\n\n"


def test_source_segments_merge_a_parsed_unit_into_one_span():
    source = b"| A |\n|---|\n| 1 |\n| 2 |\n"
    (table,) = parse_markdown(source).units
    segments = source_segments(unit=table, source=source)
    assert len(segments) == 1
    assert source[segments[0].start : segments[0].stop] == source


def test_quote_holding_a_reference_falls_back_to_source():
    source = b"> [d]: https://example.com\n> see [d]\n"
    document = parse_markdown(source)
    fragment = render_unit(unit=document.units[0], source=document.source)
    assert isinstance(fragment, FallbackExtracted)
    assert fragment.text == source.decode() + "\n"
