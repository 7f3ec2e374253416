import pytest

from mdsplit.document import parse_markdown
from mdsplit.errors import RenderError
from mdsplit.markdown_render import render_markdown
from mdsplit.models import ContentUnit


def _render_all(source: bytes) -> list[str]:
    document = parse_markdown(source)
    return [render_markdown(unit, document.source) for unit in document.units]


def test_heading_and_paragraph():
    assert _render_all(b"## Sub\n\nSome *text*\nwrapped.\n") == [
        "## Sub\n",
        "Some *text*\nwrapped.\n",
    ]


def test_setext_heading_becomes_atx():
    assert _render_all(b"Title\n=====\n") == ["# Title\n"]


def test_table_keeps_alignment():
    (text,) = _render_all(b"| A | B | C |\n|:--|:-:|--:|\n| 1 | 2 | 3 |\n")
    assert text == "| A | B | C |\n| :--- | :---: | ---: |\n| 1 | 2 | 3 |\n"


def test_tight_and_loose_lists():
    assert _render_all(b"- a\n- b\n") == ["- a\n- b\n"]
    assert _render_all(b"- a\n\n- b\n") == ["- a\n\n- b\n"]


def test_ordered_list_keeps_start_number():
    assert _render_all(b"3. x\n4. y\n") == ["3. x\n4. y\n"]


def test_nested_list_is_indented():
    assert _render_all(b"- a\n  - b\n") == ["- a\n  - b\n"]


def test_fence_blockquote_and_rule():
    rendered = _render_all(b"```py\nprint(1)\n```\n\n> quoted\n\n***\n")
    assert rendered == ["```py\nprint(1)\n```\n", "> quoted\n", "---\n"]


def test_unsupported_kind_raises_render_error():
    with pytest.raises(RenderError) as excinfo:
        render_markdown(ContentUnit("front_matter"), b"")
    assert excinfo.value.kind == "front_matter"


def test_table_without_header_raises_render_error():
    with pytest.raises(RenderError):
        render_markdown(ContentUnit("table", children=(ContentUnit("tbody"),)), b"")


def test_escaped_pipes_in_cells_stay_escaped():
    source = b"| a | b |\n|---|---|\n| x \\| y | `c\\|d` |\n"
    (text,) = _render_all(source)
    assert text == "| a | b |\n| --- | --- |\n| x \\| y | `c\\|d` |\n"
    (table,) = parse_markdown(text.encode()).units
    (row,) = table.child("tbody").children
    assert len(row.children) == 2


def test_multi_line_setext_heading_keeps_underline():
    assert _render_all(b"Setext\nmultiline\n---\n") == ["Setext\nmultiline\n---\n"]
    assert _render_all(b"Big\ntitle\n===\n") == ["Big\ntitle\n===\n"]
    (heading,) = parse_markdown(b"Setext\nmultiline\n---\n").units
    assert heading.kind == "heading"
    assert heading.tag == "h2"


def test_reference_definition_is_rendered_verbatim():
    assert _render_all(b"See [docs][d].\n\n[d]: https://example.com\n") == [
        "See [docs][d].\n",
        "[d]: https://example.com\n",
    ]


def test_reference_definition_inside_quote_raises_render_error():
    (quote,) = parse_markdown(b"> [d]: /url\n> see [d]\n").units
    with pytest.raises(RenderError) as excinfo:
        render_markdown(quote, b"")
    assert excinfo.value.kind == "reference"
