from textwrap import dedent

import pytest

from docreflow.indent import container_prefix, line_prefix, wrap_context
from docreflow.markup import NodeKind, parse_markup
from docreflow.types import WrapContext


def paragraphs(text):
    return [node for node in parse_markup(text).walk() if node.kind is NodeKind.PARAGRAPH]


NESTED_LIST = dedent("""\
    - item 1
    - item 2
      - item 3""")


def test_first_paragraph_of_the_default_section():
    (paragraph,) = paragraphs("Some text")
    assert wrap_context(paragraph, 50, True, False) == WrapContext(50, "", "")


@pytest.mark.parametrize("before_any_tags, extra_leading_space, leading, continuation", [
    (True, False, "", ""),
    (False, False, "  ", "  "),
    (True, True, " ", " "),
    (False, True, "   ", "   "),
])
def test_later_top_level_paragraphs(before_any_tags, extra_leading_space,
                                    leading, continuation):
    _, second = paragraphs("@param first\n\nsecond")
    context = wrap_context(second, 50, before_any_tags, extra_leading_space)
    assert context == WrapContext(50, leading, continuation)


def test_first_paragraph_keeps_only_the_margin():
    first, _ = paragraphs("@param first\n\nsecond")
    assert wrap_context(first, 50, False, True) == WrapContext(50, " ", "   ")


def test_list_item_paragraphs_lose_their_indent_from_the_budget():
    first, _, third = paragraphs(NESTED_LIST)

    assert wrap_context(first, 50, True, False) == WrapContext(48, "", "  ")
    assert wrap_context(third, 50, True, False) == WrapContext(46, "", "    ")
    assert wrap_context(third, 50, False, False) == WrapContext(44, "", "      ")


def test_ordered_marker_width_sets_the_continuation():
    (paragraph,) = paragraphs("10. ten")
    assert wrap_context(paragraph, 50, True, False) == WrapContext(46, "", "    ")


def test_quote_paragraph():
    _, quoted = paragraphs("My quote:\n\n> text")
    assert wrap_context(quoted, 50, True, False) == WrapContext(48, "", "> ")


def test_second_paragraph_in_a_list_item_starts_at_the_content_column():
    _, second = paragraphs("- first\n\n  second")
    assert wrap_context(second, 50, True, False) == WrapContext(48, "  ", "  ")


def test_prefixes_of_lists():
    root = parse_markup(NESTED_LIST)
    outer = root.children[0]
    second_item = outer.children[2]
    inner = second_item.children[3]

    assert line_prefix(outer, True, False) == ""
    assert line_prefix(outer.children[0], True, False) == ""
    assert line_prefix(second_item, True, False) == ""
    assert line_prefix(inner, True, False) == "  "
    assert line_prefix(inner.children[0], True, False) == "  "
    assert line_prefix(second_item, False, False) == "  "
    assert container_prefix(inner.children[0], True, False) == "    "


def test_container_prefix_of_a_quoted_list():
    quote = parse_markup("> - item").children[0]
    item = quote.children[1].children[0]

    assert container_prefix(quote, True, False) == "> "
    assert container_prefix(item, True, False) == ">   "
    assert container_prefix(item, False, True) == "   >   "
