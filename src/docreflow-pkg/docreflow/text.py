"""Reflow markdown text while preserving its structure.

- Paragraphs are split into wrap units and re-wrapped
- Code blocks, tables, headings and raw html are copied line for line
- List items and block quotes keep their markers; wrapped lines are indented
  under the item content or carry the quote prefix
- Blank lines stay where they are
"""

import re
from typing import Iterator

from .config import ReflowConfig, WrappingStyle
from .indent import TAG_INDENT, container_prefix, line_prefix, wrap_context
from .markup import MarkupNode, NodeKind, parse_markup
from .tokenizer import split_words
from .types import WrapUnit
from .wrapping import wrap

# Units that would open a new block if a wrapped line started with them.
_BLOCK_START = re.compile(
    r"[-+*]|#{1,6}|\d{1,9}[.)]|=+|-+|\*{3,}|_{3,}|>.*|`{3,}.*|~{3,}.*")


def reflow_markdown(text: str, config: ReflowConfig | None = None) -> str:
    """Reflow one doc comment section according to ``config``.

    ``text`` is the comment body with the comment markers already removed.
    A negative ``max_line_width`` returns ``text`` untouched.
    """
    if config is None:
        config = ReflowConfig()
    if not config.enabled:
        return text

    if config.extra_leading_space:
        text = _strip_decoration(text)
    if not config.before_any_tags:
        text = _dedent_tag_body(text)

    return reflow(parse_markup(text), config.wrapping_style, config.max_line_width,
                  config.before_any_tags, config.extra_leading_space)


def reflow(root: MarkupNode, style: WrappingStyle, max_width: int,
           before_any_tags: bool, extra_leading_space: bool) -> str:
    """Write the tree rooted at ``root`` back out with every paragraph re-wrapped."""
    return "".join(_emit(root, style, max_width, before_any_tags, extra_leading_space))


def _emit(node: MarkupNode, style: WrappingStyle, max_width: int,
          before_any_tags: bool, extra_leading_space: bool) -> Iterator[str]:
    if node.kind is NodeKind.PARAGRAPH:
        context = wrap_context(node, max_width, before_any_tags, extra_leading_space)
        units = _guard_block_starts(split_words(node.text))
        yield wrap(style, units, context.max_width,
                   context.leading_indent, context.continuation_indent)
    elif node.kind is NodeKind.EOL:
        yield "\n"
    elif node.kind is NodeKind.WHITESPACE:
        yield container_prefix(node.parent, before_any_tags, extra_leading_space).rstrip()
    elif node.kind in (NodeKind.LIST_ITEM_MARKER, NodeKind.BLOCK_QUOTE_MARKER):
        container = node.parent
        marker = node.text
        if node.kind is NodeKind.LIST_ITEM_MARKER:
            marker = marker.lstrip()
        yield line_prefix(container, before_any_tags, extra_leading_space) + marker
        if container.has_content:
            yield " "
    elif node.is_leaf:
        yield _verbatim(node, before_any_tags, extra_leading_space)
    else:
        for child in node.children:
            yield from _emit(child, style, max_width, before_any_tags, extra_leading_space)


def _verbatim(node: MarkupNode, before_any_tags: bool, extra_leading_space: bool) -> str:
    """Copy a leaf block, re-deriving only the container prefix of each line."""
    first, *rest = node.text.split("\n")
    prefix = container_prefix(node.parent, before_any_tags, extra_leading_space)
    lines = [line_prefix(node, before_any_tags, extra_leading_space) + first]
    for line in rest:
        if line.strip():
            lines.append(prefix + line)
        elif prefix.strip():
            lines.append(prefix.rstrip() + line)
        else:
            lines.append(line)
    return "\n".join(lines)


def _guard_block_starts(units: list[WrapUnit]) -> list[WrapUnit]:
    """Glue block-opening units to the unit before them.

    A line that starts with ``-``, ``1.`` or ``>`` would be read back as a
    list or quote, so those units never begin a wrapped line.
    """
    guarded: list[WrapUnit] = []
    for unit in units:
        if guarded and _BLOCK_START.fullmatch(unit):
            guarded[-1] += " " + unit
        else:
            guarded.append(unit)
    return guarded


def _strip_decoration(text: str) -> str:
    return "\n".join(line[1:] if line.startswith(" ") else line
                     for line in text.split("\n"))


def _dedent_tag_body(text: str) -> str:
    """Drop the hanging indent under a tag line when every body line has it."""
    first, *rest = text.split("\n")
    if not all(line.startswith(TAG_INDENT) for line in rest if line.strip()):
        return text
    body = [line[len(TAG_INDENT):] if line.startswith(TAG_INDENT) else line
            for line in rest]
    return "\n".join([first, *body])

