"""Line prefixes and width budgets for blocks in a markup tree.

Two prefixes matter for every block:

- ``line_prefix`` goes in front of the block's first line. It is empty when
  a list item or quote marker already opened that line.
- ``container_prefix`` goes in front of every later line: the decoration
  margin, the tag indent, then one piece per enclosing container from the
  outside in (``"> "`` for a quote, the marker width plus one for a list
  item).
"""

from .markup import CONTAINER_KINDS, LIST_KINDS, MarkupNode, NodeKind
from .types import WrapContext

TAG_INDENT = "  "
QUOTE_INDENT = "> "


def _margin(extra_leading_space: bool) -> str:
    return " " if extra_leading_space else ""


def container_prefix(node: MarkupNode, before_any_tags: bool,
                     extra_leading_space: bool) -> str:
    """Prefix for lines that continue inside ``node``."""
    prefix = _margin(extra_leading_space)
    if not before_any_tags:
        prefix += TAG_INDENT

    containers = [n for n in (node, *node.ancestors()) if n.kind in CONTAINER_KINDS]
    for container in reversed(containers):
        if container.kind is NodeKind.BLOCK_QUOTE:
            prefix += QUOTE_INDENT
        else:
            prefix += " " * (container.marker_width + 1)
    return prefix


def line_prefix(node: MarkupNode, before_any_tags: bool,
                extra_leading_space: bool) -> str:
    """Prefix for the first line of block ``node``."""
    parent = node.parent
    assert parent is not None, "the document has no line prefix"

    if node.is_first_block:
        if parent.is_root:
            return _margin(extra_leading_space)
        if parent.kind in CONTAINER_KINDS:
            return ""
        if parent.kind in LIST_KINDS:
            return line_prefix(parent, before_any_tags, extra_leading_space)
    return container_prefix(parent, before_any_tags, extra_leading_space)


def wrap_context(node: MarkupNode, max_width: int, before_any_tags: bool,
                 extra_leading_space: bool) -> WrapContext:
    """Width budget and indents for wrapping paragraph ``node``.

    Nested paragraphs lose the continuation indent from their budget. A
    top-level paragraph keeps the full width and its lines are measured
    with their indent included.
    """
    continuation = container_prefix(node.parent, before_any_tags, extra_leading_space)
    leading = line_prefix(node, before_any_tags, extra_leading_space)
    if node.list_level or node.quote_level:
        max_width -= len(continuation)
    return WrapContext(max_width, leading, continuation)
