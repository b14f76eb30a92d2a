"""Structural markdown tree used by the reflow engine.

The block structure comes from markdown-it-py. Its tokens only report which
source lines a block covers, so this module slices the source itself: every
container strips its own prefixes (``> `` for quotes, the marker and content
indent for list items) from the lines it hands to its children, and every
line the parser skipped (blank separators, link reference definitions) is
kept as a leaf so that nothing is lost when the tree is written back out.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from functools import cached_property
from typing import Iterator

from markdown_it import MarkdownIt
from markdown_it.tree import SyntaxTreeNode


class NodeKind(str, Enum):
    DOCUMENT = "document"
    PARAGRAPH = "paragraph"
    ORDERED_LIST = "ordered_list"
    UNORDERED_LIST = "unordered_list"
    LIST_ITEM = "list_item"
    LIST_ITEM_MARKER = "list_item_marker"
    BLOCK_QUOTE = "block_quote"
    BLOCK_QUOTE_MARKER = "block_quote_marker"
    FENCED_CODE_BLOCK = "fenced_code_block"
    INDENTED_CODE_BLOCK = "indented_code_block"
    TABLE = "table"
    HEADING = "heading"
    RAW_BLOCK = "raw_block"
    LINK = "link"
    PLAIN_TEXT = "plain_text"
    EOL = "eol"
    WHITESPACE = "whitespace"


LIST_KINDS = frozenset({NodeKind.ORDERED_LIST, NodeKind.UNORDERED_LIST})
CONTAINER_KINDS = frozenset({NodeKind.LIST_ITEM, NodeKind.BLOCK_QUOTE})
MARKER_KINDS = frozenset({NodeKind.LIST_ITEM_MARKER, NodeKind.BLOCK_QUOTE_MARKER})
_SEPARATOR_KINDS = frozenset({NodeKind.EOL, NodeKind.WHITESPACE}) | MARKER_KINDS

_LIST_MARKER = re.compile(r"^( {0,3})([-+*]|\d{1,9}[.)])(?=[ \t]|$)( *)")
_QUOTE_MARKER = re.compile(r"^ {0,3}>")
_QUOTE_PREFIX = re.compile(r"^ {0,3}> ?")
_INLINE_PIECE = re.compile(
    r"(?P<eol>\n)"
    r"|(?P<whitespace>[^\S\n]+)"
    r"|(?P<link>\[[^\[\]\n]*\](?:\([^()\s]*\)|\[[^\[\]\n]*\])?)"
    r"|(?P<plain_text>[^\s\[]+|\[)"
)

_VERBATIM_BLOCKS = {
    "fence": NodeKind.FENCED_CODE_BLOCK,
    "code_block": NodeKind.INDENTED_CODE_BLOCK,
    "table": NodeKind.TABLE,
    "heading": NodeKind.HEADING,
}


@dataclass(eq=False)
class MarkupNode:
    """One node of the parsed tree.

    ``parent`` is a lookup reference only; children are owned by the
    ``children`` list. Nodes are not modified once ``parse_markup`` returns,
    so the cached properties below are safe to memoize per instance.
    """
    kind: NodeKind
    text: str
    children: list["MarkupNode"] = field(default_factory=list)
    parent: "MarkupNode | None" = field(default=None, repr=False)

    def _add(self, child: "MarkupNode") -> "MarkupNode":
        child.parent = self
        self.children.append(child)
        return child

    @property
    def is_leaf(self) -> bool:
        return not self.children

    @property
    def is_paragraph(self) -> bool:
        return self.kind is NodeKind.PARAGRAPH

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def is_block(self) -> bool:
        """True for nodes that occupy their own lines in a container."""
        if self.is_root or self.kind in _SEPARATOR_KINDS:
            return False
        return not self.parent.is_paragraph

    def ancestors(self) -> Iterator["MarkupNode"]:
        node = self.parent
        while node is not None:
            yield node
            node = node.parent

    def walk(self) -> Iterator["MarkupNode"]:
        """Depth-first, pre-order traversal including this node."""
        yield self
        for child in self.children:
            yield from child.walk()

    def previous_siblings(self) -> Iterator["MarkupNode"]:
        if self.parent is None:
            return
        siblings = self.parent.children
        index = next(i for i, sibling in enumerate(siblings) if sibling is self)
        yield from reversed(siblings[:index])

    @cached_property
    def list_level(self) -> int:
        return sum(1 for node in self.ancestors() if node.kind is NodeKind.LIST_ITEM)

    @cached_property
    def quote_level(self) -> int:
        return sum(1 for node in self.ancestors() if node.kind is NodeKind.BLOCK_QUOTE)

    @cached_property
    def is_first_block(self) -> bool:
        return self.is_block and not any(
            sibling.is_block for sibling in self.previous_siblings())

    @property
    def marker(self) -> "MarkupNode":
        """The marker leaf that opens a list item or block quote."""
        assert self.kind in CONTAINER_KINDS, f"{self.kind.value} has no marker"
        first = self.children[0]
        assert first.kind in MARKER_KINDS, (
            f"expected a marker but the first child is {first.kind.value}")
        return first

    @property
    def marker_width(self) -> int:
        return len(self.marker.text.strip())

    @property
    def has_content(self) -> bool:
        """True when a list item or quote holds anything besides its marker."""
        return any(child.is_block for child in self.children)


def parse_markup(text: str) -> MarkupNode:
    """Parse ``text`` into a ``MarkupNode`` tree rooted at a DOCUMENT node."""
    text = text.replace("\r\n", "\n").replace("\r", "\n")
    lines = text.split("\n")
    parser = MarkdownIt("commonmark").enable("table")
    syntax_tree = SyntaxTreeNode(parser.parse(text))

    root = MarkupNode(NodeKind.DOCUMENT, text)
    view = dict(enumerate(lines))
    _fill(root, view, syntax_tree.children, 0, len(lines))
    return root


def _is_blank(line: str) -> bool:
    return not line.strip()


def _fill(container: MarkupNode, view: dict[int, str],
          blocks: list[SyntaxTreeNode], start: int, end: int) -> None:
    """Add the blocks in ``[start, end)`` to ``container``, keeping gaps."""
    drops_leading_blanks = container.kind in CONTAINER_KINDS
    cursor = start

    def add(node: MarkupNode) -> None:
        if any(child.kind not in MARKER_KINDS for child in container.children):
            container._add(MarkupNode(NodeKind.EOL, "\n"))
        container._add(node)

    def add_gap(gap_start: int, gap_end: int) -> None:
        for line_number in range(gap_start, gap_end):
            line = view[line_number]
            if not _is_blank(line):
                add(MarkupNode(NodeKind.PLAIN_TEXT, line))
            elif not (drops_leading_blanks and not container.has_content):
                add(MarkupNode(NodeKind.WHITESPACE, line))

    for block in blocks:
        # A nested block's map can cover blank lines its container trimmed.
        block_start, block_end = (min(line, end) for line in block.map)
        block_end = _trim_blank_tail(view, block_start, block_end)
        add_gap(cursor, block_start)
        add(_build(block, view, block_start, block_end))
        cursor = max(cursor, block_end)

    add_gap(cursor, end)


def _trim_blank_tail(view: dict[int, str], start: int, end: int) -> int:
    while end > start + 1 and _is_blank(view[end - 1]):
        end -= 1
    return end


def _span(view: dict[int, str], start: int, end: int) -> str:
    return "\n".join(view[i] for i in range(start, end))


def _build(block: SyntaxTreeNode, view: dict[int, str],
           start: int, end: int) -> MarkupNode:
    if block.type == "paragraph":
        return _build_paragraph(block.children[0].content)
    if block.type in ("bullet_list", "ordered_list"):
        kind = (NodeKind.ORDERED_LIST if block.type == "ordered_list"
                else NodeKind.UNORDERED_LIST)
        node = MarkupNode(kind, _span(view, start, end))
        _fill(node, view, block.children, start, end)
        return node
    if block.type == "list_item":
        return _build_list_item(block, view, start, end)
    if block.type == "blockquote":
        return _build_block_quote(block, view, start, end)
    kind = _VERBATIM_BLOCKS.get(block.type, NodeKind.RAW_BLOCK)
    return MarkupNode(kind, _span(view, start, end))


def _build_paragraph(content: str) -> MarkupNode:
    paragraph = MarkupNode(NodeKind.PARAGRAPH, content)
    for match in _INLINE_PIECE.finditer(content):
        paragraph._add(MarkupNode(NodeKind(match.lastgroup), match.group(0)))
    return paragraph


def _build_list_item(block: SyntaxTreeNode, view: dict[int, str],
                     start: int, end: int) -> MarkupNode:
    first_line = view[start]
    match = _LIST_MARKER.match(first_line)
    assert match is not None, f"expected a list marker in {first_line!r}"

    leading, marker, spaces = match.groups()
    marker_end = len(leading) + len(marker)
    rest = first_line[match.end():]
    if not rest or len(spaces) > 4:
        # Blank first line, or indented code right after the marker.
        content_indent = marker_end + 1
    else:
        content_indent = match.end()

    item = MarkupNode(NodeKind.LIST_ITEM, _span(view, start, end))
    item._add(MarkupNode(NodeKind.LIST_ITEM_MARKER, leading + marker))

    item_view = {start: first_line[content_indent:]}
    for line_number in range(start + 1, end):
        item_view[line_number] = _dedent(view[line_number], content_indent)
    _fill(item, item_view, block.children, start, end)
    return item


def _dedent(line: str, width: int) -> str:
    spaces = len(line) - len(line.lstrip(" "))
    return line[min(spaces, width):]


def _build_block_quote(block: SyntaxTreeNode, view: dict[int, str],
                       start: int, end: int) -> MarkupNode:
    # A nested quote's marker arrives as the leftover of its parent's
    # opening line, possibly behind whitespace (">  > text").
    first_line = view[start]
    match = _QUOTE_MARKER.match(first_line)
    assert match is not None, f"expected a block quote marker in {first_line!r}"

    quote = MarkupNode(NodeKind.BLOCK_QUOTE, _span(view, start, end))
    quote._add(MarkupNode(NodeKind.BLOCK_QUOTE_MARKER, match.group(0)))

    quote_view = {}
    for line_number in range(start, end):
        line = view[line_number]
        prefix = _QUOTE_PREFIX.match(line)
        quote_view[line_number] = line[prefix.end():] if prefix else line
    _fill(quote, quote_view, block.children, start, end)
    return quote
