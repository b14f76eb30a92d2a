"""Split paragraph text into atomic wrap units.

A unit is never broken across output lines. Besides plain words, these
markdown spans are kept whole even when they contain spaces:

- links: ``[label][ref]``, ``[label](target)`` and bare ``[label]``
- code: ````` ```fenced span``` ````` and ```single backtick```
- emphasis: ``**bold**``, ``__bold__``, ``~~strike~~``, ``*italic*``, ``_italic_``

Spans that touch (no whitespace in between) fuse into one unit, so trailing
punctuation or a word glued to a link stays with it.
"""

import re

from .types import WrapUnit

# Nested groups use single-character alternation to keep matching linear
# on unbalanced input.
_IN_BRACKETS = r"\[(?:[^\[\]]|\[[^\[\]]*\])*\]"
_IN_PARENS = r"\((?:[^()\\]|\\.|\((?:[^()\\]|\\.)*\))*\)"

_PATTERNS = (
    # [Some Text][reference]
    _IN_BRACKETS + _IN_BRACKETS,
    # [Some Text](https://example.com)
    _IN_BRACKETS + _IN_PARENS,
    # [Some Text]
    _IN_BRACKETS,
    # ```fun foo() = Unit```
    r"```[^`]*(?:`[^`]+`[^`]*)*```",
    # `fun foo() = Unit`
    r"`[^`\n]*`",
    # **bold**, __bold__, ~~strike~~
    r"(?P<bold>\*\*|__|~~)(?![\s*_~])[^\n]*?\S(?P=bold)(?!\w)",
    # *italic*, _italic_
    r"(?P<italic>[*_~])(?![\s*_~])[^\n]*?\S(?P=italic)(?!\w)",
    # anything else up to whitespace
    r"\S+",
)

_UNIT = re.compile("(?:" + "|".join(_PATTERNS) + ")+")
_WHITESPACE_RUN = re.compile(r"\s+")


def split_words(text: str) -> list[WrapUnit]:
    """Return the wrap units of ``text`` in order.

    Joining the result with single spaces gives back ``text`` with its
    whitespace runs collapsed. A span written across a line break has the
    break folded into a single space.
    """
    return [_WHITESPACE_RUN.sub(" ", match.group(0))
            for match in _UNIT.finditer(text)]
