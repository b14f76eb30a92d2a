"""Core data types for the docreflow engine."""

from dataclasses import dataclass

# One indivisible wrap token: a word, or a span such as `code`, [a link](url)
# or **bold text**, with any glued-on punctuation.
WrapUnit = str


@dataclass(frozen=True)
class WrapContext:
    """Per-paragraph wrapping budget and line prefixes."""
    max_width: int
    leading_indent: str
    continuation_indent: str

