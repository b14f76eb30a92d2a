"""docreflow: markdown-aware reflow for documentation comments.

Public API re-exports for convenient single-import usage.
"""

__version__ = "0.1.0"

from .config import ReflowConfig, WrappingStyle
from .indent import container_prefix, line_prefix, wrap_context
from .markup import MarkupNode, NodeKind, parse_markup
from .text import reflow, reflow_markdown
from .tokenizer import split_words
from .types import WrapContext, WrapUnit
from .wrapping import greedy_wrap, minimum_raggedness_wrap, raggedness, wrap

__all__ = [
    # config
    "ReflowConfig",
    "WrappingStyle",
    # indent
    "container_prefix",
    "line_prefix",
    "wrap_context",
    # markup
    "MarkupNode",
    "NodeKind",
    "parse_markup",
    # text
    "reflow",
    "reflow_markdown",
    # tokenizer
    "split_words",
    # types
    "WrapContext",
    "WrapUnit",
    # wrapping
    "greedy_wrap",
    "minimum_raggedness_wrap",
    "raggedness",
    "wrap",
]
