"""Line-breaking strategies.

Both strategies take the same arguments and are pure functions: the first
line starts with ``leading_indent``, every later line with
``continuation_indent``, and ``max_width`` is the budget for a whole line,
indent included. The first unit on a line is always placed, even when it
alone overflows the budget; an over-long link or code span is left intact
rather than broken.
"""

from typing import Callable, Sequence

from .config import WrappingStyle
from .types import WrapUnit

Wrapper = Callable[[Sequence[WrapUnit], int, str, str], str]


def greedy_wrap(units: Sequence[WrapUnit], max_width: int,
                leading_indent: str, continuation_indent: str) -> str:
    """Fill each line with as many units as fit, left to right."""
    lines: list[str] = []
    current_line = leading_indent
    is_first_unit = True

    for unit in units:
        if is_first_unit:
            current_line += unit
            is_first_unit = False
        elif len(current_line) + 1 + len(unit) <= max_width:
            current_line += " " + unit
        else:
            lines.append(current_line)
            current_line = continuation_indent + unit

    lines.append(current_line)
    return "\n".join(lines)


def minimum_raggedness_wrap(units: Sequence[WrapUnit], max_width: int,
                            leading_indent: str, continuation_indent: str) -> str:
    """Choose breaks minimizing the sum of squared slack over all lines.

    ``min_costs[i]`` is the cheapest way to lay out ``units[i:]`` with a line
    starting at ``i``. On equal cost the shortest first line wins, which keeps
    the output reproducible.
    """
    unit_count = len(units)
    if unit_count == 0:
        return ""

    min_costs = [float("inf")] * (unit_count + 1)
    split_indices = [unit_count] * (unit_count + 1)
    min_costs[unit_count] = 0

    for start in reversed(range(unit_count)):
        indent = leading_indent if start == 0 else continuation_indent
        # Running length of the line plus one trailing space.
        line_length = len(indent)
        for end in range(start, unit_count):
            line_length += len(units[end]) + 1
            if line_length - 1 > max_width and end > start:
                break
            slack = max_width - (line_length - 1)
            cost = min_costs[end + 1] + slack * slack
            if cost < min_costs[start]:
                min_costs[start] = cost
                split_indices[start] = end + 1

    lines: list[str] = []
    start = 0
    while start < unit_count:
        end = split_indices[start]
        indent = leading_indent if start == 0 else continuation_indent
        lines.append(indent + " ".join(units[start:end]))
        start = end
    return "\n".join(lines)


_WRAPPERS: dict[WrappingStyle, Wrapper] = {
    WrappingStyle.GREEDY: greedy_wrap,
    WrappingStyle.MINIMUM_RAGGED: minimum_raggedness_wrap,
}


def wrap(style: WrappingStyle, units: Sequence[WrapUnit], max_width: int,
         leading_indent: str, continuation_indent: str) -> str:
    """Wrap ``units`` with the strategy selected by ``style``."""
    return _WRAPPERS[WrappingStyle(style)](
        units, max_width, leading_indent, continuation_indent)


def raggedness(wrapped: str, max_width: int) -> int:
    """Sum of squared slack over the lines of an already wrapped string."""
    return sum((max_width - len(line)) ** 2 for line in wrapped.split("\n"))
