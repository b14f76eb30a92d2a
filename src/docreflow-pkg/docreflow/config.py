"""Configuration for the docreflow engine."""

from enum import Enum

from pydantic import BaseModel, Field


class WrappingStyle(str, Enum):
    """Line-breaking algorithm used for paragraphs.

    GREEDY fills each line with as many units as fit. Output is predictable
    but line lengths can be uneven.

    MINIMUM_RAGGED picks the breaks that minimize the sum of squared slack
    over all lines, which usually reads better at the cost of predictability.
    """
    GREEDY = "greedy"
    MINIMUM_RAGGED = "minimum_ragged"

    @classmethod
    def _missing_(cls, value: object) -> "WrappingStyle | None":
        if not isinstance(value, str):
            return None
        name = value.strip().strip("'\"").lower()
        if name == "equal":
            return cls.MINIMUM_RAGGED
        for member in cls:
            if member.value == name:
                return member
        return None


class ReflowConfig(BaseModel, frozen=True):
    """Caller-supplied settings for one reflow.

    Instances are immutable, so one config can be shared across threads.
    """
    max_line_width: int = Field(
        default=100,
        description="Total line budget. A negative value disables reflow.")
    wrapping_style: WrappingStyle = Field(
        default=WrappingStyle.MINIMUM_RAGGED,
        description="Which line-breaking strategy to use")
    before_any_tags: bool = Field(
        default=True,
        description="The text is the untagged section that opens a doc comment")
    extra_leading_space: bool = Field(
        default=False,
        description="Every line carries one decoration space after the comment marker")

    @property
    def enabled(self) -> bool:
        return self.max_line_width >= 0
