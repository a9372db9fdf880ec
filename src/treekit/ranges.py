"""Range value types used to binarize continuous features.

Ranges only answer one question: does a scalar value fall inside them? They
are frozen pydantic models, so two ranges with the same bounds and
inclusivity flags are equal and hash alike, which lets them serve as branch
keys.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from treekit.exceptions import InvalidArgumentError


class Range(BaseModel, ABC):
    """A set of values described by one or two bounds."""

    model_config = ConfigDict(frozen=True)

    @abstractmethod
    def contains(self, value: Any) -> bool:
        """Return whether `value` lies inside this range."""


class SemiRange(Range):
    """A semi-infinite range with a single lower or upper bound.

    Attributes:
        bound (Any): The bound value.
        is_lower (bool): `True` for a lower bound (values above `bound`),
            `False` for an upper bound (values below `bound`).
        inclusive (bool): Whether `bound` itself belongs to the range.

    Examples:
        >>> at_most_36 = SemiRange(bound=36, is_lower=False, inclusive=True)
        >>> at_most_36.contains(36), at_most_36.contains(37)
        (True, False)
        >>> str(at_most_36)
        '<= 36'
    """

    bound: Any = Field(description="The single bound of the range.")
    is_lower: bool = Field(description="True if the bound is a lower bound, False if it is an upper bound.")
    inclusive: bool = Field(description="Whether the bound itself belongs to the range.")

    def contains(self, value: Any) -> bool:
        if value == self.bound:
            return self.inclusive
        if self.is_lower:
            return self.bound < value
        return value < self.bound

    @property
    def operator(self) -> str:
        """Comparison operator equivalent to membership, e.g. `"<="`."""
        symbol = ">" if self.is_lower else "<"
        return f"{symbol}=" if self.inclusive else symbol

    def __str__(self) -> str:
        return f"{self.operator} {self.bound}"


class FiniteRange(Range):
    """A range bounded on both sides.

    Attributes:
        low (Any): Lower bound.
        high (Any): Upper bound, not less than `low`.
        low_inclusive (bool): Whether `low` belongs to the range.
        high_inclusive (bool): Whether `high` belongs to the range.

    Examples:
        >>> FiniteRange(low=0, high=10, low_inclusive=True, high_inclusive=False).contains(10)
        False
    """

    low: Any
    high: Any
    low_inclusive: bool = True
    high_inclusive: bool = True

    def __init__(self, **data: Any) -> None:
        """Validate field types, then that the bounds are ordered.

        Args:
            **data (Any): Field values.

        Raises:
            InvalidArgumentError: If `low > high`.
        """
        super().__init__(**data)
        if self.high < self.low:
            raise InvalidArgumentError(
                f"low must not exceed high, got low={self.low!r} and high={self.high!r}",
                argument="low",
            )

    def contains(self, value: Any) -> bool:
        if self.low < value < self.high:
            return True
        return (self.low_inclusive and value == self.low) or (self.high_inclusive and value == self.high)

    def __str__(self) -> str:
        opening = "[" if self.low_inclusive else "("
        closing = "]" if self.high_inclusive else ")"
        return f"{opening}{self.low}, {self.high}{closing}"


class MedianSplit(BaseModel):
    """The complementary pair of semi-ranges that binarizes a column at its median.

    `low` holds every value up to and including the median, `high` every value
    above it. Exactly one of them contains any given value.

    Attributes:
        median (Any): The split point.

    Examples:
        >>> split = MedianSplit(median=36)
        >>> split.locate(36) == split.low, split.locate(51) == split.high
        (True, True)
    """

    model_config = ConfigDict(frozen=True)

    median: Any = Field(description="The split point of the column.")

    @property
    def low(self) -> SemiRange:
        """Values at or below the median."""
        return SemiRange(bound=self.median, is_lower=False, inclusive=True)

    @property
    def high(self) -> SemiRange:
        """Values strictly above the median."""
        return SemiRange(bound=self.median, is_lower=True, inclusive=False)

    @property
    def ranges(self) -> tuple[SemiRange, SemiRange]:
        """The `(low, high)` pair."""
        return self.low, self.high

    def locate(self, value: Any) -> SemiRange:
        """Return the semi-range of this pair that contains `value`.

        Args:
            value (Any): A value comparable with the median.

        Returns:
            SemiRange: `low` if `value <= median`, otherwise `high`.
        """
        low = self.low
        return low if low.contains(value) else self.high
