"""Branch keys: the labels on the edges between a node and its children."""

from __future__ import annotations

from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from treekit.ranges import FiniteRange, SemiRange


class DiscreteKey(BaseModel):
    """Branch taken when a discrete feature equals `value`.

    Examples:
        >>> DiscreteKey(value="male").matches("male")
        True
    """

    model_config = ConfigDict(frozen=True)

    key_type: Literal["discrete"] = "discrete"
    value: Any = Field(description="The discrete feature value this branch is taken for.")

    def matches(self, value: Any) -> bool:
        """Return whether a feature value follows this branch."""
        return value == self.value

    def __str__(self) -> str:
        return f"== {self.value}"


class RangeKey(BaseModel):
    """Branch taken when a continuous feature falls inside `interval`.

    Examples:
        >>> RangeKey(interval=SemiRange(bound=36, is_lower=True, inclusive=False)).matches(40)
        True
    """

    model_config = ConfigDict(frozen=True)

    key_type: Literal["range"] = "range"
    interval: SemiRange | FiniteRange = Field(description="The range of values this branch is taken for.")

    def matches(self, value: Any) -> bool:
        """Return whether a feature value follows this branch."""
        return self.interval.contains(value)

    def __str__(self) -> str:
        return str(self.interval)


# Pydantic selects the concrete key model from `key_type` when validating.
type BranchKey = Annotated[DiscreteKey | RangeKey, Field(discriminator="key_type")]
