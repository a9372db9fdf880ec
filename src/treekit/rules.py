"""Pydantic rule models and root-to-leaf rule extraction for trained trees."""

from __future__ import annotations

import operator
from collections.abc import Callable
from typing import Any, Literal

from pydantic import BaseModel, Field

from treekit.keys import BranchKey, DiscreteKey
from treekit.node import Node
from treekit.ranges import SemiRange

# ---------------------------------------------------------------------------
# Public type aliases
# ---------------------------------------------------------------------------

type PredicateOp = Literal[">", ">=", "==", "<", "<="]

# ---------------------------------------------------------------------------
# Public models
# ---------------------------------------------------------------------------


class Predicate(BaseModel):
    """A single boolean condition on one feature.

    Represents one edge of a root-to-leaf path, such as `age <= 36` or
    `sex == female`.

    Attributes:
        variable (str): Feature title the condition applies to.
        operator (PredicateOp): Comparison operator.
        value (Any): Threshold or discrete value compared against.

    Examples:
        >>> p = Predicate(variable="age", operator="<=", value=36)
        >>> str(p)
        'age <= 36'
        >>> p.eval(30)
        True
    """

    variable: str = Field(description="Feature title the condition applies to, e.g. 'age'.")
    operator: PredicateOp = Field(description="Comparison operator.")
    value: Any = Field(description="Threshold for continuous features or the branch value for discrete ones.")

    def __str__(self) -> str:
        return f"{self.variable} {self.operator} {self.value}"

    def eval(self, x: Any) -> bool:
        """Evaluate this predicate against a feature value.

        Args:
            x (Any): The feature value to test.

        Returns:
            bool: `True` if the predicate holds for `x`.
        """
        return _SCALAR_OPS[self.operator](x, self.value)

    @classmethod
    def from_branch(cls, variable: str, key: BranchKey) -> Predicate:
        """Express the branch `key` of feature `variable` as a predicate.

        Args:
            variable (str): Feature title the branch splits on.
            key (BranchKey): A discrete key or a semi-range key.

        Returns:
            Predicate: `==` for discrete keys, the semi-range's comparison
                operator and bound for range keys.

        Raises:
            TypeError: If the key holds a range that is not a semi-range.
        """
        if isinstance(key, DiscreteKey):
            return cls(variable=variable, operator="==", value=key.value)
        interval = key.interval
        if not isinstance(interval, SemiRange):
            raise TypeError(f"Cannot express {type(interval).__name__} as a single predicate")
        return cls(variable=variable, operator=interval.operator, value=interval.bound)


class LeafRule(BaseModel):
    """A decision rule extracted from one leaf of a trained tree.

    Attributes:
        predicates (list[Predicate]): Conditions along the path from the root
            to the leaf. An empty list means the tree is a single leaf.
        prediction (Any): Majority target at the leaf.
        samples (int): Number of training rows that reached the leaf.
        confidence (float): Fraction of those rows whose target equals the
            prediction.

    Examples:
        >>> rule = LeafRule(
        ...     predicates=[Predicate(variable="sex", operator="==", value="male")],
        ...     prediction="bad",
        ...     samples=6,
        ...     confidence=0.6667,
        ... )
        >>> str(rule)
        'IF sex == male THEN bad (samples=6, confidence=0.6667)'
    """

    predicates: list[Predicate] = Field(
        description="Predicates along the path from root to this leaf; empty for a single-leaf tree.",
    )
    prediction: Any = Field(description="Majority target among the training rows at this leaf.")
    samples: int = Field(ge=1, description="Number of training rows that reached this leaf.")
    confidence: float = Field(ge=0.0, le=1.0, description="Fraction of rows at this leaf matching the prediction.")

    def __str__(self) -> str:
        conditions = " AND ".join(str(predicate) for predicate in self.predicates) or "TRUE"
        return f"IF {conditions} THEN {self.prediction} (samples={self.samples}, confidence={self.confidence})"

    def matches(self, values: dict[str, Any]) -> bool:
        """Return whether every predicate holds for the given feature values."""
        return all(predicate.eval(values[predicate.variable]) for predicate in self.predicates)


# ---------------------------------------------------------------------------
# Public interface -- Rule extraction
# ---------------------------------------------------------------------------


def extract_rules(root: Node) -> list[LeafRule]:
    """Extract one rule per leaf, in depth-first order.

    Args:
        root (Node): Root of a trained tree.

    Returns:
        list[LeafRule]: One rule per leaf node.
    """
    rules: list[LeafRule] = []
    _walk_tree(root, path_predicates=[], rules=rules)
    return rules


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------

_SCALAR_OPS: dict[str, Callable[[Any, Any], bool]] = {
    ">": operator.gt,
    ">=": operator.ge,
    "<": operator.lt,
    "<=": operator.le,
    "==": operator.eq,
}


def _walk_tree(node: Node, *, path_predicates: list[Predicate], rules: list[LeafRule]) -> None:
    """Recursively walk `node` and append a rule for every leaf below it."""
    if node.is_leaf or node.feature is None:
        rules.append(_build_leaf_rule(node, path_predicates))
        return
    for key, child in node.children.items():
        predicate = Predicate.from_branch(node.feature, key)
        _walk_tree(child, path_predicates=[*path_predicates, predicate], rules=rules)


def _build_leaf_rule(node: Node, path_predicates: list[Predicate]) -> LeafRule:
    """Summarize a leaf's rows as a rule."""
    counts = node.table.target_counts()
    prediction = node.dominant_target()
    samples = len(node.table)
    return LeafRule(
        predicates=path_predicates,
        prediction=prediction,
        samples=samples,
        confidence=round(counts[prediction] / samples, 4),
    )
