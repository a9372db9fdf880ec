"""Tree nodes and the recursive top-down training algorithm."""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Any

from loguru import logger

from treekit.keys import BranchKey, DiscreteKey
from treekit.logging import SPLIT_LEVEL
from treekit.table import Table


class Node:
    """One vertex of a decision tree.

    A node owns a table of rows. After training it is either a leaf, or it
    records the title it split on and one child per surviving partition.
    Nodes are mutated only while `split` runs.

    Attributes:
        table (Table): The rows that reached this node during training.
        feature (str | None): Title the node split on; `None` for leaves.
    """

    def __init__(self, table: Table) -> None:
        """Create an untrained leaf holding `table`.

        Args:
            table (Table): Rows that reached this node.
        """
        self.table = table
        self.feature: str | None = None
        self._children: dict[BranchKey, Node] = {}

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(rows={len(self.table)}, feature={self.feature!r}, children={len(self._children)})"

    @property
    def is_leaf(self) -> bool:
        """Whether this node has no children."""
        return not self._children

    @property
    def children(self) -> Mapping[BranchKey, Node]:
        """Read-only view of the children keyed by branch."""
        return MappingProxyType(self._children)

    # -- training ------------------------------------------------------------

    def split(self, min_capacity: int) -> None:
        """Grow the subtree rooted at this node.

        Picks the table's optimal feature, partitions on it, and recurses into
        every partition. The node stays a leaf when it was already split, holds
        fewer than `min_capacity` rows, is label-pure, or when fewer than two
        partitions survive, since a single partition carries no information.

        Args:
            min_capacity (int): Minimum rows a node must hold to be split, and
                minimum rows a partition must hold to become a child.
        """
        if not self.is_leaf:
            return
        row_count = len(self.table)
        if row_count < min_capacity:
            logger.debug("Node kept as leaf: below minimum capacity", rows=row_count, min_capacity=min_capacity)
            return
        if self.table.entropy() == 0.0:
            logger.debug("Node kept as leaf: label-pure", rows=row_count)
            return

        feature = self.table.optimal_feature()
        partitions = self.table.split(feature, min_capacity)
        if len(partitions) < 2:
            logger.debug(
                "Node kept as leaf: split yields fewer than 2 partitions",
                rows=row_count,
                feature=feature,
                partitions=len(partitions),
            )
            return

        self.feature = feature
        self._children = {key: Node(child_table) for key, child_table in partitions.items()}
        logger.log(
            SPLIT_LEVEL,
            "Node split",
            feature=feature,
            rows=row_count,
            branches={str(key): len(child_table) for key, child_table in partitions.items()},
        )

        for child in self._children.values():
            child.split(min_capacity)

    # -- inference -----------------------------------------------------------

    def branch(self, value: Any) -> Node | None:
        """Return the child a feature value leads to.

        Args:
            value (Any): Value of this node's split feature in the query row.

        Returns:
            Node | None: The matching child, or `None` for a leaf or a value
                no branch accepts, e.g. a discrete value unseen in training.
        """
        if self.feature is None:
            return None
        if self.table.kind(self.feature) == "discrete":
            return self._children.get(DiscreteKey(value=value))
        for key, child in self._children.items():
            if key.matches(value):
                return child
        return None

    def dominant_target(self) -> Any:
        """Return the most frequent target among this node's rows."""
        return self.table.dominant_target()

    # -- introspection -------------------------------------------------------

    def walk(self) -> Iterator[Node]:
        """Yield this node and its descendants in depth-first pre-order."""
        yield self
        for child in self._children.values():
            yield from child.walk()

    @property
    def depth(self) -> int:
        """Number of edges on the longest path from this node to a leaf."""
        if self.is_leaf:
            return 0
        return 1 + max(child.depth for child in self._children.values())

    @property
    def leaf_count(self) -> int:
        """Number of leaves in the subtree rooted here."""
        return sum(1 for node in self.walk() if node.is_leaf)

    @property
    def node_count(self) -> int:
        """Number of nodes in the subtree rooted here."""
        return sum(1 for _ in self.walk())
