"""The public decision tree classifier: training and inference."""

from __future__ import annotations

from collections.abc import Collection, Iterable
from typing import Any

from loguru import logger
from sklearn.metrics import accuracy_score

from treekit.config import DEFAULT_CONFIG, TreeConfig
from treekit.exceptions import InvalidArgumentError
from treekit.features import Record
from treekit.node import Node
from treekit.rules import LeafRule, extract_rules
from treekit.table import Table


class DecisionTree:
    """A decision tree classifier trained by top-down greedy partitioning.

    Training happens entirely in the constructor: the records become the
    root table, and the root node splits recursively on the feature with the
    highest information gain until nodes are label-pure, too small, or
    cannot be partitioned further. No pruning is applied.

    A trained tree is never mutated, so `predict` may be called concurrently.

    Examples:
        >>> tree = DecisionTree(records, min_node_capacity=1)  # doctest: +SKIP
        >>> tree.predict(query)  # doctest: +SKIP
        'good'
    """

    def __init__(
        self,
        records: Collection[Record],
        min_node_capacity: int,
        *,
        config: TreeConfig | None = None,
    ) -> None:
        """Train a decision tree.

        Args:
            records (Collection[Record]): Training rows; all must carry a
                target and share the same feature titles and kinds.
            min_node_capacity (int): Minimum rows a node needs to be split, and
                minimum rows a partition needs to become a child node.
            config (TreeConfig | None): Training configuration. Defaults to
                `TreeConfig()`.

        Raises:
            InvalidArgumentError: If `records` is empty, `min_node_capacity`
                is negative or exceeds `len(records)`, or a record has no target.
        """
        if not records:
            msg = "records must contain at least 1 element"
            logger.warning("Decision tree training rejected", reason=msg)
            raise InvalidArgumentError(msg, argument="records")
        if min_node_capacity < 0:
            msg = f"min_node_capacity must be >= 0, got {min_node_capacity}"
            logger.warning("Decision tree training rejected", reason=msg)
            raise InvalidArgumentError(msg, argument="min_node_capacity")
        if len(records) < min_node_capacity:
            msg = f"records must hold at least min_node_capacity={min_node_capacity} elements, got {len(records)}"
            logger.warning("Decision tree training rejected", reason=msg)
            raise InvalidArgumentError(msg, argument="min_node_capacity")

        self._config = config if config is not None else DEFAULT_CONFIG
        self._min_node_capacity = min_node_capacity

        root = Node(Table(records, config=self._config))
        root.split(min_node_capacity)
        self._root = root

        logger.info(
            "Decision tree trained",
            rows=len(records),
            min_node_capacity=min_node_capacity,
            depth=root.depth,
            leaf_count=root.leaf_count,
            root_feature=root.feature,
        )

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(rows={len(self._root.table)}, "
            f"min_node_capacity={self._min_node_capacity}, depth={self.depth}, leaf_count={self.leaf_count})"
        )

    @property
    def root(self) -> Node:
        """The root node."""
        return self._root

    @property
    def config(self) -> TreeConfig:
        """The configuration the tree was trained with."""
        return self._config

    @property
    def min_node_capacity(self) -> int:
        """The minimum node capacity the tree was trained with."""
        return self._min_node_capacity

    @property
    def depth(self) -> int:
        """Number of edges on the longest root-to-leaf path."""
        return self._root.depth

    @property
    def leaf_count(self) -> int:
        """Number of leaves."""
        return self._root.leaf_count

    @property
    def node_count(self) -> int:
        """Number of nodes, leaves included."""
        return self._root.node_count

    def predict(self, record: Record) -> Any:
        """Predict the target of a query row.

        Descends from the root, following at each node the branch that the
        record's value of the node's split feature selects. Stops at a leaf or
        at the first node with no branch for the observed value, e.g. a
        discrete value never seen in training, and returns that node's
        majority target.

        Args:
            record (Record): The query row. Its target, if any, is ignored.

        Returns:
            Any: The predicted target, one of the training targets.

        Raises:
            MissingFeatureError: If the record lacks a feature the tree
                branches on along its path.
        """
        node = self._root
        while node.feature is not None:
            next_node = node.branch(record.value(node.feature))
            if next_node is None:
                break
            node = next_node
        return node.dominant_target()

    def predict_many(self, records: Iterable[Record]) -> list[Any]:
        """Predict the target of every record, in order."""
        return [self.predict(record) for record in records]

    def score(self, records: Collection[Record]) -> float:
        """Return the classification accuracy on labeled rows.

        Args:
            records (Collection[Record]): Labeled evaluation rows.

        Returns:
            float: Fraction of rows whose prediction equals their target.

        Raises:
            InvalidArgumentError: If `records` is empty or a record has no target.
        """
        if not records:
            raise InvalidArgumentError("records must contain at least 1 element", argument="records")
        if any(not record.is_labeled for record in records):
            raise InvalidArgumentError("All records must have a non-null target to be scored", argument="records")
        targets = [record.target for record in records]
        predictions = self.predict_many(records)
        accuracy = float(accuracy_score(targets, predictions))
        logger.debug("Decision tree scored", rows=len(targets), accuracy=accuracy)
        return accuracy

    def rules(self) -> list[LeafRule]:
        """Extract one human-readable rule per leaf."""
        return extract_rules(self._root)
