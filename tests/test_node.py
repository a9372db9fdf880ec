"""Tests for `Node`: recursive splitting, branching and introspection."""

from __future__ import annotations

import pytest
from conftest import make_discrete_record
from pytest_check import check

from treekit import DiscreteKey, Node, Record, Table


def _shape(node: Node) -> list[tuple[str | None, int, int]]:
    """Pre-order (feature, rows, children) triples describing a subtree."""
    return [(n.feature, len(n.table), len(n.children)) for n in node.walk()]


class TestNodeSplit:
    """Tests for `Node.split`."""

    def test_new_node_is_leaf(self, credit_records: list[Record]) -> None:
        """An untrained node should be a leaf with no split feature."""
        node = Node(Table(credit_records))

        with check:
            assert node.is_leaf
        with check:
            assert node.feature is None

    def test_root_splits_on_optimal_feature(self, credit_records: list[Record]) -> None:
        """The root should split on the table's optimal feature into its two median ranges."""
        node = Node(Table(credit_records))

        node.split(1)

        with check:
            assert node.feature == "salary"
        with check:
            assert len(node.children) == 2
        with check:
            assert not node.is_leaf

    @pytest.mark.parametrize("min_capacity", range(11))
    def test_never_produces_exactly_one_child(self, credit_records: list[Record], min_capacity: int) -> None:
        """Every node of a trained subtree should have either zero or at least two children."""
        node = Node(Table(credit_records))

        node.split(min_capacity)

        assert all(len(n.children) != 1 for n in node.walk())

    def test_split_twice_is_a_no_op(self, credit_records: list[Record]) -> None:
        """A second split call should leave the tree shape unchanged."""
        node = Node(Table(credit_records))
        node.split(1)
        shape_before = _shape(node)
        children_before = dict(node.children)

        node.split(1)

        with check:
            assert _shape(node) == shape_before
        with check:
            assert all(node.children[key] is child for key, child in children_before.items())

    def test_label_pure_node_stays_leaf(self) -> None:
        """A node whose rows all share a target should not split, even at capacity 0."""
        records = [make_discrete_record(target="yes", colour=colour) for colour in ["red", "blue", "green"]]
        node = Node(Table(records))

        node.split(0)

        assert node.is_leaf

    def test_node_below_min_capacity_stays_leaf(self, credit_records: list[Record]) -> None:
        """A node with fewer rows than min_capacity should not split."""
        node = Node(Table(credit_records[:4]))

        node.split(5)

        assert node.is_leaf

    def test_single_partition_split_is_rejected(self) -> None:
        """A split yielding one partition carries no information, so the node stays a leaf."""
        records = [make_discrete_record(target=target, colour="red") for target in ["a", "b", "a"]]
        node = Node(Table(records))

        node.split(0)

        with check:
            assert node.is_leaf
        with check:
            assert node.feature is None

    def test_partitions_below_capacity_can_reject_split(self, credit_records: list[Record]) -> None:
        """At capacity 6 both five-row salary halves are dropped, leaving the root a leaf."""
        node = Node(Table(credit_records))

        node.split(6)

        assert node.is_leaf

    def test_leaves_hold_every_row_when_nothing_is_dropped(self, credit_records: list[Record]) -> None:
        """With capacity 1 no partition is dropped, so leaves partition all training rows."""
        node = Node(Table(credit_records))

        node.split(1)

        leaf_rows = sum(len(n.table) for n in node.walk() if n.is_leaf)
        assert leaf_rows == len(credit_records)


class TestNodeBranch:
    """Tests for `Node.branch` and `Node.dominant_target`."""

    def test_discrete_branch(self) -> None:
        """A seen discrete value should lead to its child; an unseen one to None."""
        records = [
            make_discrete_record(target=target, colour=colour)
            for colour, target in [("red", "a"), ("red", "a"), ("blue", "b")]
        ]
        node = Node(Table(records))
        node.split(1)

        with check:
            assert node.branch("red") is node.children[DiscreteKey(value="red")]
        with check:
            assert node.branch("green") is None

    def test_continuous_branch_follows_containing_range(self, credit_records: list[Record]) -> None:
        """Continuous values should follow the range containing them, at and around the median."""
        node = Node(Table(credit_records))
        node.split(1)
        low_child, high_child = (node.children[key] for key in node.table.feature_values("salary"))

        with check:
            assert node.branch(10) is low_child
        with check:
            assert node.branch(50_000) is low_child
        with check:
            assert node.branch(50_001) is high_child

    def test_leaf_branch_returns_none(self, credit_records: list[Record]) -> None:
        """Leaves have no children, so branching should return None."""
        assert Node(Table(credit_records)).branch(30) is None

    def test_dominant_target_delegates_to_table(self) -> None:
        """The node's dominant target should be its table's."""
        records = [make_discrete_record(target=target, colour="red") for target in ["a", "b", "b"]]

        assert Node(Table(records)).dominant_target() == "b"


class TestNodeIntrospection:
    """Tests for depth, leaf and node counts."""

    def test_counts_for_single_leaf(self, credit_records: list[Record]) -> None:
        """An unsplit node should have depth 0 and count as one leaf."""
        node = Node(Table(credit_records))

        with check:
            assert node.depth == 0
        with check:
            assert node.leaf_count == 1
        with check:
            assert node.node_count == 1

    def test_counts_are_consistent(self, credit_records: list[Record]) -> None:
        """Node count should equal leaves plus internal nodes, and depth should be positive."""
        node = Node(Table(credit_records))
        node.split(1)

        internal = sum(1 for n in node.walk() if not n.is_leaf)
        with check:
            assert node.node_count == node.leaf_count + internal
        with check:
            assert node.depth >= 1
        with check:
            assert node.leaf_count >= 2
