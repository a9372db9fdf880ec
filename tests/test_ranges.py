"""Tests for the range family and branch keys."""

from __future__ import annotations

import pytest
from pytest_check import check

from treekit import DiscreteKey, FiniteRange, InvalidArgumentError, MedianSplit, RangeKey, SemiRange


class TestSemiRange:
    """Tests for `SemiRange.contains` and its value semantics."""

    @pytest.mark.parametrize(
        ("is_lower", "inclusive", "value", "expected"),
        [
            (False, True, 36, True),
            (False, True, 35, True),
            (False, True, 37, False),
            (False, False, 36, False),
            (True, False, 36, False),
            (True, False, 37, True),
            (True, False, 35, False),
            (True, True, 36, True),
        ],
    )
    def test_contains(self, is_lower: bool, inclusive: bool, value: int, expected: bool) -> None:
        """Membership should follow the bound direction, with the bound governed by `inclusive`."""
        semi_range = SemiRange(bound=36, is_lower=is_lower, inclusive=inclusive)

        assert semi_range.contains(value) is expected

    def test_value_equality_and_hash(self) -> None:
        """Semi-ranges with equal bound and flags should be equal and hash alike."""
        first = SemiRange(bound=50_000, is_lower=True, inclusive=False)
        second = SemiRange(bound=50_000, is_lower=True, inclusive=False)
        other = SemiRange(bound=50_000, is_lower=True, inclusive=True)

        with check:
            assert first == second
        with check:
            assert hash(first) == hash(second)
        with check:
            assert first != other

    def test_operator_and_str(self) -> None:
        """The operator should mirror membership, e.g. '<=' for an inclusive upper bound."""
        with check:
            assert str(SemiRange(bound=36, is_lower=False, inclusive=True)) == "<= 36"
        with check:
            assert str(SemiRange(bound=36, is_lower=True, inclusive=False)) == "> 36"
        with check:
            assert SemiRange(bound=36, is_lower=False, inclusive=False).operator == "<"
        with check:
            assert SemiRange(bound=36, is_lower=True, inclusive=True).operator == ">="

    def test_works_with_strings(self) -> None:
        """Any ordered type should be usable as a bound."""
        semi_range = SemiRange(bound="m", is_lower=False, inclusive=True)

        with check:
            assert semi_range.contains("a")
        with check:
            assert not semi_range.contains("z")


class TestFiniteRange:
    """Tests for `FiniteRange`."""

    def test_contains_interior_and_bounds(self) -> None:
        """Interior values are always contained; bounds only when inclusive."""
        half_open = FiniteRange(low=0, high=10, low_inclusive=True, high_inclusive=False)

        with check:
            assert half_open.contains(5)
        with check:
            assert half_open.contains(0)
        with check:
            assert not half_open.contains(10)
        with check:
            assert not half_open.contains(-1)
        with check:
            assert not half_open.contains(11)

    def test_degenerate_range(self) -> None:
        """A closed range with equal bounds contains exactly that value."""
        point = FiniteRange(low=3, high=3)

        with check:
            assert point.contains(3)
        with check:
            assert not point.contains(4)

    def test_rejects_inverted_bounds(self) -> None:
        """low greater than high should raise InvalidArgumentError."""
        with pytest.raises(InvalidArgumentError, match="low must not exceed high"):
            FiniteRange(low=10, high=0)

    def test_str(self) -> None:
        """Interval notation should reflect inclusivity."""
        assert str(FiniteRange(low=0, high=10, low_inclusive=False, high_inclusive=True)) == "(0, 10]"


class TestMedianSplit:
    """Tests for `MedianSplit`, the complementary semi-range pair."""

    def test_low_holds_median_high_does_not(self) -> None:
        """Exactly one of the pair should contain the median itself."""
        split = MedianSplit(median=36)

        with check:
            assert split.low.contains(36)
        with check:
            assert not split.high.contains(36)

    @pytest.mark.parametrize("value", [-1_000, 0, 35, 36, 36.5, 37, 10_000])
    def test_partitions_value_space(self, value: float) -> None:
        """Every value should be in exactly one of the two ranges."""
        split = MedianSplit(median=36)

        memberships = [interval.contains(value) for interval in split.ranges]

        assert memberships.count(True) == 1

    def test_locate(self) -> None:
        """locate() should return the range that contains the value."""
        split = MedianSplit(median=36)

        with check:
            assert split.locate(20) == split.low
        with check:
            assert split.locate(36) == split.low
        with check:
            assert split.locate(40) == split.high


class TestBranchKeys:
    """Tests for `DiscreteKey` and `RangeKey`."""

    def test_discrete_key_value_equality(self) -> None:
        """Discrete keys should compare and hash by value, so they work as dict keys."""
        children = {DiscreteKey(value="male"): "left"}

        with check:
            assert children[DiscreteKey(value="male")] == "left"
        with check:
            assert DiscreteKey(value="male") != DiscreteKey(value="female")

    def test_range_key_value_equality(self) -> None:
        """Range keys built from equal ranges should be equal."""
        first = RangeKey(interval=MedianSplit(median=5).low)
        second = RangeKey(interval=SemiRange(bound=5, is_lower=False, inclusive=True))

        with check:
            assert first == second
        with check:
            assert hash(first) == hash(second)

    def test_discrete_and_range_keys_never_equal(self) -> None:
        """Keys of different variants should not compare equal."""
        assert DiscreteKey(value=5) != RangeKey(interval=MedianSplit(median=5).low)

    def test_matches(self) -> None:
        """matches() should apply equality for discrete keys and containment for range keys."""
        with check:
            assert DiscreteKey(value="female").matches("female")
        with check:
            assert not DiscreteKey(value="female").matches("male")
        with check:
            assert RangeKey(interval=MedianSplit(median=5).high).matches(6)
        with check:
            assert not RangeKey(interval=MedianSplit(median=5).high).matches(5)
