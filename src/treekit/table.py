"""Immutable row tables: entropy, information gain, median selection and partitioning."""

from __future__ import annotations

import heapq
from collections import Counter
from collections.abc import Iterable, Mapping, Sequence
from types import MappingProxyType
from typing import Any

import numpy as np
from loguru import logger

from treekit.config import DEFAULT_CONFIG, TreeConfig
from treekit.exceptions import EmptyResultError, InvalidArgumentError, MissingFeatureError
from treekit.features import FeatureKind, Record
from treekit.keys import BranchKey, DiscreteKey, RangeKey
from treekit.ranges import MedianSplit

# ---------------------------------------------------------------------------
# Module-level constants
# ---------------------------------------------------------------------------

_GAIN_DECIMAL_PLACES: int = 12  # Gains equal to this precision are ties; absorbs float noise around 0.


# ---------------------------------------------------------------------------
# Public interface -- Statistics
# ---------------------------------------------------------------------------


def select_median(values: Sequence[Any], rng: np.random.Generator | None = None) -> Any:
    """Select the median of `values` in average-case linear time.

    Shuffles a copy of the values, then streams them through a min-heap that
    keeps the `(n + 2) // 2` largest values seen so far. The heap head is the
    median: the middle value for odd `n` and the lower middle value for even
    `n`. Shuffling first keeps sorted or adversarial input from degrading the
    number of heap replacements.

    Args:
        values (Sequence[Any]): Mutually comparable values.
        rng (np.random.Generator | None): Generator for the shuffle. A fresh
            unseeded generator is used when `None`.

    Returns:
        Any: The selected median, one of `values`.

    Raises:
        EmptyResultError: If `values` is empty.

    Examples:
        >>> select_median([51, 25, 42, 36, 21])
        36
        >>> select_median([4, 1, 3, 2])
        2
    """
    if not values:
        raise EmptyResultError("median")
    generator = rng if rng is not None else np.random.default_rng()
    shuffled = [values[index] for index in generator.permutation(len(values))]
    keep = (len(shuffled) + 2) // 2
    heap = shuffled[:keep]
    heapq.heapify(heap)
    for value in shuffled[keep:]:
        if heap[0] < value:
            heapq.heapreplace(heap, value)
    return heap[0]


def target_entropy(records: Iterable[Record]) -> float:
    """Shannon entropy (base 2) of the target distribution of `records`.

    Each target value's probability is its count divided by the number of
    rows, giving `-sum(p * log2(p))`.

    Args:
        records (Iterable[Record]): Labeled rows.

    Returns:
        float: Entropy in bits; 0.0 for a label-pure subset.

    Raises:
        EmptyResultError: If `records` is empty.
    """
    counts = Counter(record.target for record in records)
    total = counts.total()
    if total == 0:
        raise EmptyResultError("entropy")
    probabilities = np.fromiter(counts.values(), dtype=float, count=len(counts)) / total
    return abs(float(np.sum(probabilities * np.log2(probabilities))))


# ---------------------------------------------------------------------------
# Public interface -- Table
# ---------------------------------------------------------------------------


class Table:
    """An immutable set of labeled records that knows how to split itself.

    On construction every continuous column is binarized at the median of
    this table's rows. Medians are local: each child table produced by
    `split` computes its own.

    The first record serves as the schema template. All records must share
    its feature titles and kinds; this precondition is not validated, and
    violating it leads to `MissingFeatureError` or comparison errors later.

    Examples:
        >>> table = Table(records)  # doctest: +SKIP
        >>> table.optimal_feature()  # doctest: +SKIP
        'sex'
        >>> children = table.split("sex", min_capacity=1)  # doctest: +SKIP
    """

    def __init__(self, records: Iterable[Record], *, config: TreeConfig | None = None) -> None:
        """Create a table and compute the median split of each continuous column.

        Args:
            records (Iterable[Record]): Labeled rows; at least one.
            config (TreeConfig | None): Training configuration. Defaults to
                `TreeConfig()`.

        Raises:
            InvalidArgumentError: If `records` is empty or any record has no target.
        """
        rows = tuple(records)
        if not rows:
            raise InvalidArgumentError("records must contain at least 1 element", argument="records")
        unlabeled_count = sum(1 for row in rows if not row.is_labeled)
        if unlabeled_count:
            raise InvalidArgumentError(
                f"All records must have a non-null target, found {unlabeled_count} without one",
                argument="records",
            )

        self._config = config if config is not None else DEFAULT_CONFIG
        self._records = rows
        template = rows[0]
        self._kinds: dict[str, FeatureKind] = {title: template.features[title].kind for title in template.titles}

        rng = np.random.default_rng(self._config.random_state)
        self._splits: dict[str, MedianSplit] = {
            title: MedianSplit(median=select_median([row.value(title) for row in rows], rng))
            for title, kind in self._kinds.items()
            if kind == "continuous"
        }

    def __len__(self) -> int:
        return len(self._records)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(rows={len(self._records)}, titles={self.titles!r})"

    # -- accessors -----------------------------------------------------------

    @property
    def records(self) -> tuple[Record, ...]:
        """The rows of this table."""
        return self._records

    @property
    def config(self) -> TreeConfig:
        """The training configuration shared with child tables."""
        return self._config

    @property
    def titles(self) -> list[str]:
        """Sorted feature titles of the schema."""
        return list(self._kinds)

    @property
    def ranges(self) -> Mapping[str, MedianSplit]:
        """Median split of every continuous column, keyed by title."""
        return MappingProxyType(self._splits)

    def kind(self, title: str) -> FeatureKind:
        """Return the kind of the column `title`.

        Raises:
            MissingFeatureError: If `title` is not part of the schema.
        """
        self._require_title(title)
        return self._kinds[title]

    def feature_values(self, title: str) -> tuple[BranchKey, ...]:
        """Return the branch-key universe of a column.

        Args:
            title (str): Feature title.

        Returns:
            tuple[BranchKey, ...]: One `DiscreteKey` per distinct value, in
                order of first appearance, for a discrete column; the
                `(low, high)` `RangeKey` pair of the median split for a
                continuous column.

        Raises:
            MissingFeatureError: If `title` is not part of the schema.
        """
        self._require_title(title)
        median_split = self._splits.get(title)
        if median_split is not None:
            return tuple(RangeKey(interval=interval) for interval in median_split.ranges)
        distinct = dict.fromkeys(row.value(title) for row in self._records)
        return tuple(DiscreteKey(value=value) for value in distinct)

    # -- statistics ----------------------------------------------------------

    def entropy(self, records: Iterable[Record] | None = None) -> float:
        """Shannon entropy (base 2) of the target distribution.

        Args:
            records (Iterable[Record] | None): Row subset to measure. Defaults
                to all rows of this table.

        Returns:
            float: Entropy in bits.

        Raises:
            EmptyResultError: If the subset is empty.
        """
        return target_entropy(self._records if records is None else records)

    def information_gain(self, title: str) -> float:
        """Entropy reduction achieved by partitioning this table on `title`.

        Discrete partitions are weighted by their share of rows. Continuous
        partitions follow `config.continuous_weighting`: with `"median"` the
        low branch weighs `(n - (n + 2) // 2 + 1) / n` and the high branch
        `((n + 2) // 2 - 1) / n`, the shares implied by the median's rank.
        Those shares are exact for distinct values and approximate when the
        column has ties at the median. With `"counted"` the observed branch
        sizes are used instead. A continuous split that leaves one side empty
        separates nothing and has gain 0.0 under either weighting.

        Args:
            title (str): Feature title to evaluate.

        Returns:
            float: The information gain in bits, rounded to 12 decimal places.

        Raises:
            MissingFeatureError: If `title` is not part of the schema.
        """
        partitions = self._partition(title)
        row_count = len(self._records)

        if title in self._splits and not all(partitions.values()):
            return 0.0
        if title in self._splits and self._config.continuous_weighting == "median":
            upper_count = (row_count + 2) // 2
            low_key, high_key = partitions
            weights = {
                low_key: (row_count - upper_count + 1) / row_count,
                high_key: (upper_count - 1) / row_count,
            }
        else:
            weights = {key: len(rows) / row_count for key, rows in partitions.items()}

        remainder = sum(weights[key] * target_entropy(rows) for key, rows in partitions.items() if rows)
        return round(self.entropy() - remainder, _GAIN_DECIMAL_PLACES)

    def optimal_feature(self) -> str:
        """Return the title with the highest information gain.

        Every schema title is a candidate; the target never is. Ties go to
        the lexicographically smallest title.

        Returns:
            str: The best title to split on.
        """
        gains = {title: self.information_gain(title) for title in self._kinds}
        best = min(gains, key=lambda title: (-gains[title], title))
        logger.trace("Information gains computed", rows=len(self._records), gains=gains, best=best)
        return best

    def dominant_target(self) -> Any:
        """Return the most frequent target; ties go to the earliest-seen value.

        Raises:
            EmptyResultError: If the table has no rows.
        """
        counts = self.target_counts()
        if not counts:
            raise EmptyResultError("dominant target")
        return max(counts, key=counts.__getitem__)

    def target_counts(self) -> dict[Any, int]:
        """Count rows per target value, in order of first appearance."""
        return dict(Counter(row.target for row in self._records))

    # -- partitioning --------------------------------------------------------

    def split(self, title: str, min_capacity: int) -> dict[BranchKey, Table]:
        """Partition this table on `title`.

        Partitions with fewer than `min_capacity` rows are dropped along with
        their rows. Empty partitions are always dropped.

        Args:
            title (str): Feature title to split on.
            min_capacity (int): Minimum rows a child table must hold.

        Returns:
            dict[BranchKey, Table]: Child tables keyed by branch. Empty when
                this table itself holds fewer than `min_capacity` rows.

        Raises:
            MissingFeatureError: If `title` is not part of the schema.
        """
        if len(self._records) < min_capacity:
            return {}
        return {
            key: Table(rows, config=self._config)
            for key, rows in self._partition(title).items()
            if rows and len(rows) >= min_capacity
        }

    def _partition(self, title: str) -> dict[BranchKey, list[Record]]:
        """Group rows by branch key; continuous columns always yield `(low, high)`."""
        self._require_title(title)
        median_split = self._splits.get(title)
        if median_split is not None:
            groups: dict[BranchKey, list[Record]] = {
                RangeKey(interval=interval): [] for interval in median_split.ranges
            }
            for row in self._records:
                groups[RangeKey(interval=median_split.locate(row.value(title)))].append(row)
            return groups

        by_value: dict[Any, list[Record]] = {}
        for row in self._records:
            by_value.setdefault(row.value(title), []).append(row)
        return {DiscreteKey(value=value): rows for value, rows in by_value.items()}

    def _require_title(self, title: str) -> None:
        if title not in self._kinds:
            raise MissingFeatureError(title, available_titles=list(self._kinds))
