"""Feature and Record models: the typed rows a decision tree is trained on."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from types import MappingProxyType
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from treekit.exceptions import InvalidArgumentError, MissingFeatureError

type FeatureKind = Literal["discrete", "continuous"]


class Feature(BaseModel):
    """A named, typed scalar value attached to a row.

    Two features with the same title denote the same column, so equality and
    hashing only consider `title`.

    Attributes:
        title (str): Column name, e.g. `"age"`.
        value (Any): The cell value. Must be comparable with the other values
            of the same column; continuous values must support `<`.
        kind (FeatureKind): `"discrete"` values become one branch each;
            `"continuous"` values are binarized at the median.

    Examples:
        >>> Feature(title="age", value=30, kind="continuous") == Feature(title="age", value=51, kind="continuous")
        True
    """

    model_config = ConfigDict(frozen=True)

    title: str = Field(description="Column name the value belongs to.")
    value: Any = Field(description="Comparable cell value.")
    kind: FeatureKind = Field(description="Whether the column is discrete or continuous.")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Feature):
            return NotImplemented
        return self.title == other.title

    def __hash__(self) -> int:
        return hash(self.title)


class FeatureGenerator(BaseModel):
    """Factory for features of a single column.

    Fixes the title and kind of a column so rows can be built from raw values.

    Examples:
        >>> sex = FeatureGenerator(title="sex", kind="discrete")
        >>> sex.generate("female").value
        'female'
    """

    model_config = ConfigDict(frozen=True)

    title: str
    kind: FeatureKind

    def generate(self, value: Any) -> Feature:
        """Create a feature of this column holding `value`.

        Args:
            value (Any): The cell value.

        Returns:
            Feature: A feature with this generator's title and kind.
        """
        return Feature(title=self.title, value=value, kind=self.kind)


class Record(BaseModel):
    """One row: features keyed by title plus an optional target.

    A record with `target=None` is a query record; one with a target is a
    training record. All records fed to one table must share the same feature
    titles and, per title, the same kind. This is not validated.

    Attributes:
        features (Mapping[str, Feature]): Read-only view of the features keyed
            by their title.
        target (Any): Class label, or `None` for query records.

    Examples:
        >>> record = Record.from_features(
        ...     [
        ...         Feature(title="age", value=25, kind="continuous"),
        ...         Feature(title="sex", value="female", kind="discrete"),
        ...     ],
        ...     target="good",
        ... )
        >>> record.value("sex")
        'female'
    """

    model_config = ConfigDict(frozen=True)

    features: Mapping[str, Feature] = Field(description="Features keyed by their title.")
    target: Any = Field(default=None, description="Class label, or None for query records.")

    @field_validator("features", mode="after")
    @classmethod
    def _freeze_features(cls, value: Mapping[str, Feature]) -> Mapping[str, Feature]:
        """Copy the features into a read-only mapping so the row cannot change after construction."""
        return MappingProxyType(dict(value))

    def __init__(self, **data: Any) -> None:
        """Validate field types, then the record's own invariants.

        The invariant checks run outside pydantic validators so that they
        surface as `InvalidArgumentError` rather than `ValidationError`.

        Args:
            **data (Any): Field values, `features` and optionally `target`.

        Raises:
            InvalidArgumentError: If there are no features or a key differs from
                its feature's title.
        """
        super().__init__(**data)
        if not self.features:
            raise InvalidArgumentError("A record must contain at least 1 feature", argument="features")
        mismatched = sorted(key for key, feature in self.features.items() if key != feature.title)
        if mismatched:
            raise InvalidArgumentError(f"Feature keys do not match feature titles: {mismatched}", argument="features")

    @classmethod
    def from_features(cls, features: Iterable[Feature], target: Any = None) -> Record:
        """Build a record from a sequence of features.

        Args:
            features (Iterable[Feature]): The row's features, one per title.
            target (Any): Class label, or `None` for a query record.

        Returns:
            Record: The assembled record.

        Raises:
            InvalidArgumentError: If two features share a title.
        """
        by_title: dict[str, Feature] = {}
        for feature in features:
            if feature.title in by_title:
                raise InvalidArgumentError(f"Duplicate feature title '{feature.title}'", argument="features")
            by_title[feature.title] = feature
        return cls(features=by_title, target=target)

    @property
    def is_labeled(self) -> bool:
        """Whether this record carries a target."""
        return self.target is not None

    @property
    def titles(self) -> list[str]:
        """Sorted feature titles of this record."""
        return sorted(self.features)

    def value(self, title: str) -> Any:
        """Return the value of the feature named `title`.

        Args:
            title (str): Feature title to look up.

        Returns:
            Any: The feature's value.

        Raises:
            MissingFeatureError: If the record has no feature with that title.
        """
        feature = self.features.get(title)
        if feature is None:
            raise MissingFeatureError(title, available_titles=list(self.features))
        return feature.value
