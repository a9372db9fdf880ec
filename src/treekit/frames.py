"""Polars adapter: turn DataFrame rows into typed records."""

from __future__ import annotations

from collections.abc import Collection

import polars as pl
from loguru import logger

from treekit.exceptions import InvalidArgumentError, MissingFeatureError
from treekit.features import Feature, FeatureKind, Record

# ---------------------------------------------------------------------------
# Private helpers -- Column kind classification
# ---------------------------------------------------------------------------

_DISCRETE_DTYPES: tuple[type[pl.DataType], ...] = (pl.Boolean, pl.String, pl.Categorical, pl.Enum)
_TEMPORAL_DTYPES: tuple[type[pl.DataType], ...] = (pl.Date, pl.Datetime)


def _infer_kind(dtype: pl.DataType) -> FeatureKind | None:
    """Map a Polars dtype to a feature kind.

    Numeric dtypes are continuous; boolean, string, categorical and enum
    dtypes are discrete. Dates and datetimes are continuous since they are
    ordered. Anything else is unsupported.

    Args:
        dtype (pl.DataType): Column dtype.

    Returns:
        FeatureKind | None: The inferred kind, or `None` if unsupported.
    """
    if dtype.is_numeric():
        return "continuous"
    if isinstance(dtype, _DISCRETE_DTYPES):
        return "discrete"
    if isinstance(dtype, _TEMPORAL_DTYPES):
        return "continuous"
    return None


# ---------------------------------------------------------------------------
# Public interface
# ---------------------------------------------------------------------------


def records_from_dataframe(
    df: pl.DataFrame,
    target: str | None = None,
    *,
    continuous: Collection[str] = (),
    discrete: Collection[str] = (),
) -> list[Record]:
    """Convert each DataFrame row into a `Record`.

    Every non-target column becomes a feature. Kinds are inferred from
    dtypes unless listed in `continuous` or `discrete`, e.g. to treat an
    integer rating column as discrete. Columns with an unsupported dtype are
    skipped and reported at WARNING level.

    Args:
        df (pl.DataFrame): Source rows; at least one.
        target (str | None): Name of the target column. `None` builds query
            records; a null target cell also yields a query record.
        continuous (Collection[str]): Columns forced to be continuous.
        discrete (Collection[str]): Columns forced to be discrete.

    Returns:
        list[Record]: One record per row, in row order.

    Raises:
        InvalidArgumentError: If `df` is empty, a column is forced to both
            kinds, no usable feature column remains, or a feature column holds
            nulls.
        MissingFeatureError: If `target` or a forced column is not in `df`.

    Examples:
        >>> df = pl.DataFrame({"age": [25, 51], "sex": ["female", "male"], "risk": ["good", "bad"]})
        >>> records = records_from_dataframe(df, target="risk")
        >>> records[0].features["age"].kind, records[0].target
        ('continuous', 'good')
    """
    if df.is_empty():
        raise InvalidArgumentError("DataFrame must contain at least 1 row", argument="df")
    overlap = set(continuous) & set(discrete)
    if overlap:
        raise InvalidArgumentError(f"Columns forced to both kinds: {sorted(overlap)}", argument="continuous")
    for name in [*([target] if target is not None else []), *continuous, *discrete]:
        if name not in df.columns:
            raise MissingFeatureError(name, available_titles=df.columns)

    kinds: dict[str, FeatureKind] = {}
    for name in df.columns:
        if name == target:
            continue
        if name in continuous:
            kinds[name] = "continuous"
        elif name in discrete:
            kinds[name] = "discrete"
        else:
            kind = _infer_kind(df.schema[name])
            if kind is None:
                logger.warning("Column skipped: unsupported dtype", column=name, dtype=str(df.schema[name]))
                continue
            kinds[name] = kind

    if not kinds:
        raise InvalidArgumentError("No usable feature columns remain", argument="df")
    null_columns = [name for name in kinds if df[name].null_count() > 0]
    if null_columns:
        raise InvalidArgumentError(f"Feature columns contain nulls: {null_columns}", argument="df")

    records = [
        Record(
            features={name: Feature(title=name, value=row[name], kind=kind) for name, kind in kinds.items()},
            target=row[target] if target is not None else None,
        )
        for row in df.iter_rows(named=True)
    ]
    logger.debug("Records built from DataFrame", rows=len(records), kinds=kinds, target=target)
    return records
