"""Shared fixtures: a small credit-risk training set and a loguru capturing sink."""

from __future__ import annotations

from collections.abc import Generator
from typing import Any, NamedTuple

import loguru
import pytest
from loguru import logger

from treekit import FeatureGenerator, Record
from treekit.logging import PACKAGE_NAME

AGE = FeatureGenerator(title="age", kind="continuous")
SALARY = FeatureGenerator(title="salary", kind="continuous")
SEX = FeatureGenerator(title="sex", kind="discrete")

# (age, salary, sex, target)
CREDIT_ROWS: list[tuple[int, int, str, str]] = [
    (25, 50_000, "female", "good"),
    (51, 45_816, "male", "bad"),
    (42, 75_491, "male", "good"),
    (36, 15_034, "female", "bad"),
    (21, 65_500, "female", "good"),
    (62, 35_000, "male", "bad"),
    (23, 74_154, "male", "bad"),
    (56, 120_000, "female", "good"),
    (34, 25_150, "male", "bad"),
    (28, 165_000, "male", "good"),
]


def make_credit_record(age: int, salary: int, sex: str, target: str | None = None) -> Record:
    """Build a credit-risk record from raw values."""
    return Record.from_features([AGE.generate(age), SALARY.generate(salary), SEX.generate(sex)], target=target)


def make_discrete_record(target: Any = None, **values: Any) -> Record:
    """Build a record whose features are all discrete."""
    return Record.from_features(
        [FeatureGenerator(title=title, kind="discrete").generate(value) for title, value in values.items()],
        target=target,
    )


def make_continuous_record(target: Any = None, **values: Any) -> Record:
    """Build a record whose features are all continuous."""
    return Record.from_features(
        [FeatureGenerator(title=title, kind="continuous").generate(value) for title, value in values.items()],
        target=target,
    )


def make_constant_column_records() -> list[Record]:
    """Ten rows where continuous `c` is always 5 and discrete `x` is informative.

    Targets: x=a gives 4 yes / 1 no, x=b gives 2 yes / 3 no.
    """
    rows = [("a", "yes")] * 4 + [("a", "no")] + [("b", "yes")] * 2 + [("b", "no")] * 3
    return [
        Record.from_features(
            [
                FeatureGenerator(title="c", kind="continuous").generate(5),
                FeatureGenerator(title="x", kind="discrete").generate(x),
            ],
            target=target,
        )
        for x, target in rows
    ]


@pytest.fixture
def credit_records() -> list[Record]:
    """Ten labeled rows with continuous age/salary, discrete sex and a good/bad target.

    Returns:
        list[Record]: The training rows.
    """
    return [make_credit_record(*row) for row in CREDIT_ROWS]


@pytest.fixture
def credit_query() -> Record:
    """Held-out unlabeled row used for prediction.

    Returns:
        Record: A query record with no target.
    """
    return make_credit_record(30, 40_816, "female")


class LogSink(NamedTuple):
    """Log sink with records list and handler ID for cleanup.

    Attributes:
        records (list[loguru.Record]): List that accumulates log record dictionaries.
        handler_id (int): Logger handler ID for cleanup.
    """

    records: list[loguru.Record]
    handler_id: int


@pytest.fixture
def log_sink() -> Generator[LogSink]:
    """Create a sink that captures treekit log records at DEBUG and above.

    Yields:
        Generator[LogSink]: Named tuple with records list and handler_id for cleanup.
    """
    captured_records: list[loguru.Record] = []

    def sink(message: loguru.Message) -> None:
        captured_records.append(message.record)

    handler_id = logger.add(sink, level="DEBUG")
    logger.enable(PACKAGE_NAME)

    yield LogSink(records=captured_records, handler_id=handler_id)

    logger.disable(PACKAGE_NAME)
    logger.remove(handler_id)
