"""treekit: ID3-style decision tree classification over typed records."""

from loguru import logger

from treekit.config import TreeConfig
from treekit.exceptions import EmptyResultError, InvalidArgumentError, MissingFeatureError, TreeKitError
from treekit.features import Feature, FeatureGenerator, FeatureKind, Record
from treekit.frames import records_from_dataframe
from treekit.keys import BranchKey, DiscreteKey, RangeKey
from treekit.logging import PACKAGE_NAME, enable_logging
from treekit.node import Node
from treekit.ranges import FiniteRange, MedianSplit, Range, SemiRange
from treekit.rules import LeafRule, Predicate
from treekit.table import Table
from treekit.tree import DecisionTree

logger.disable(PACKAGE_NAME)  # noqa: RUF067 - Disable logging for the treekit package by default

__all__ = [
    "BranchKey",
    "DecisionTree",
    "DiscreteKey",
    "EmptyResultError",
    "Feature",
    "FeatureGenerator",
    "FeatureKind",
    "FiniteRange",
    "InvalidArgumentError",
    "LeafRule",
    "MedianSplit",
    "MissingFeatureError",
    "Node",
    "Predicate",
    "Range",
    "RangeKey",
    "Record",
    "SemiRange",
    "Table",
    "TreeConfig",
    "TreeKitError",
    "enable_logging",
    "records_from_dataframe",
]
