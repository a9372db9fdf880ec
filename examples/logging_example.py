"""Demonstrates how to follow decision tree training through treekit logging.

treekit logging is disabled by default. Users opt in by calling ``enable_logging()``,
which returns a ``LoggingHandle``. The handle can be used as a context manager
(``with enable_logging(): ...``) or disabled manually via ``handle.disable()``.
When the last active handle is disabled, treekit logging is automatically turned off.

Key concepts shown here:

- ``level``: controls the minimum log level. The custom ``SPLIT`` level
  (numeric value 15, between DEBUG and INFO) reports every accepted node split.
  ``INFO`` reports one summary per trained tree; ``DEBUG`` also explains why
  nodes stayed leaves.
- ``log_format``: ``"short"`` shows ``timestamp | level | function - message``;
  ``"full"`` adds the module and line number.
- Rejected arguments are logged at WARNING before the error is raised.
"""

import polars as pl

from treekit import DecisionTree, InvalidArgumentError, enable_logging, records_from_dataframe

df_credit = pl.DataFrame({
    "age": [25, 51, 42, 36, 21, 62, 23, 56, 34, 28],
    "salary": [50_000, 45_816, 75_491, 15_034, 65_500, 35_000, 74_154, 120_000, 25_150, 165_000],
    "sex": ["female", "male", "male", "female", "female", "male", "male", "female", "male", "male"],
    "risk": ["good", "bad", "good", "bad", "good", "bad", "bad", "good", "bad", "good"],
})
records = records_from_dataframe(df_credit, target="risk")

# Enable logging at SPLIT level (and above) with full log format to see where each split happens
with enable_logging(level="SPLIT", log_format="full"):
    tree = DecisionTree(records, min_node_capacity=1)

    query = records_from_dataframe(pl.DataFrame({"age": [30], "salary": [40_816], "sex": ["female"]}))[0]
    print(f"\nPrediction: {tree.predict(query)}\n")

    for rule in tree.rules():
        print(rule)

    # Try an invalid capacity to show warning logging
    try:
        DecisionTree(records, min_node_capacity=len(records) + 1)
    except InvalidArgumentError as exc:
        print(f"\nRejected: {exc}\n")

# Logging automatically disabled here
