"""Custom exceptions for the decision tree engine.

All exceptions derive from `TreeKitError`, so callers can catch every
treekit failure with a single handler. Each concrete exception also subclasses
the builtin it specializes:

- InvalidArgumentError (ValueError): Raised when a constructor or operation
  receives an argument that violates its contract, e.g. an empty record
  collection or a negative minimum node capacity.
- MissingFeatureError (KeyError): Raised when a record lacks a feature title
  that the tree or table needs.
- EmptyResultError (ValueError): Raised when an empty row subset reaches an
  entropy or majority computation.
"""

from __future__ import annotations


class TreeKitError(Exception):
    """Base exception for all treekit errors."""


class InvalidArgumentError(TreeKitError, ValueError):
    """Raised when an argument violates the contract of the call it is passed to.

    Attributes:
        argument (str | None): Name of the offending argument, when known.

    Examples:
        >>> err = InvalidArgumentError("min_node_capacity must be >= 0", argument="min_node_capacity")
        >>> err.argument
        'min_node_capacity'
    """

    argument: str | None

    def __init__(self, message: str, *, argument: str | None = None) -> None:
        """Initialize InvalidArgumentError.

        Args:
            message (str): Description of the violated contract.
            argument (str | None): Name of the offending argument.
        """
        super().__init__(message)
        self.argument = argument

    def __repr__(self) -> str:
        """Return detailed representation for debugging.

        Returns:
            str: Detailed string representation including message and argument.
        """
        return f"{self.__class__.__name__}(message={str(self)!r}, argument={self.argument!r})"


class MissingFeatureError(TreeKitError, KeyError):
    """Raised when a record does not carry a feature title that is required.

    Subclasses `KeyError` so that generic lookup handling keeps working, but
    overrides `__str__` to avoid `KeyError`'s quoting of the message.

    Attributes:
        title (str): The feature title that could not be found.
        available_titles (list[str]): Sorted feature titles the record does carry.

    Examples:
        >>> err = MissingFeatureError("salary", available_titles=["age", "sex"])
        >>> str(err)
        "Feature 'salary' not found. Available features: ['age', 'sex']"
    """

    title: str
    available_titles: list[str]

    def __init__(self, title: str, *, available_titles: list[str] | None = None) -> None:
        """Initialize MissingFeatureError.

        Args:
            title (str): The feature title that was requested.
            available_titles (list[str] | None): Feature titles that are present.
        """
        self.title = title
        self.available_titles = sorted(available_titles or [])
        super().__init__(f"Feature '{title}' not found. Available features: {self.available_titles}")

    def __str__(self) -> str:
        """Return the plain error message.

        Returns:
            str: The message passed to the constructor, without `KeyError` quoting.
        """
        return str(self.args[0])

    def __repr__(self) -> str:
        """Return detailed representation for debugging.

        Returns:
            str: Detailed string representation including title and available titles.
        """
        return f"{self.__class__.__name__}(title={self.title!r}, available_titles={self.available_titles!r})"


class EmptyResultError(TreeKitError, ValueError):
    """Raised when a computation that needs at least one row receives none.

    Attributes:
        operation (str): Name of the computation that received no rows.
    """

    operation: str

    def __init__(self, operation: str) -> None:
        """Initialize EmptyResultError.

        Args:
            operation (str): Name of the computation, e.g. `"entropy"`.
        """
        super().__init__(f"Cannot compute {operation} of an empty row subset")
        self.operation = operation

    def __repr__(self) -> str:
        """Return detailed representation for debugging.

        Returns:
            str: Detailed string representation including the operation.
        """
        return f"{self.__class__.__name__}(message={str(self)!r}, operation={self.operation!r})"
