"""Opt-in loguru logging for tree training.

treekit logs through loguru under the ``treekit`` name and stays silent until
``enable_logging()`` is called. Training reports at three levels: DEBUG says
why a node stayed a leaf, SPLIT (a custom level between DEBUG and INFO) records
each accepted split, and INFO summarizes each trained tree.

Importing this module removes loguru's default stderr handler (ID 0) so that
``enable_logging()`` output is not printed twice.
"""

from __future__ import annotations

import contextlib
import sys
import threading
import warnings
from typing import TYPE_CHECKING, ClassVar, Final, Literal

from loguru import logger

if TYPE_CHECKING:
    from types import TracebackType

    from loguru import Record

PACKAGE_NAME: Final[str] = __name__.split(".")[0]

with contextlib.suppress(ValueError):
    logger.remove(0)

SPLIT_LEVEL: Final[str] = "SPLIT"
SPLIT_LEVEL_NUMBER: Final[int] = 15

type LogLevel = Literal["TRACE", "DEBUG", "SPLIT", "INFO", "WARNING", "ERROR", "CRITICAL"]
type LogFormat = Literal["short", "full"]

_PREFIX: Final[str] = "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | <level>{level: <8}</level> | "  # noqa: RUF027
_FORMATS: Final[dict[str, str]] = {
    "short": _PREFIX + "<cyan>{function}</cyan> - <level>{message}</level> {extra}",
    "full": _PREFIX + "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level> {extra}",
}


def _register_split_level() -> None:
    """Register SPLIT with loguru, warning if it already exists under another number."""
    try:
        existing_level = logger.level(SPLIT_LEVEL)
    except ValueError:
        logger.level(SPLIT_LEVEL, no=SPLIT_LEVEL_NUMBER, icon="🌳")
        return
    if existing_level.no != SPLIT_LEVEL_NUMBER:
        msg = f"SPLIT level already registered with numeric value {existing_level.no}, expected {SPLIT_LEVEL_NUMBER}"
        warnings.warn(msg, stacklevel=2)


_register_split_level()


class LoggingHandle:
    """One stderr handler added by `enable_logging`.

    Handles are independent. The ``treekit`` logger stays enabled while at
    least one handle is active and is disabled again when the last one is.

    Examples:
        >>> with enable_logging(level="SPLIT"):  # doctest: +SKIP
        ...     tree = DecisionTree(records, min_node_capacity=1)
    """

    _active_ids: ClassVar[set[int]] = set()
    _lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self, handler_id: int) -> None:
        self.handler_id: int | None = handler_id
        with LoggingHandle._lock:
            LoggingHandle._active_ids.add(handler_id)

    def disable(self) -> None:
        """Remove this handle's handler; safe to call more than once."""
        with LoggingHandle._lock:
            if self.handler_id is None:
                return
            LoggingHandle._active_ids.discard(self.handler_id)
            with contextlib.suppress(ValueError):
                logger.remove(self.handler_id)
            self.handler_id = None
            if not LoggingHandle._active_ids:
                logger.disable(PACKAGE_NAME)

    def __enter__(self) -> LoggingHandle:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.disable()

    @classmethod
    def get_active_handle_count(cls) -> int:
        """Number of handles not yet disabled."""
        with cls._lock:
            return len(cls._active_ids)


def enable_logging(
    *,
    level: LogLevel = "INFO",
    log_format: LogFormat = "short",
) -> LoggingHandle:
    """Print treekit log records to stderr.

    Args:
        level (LogLevel): Minimum level shown. "INFO" (default) gives one line
            per trained tree, "SPLIT" adds one per node split, "DEBUG" adds why
            nodes stayed leaves.
        log_format (LogFormat): "short" shows ``timestamp | level | function -
            message``; "full" adds the module and line number.

    Returns:
        LoggingHandle: Handle that removes the handler on `disable()` or on
            leaving a ``with`` block.
    """
    logger.enable(PACKAGE_NAME)
    handler_id = logger.add(
        sys.stderr,
        level=level,
        filter=_is_treekit_record,
        format=_FORMATS[log_format],
    )
    return LoggingHandle(handler_id)


def _is_treekit_record(record: Record) -> bool:
    name = record["name"]
    return name is not None and name.startswith(PACKAGE_NAME)
