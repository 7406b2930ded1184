"""Logging utilities for tree_surrogate.

The package logs through loguru and is disabled by default, so importing
tree_surrogate never writes anything. Call :func:`enable_logging` to see the
workflow stages (sampling, querying, fitting) on stderr.

Importing this module removes loguru's default stderr handler (ID 0) so that
package messages are not written twice once :func:`enable_logging` adds its
own handler. Configure application handlers after importing tree_surrogate.
"""

from __future__ import annotations

import contextlib
import sys
import threading
from typing import TYPE_CHECKING, ClassVar, Optional

from loguru import logger

if TYPE_CHECKING:
    from types import TracebackType

    from loguru import Record

PACKAGE_NAME: str = __name__.split(".")[0]

# Handler 0 is loguru's own stderr sink; enable_logging() adds a filtered one.
with contextlib.suppress(ValueError):
    logger.remove(0)

logger.disable(PACKAGE_NAME)

_FORMATS = {
    "short": (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{function}</cyan> - "
        "<level>{message}</level>"
    ),
    "full": (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
        "<level>{message}</level>"
    ),
}


class LoggingHandle:
    """Handle owning one stderr handler added by :func:`enable_logging`.

    Use :meth:`disable` or the context-manager protocol to remove it. When
    the last active handle goes away the package logger is disabled again.
    """

    _active_ids: ClassVar[set] = set()
    _lock: ClassVar[threading.Lock] = threading.Lock()

    def __init__(self, handler_id: int) -> None:
        self.handler_id: Optional[int] = handler_id
        with LoggingHandle._lock:
            LoggingHandle._active_ids.add(handler_id)

    def disable(self) -> None:
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
        exc_type: Optional[type],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        self.disable()

    @classmethod
    def get_active_handle_count(cls) -> int:
        with cls._lock:
            return len(cls._active_ids)


def enable_logging(*, level: str = "INFO", log_format: str = "short") -> LoggingHandle:
    """Enable tree_surrogate logging on stderr.

    Parameters
    ----------
    level : str, default "INFO"
        Minimum loguru level to display. ``"DEBUG"`` also shows every call
        to :meth:`TreeSurrogate.predict`.
    log_format : {"short", "full"}
        ``"full"`` adds ``module:function:line`` to each line.

    Returns
    -------
    LoggingHandle
    """
    if log_format not in _FORMATS:
        raise ValueError(
            f"log_format must be 'short' or 'full', got {log_format!r}"
        )
    logger.enable(PACKAGE_NAME)
    handler_id = logger.add(
        sys.stderr,
        level=level,
        filter=_is_package_record,
        format=_FORMATS[log_format],
    )
    return LoggingHandle(handler_id)


def _is_package_record(record: Record) -> bool:
    name = record["name"]
    return name is not None and name.startswith(PACKAGE_NAME)
