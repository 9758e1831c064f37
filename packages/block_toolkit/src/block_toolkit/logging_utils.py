"""Logging helpers for block invocation context."""

from __future__ import annotations

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s [%(block_id)s] %(message)s"

_CURRENT_BLOCK: ContextVar[str | None] = ContextVar("block_toolkit_current_block", default=None)


def get_current_block_id() -> str | None:
    """Return the qualified id of the block being invoked, if any."""
    return _CURRENT_BLOCK.get()


@contextmanager
def block_context(block_id: str) -> Iterator[None]:
    """Mark a block as running for the duration of the context."""
    token = _CURRENT_BLOCK.set(block_id)
    try:
        yield
    finally:
        _CURRENT_BLOCK.reset(token)


class BlockContextFilter(logging.Filter):
    """Attach the running block id to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Inject block_id into the log record."""
        record.block_id = get_current_block_id() or "-"
        return True


def configure_logging(level: str = "INFO") -> None:
    """Configure root logging with block context in every record."""
    root = logging.getLogger()
    root.setLevel(level.upper())
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    for handler in root.handlers:
        if not any(isinstance(flt, BlockContextFilter) for flt in handler.filters):
            handler.addFilter(BlockContextFilter())
