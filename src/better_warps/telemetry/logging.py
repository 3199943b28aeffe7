"""Logging setup for the console entrypoint."""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

_STANDARD_ATTRS = frozenset(vars(logging.makeLogRecord({})).keys()) | {"message", "asctime"}


class _ExtraFieldsFilter(logging.Filter):
    """Appends structured ``extra`` fields to event-style log messages."""

    def filter(self, record: logging.LogRecord) -> bool:
        extras = {key: value for key, value in vars(record).items() if key not in _STANDARD_ATTRS}
        if extras:
            fields = " ".join(f"{key}={value!r}" for key, value in sorted(extras.items()))
            record.msg = f"{record.msg} {fields}"
        return True


def configure_logging(level: str = "INFO") -> None:
    """Route ``better_warps`` loggers through a rich console handler."""
    handler = RichHandler(console=Console(stderr=True), rich_tracebacks=True, show_path=False)
    handler.addFilter(_ExtraFieldsFilter())
    logger = logging.getLogger("better_warps")
    logger.handlers[:] = [handler]
    logger.setLevel(level.upper())
    logger.propagate = False
