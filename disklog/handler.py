"""Bridge from the :mod:`logging` module into a DiskJournal."""

from __future__ import annotations

import logging
from datetime import datetime

from disklog.journal import DiskJournal
from disklog.levels import LogLevel
from disklog.logger import format_line

_OWN_LOGGER_PREFIX = "disklog"


class DiskSinkHandler(logging.Handler):
    """``logging.Handler`` that enqueues formatted records into a journal.

    Without a formatter, records use the same pipe-separated layout as
    :class:`disklog.logger.Logger`. Records emitted by disklog's own loggers
    are skipped so the journal never writes about itself.
    """

    def __init__(self, journal: DiskJournal, level: int = logging.NOTSET) -> None:
        super().__init__(level)
        self.journal = journal

    def filter(self, record: logging.LogRecord) -> bool:
        name = record.name
        if name == _OWN_LOGGER_PREFIX or name.startswith(_OWN_LOGGER_PREFIX + "."):
            return False
        return bool(super().filter(record))

    def format(self, record: logging.LogRecord) -> str:
        if self.formatter is not None:
            return super().format(record)
        message = record.getMessage()
        if record.exc_info:
            message = f"{message} {logging.Formatter().formatException(record.exc_info)}"
        return format_line(
            datetime.fromtimestamp(record.created),
            record.name,
            "",
            LogLevel.from_stdlib(record.levelno),
            message,
            record.funcName or "",
            record.pathname or "",
            record.lineno or 0,
        )

    def emit(self, record: logging.LogRecord) -> None:
        try:
            line = self.format(record)
        except Exception:
            self.handleError(record)
            return
        self.journal.enqueue(datetime.fromtimestamp(record.created), line)

    def close(self) -> None:
        try:
            self.journal.flush()
        finally:
            super().close()
