"""Per-context logger that formats lines and hands them to a DiskJournal.

Line layout::

    <ISO-8601 time>|<context>|<sender>|<caller function>|<source file>|<line>|<Level>|<message>
"""

from __future__ import annotations

import inspect
from datetime import datetime
from pathlib import Path
from typing import TYPE_CHECKING

from disklog.levels import LogLevel

if TYPE_CHECKING:
    from disklog.journal import DiskJournal


def format_line(
    time: datetime,
    context: str,
    sender: str,
    level: LogLevel,
    message: str,
    caller: str = "",
    source_path: str = "",
    line_number: int = 0,
) -> str:
    source_file = Path(source_path).name if source_path else ""
    return "|".join(
        (
            time.isoformat(),
            context,
            sender,
            caller,
            source_file,
            str(line_number),
            level.value,
            message,
        )
    )


def _caller_info(stacklevel: int) -> tuple[str, str, int]:
    """Return (function, file, line) of the frame ``stacklevel`` levels above this one."""

    frame = inspect.currentframe()
    try:
        for _ in range(stacklevel):
            if frame is None:
                break
            frame = frame.f_back
        if frame is None:
            return "", "", 0
        code = frame.f_code
        return code.co_name, code.co_filename, frame.f_lineno
    finally:
        del frame


class Logger:
    """Convenience facade bound to one context name.

    Instances come from :meth:`disklog.manager.LogManager.for_context`; all of
    them share the manager's journal.
    """

    def __init__(self, context: str, journal: DiskJournal) -> None:
        self.context = context
        self._journal = journal

    def fatal(self, message: str, sender: str = "") -> None:
        self._add(None, LogLevel.FATAL, message, sender)

    def error(self, message: str, sender: str = "") -> None:
        self._add(None, LogLevel.ERROR, message, sender)

    def warning(self, message: str, sender: str = "") -> None:
        self._add(None, LogLevel.WARNING, message, sender)

    def notice(self, message: str, sender: str = "") -> None:
        self._add(None, LogLevel.NOTICE, message, sender)

    def info(self, message: str, sender: str = "") -> None:
        self._add(None, LogLevel.INFO, message, sender)

    def debug(self, message: str, sender: str = "") -> None:
        self._add(None, LogLevel.DEBUG, message, sender)

    def trace(self, message: str, sender: str = "") -> None:
        self._add(None, LogLevel.TRACE, message, sender)

    def add_record(
        self,
        level: LogLevel,
        message: str,
        sender: str = "",
        *,
        time: datetime | None = None,
    ) -> None:
        """Add a line at ``level``; ``time`` defaults to now and picks the day file."""

        self._add(time, level, message, sender)

    def _add(self, time: datetime | None, level: LogLevel, message: str, sender: str) -> None:
        # _caller_info -> _add -> public method -> caller
        caller, source_path, line_number = _caller_info(3)
        ts = time or datetime.now()
        line = format_line(ts, self.context, sender, level, message, caller, source_path, line_number)
        self._journal.enqueue(ts, line)
