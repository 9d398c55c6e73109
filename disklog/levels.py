from __future__ import annotations

from enum import Enum


class LogLevel(str, Enum):
    """Severity written into each formatted line. Not used for filtering."""

    FATAL = "Fatal"
    ERROR = "Error"
    WARNING = "Warning"
    NOTICE = "Notice"
    INFO = "Info"
    DEBUG = "Debug"
    TRACE = "Trace"

    @classmethod
    def from_stdlib(cls, levelno: int) -> LogLevel:
        """Map a :mod:`logging` level number onto the closest severity."""

        if levelno >= 50:
            return cls.FATAL
        if levelno >= 40:
            return cls.ERROR
        if levelno >= 30:
            return cls.WARNING
        if levelno >= 20:
            return cls.INFO
        if levelno >= 10:
            return cls.DEBUG
        return cls.TRACE
