"""Buffered, day-rotated text log files."""

from disklog.contracts import DiskError, FlushResult, Record, SinkStats
from disklog.handler import DiskSinkHandler
from disklog.journal import DiskJournal
from disklog.levels import LogLevel
from disklog.logger import Logger
from disklog.manager import LogManager
from disklog.naming import log_file_name, sanitize_prefix

__version__ = "0.1.0"

__all__ = [
    "DiskError",
    "DiskJournal",
    "DiskSinkHandler",
    "FlushResult",
    "LogLevel",
    "LogManager",
    "Logger",
    "Record",
    "SinkStats",
    "log_file_name",
    "sanitize_prefix",
]
