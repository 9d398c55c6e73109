from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Literal

DiskOperation = Literal["mkdir", "open", "record", "write", "flush", "close"]


@dataclass(frozen=True)
class Record:
    """Formatted log line waiting to be written.

    The timestamp only decides which day file the line lands in; the text is
    written as-is.
    """

    timestamp: datetime
    text: str


@dataclass(frozen=True)
class DiskError:
    """A contained disk failure, reported instead of raised."""

    operation: DiskOperation
    path: Path | None
    error: BaseException


@dataclass(frozen=True)
class FlushResult:
    written: int = 0
    dropped: int = 0
    rotations: int = 0
    errors: tuple[DiskError, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.errors


@dataclass(frozen=True)
class SinkStats:
    enqueued: int = 0
    written: int = 0
    dropped: int = 0
    flushes: int = 0
    rotations: int = 0
    open_failures: int = 0
    write_failures: int = 0
    close_failures: int = 0
    enqueued_after_close: int = 0
