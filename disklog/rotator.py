"""Day-based rotation of the journal's output file.

Holds the single open handle and the calendar date it was opened for.
Nothing here raises on I/O failure: every operation that touches the disk
returns a ``DiskError`` (or ``None`` on success) and leaves the rotator in a
consistent state, possibly without an open file.
"""

from __future__ import annotations

import os
from datetime import date
from pathlib import Path
from typing import TextIO

from disklog.contracts import DiskError
from disklog.naming import log_file_name


class DailyFileRotator:
    """Owns the open day file; one handle at a time, always for ``current_date``."""

    def __init__(self, folder: str | Path, prefix: str = "", *, encoding: str = "utf-8") -> None:
        self.folder = Path(folder)
        self.prefix = prefix
        self.encoding = encoding
        self.current_date: date | None = None
        self.current_path: Path | None = None
        self._file: TextIO | None = None

    @property
    def is_open(self) -> bool:
        return self._file is not None

    def path_for(self, day: date) -> Path:
        return self.folder / log_file_name(day, self.prefix)

    def should_rotate(self, day: date) -> bool:
        """True when a record dated ``day`` does not belong in the open file."""

        return day != self.current_date

    def ensure_folder(self) -> DiskError | None:
        try:
            self.folder.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            return DiskError("mkdir", self.folder, e)
        return None

    def open(self, day: date) -> DiskError | None:
        """Open the file for ``day`` in append mode.

        ``current_date`` moves to ``day`` even when the open fails, so the next
        attempt happens at the next date change rather than on every record.
        """
        if self._file is not None:
            raise RuntimeError("open() called while a file is already open")

        self.current_date = day
        path = self.path_for(day)
        self.current_path = path
        try:
            self._file = path.open("a", encoding=self.encoding)
        except (OSError, ValueError) as e:
            return DiskError("open", path, e)
        return None

    def close(self) -> DiskError | None:
        """Flush and release the handle; the handle is discarded even on failure."""

        fh, self._file = self._file, None
        if fh is None:
            return None
        try:
            fh.close()
        except (OSError, ValueError) as e:
            return DiskError("close", self.current_path, e)
        return None

    def rotate(self, day: date) -> list[DiskError]:
        errors: list[DiskError] = []
        close_error = self.close()
        if close_error is not None:
            errors.append(close_error)
        open_error = self.open(day)
        if open_error is not None:
            errors.append(open_error)
        return errors

    def write_line(self, text: str) -> DiskError | None:
        if self._file is None:
            return DiskError("write", self.current_path, RuntimeError("no open log file"))
        try:
            self._file.write(text.rstrip("\n") + "\n")
        except (OSError, ValueError) as e:
            return DiskError("write", self.current_path, e)
        return None

    def flush(self, *, fsync: bool = False) -> DiskError | None:
        if self._file is None:
            return None
        try:
            self._file.flush()
            if fsync:
                os.fsync(self._file.fileno())
        except (OSError, ValueError) as e:
            return DiskError("flush", self.current_path, e)
        return None
