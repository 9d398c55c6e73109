"""Asynchronous day-rotated disk journal.

Producers call :meth:`DiskJournal.enqueue`, which only touches memory. A
single worker thread wakes every ``interval`` seconds, drains everything that
is pending into the day file matching each record's timestamp, and flushes the
file once per batch. :meth:`DiskJournal.close` stops the worker, drains one
last time on the calling thread, and closes the file.
"""

from __future__ import annotations

import logging
import queue
import threading
from collections.abc import Callable
from datetime import date, datetime
from pathlib import Path
from typing import TYPE_CHECKING, Any

from disklog.contracts import DiskError, FlushResult, Record, SinkStats
from disklog.rotator import DailyFileRotator
from disklog.telemetry import ErrorCallback, SinkCounters

if TYPE_CHECKING:
    from disklog.config import SinkCfg

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 1.0


class DiskJournal:
    """Buffered writer of pre-formatted lines into ``<prefix>_<YYYY-MM-DD>.log`` files."""

    def __init__(
        self,
        folder: str | Path,
        prefix: str = "",
        *,
        interval: float = DEFAULT_INTERVAL,
        encoding: str = "utf-8",
        fsync: bool = False,
        clock: Callable[[], datetime] | None = None,
        on_error: ErrorCallback | None = None,
        autostart: bool = True,
    ) -> None:
        """Open today's file and, unless ``autostart`` is False, start flushing.

        Args:
            folder: Directory holding the day files; created if missing
            prefix: File name prefix; characters illegal in file names become ``_``
            interval: Seconds between drain cycles
            encoding: Text encoding of the day files
            fsync: Also fsync the file after each batch flush
            clock: Source of "now" for the initial file (defaults to ``datetime.now``)
            on_error: Called with every contained disk failure
            autostart: Start the periodic worker immediately
        """
        if interval <= 0:
            raise ValueError(f"interval must be > 0, got {interval}")

        self.interval = interval
        self._fsync = fsync
        self._clock = clock or datetime.now
        self._counters = SinkCounters(on_error)
        self._pending: queue.SimpleQueue[Record] = queue.SimpleQueue()

        self._flush_lock = threading.Lock()
        self._state_lock = threading.Lock()
        self._stop = threading.Event()
        self._worker: threading.Thread | None = None
        self._closed = False

        self._rotator = DailyFileRotator(folder, prefix, encoding=encoding)
        with self._flush_lock:
            self._report(self._rotator.ensure_folder())
            self._report(self._rotator.open(self._clock().date()))

        if autostart:
            self.start()

    @classmethod
    def from_config(cls, cfg: SinkCfg, **kwargs: Any) -> DiskJournal:
        return cls(
            cfg.folder,
            cfg.prefix,
            interval=cfg.interval,
            encoding=cfg.encoding,
            fsync=cfg.fsync,
            **kwargs,
        )

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def folder(self) -> Path:
        return self._rotator.folder

    @property
    def current_path(self) -> Path | None:
        """Path of the day file the journal is (or last tried to be) writing to."""

        return self._rotator.current_path

    @property
    def closed(self) -> bool:
        return self._closed

    def enqueue(self, timestamp: datetime, text: str) -> None:
        """Queue one line for writing. Never blocks on disk and never raises.

        Lines queued after :meth:`close` are accepted but never written.
        """
        self._pending.put(Record(timestamp, text))
        self._counters.inc("enqueued")
        if self._closed:
            self._counters.inc("enqueued_after_close")

    def flush(self) -> FlushResult:
        """Drain every pending record to disk now.

        Serialized with the worker's cycles, so it is safe to call from any
        thread at any time. After :meth:`close` nothing is written.
        """
        with self._flush_lock:
            if self._closed:
                return FlushResult()
            return self._drain()

    def start(self) -> None:
        """Start the periodic worker; a no-op if running or closed."""

        with self._state_lock:
            if self._closed or self._worker is not None:
                return
            self._worker = threading.Thread(
                target=self._run, name=f"disklog-{self._rotator.prefix or 'journal'}", daemon=True
            )
            self._worker.start()
        logger.debug(
            "journal.started",
            extra={"folder": str(self.folder), "prefix": self._rotator.prefix, "interval": self.interval},
        )

    def close(self) -> None:
        """Stop the worker, drain what is left, and close the file. Idempotent."""

        with self._state_lock:
            if self._closed:
                return
            self._closed = True
            worker = self._worker

        self._stop.set()
        if worker is not None:
            worker.join()

        with self._flush_lock:
            try:
                self._drain()
            finally:
                self._report(self._rotator.close())

        stats = self.stats()
        logger.debug(
            "journal.closed",
            extra={"folder": str(self.folder), "written": stats.written, "dropped": stats.dropped},
        )

    def stats(self) -> SinkStats:
        return self._counters.snapshot()

    def __enter__(self) -> DiskJournal:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _run(self) -> None:
        while not self._stop.wait(self.interval):
            with self._flush_lock:
                self._drain()

    def _drain(self) -> FlushResult:
        """One flush cycle. Caller must hold ``_flush_lock``."""

        written = dropped = rotations = 0
        errors: list[DiskError] = []

        while True:
            try:
                record = self._pending.get_nowait()
            except queue.Empty:
                break

            try:
                # Checked per record: a batch may straddle midnight
                day = _calendar_day(record.timestamp)
                if self._rotator.should_rotate(day):
                    errors.extend(self._rotator.rotate(day))
                    rotations += 1

                if not self._rotator.is_open:
                    dropped += 1
                    continue

                write_error = self._rotator.write_line(record.text)
            except Exception as e:
                # One unusable record must not stop the worker
                errors.append(DiskError("record", self._rotator.current_path, e))
                dropped += 1
                continue

            if write_error is not None:
                errors.append(write_error)
                dropped += 1
            else:
                written += 1

        if written:
            flush_error = self._rotator.flush(fsync=self._fsync)
            if flush_error is not None:
                errors.append(flush_error)

        for error in errors:
            self._counters.report(error)
        self._counters.inc("written", written)
        self._counters.inc("dropped", dropped)
        self._counters.inc("rotations", rotations)
        self._counters.inc("flushes")

        return FlushResult(
            written=written, dropped=dropped, rotations=rotations, errors=tuple(errors)
        )

    def _report(self, error: DiskError | None) -> None:
        if error is not None:
            self._counters.report(error)


def _calendar_day(timestamp: datetime | date) -> date:
    if isinstance(timestamp, datetime):
        return timestamp.date()
    if isinstance(timestamp, date):
        return timestamp
    raise TypeError(f"record timestamp must be a datetime or date, got {type(timestamp).__name__}")
