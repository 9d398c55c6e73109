"""Registry of context loggers sharing one DiskJournal."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import TYPE_CHECKING, Any

from disklog.journal import DiskJournal
from disklog.logger import Logger

if TYPE_CHECKING:
    from disklog.config import SinkCfg

logger = logging.getLogger(__name__)


class LogManager:
    """Creates and caches :class:`Logger` handles, one per context name."""

    def __init__(self, folder: str | Path, prefix: str = "", **journal_kwargs: Any) -> None:
        """Open the shared journal.

        Args:
            folder: Directory holding the day files
            prefix: File name prefix
            **journal_kwargs: Passed through to :class:`DiskJournal`
        """
        self._attach(DiskJournal(folder, prefix, **journal_kwargs))

    @classmethod
    def from_config(cls, cfg: SinkCfg, **journal_kwargs: Any) -> LogManager:
        return cls.from_journal(DiskJournal.from_config(cfg, **journal_kwargs))

    @classmethod
    def from_journal(cls, journal: DiskJournal) -> LogManager:
        """Wrap an existing journal; closing the manager closes it."""

        manager = cls.__new__(cls)
        manager._attach(journal)
        return manager

    def _attach(self, journal: DiskJournal) -> None:
        self.journal = journal
        self._loggers: dict[str, Logger] = {}
        self._lock = threading.Lock()

    def for_context(self, context: str) -> Logger:
        """Return the logger for ``context``, creating it on first use."""

        with self._lock:
            existing = self._loggers.get(context)
            if existing is not None:
                return existing
            created = Logger(context, self.journal)
            self._loggers[context] = created
        logger.debug("manager.context_created", extra={"context": context})
        return created

    def for_type(self, cls: type) -> Logger:
        return self.for_context(cls.__name__)

    def close(self) -> None:
        with self._lock:
            self._loggers.clear()
        self.journal.close()

    def __enter__(self) -> LogManager:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
