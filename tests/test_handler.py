from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

import pytest

from disklog.handler import DiskSinkHandler
from disklog.journal import DiskJournal


def today_file(folder: Path, prefix: str) -> Path:
    return folder / f"{prefix}_{datetime.now().date().isoformat()}.log"


@pytest.fixture
def journal(tmp_path: Path) -> DiskJournal:
    return DiskJournal(tmp_path, "std", autostart=False)


def test_stdlib_records_are_enqueued(tmp_path: Path, journal: DiskJournal) -> None:
    handler = DiskSinkHandler(journal)
    log = logging.getLogger("tests.handler.basic")
    log.setLevel(logging.DEBUG)
    log.addHandler(handler)
    log.propagate = False
    try:
        log.warning("disk at %d%%", 91)
        log.debug("details")
    finally:
        log.removeHandler(handler)
    journal.close()

    lines = today_file(tmp_path, "std").read_text(encoding="utf-8").splitlines()
    assert len(lines) == 2
    fields = lines[0].split("|")
    assert fields[1] == "tests.handler.basic"
    assert fields[3] == "test_stdlib_records_are_enqueued"
    assert fields[4] == Path(__file__).name
    assert fields[6] == "Warning"
    assert fields[7] == "disk at 91%"
    assert lines[1].endswith("|Debug|details")


def test_custom_formatter_is_used(tmp_path: Path, journal: DiskJournal) -> None:
    handler = DiskSinkHandler(journal)
    handler.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
    log = logging.getLogger("tests.handler.formatted")
    log.addHandler(handler)
    log.propagate = False
    try:
        log.error("boom")
    finally:
        log.removeHandler(handler)
    journal.close()

    assert today_file(tmp_path, "std").read_text(encoding="utf-8").splitlines() == ["ERROR boom"]


def test_own_loggers_are_skipped(tmp_path: Path, journal: DiskJournal) -> None:
    handler = DiskSinkHandler(journal)
    own = logging.makeLogRecord({"name": "disklog.journal", "msg": "journal.started", "levelno": 10})
    nested = logging.makeLogRecord({"name": "disklog", "msg": "x", "levelno": 20})
    foreign = logging.makeLogRecord({"name": "disklogger", "msg": "kept", "levelno": 20})

    handler.handle(own)
    handler.handle(nested)
    handler.handle(foreign)
    journal.close()

    lines = today_file(tmp_path, "std").read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    assert lines[0].endswith("|kept")


def test_exception_text_is_included(tmp_path: Path, journal: DiskJournal) -> None:
    handler = DiskSinkHandler(journal)
    log = logging.getLogger("tests.handler.exc")
    log.addHandler(handler)
    log.propagate = False
    try:
        try:
            raise ValueError("bad value")
        except ValueError:
            log.exception("failed")
    finally:
        log.removeHandler(handler)
    journal.close()

    content = today_file(tmp_path, "std").read_text(encoding="utf-8")
    assert "failed" in content
    assert "ValueError: bad value" in content


def test_close_flushes_pending(tmp_path: Path, journal: DiskJournal) -> None:
    handler = DiskSinkHandler(journal)
    handler.handle(logging.makeLogRecord({"name": "app", "msg": "pending", "levelno": 20}))

    handler.close()

    path = today_file(tmp_path, "std")
    assert path.read_text(encoding="utf-8").splitlines()[0].endswith("|Info|pending")
    journal.close()
