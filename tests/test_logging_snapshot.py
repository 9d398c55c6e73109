from __future__ import annotations

import io
import json
import logging
from pathlib import Path

from disklog.journal import DiskJournal
from disklog.logging import setup_json_logging, setup_logging


def read_last_line(path: Path) -> str:
    with path.open("r", encoding="utf-8") as fh:
        lines = fh.readlines()
    return lines[-1].strip()


def test_json_logging_snapshot(tmp_path: Path) -> None:
    logger = setup_json_logging(str(tmp_path))

    logger.info("hello", k=1)

    for handler in logging.getLogger().handlers:
        handler.flush()

    payload = json.loads(read_last_line(tmp_path / "app.ndjson"))

    assert payload["event"] == "hello"
    assert payload["k"] == 1
    assert payload["level"] == "info"


def test_stream_logging_renders_stdlib_extra(tmp_path: Path) -> None:
    stream = io.StringIO()
    setup_logging("DEBUG", json_output=True, stream=stream)

    journal = DiskJournal(tmp_path, "app", autostart=False)
    journal.start()
    journal.close()

    events = [json.loads(line) for line in stream.getvalue().splitlines()]
    started = next(e for e in events if e["event"] == "journal.started")
    closed = next(e for e in events if e["event"] == "journal.closed")
    assert started["logger"] == "disklog.journal"
    assert started["prefix"] == "app"
    assert closed["written"] == 0


def test_stream_logging_respects_level() -> None:
    stream = io.StringIO()
    log = setup_logging("WARNING", stream=stream)

    log.info("quiet")
    log.warning("loud")

    output = stream.getvalue()
    assert "quiet" not in output
    assert "loud" in output
