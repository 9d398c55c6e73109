"""Command-line interface for disklog."""

from __future__ import annotations

import argparse
import sys
from collections.abc import Sequence
from datetime import date, datetime
from typing import TextIO

from pydantic import ValidationError

from disklog.config import SinkCfg, load_config
from disklog.exceptions import ConfigError
from disklog.journal import DiskJournal
from disklog.logging import setup_logging
from disklog.naming import log_file_name


def parse_date(date_str: str) -> date:
    """Parse a YYYY-MM-DD string for argparse."""

    try:
        return datetime.strptime(date_str, "%Y-%m-%d").date()
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Invalid date '{date_str}', expected YYYY-MM-DD") from e


def _sink_cfg(args: argparse.Namespace) -> SinkCfg:
    overrides = {
        key: value
        for key, value in (
            ("folder", args.folder),
            ("prefix", args.prefix),
            ("interval", args.interval),
        )
        if value is not None
    }
    if args.config_dir:
        data = load_config(args.config_dir).sink.model_dump()
    elif args.folder is None:
        raise ConfigError("Either --config-dir or --folder is required")
    else:
        data = {}

    try:
        return SinkCfg.model_validate({**data, **overrides})
    except ValidationError as e:
        raise ConfigError(f"Invalid sink options: {e}") from e


def pipe(args: argparse.Namespace, stdin: TextIO | None = None) -> int:
    """Copy stdin lines into the day files until EOF.

    Args:
        args: Parsed command-line arguments
        stdin: Input stream (defaults to ``sys.stdin``)

    Returns:
        Exit code (0 for success)
    """
    log = setup_logging(args.log_level)
    try:
        cfg = _sink_cfg(args)
    except ConfigError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    source = stdin or sys.stdin
    journal = DiskJournal.from_config(cfg)
    try:
        for line in source:
            journal.enqueue(datetime.now(), line.rstrip("\n"))
    except KeyboardInterrupt:
        log.info("pipe.interrupted")
    finally:
        journal.close()

    stats = journal.stats()
    log.info(
        "pipe.finished",
        folder=str(cfg.folder),
        written=stats.written,
        dropped=stats.dropped,
        open_failures=stats.open_failures,
        write_failures=stats.write_failures,
    )
    print(f"Wrote {stats.written} lines to {cfg.folder}")
    return 0 if stats.dropped == 0 else 1


def filename(args: argparse.Namespace) -> int:
    """Print the day file name used for a date.

    Returns:
        Exit code (0 for success)
    """
    day = args.date or date.today()
    print(log_file_name(day, args.prefix or ""))
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Main CLI entry point.

    Returns:
        Exit code (0 for success)
    """
    parser = argparse.ArgumentParser(
        prog="disklog",
        description="Buffered, day-rotated text log files",
    )
    subparsers = parser.add_subparsers(dest="command", help="Command to execute")

    pipe_parser = subparsers.add_parser("pipe", help="Write stdin lines into day files")
    pipe_parser.add_argument(
        "--config-dir", help="Directory containing config/base.yaml (sink section)"
    )
    pipe_parser.add_argument("--folder", help="Output folder (overrides config)")
    pipe_parser.add_argument("--prefix", help="File name prefix (overrides config)")
    pipe_parser.add_argument(
        "--interval", type=float, help="Seconds between flushes (overrides config)"
    )
    pipe_parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Level for disklog's own diagnostics on stderr",
    )

    name_parser = subparsers.add_parser("filename", help="Print the file name for a date")
    name_parser.add_argument("--prefix", default="", help="File name prefix")
    name_parser.add_argument("--date", type=parse_date, help="Date (YYYY-MM-DD), default today")

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.command == "pipe":
        return pipe(args)
    elif args.command == "filename":
        return filename(args)
    else:
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
