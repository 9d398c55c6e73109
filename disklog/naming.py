"""Day file naming: ``<prefix>_<YYYY-MM-DD>.log`` or ``<YYYY-MM-DD>.log``."""

from __future__ import annotations

import os
from datetime import date

LOG_SUFFIX = ".log"

if os.name == "nt":
    INVALID_FILENAME_CHARS = frozenset('<>:"/\\|?*') | frozenset(chr(i) for i in range(32))
else:
    INVALID_FILENAME_CHARS = frozenset("/\0")


def sanitize_prefix(prefix: str) -> str:
    """Replace characters the host filesystem rejects in file names with ``_``."""

    return "".join("_" if ch in INVALID_FILENAME_CHARS else ch for ch in prefix)


def log_file_name(day: date, prefix: str = "") -> str:
    """Build the file name used for ``day``.

    Example: ``log_file_name(date(2024, 1, 15), "a/b")`` -> ``a_b_2024-01-15.log``
    """

    stamp = day.isoformat()
    if not prefix:
        return f"{stamp}{LOG_SUFFIX}"
    return f"{sanitize_prefix(prefix)}_{stamp}{LOG_SUFFIX}"
