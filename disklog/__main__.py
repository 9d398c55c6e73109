"""Entry point for ``python -m disklog``."""

from __future__ import annotations

import sys

from disklog.cli import main

if __name__ == "__main__":
    sys.exit(main())
