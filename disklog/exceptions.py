"""Exception hierarchy for disklog."""

from __future__ import annotations


class DiskLogError(Exception):
    """Base exception for all disklog errors."""


class ConfigError(DiskLogError):
    """Raised when configuration loading or validation fails."""
