"""Fatal error taxonomy shared by the scan, spec and scaffold layers."""

from __future__ import annotations


class ScanError(Exception):
    """Base class for errors that abort an invocation before or during loading."""


class PathError(ScanError):
    """Root or input path does not exist, is not a directory, or cannot be read."""


class ConfigError(ScanError):
    """Rule document or scaffold input is malformed."""
