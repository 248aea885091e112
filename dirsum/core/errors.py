"""Exceptions raised by dirsum.

Every error is fatal to the run that raised it.
"""
from __future__ import annotations

from pathlib import Path
from typing import Optional


class DirsumError(Exception):
    """Base exception class for dirsum."""

    pass


class ConfigurationError(DirsumError):
    """Invalid arguments or a missing destination, detected before any work starts."""

    pass


class EnumerationError(DirsumError):
    """Source directory could not be read or one of its entries could not be stat-ed."""

    def __init__(self, directory: Path, cause: Optional[Exception] = None) -> None:
        self.directory = directory
        self.cause = cause
        detail = f": {cause}" if cause else ""
        super().__init__(f"Cannot list {directory}{detail}")


class FileOperationError(DirsumError):
    """Open, read, write or create failure while processing one file."""

    def __init__(self, operation: str, path: Path, cause: Optional[Exception] = None) -> None:
        self.operation = operation
        self.path = path
        self.cause = cause
        detail = f": {cause}" if cause else ""
        super().__init__(f"{operation} failed for {path}{detail}")
