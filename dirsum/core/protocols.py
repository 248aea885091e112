"""Protocol definitions (interfaces) for dependency injection."""
from __future__ import annotations

from abc import abstractmethod
from typing import Protocol

from .config import Operation
from .models import FileResult, RunStats


class FileOperation(Protocol):
    """A unit of work applied to one filename.

    Implementations:
    - HashOperation: digest of the source file
    - CopyAndHashOperation: copy to destination while hashing
    """

    @property
    @abstractmethod
    def kind(self) -> Operation:
        """Which operation this is."""
        ...

    @abstractmethod
    def __call__(self, name: str) -> FileResult:
        """Process one file, named relative to the source directory.

        Raises:
            FileOperationError: The file could not be processed.
        """
        ...


class ProgressReporter(Protocol):
    """Interface for progress reporting."""

    @abstractmethod
    def start_phase(self, name: str, total: int) -> None:
        """Start a new processing phase."""
        ...

    @abstractmethod
    def advance_phase(self, amount: int = 1) -> None:
        """Advance the current phase by an amount."""
        ...

    @abstractmethod
    def end_phase(self) -> None:
        """Complete current phase."""
        ...

    @abstractmethod
    def success(self, message: str) -> None:
        """Log a success message."""
        ...

    @abstractmethod
    def warning(self, message: str) -> None:
        """Log a warning message."""
        ...

    @abstractmethod
    def error(self, message: str) -> None:
        """Log an error message."""
        ...

    @abstractmethod
    def debug(self, message: str) -> None:
        """Log a debug message."""
        ...

    @abstractmethod
    def print_header(self, title: str) -> None:
        """Show a title banner."""
        ...

    @abstractmethod
    def print_config(self, config_items: dict) -> None:
        """Show the effective configuration."""
        ...

    @abstractmethod
    def print_stats(self, stats: RunStats) -> None:
        """Show run statistics."""
        ...

