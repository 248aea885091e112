"""Domain models - immutable data classes."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .config import Operation


@dataclass(frozen=True, slots=True)
class FileResult:
    """Result of applying an operation to one file."""
    name: str
    digest: str
    operation: Operation = Operation.HASH
    size: Optional[int] = None  # Bytes written, copy mode only

    def format_line(self) -> str:
        """Render the result as a single output line."""
        if self.operation == Operation.COPY:
            return f"{self.name} {self.size} {self.digest}"
        return f"{self.name}: {self.digest}"

    def __str__(self) -> str:
        return self.format_line()


@dataclass(slots=True)
class RunStats:
    """Mutable statistics for a processing run."""
    files_listed: int = 0
    processed: int = 0
    bytes_processed: int = 0
    workers: int = 0
    elapsed_seconds: float = 0.0

    def record(self, result: FileResult) -> None:
        """Record a processing result."""
        self.processed += 1
        if result.size is not None:
            self.bytes_processed += result.size

    @property
    def files_per_second(self) -> float:
        if self.elapsed_seconds > 0:
            return self.processed / self.elapsed_seconds
        return 0.0

    def summary(self) -> dict[str, int]:
        return {
            "listed": self.files_listed,
            "processed": self.processed,
            "bytes": self.bytes_processed,
            "workers": self.workers,
        }
