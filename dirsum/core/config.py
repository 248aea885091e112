"""Configuration dataclasses with validation."""
from __future__ import annotations

import hashlib
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional

from .errors import ConfigurationError


DEFAULT_WORKERS = 10
MAX_WORKERS = 30
DEFAULT_ALGORITHM = "sha1"
DEFAULT_CHUNK_SIZE = 1024 * 1024


class Operation(Enum):
    """Which per-file operation a run applies."""
    HASH = "hash"    # Digest only
    COPY = "copy"    # Copy to destination while hashing


def clamp_workers(requested: int, maximum: int = MAX_WORKERS) -> int:
    """Clamp a requested worker count to the hard maximum.

    Values above the cap are silently reduced, never rejected.
    """
    if requested < 1:
        raise ConfigurationError(f"Workers must be at least 1, got {requested}")
    return min(requested, maximum)


@dataclass(frozen=True, slots=True)
class RunConfig:
    """Configuration for a single directory run.

    All fields are validated on construction.
    This is the only configuration object passed through the system.
    """
    # Required
    source: Path
    operation: Operation = Operation.HASH
    destination: Optional[Path] = None

    # Performance
    workers: int = DEFAULT_WORKERS
    max_workers: int = MAX_WORKERS
    chunk_size: int = DEFAULT_CHUNK_SIZE

    # Digest
    algorithm: str = DEFAULT_ALGORITHM

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.workers < 1:
            raise ConfigurationError(f"Workers must be at least 1, got {self.workers}")

        if self.max_workers < 1:
            raise ConfigurationError("Worker cap must be at least 1")

        if self.chunk_size < 1:
            raise ConfigurationError("Chunk size must be at least 1")

        algorithm = self.algorithm.lower()
        if algorithm not in hashlib.algorithms_available:
            raise ConfigurationError(f"Unknown digest algorithm: {self.algorithm}")
        # Variable-length digests need an explicit length
        if algorithm.startswith("shake_"):
            raise ConfigurationError(f"Unsupported digest algorithm: {self.algorithm}")

        if self.operation == Operation.COPY and self.destination is None:
            raise ConfigurationError("Copy requires a destination directory")

    @property
    def effective_workers(self) -> int:
        """Worker count after applying the cap."""
        return clamp_workers(self.workers, self.max_workers)

    @property
    def was_clamped(self) -> bool:
        return self.workers > self.max_workers

