"""Directory runner - checks preconditions, lists files, drives the pool."""
from __future__ import annotations

import time
from pathlib import Path
from typing import Iterator, Optional

from ..core.config import Operation, RunConfig, DEFAULT_WORKERS
from ..core.errors import ConfigurationError
from ..core.models import FileResult, RunStats
from ..core.protocols import FileOperation
from ..engines.digest import create_operation
from .pool import WorkerPool
from .scanner import DirectoryScanner


class DirectoryRunner:
    """Runs one operation over every regular file of a source directory.

    All dependencies are injected - no global state.
    """

    def __init__(
        self,
        config: RunConfig,
        scanner: Optional[DirectoryScanner] = None,
        operation: Optional[FileOperation] = None,
    ):
        """Initialize runner with config and dependencies.

        Args:
            config: Run configuration.
            scanner: Directory lister (default: DirectoryScanner).
            operation: Per-file operation (default: built from config).
        """
        self._config = config
        self._scanner = scanner or DirectoryScanner()
        self._operation = operation or create_operation(config)
        self._stats = RunStats()

    @property
    def stats(self) -> RunStats:
        return self._stats

    def check_preconditions(self) -> None:
        """Fail before any dispatch if the destination is unusable.

        Raises:
            ConfigurationError: Copy destination does not exist or is the
                source directory itself.
        """
        if self._config.operation != Operation.COPY:
            return
        destination = self._config.destination
        if destination is None or not destination.is_dir():
            raise ConfigurationError(f"Can't find directory {destination}")
        # Opening a file for writing onto itself truncates it before it is read
        if destination.resolve() == self._config.source.resolve():
            raise ConfigurationError(
                f"Destination {destination} is the source directory"
            )

    def list_files(self) -> list[str]:
        """List the source directory.

        Raises:
            EnumerationError: Source directory could not be listed.
        """
        return self._scanner.scan(self._config.source)

    def process(self, names: list[str]) -> Iterator[FileResult]:
        """Run the operation over names with the worker pool.

        Raises:
            FileOperationError: A file could not be processed.
        """
        start = time.monotonic()
        pool = WorkerPool(
            self._operation,
            workers=self._config.workers,
            max_workers=self._config.max_workers,
        )
        self._stats = RunStats(files_listed=len(names), workers=pool.size)

        try:
            for result in pool.run(names):
                self._stats.record(result)
                yield result
        finally:
            self._stats.elapsed_seconds = time.monotonic() - start

    def run(self) -> Iterator[FileResult]:
        """Yield one result per file, in completion order.

        Preconditions are checked and the directory listed before the
        first result is requested from the pool.

        Raises:
            ConfigurationError: Preconditions not met.
            EnumerationError: Source directory could not be listed.
            FileOperationError: A file could not be processed.
        """
        self.check_preconditions()
        yield from self.process(self.list_files())


def run_directory(
    source: Path,
    destination: Optional[Path] = None,
    workers: int = DEFAULT_WORKERS,
    **kwargs,
) -> Iterator[FileResult]:
    """Hash (or copy and hash, when destination is given) a directory.

    Extra keyword arguments are passed to RunConfig.
    """
    operation = Operation.COPY if destination is not None else Operation.HASH
    config = RunConfig(
        source=Path(source),
        destination=Path(destination) if destination is not None else None,
        operation=operation,
        workers=workers,
        **kwargs,
    )
    return DirectoryRunner(config).run()
