"""Per-file digest operations.

hash: stream a file through a digest
copy: stream a file to a destination and through a digest in one pass
"""
from __future__ import annotations

import hashlib
import logging
from pathlib import Path

from ..core.config import Operation, RunConfig, DEFAULT_ALGORITHM, DEFAULT_CHUNK_SIZE
from ..core.errors import FileOperationError
from ..core.models import FileResult

logger = logging.getLogger(__name__)


def hash_file(
    path: Path,
    algorithm: str = DEFAULT_ALGORITHM,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> str:
    """Compute the hex digest of file contents.

    Raises:
        FileOperationError: The file could not be opened or fully read.
    """
    digest = hashlib.new(algorithm)
    try:
        with path.open("rb") as f:
            for chunk in iter(lambda: f.read(chunk_size), b""):
                digest.update(chunk)
    except OSError as e:
        raise FileOperationError("hash", path, e) from e
    return digest.hexdigest()


def copy_and_hash(
    source: Path,
    dest: Path,
    algorithm: str = DEFAULT_ALGORITHM,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> tuple[int, str]:
    """Copy source to dest and compute the digest of the bytes copied.

    The destination is created or truncated. Each chunk read is written to
    dest and fed to the digest before the next read.

    Returns:
        (bytes_written, hex_digest)

    Raises:
        FileOperationError: Source could not be read or dest could not be written.
    """
    digest = hashlib.new(algorithm)
    written = 0
    try:
        src = source.open("rb")
    except OSError as e:
        raise FileOperationError("copy", source, e) from e

    with src:
        try:
            dst = dest.open("wb")
        except OSError as e:
            raise FileOperationError("copy", dest, e) from e

        with dst:
            while True:
                try:
                    chunk = src.read(chunk_size)
                except OSError as e:
                    raise FileOperationError("copy", source, e) from e
                if not chunk:
                    break
                try:
                    dst.write(chunk)
                except OSError as e:
                    raise FileOperationError("copy", dest, e) from e
                digest.update(chunk)
                written += len(chunk)
    return written, digest.hexdigest()


class HashOperation:
    """Digest each file in the source directory."""

    def __init__(
        self,
        source_dir: Path,
        algorithm: str = DEFAULT_ALGORITHM,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ):
        self._source_dir = Path(source_dir)
        self._algorithm = algorithm
        self._chunk_size = chunk_size

    @property
    def kind(self) -> Operation:
        return Operation.HASH

    def __call__(self, name: str) -> FileResult:
        digest = hash_file(self._source_dir / name, self._algorithm, self._chunk_size)
        return FileResult(name=name, digest=digest, operation=Operation.HASH)


class CopyAndHashOperation:
    """Copy each file into the destination directory while hashing it."""

    def __init__(
        self,
        source_dir: Path,
        dest_dir: Path,
        algorithm: str = DEFAULT_ALGORITHM,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ):
        self._source_dir = Path(source_dir)
        self._dest_dir = Path(dest_dir)
        self._algorithm = algorithm
        self._chunk_size = chunk_size

    @property
    def kind(self) -> Operation:
        return Operation.COPY

    def __call__(self, name: str) -> FileResult:
        size, digest = copy_and_hash(
            self._source_dir / name,
            self._dest_dir / name,
            self._algorithm,
            self._chunk_size,
        )
        return FileResult(name=name, digest=digest, operation=Operation.COPY, size=size)


def create_operation(config: RunConfig) -> HashOperation | CopyAndHashOperation:
    """Factory function to create the operation a config asks for.

    Args:
        config: Run configuration.

    Returns:
        A FileOperation implementation.
    """
    algorithm = config.algorithm.lower()
    if config.operation == Operation.COPY:
        logger.debug("Using copy-and-hash (%s) into %s", algorithm, config.destination)
        return CopyAndHashOperation(
            config.source, config.destination, algorithm, config.chunk_size
        )
    logger.debug("Using hash-only (%s)", algorithm)
    return HashOperation(config.source, algorithm, config.chunk_size)
