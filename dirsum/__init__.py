"""Parallel directory hashing and copying.

Lists the regular files of a flat directory and hashes (or copies and
hashes) them with a bounded pool of worker threads.
"""

__version__ = "1.0.0"

# Core exports
from .core.config import RunConfig, Operation, MAX_WORKERS, DEFAULT_WORKERS
from .core.errors import DirsumError, ConfigurationError, EnumerationError, FileOperationError
from .core.models import FileResult, RunStats
from .core.protocols import FileOperation, ProgressReporter

# Engine exports
from .engines.digest import hash_file, copy_and_hash, create_operation

# Service exports
from .services.scanner import list_regular_files, DirectoryScanner
from .services.pool import WorkerPool
from .services.runner import DirectoryRunner, run_directory

# Logging exports
from .logging.rich_logger import RichProgressReporter

__all__ = [
    # Core
    "RunConfig",
    "Operation",
    "MAX_WORKERS",
    "DEFAULT_WORKERS",
    "DirsumError",
    "ConfigurationError",
    "EnumerationError",
    "FileOperationError",
    "FileResult",
    "RunStats",
    "FileOperation",
    "ProgressReporter",
    # Engines
    "hash_file",
    "copy_and_hash",
    "create_operation",
    # Services
    "list_regular_files",
    "DirectoryScanner",
    "WorkerPool",
    "DirectoryRunner",
    "run_directory",
    # Logging
    "RichProgressReporter",
]
