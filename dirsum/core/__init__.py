"""Core domain models, errors and protocols."""
from .protocols import FileOperation, ProgressReporter
from .models import FileResult, RunStats
from .config import RunConfig, Operation, clamp_workers, MAX_WORKERS, DEFAULT_WORKERS
from .errors import DirsumError, ConfigurationError, EnumerationError, FileOperationError

__all__ = [
    # Protocols
    "FileOperation",
    "ProgressReporter",
    # Models
    "FileResult",
    "RunStats",
    # Config
    "RunConfig",
    "Operation",
    "clamp_workers",
    "MAX_WORKERS",
    "DEFAULT_WORKERS",
    # Errors
    "DirsumError",
    "ConfigurationError",
    "EnumerationError",
    "FileOperationError",
]
