"""Service layer - listing, channels, worker pool, runner."""
from .scanner import DirectoryScanner, list_regular_files
from .channels import HandoffQueue, ResultChannel, ChannelClosed
from .pool import WorkerPool
from .runner import DirectoryRunner, run_directory

__all__ = [
    "DirectoryScanner",
    "list_regular_files",
    "HandoffQueue",
    "ResultChannel",
    "ChannelClosed",
    "WorkerPool",
    "DirectoryRunner",
    "run_directory",
]
