"""Per-file digest operations."""
from .digest import (
    hash_file,
    copy_and_hash,
    HashOperation,
    CopyAndHashOperation,
    create_operation,
)

__all__ = [
    "hash_file",
    "copy_and_hash",
    "HashOperation",
    "CopyAndHashOperation",
    "create_operation",
]
