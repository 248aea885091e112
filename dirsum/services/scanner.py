"""Directory scanning service."""
from __future__ import annotations

import os
import stat
from pathlib import Path

from ..core.errors import EnumerationError


def list_regular_files(directory: Path) -> list[str]:
    """List the regular files at the top level of a directory.

    Entries are stat-ed without following symlinks, so symlinks,
    subdirectories, sockets and devices are all left out. Order is
    whatever the directory read returns.

    Raises:
        EnumerationError: The directory or one of its entries could not be read.
    """
    directory = Path(directory)
    try:
        names = os.listdir(directory)
    except OSError as e:
        raise EnumerationError(directory, e) from e

    files = []
    for name in names:
        try:
            mode = os.lstat(directory / name).st_mode
        except OSError as e:
            raise EnumerationError(directory, e) from e
        if stat.S_ISREG(mode):
            files.append(name)
    return files


class DirectoryScanner:
    """Lists regular files in a flat source directory.

    Thin object wrapper so the runner can take the scanner as a dependency.
    """

    def scan(self, directory: Path) -> list[str]:
        """Return the top-level regular file names of directory."""
        return list_regular_files(directory)
