"""
Directory listing for the organizer.

Produces a sorted, non-recursive snapshot of the files to process.
The order decides which of several identical files is kept as the
original, so it must be the same on every run over the same directory.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

from .exceptions import ListingError
from .utils import get_extension


@dataclass(frozen=True)
class DirectoryEntry:
    """A path in the target directory with its cached metadata."""
    path: Path
    is_dir: bool
    extension: Optional[str]

    @property
    def name(self) -> str:
        return self.path.name

    @classmethod
    def from_path(cls, path: Path) -> "DirectoryEntry":
        return cls(path=path, is_dir=path.is_dir(), extension=get_extension(path))


def sort_key(path: Path) -> bytes:
    """Sort key giving lexicographic byte order of the full path."""
    return os.fsencode(path)


def list_entries(directory: Path, exclude_name: Optional[str] = None) -> List[DirectoryEntry]:
    """
    List the files directly inside a directory, sorted by full path.

    Args:
        directory: Directory to list (not recursed into)
        exclude_name: File name to leave out, normally the config file's

    Returns:
        File entries in lexicographic byte order of their paths.
        Subdirectories and the excluded name are not included.

    Raises:
        ListingError: If the directory cannot be read
    """
    try:
        paths = sorted(directory.iterdir(), key=sort_key)
        entries = [DirectoryEntry.from_path(path) for path in paths]
    except OSError as e:
        raise ListingError(directory, e) from e

    return [
        entry for entry in entries
        if not entry.is_dir and entry.name != exclude_name
    ]
