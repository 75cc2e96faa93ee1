"""
Pure utility functions for the organizer.

These functions are stateless and have no side effects (except reading files).
They are easy to unit test in isolation.
"""

import hashlib
import os
from pathlib import Path
from typing import Optional, Union

DEFAULT_HASH_BUFFER_SIZE = 64 * 1024


def display_path(path: Union[str, Path]) -> str:
    """
    Render a path for console output.

    Names that are not valid UTF-8 are legal on POSIX and come back from the
    OS with surrogate escapes, which cannot be printed. Their raw bytes are
    shown as backslash escapes instead, e.g. "caf\\xe9.pdf".
    """
    return os.fsencode(path).decode("utf-8", errors="backslashreplace")


def get_extension(file_path: Path) -> Optional[str]:
    """
    Get the extension of a file: the text after the last dot in its name.

    Args:
        file_path: Path to the file

    Returns:
        Extension without the dot, or None if the name has none.
        Dotfiles such as ".bashrc" and names ending in a dot have no extension.

    Example:
        >>> get_extension(Path("archive.tar.gz"))
        'gz'
    """
    name = file_path.name
    stem, dot, extension = name.rpartition(".")
    if not dot or not stem or not extension:
        return None
    return extension


def get_file_size_bytes(file_path: Path) -> int:
    return file_path.stat().st_size


def format_file_size(size_bytes: int) -> str:
    """
    Convert bytes to human-readable format (KB, MB, GB).

    Example:
        >>> format_file_size(1536)
        '1.50 KB'
    """
    size = float(size_bytes)
    for unit in ['B', 'KB', 'MB', 'GB', 'TB']:
        if size < 1024:
            return f"{size:.2f} {unit}" if unit != 'B' else f"{int(size)} {unit}"
        size /= 1024
    return f"{size:.2f} PB"


def compute_file_hash(file_path: Path, buffer_size: int = DEFAULT_HASH_BUFFER_SIZE) -> str:
    """
    Compute the SHA-256 hash of a file for duplicate detection.

    Reads the file in chunks to handle large files efficiently.

    Args:
        file_path: Path to the file to hash
        buffer_size: Size of chunks to read

    Returns:
        SHA-256 hash as a 64-character lower-case hex string

    Raises:
        OSError: If the file cannot be opened or read
    """
    hasher = hashlib.sha256()

    with open(file_path, 'rb') as f:
        while chunk := f.read(buffer_size):
            hasher.update(chunk)

    return hasher.hexdigest()
