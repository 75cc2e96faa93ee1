"""
Exceptions raised by the organizer.

Every failure is fatal for the run. The CLI catches OrganizerError,
prints the message to stderr and exits with a non-zero status.
"""

from pathlib import Path
from typing import Optional

from .utils import display_path


class OrganizerError(Exception):
    """Base class for all organizer errors."""


class ConfigError(OrganizerError):
    """The rules file could not be read or does not have the expected shape."""


class ListingError(OrganizerError):
    """The target directory could not be listed."""

    def __init__(self, directory: Path, cause: OSError):
        self.directory = directory
        self.cause = cause
        super().__init__(f"Could not list directory '{display_path(directory)}': {cause.strerror or cause}")


class FileOperationError(OrganizerError):
    """
    A per-file operation failed mid-run.

    Attributes:
        operation: Short name of the failed step ("hash", "stat", "delete", "mkdir", "move")
        path: File or folder the operation was applied to
        cause: Underlying OSError, if any
    """

    def __init__(self, operation: str, path: Path, cause: Optional[OSError] = None, detail: str = ""):
        self.operation = operation
        self.path = path
        self.cause = cause
        reason = detail or (cause.strerror if cause is not None and cause.strerror else str(cause))
        super().__init__(f"{operation} failed for '{display_path(path)}': {reason}")
