"""
Organizer - Sort the files of a directory into subfolders by extension.

This package loads extension rules from a TOML file, optionally removes
byte-identical duplicate files, and moves the rest into rule folders.
"""

__version__ = "1.0.0"

from .config import Rule, RuleSet, RunConfig, load_rules
from .exceptions import ConfigError, FileOperationError, ListingError, OrganizerError
from .operations import (
    EntryOutcome,
    OperationResult,
    SeenHashRegistry,
    organize_directory,
    process_entry,
)
from .scanner import DirectoryEntry, list_entries

__all__ = [
    "Rule",
    "RuleSet",
    "RunConfig",
    "load_rules",
    "ConfigError",
    "FileOperationError",
    "ListingError",
    "OrganizerError",
    "EntryOutcome",
    "OperationResult",
    "SeenHashRegistry",
    "organize_directory",
    "process_entry",
    "DirectoryEntry",
    "list_entries",
]
