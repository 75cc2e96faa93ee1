"""
Core file operations for the organizer.

These functions perform the actual file system operations (delete, move).
They use a callback pattern for output to separate concerns from the CLI.

Each run is a single pass over the sorted directory listing. For every file:
    1. (optional) hash it; if an earlier file had the same content, remove it
    2. otherwise look up its extension in the rules and move it to that folder

Any I/O failure stops the run. Files handled before the failure stay
where they were put.
"""

import shutil
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Callable, Dict, List, Optional, Tuple

from .config import RuleSet, RunConfig
from .exceptions import FileOperationError
from .scanner import DirectoryEntry, list_entries
from .utils import compute_file_hash, display_path, format_file_size, get_file_size_bytes


class EntryOutcome(Enum):
    """What happened to a listed file."""
    DUPLICATE_REMOVED = "duplicate_removed"
    MOVED = "moved"
    LEFT_IN_PLACE = "left_in_place"


@dataclass
class OperationResult:
    """Result of an organize run with statistics."""
    moved_count: int = 0
    duplicate_count: int = 0
    skip_count: int = 0
    actions: List[str] = field(default_factory=list)
    outcomes: List[Tuple[Path, EntryOutcome]] = field(default_factory=list)

    # Bytes of duplicate content removed (or that would be, in dry-run)
    space_recovered: int = 0

    def record(self, path: Path, outcome: EntryOutcome) -> None:
        self.outcomes.append((path, outcome))
        if outcome is EntryOutcome.MOVED:
            self.moved_count += 1
        elif outcome is EntryOutcome.DUPLICATE_REMOVED:
            self.duplicate_count += 1
        else:
            self.skip_count += 1


class SeenHashRegistry:
    """
    Content hash -> first path seen with that hash, for a single run.

    Example:
        registry = SeenHashRegistry()
        registry.check("ab12...", Path("a.txt"))  # None, now registered
        registry.check("ab12...", Path("b.txt"))  # Path("a.txt")
    """

    def __init__(self) -> None:
        self._seen: Dict[str, Path] = {}

    def check(self, digest: str, path: Path) -> Optional[Path]:
        """
        Look up a digest, registering the path if it is new.

        Returns:
            Path of the original file if the digest was already seen, else None
        """
        original = self._seen.get(digest)
        if original is None:
            self._seen[digest] = path
        return original


# Type alias for output callback
OutputCallback = Callable[[str], None]


def _default_output(message: str) -> None:
    """Default output callback that prints to stdout."""
    print(message)


def _remove_if_duplicate(
    entry: DirectoryEntry,
    registry: SeenHashRegistry,
    run_config: RunConfig,
    result: OperationResult,
    output: OutputCallback,
) -> bool:
    """Run the dedup stage for one file. Returns True if it was a duplicate."""
    try:
        digest = compute_file_hash(entry.path, run_config.hash_buffer_size)
    except OSError as e:
        raise FileOperationError("hash", entry.path, e) from e

    original = registry.check(digest, entry.path)
    if original is None:
        return False

    output(f"  [DUPLICATE] {display_path(entry.path)} is a duplicate of {display_path(original)}")

    try:
        size = get_file_size_bytes(entry.path)
    except OSError as e:
        raise FileOperationError("stat", entry.path, e) from e

    if not run_config.dry_run:
        try:
            entry.path.unlink()
        except OSError as e:
            raise FileOperationError("delete", entry.path, e) from e

    result.space_recovered += size
    result.actions.append(f"{display_path(entry.name)} (duplicate of {display_path(original.name)})")

    if run_config.dry_run:
        output(f"  [WOULD DELETE] {display_path(entry.path)}")
    else:
        output(f"  [DELETED] {display_path(entry.path)}")
    return True


def _move_to_folder(entry: DirectoryEntry, folder: str, run_config: RunConfig, output: OutputCallback) -> None:
    """
    Move a file into folder, or report the move in dry-run.

    Dry-run checks the same preconditions as a real move so the preview
    fails on the same file a real run would.
    """
    folder_dir = run_config.directory / folder
    destination = folder_dir / entry.name

    if run_config.dry_run:
        if folder_dir.exists() and not folder_dir.is_dir():
            raise FileOperationError("mkdir", folder_dir, detail="a file with that name already exists")
    else:
        try:
            folder_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise FileOperationError("mkdir", folder_dir, e) from e

    if destination.exists():
        raise FileOperationError("move", entry.path, detail=f"destination '{display_path(destination)}' already exists")

    if run_config.dry_run:
        output(f"  [WOULD MOVE] {display_path(entry.path)} -> {folder}/")
        return

    try:
        shutil.move(str(entry.path), str(destination))
    except OSError as e:
        raise FileOperationError("move", entry.path, e) from e

    output(f"  [MOVED] {display_path(entry.path)} -> {display_path(destination)}")


def process_entry(
    entry: DirectoryEntry,
    rules: RuleSet,
    run_config: RunConfig,
    registry: Optional[SeenHashRegistry] = None,
    result: Optional[OperationResult] = None,
    output: OutputCallback = _default_output,
) -> EntryOutcome:
    """
    Deduplicate, classify and move a single file.

    Args:
        entry: Listed file to process
        rules: Extension routing rules
        run_config: Parameters of the current run
        registry: Hashes seen so far; pass None to skip duplicate detection
        result: Run statistics to update (optional)
        output: Callback for output messages

    Returns:
        The outcome for this file. In dry-run, MOVED means "would be moved"
        and DUPLICATE_REMOVED means "would be deleted".

    Raises:
        FileOperationError: If hashing, deleting, creating the folder or moving fails.
            Dry-run raises on the same preconditions a real move would hit.
    """
    if result is None:
        result = OperationResult()

    if registry is not None and _remove_if_duplicate(entry, registry, run_config, result, output):
        outcome = EntryOutcome.DUPLICATE_REMOVED
    else:
        folder = rules.find_folder(entry.extension) if entry.extension else None

        if folder is None:
            outcome = EntryOutcome.LEFT_IN_PLACE
        else:
            _move_to_folder(entry, folder, run_config, output)
            result.actions.append(f"{display_path(entry.name)} -> {folder}/")
            outcome = EntryOutcome.MOVED

    result.record(entry.path, outcome)
    return outcome


def organize_directory(
    run_config: RunConfig,
    rules: RuleSet,
    output: OutputCallback = _default_output,
) -> OperationResult:
    """
    Organize the files in run_config.directory according to the rules.

    Files are processed in sorted path order. With deduplication enabled,
    the first file of each group of identical files is kept and organized;
    the later ones are deleted and never organized.

    Args:
        run_config: Parameters of the run
        rules: Extension routing rules
        output: Callback for output messages

    Returns:
        OperationResult with statistics

    Raises:
        ListingError: If the directory cannot be read
        FileOperationError: On the first per-file failure
    """
    result = OperationResult()

    entries = list_entries(run_config.directory, exclude_name=run_config.config_filename)

    if not entries:
        output("No files found to organize.")
        return result

    registry = SeenHashRegistry() if run_config.deduplicate else None

    prefix = "[DRY RUN] " if run_config.dry_run else ""
    output(f"\n{prefix}Processing {len(entries)} files in: {display_path(run_config.directory)}\n")
    output("-" * 60)

    for entry in entries:
        process_entry(entry, rules, run_config, registry=registry, result=result, output=output)

    output("-" * 60)

    space_str = format_file_size(result.space_recovered)
    if run_config.dry_run:
        output(
            f"\n[DRY RUN] Would move {result.moved_count} files, "
            f"would remove {result.duplicate_count} duplicates"
        )
        if run_config.deduplicate:
            output(f"Potential space savings: {space_str}")
        output("Run without --dry-run to apply changes.")
    else:
        output(
            f"\nSummary: {result.moved_count} moved, "
            f"{result.duplicate_count} duplicates removed, "
            f"{result.skip_count} left in place"
        )
        if run_config.deduplicate:
            output(f"Space freed by removing duplicates: {space_str}")

    return result
