"""
Configuration for the organizer.

Two frozen dataclasses: RuleSet, the extension routing table loaded from a
TOML file, and RunConfig, the parameters of a single invocation.
Both are immutable for the duration of a run.
"""

import tomllib
from dataclasses import dataclass
from pathlib import Path, PurePath
from typing import Any, Dict, FrozenSet, Iterable, Iterator, Mapping, Optional, Tuple

from .exceptions import ConfigError
from .utils import DEFAULT_HASH_BUFFER_SIZE

DEFAULT_CONFIG_FILENAME = "config.toml"


def check_folder_name(folder: str, source: str = "rules") -> None:
    """
    Make sure a rule folder stays inside the organized directory.

    Nested folders ("Media/Pictures") are allowed. Absolute paths, ".."
    components and names that point at the directory itself ("", ".") are not.

    Raises:
        ConfigError: If the folder name is not a relative subfolder
    """
    path = PurePath(folder)
    if path.is_absolute() or path.drive or path.root:
        raise ConfigError(f"{source}: folder '{folder}' must be a relative path")
    if ".." in path.parts:
        raise ConfigError(f"{source}: folder '{folder}' must not contain '..'")
    if not path.parts:
        raise ConfigError(f"{source}: folder '{folder}' must name a subfolder")


@dataclass(frozen=True)
class Rule:
    """A destination folder and the extensions routed to it."""
    folder: str
    extensions: FrozenSet[str]

    def matches(self, extension: str) -> bool:
        return extension in self.extensions


@dataclass(frozen=True)
class RuleSet:
    """
    Ordered, immutable table of folder -> extensions rules.

    Rules keep the order in which they are declared in the config file.
    When an extension is listed under several folders, the first one wins.

    Example:
        rules = RuleSet.from_mapping({"Documents": ["pdf", "txt"]})
        rules.find_folder("pdf")  # "Documents"
    """

    rules: Tuple[Rule, ...] = ()

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Iterable[str]], source: str = "rules") -> "RuleSet":
        """
        Build a RuleSet from a folder -> extensions mapping, keeping its order.

        Raises:
            ConfigError: If a folder name would leave the organized directory
        """
        for folder in mapping:
            check_folder_name(folder, source)
        return cls(tuple(
            Rule(folder=folder, extensions=frozenset(extensions))
            for folder, extensions in mapping.items()
        ))

    def find_folder(self, extension: str) -> Optional[str]:
        """
        Get the destination folder for a file extension.

        Matching is case-sensitive and the extension has no leading dot.

        Args:
            extension: File extension (e.g., "pdf")

        Returns:
            Folder name of the first matching rule, or None if nothing matches
        """
        for rule in self.rules:
            if rule.matches(extension):
                return rule.folder
        return None

    @property
    def folders(self) -> Tuple[str, ...]:
        return tuple(rule.folder for rule in self.rules)

    def __iter__(self) -> Iterator[Rule]:
        return iter(self.rules)

    def __len__(self) -> int:
        return len(self.rules)


@dataclass(frozen=True)
class RunConfig:
    """Parameters for one run of the organizer."""
    directory: Path
    config_path: Path = Path(DEFAULT_CONFIG_FILENAME)
    dry_run: bool = False
    deduplicate: bool = False
    hash_buffer_size: int = DEFAULT_HASH_BUFFER_SIZE

    @property
    def config_filename(self) -> str:
        """Bare file name of the config file, excluded from organizing."""
        return self.config_path.name


def _parse_rule(config_path: Path, folder: str, raw: Any) -> FrozenSet[str]:
    if not isinstance(raw, dict):
        raise ConfigError(f"{config_path}: rule '{folder}' must be a table")
    if "extensions" not in raw:
        raise ConfigError(f"{config_path}: rule '{folder}' is missing 'extensions'")

    extensions = raw["extensions"]
    if not isinstance(extensions, list) or not all(isinstance(ext, str) for ext in extensions):
        raise ConfigError(f"{config_path}: 'extensions' of rule '{folder}' must be a list of strings")

    return frozenset(extensions)


def parse_rules(data: Dict[str, Any], config_path: Path = Path(DEFAULT_CONFIG_FILENAME)) -> RuleSet:
    """
    Validate parsed TOML data and build a RuleSet.

    Args:
        data: Parsed TOML document
        config_path: Path used in error messages

    Returns:
        RuleSet with rules in declaration order

    Raises:
        ConfigError: If the data does not have the expected shape, or a
            folder name points outside the organized directory
    """
    if "rules" not in data:
        raise ConfigError(f"{config_path}: missing [rules] table")

    raw_rules = data["rules"]
    if not isinstance(raw_rules, dict):
        raise ConfigError(f"{config_path}: 'rules' must be a table")

    return RuleSet.from_mapping(
        {folder: _parse_rule(config_path, folder, raw) for folder, raw in raw_rules.items()},
        source=str(config_path),
    )


def load_rules(config_path: Path) -> RuleSet:
    """
    Read and validate the rules file.

    The expected format is one table per destination folder:

        [rules.Documents]
        extensions = ["pdf", "txt"]

    Args:
        config_path: Path to the TOML config file

    Returns:
        RuleSet loaded from the file

    Raises:
        ConfigError: If the file cannot be read or parsed
    """
    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except OSError as e:
        raise ConfigError(f"Could not read config file '{config_path}': {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Could not parse config file '{config_path}': {e}") from e

    return parse_rules(data, config_path)
