"""
Pytest fixtures for organizer tests.

Provides reusable test fixtures for creating temporary directories,
rules files, test files, and output capture.
"""

import pytest
from pathlib import Path

from organizer_cli.config import RuleSet, RunConfig


RULES_TOML = """
[rules.Documents]
extensions = ["pdf", "txt", "docx"]

[rules.Images]
extensions = ["jpg", "png"]

[rules.Code]
extensions = ["py", "txt"]
"""


@pytest.fixture
def temp_dir(tmp_path: Path) -> Path:
    """Create a temporary directory for testing."""
    return tmp_path


@pytest.fixture
def rules_file(temp_dir: Path) -> Path:
    """Write a config.toml inside the directory being organized."""
    f = temp_dir / "config.toml"
    f.write_text(RULES_TOML)
    return f


@pytest.fixture
def rules() -> RuleSet:
    """Rules matching RULES_TOML, built without touching the filesystem."""
    return RuleSet.from_mapping({
        "Documents": ["pdf", "txt", "docx"],
        "Images": ["jpg", "png"],
        "Code": ["py", "txt"],
    })


@pytest.fixture
def run_config(temp_dir: Path) -> RunConfig:
    return RunConfig(directory=temp_dir)


@pytest.fixture
def sample_files(temp_dir: Path) -> dict:
    """
    Create sample files of different types for testing.

    Each file has UNIQUE content to avoid being detected as duplicates.

    Returns a dict mapping expected folder (None = stays in place) to files.
    """
    layout = {
        "Documents": ["report.pdf", "notes.txt", "letter.docx"],
        "Images": ["photo.jpg", "icon.png"],
        "Code": ["script.py"],
        None: ["README", "data.xyz", "PHOTO.JPG"],
    }

    files = {}
    for folder, names in layout.items():
        files[folder] = []
        for name in names:
            f = temp_dir / name
            f.write_text(f"unique content of {name}")
            files[folder].append(f)

    return files


@pytest.fixture
def duplicate_files(temp_dir: Path) -> list:
    """Create three files with identical content, returned in sorted order."""
    content = "This is duplicate content that will produce the same hash."

    files = []
    for name in ["a_copy.txt", "b_copy.txt", "original.txt"]:
        f = temp_dir / name
        f.write_text(content)
        files.append(f)

    return files


@pytest.fixture
def capture_output() -> list:
    """Create a list to capture output from operations."""
    return []


@pytest.fixture
def output_callback(capture_output: list):
    """Create an output callback that captures messages."""
    def callback(message: str) -> None:
        capture_output.append(message)
    return callback
