"""
Command-line interface for the organizer.

Handles argument parsing and orchestrates operations.
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .config import DEFAULT_CONFIG_FILENAME, RunConfig, load_rules
from .exceptions import OrganizerError
from .operations import organize_directory
from .utils import display_path


def create_parser() -> argparse.ArgumentParser:
    """
    Create the argument parser for the CLI.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog="organizer",
        description="Organize the files of a directory into subfolders by extension",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=f"""
Config file format ({DEFAULT_CONFIG_FILENAME}):
  [rules.Documents]
  extensions = ["pdf", "txt"]

  [rules.Images]
  extensions = ["jpg", "png"]

  Extensions are case-sensitive and written without the dot.
  If an extension appears in several rules, the first rule wins.

Safety:
  Only files directly inside the directory are touched. Subfolders and
  the config file itself are left alone.
  --deduplicate DELETES every file whose content matches an earlier file
  (in sorted order). Use --dry-run to preview changes before applying.
        """
    )

    parser.add_argument(
        "directory",
        type=str,
        help="Directory to organize"
    )

    parser.add_argument(
        "--config", "-c",
        type=str,
        default=DEFAULT_CONFIG_FILENAME,
        help=f"Path to the rules file (default: {DEFAULT_CONFIG_FILENAME})"
    )

    parser.add_argument(
        "--dry-run", "-n",
        action="store_true",
        help="Preview changes without moving or deleting files"
    )

    parser.add_argument(
        "--deduplicate", "-d",
        action="store_true",
        help="Delete files whose content is identical to an earlier file"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    return parser


def run(args: argparse.Namespace) -> int:
    """
    Run the organizer with the given arguments.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, 1 for error)
    """
    run_config = RunConfig(
        directory=Path(args.directory).expanduser(),
        config_path=Path(args.config).expanduser(),
        dry_run=args.dry_run,
        deduplicate=args.deduplicate,
    )

    try:
        # Rules are loaded before the directory is touched
        rules = load_rules(run_config.config_path)

        print(f"Directory to organize: {display_path(run_config.directory)}")
        if run_config.dry_run:
            print("Dry-run mode enabled.")
        if run_config.deduplicate:
            print("Duplicate detection enabled.")

        organize_directory(run_config, rules)

    except OrganizerError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except Exception as e:
        print(f"Error: {type(e).__name__}: {e}", file=sys.stderr)
        return 1

    print("\nOrganization complete!")
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
