import argparse
from typing import List, Optional


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parses command-line arguments for the ``supertux-levels`` tool.

    Three sub-commands are available:
      - ``info``: load one or more levels and print their metadata and sectors.
      - ``list``: print the name of every level document in a directory.
      - ``new``: create a blank level (or worldmap) in a directory and save it.

    Args:
        argv (Optional[List[str]]): Arguments to parse; defaults to ``sys.argv[1:]``.

    Returns:
        argparse.Namespace: Parsed arguments with a ``command`` attribute.
    """
    parser = argparse.ArgumentParser(
        description="Inspect and create SuperTux level documents"
    )
    parser.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging"
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    info = subparsers.add_parser("info", help="Show metadata and sectors of level files")
    info.add_argument(
        "paths",
        nargs="+",
        help="Level (.stl) or worldmap (.stwm) files to load"
    )
    info.add_argument(
        "--editable",
        action="store_true",
        help="Load levels in editable mode"
    )

    listing = subparsers.add_parser("list", help="List level names in a directory")
    listing.add_argument(
        "directory",
        type=str,
        help="Directory containing level files"
    )

    new = subparsers.add_parser("new", help="Create a blank level in a directory")
    new.add_argument(
        "directory",
        type=str,
        help="Directory the new level is allocated in and saved to"
    )
    new.add_argument(
        "--worldmap",
        type=str,
        default=None,
        metavar="NAME",
        help="Create a worldmap with the given name instead of a level"
    )
    return parser.parse_args(argv)
