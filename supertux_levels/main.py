#!/usr/bin/env python3
"""
main.py

Command line entry point for supertux_levels. It parses the command line,
configures logging and runs one of the sub-commands: printing level metadata,
listing the levels of a directory, or creating a new blank level or worldmap.
"""
import sys
import logging
from typing import List, Optional

from supertux_levels.level_parser import LevelError, LevelParser
from supertux_levels.storage import LocalStorage
from supertux_levels.utils.helpers import adjust_save_path, find_level_files
from supertux_levels.utils.parse_args import parse_args

logger = logging.getLogger(__name__)


def run_info(paths: List[str], editable: bool) -> int:
    """Prints metadata for each level; returns 1 if any of them failed to load."""
    status = 0
    for path in paths:
        try:
            level = LevelParser.from_file(path, editable=editable)
        except LevelError:
            logger.error("Could not load %s", path, exc_info=True)
            status = 1
            continue
        metadata = level.get_metadata()
        print(f"{path}:")
        for key in ("name", "author", "contact", "license", "target_time", "tileset"):
            print(f"  {key + ':':<13}{metadata[key] or '(none)'}")
        print(f"  {'sectors:':<13}{', '.join(metadata['sectors']) or '(none)'}")
    return status


def run_list(directory: str) -> int:
    storage = LocalStorage()
    try:
        paths = find_level_files(storage, directory)
    except FileNotFoundError:
        logger.error("Directory %s does not exist", directory)
        return 1
    for path in paths:
        print(f"{path}: {LevelParser.get_level_name(path, storage=storage)}")
    return 0


def run_new(directory: str, worldmap_name: Optional[str]) -> int:
    if worldmap_name is not None:
        level = LevelParser.from_nothing_worldmap(directory, worldmap_name)
    else:
        level = LevelParser.from_nothing(directory)
    path = adjust_save_path(directory, level.filename)
    level.save(path)
    logger.info("Created '%s' in %s", level.name, path)
    print(path)
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the ``supertux-levels`` tool.

    Args:
        argv (Optional[List[str]]): Arguments, defaults to ``sys.argv[1:]``.

    Returns:
        int: Process exit status.
    """
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s: %(message)s",
        stream=sys.stdout,
    )

    if args.command == "info":
        return run_info(args.paths, args.editable)
    if args.command == "list":
        return run_list(args.directory)
    return run_new(args.directory, args.worldmap)


if __name__ == "__main__":
    sys.exit(main())
