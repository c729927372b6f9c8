"""
supertux_levels Package

This package loads, identifies and creates SuperTux level documents. A level
is a named container of one or more sectors, each with its own tilemaps and
game objects. It encompasses several key modules:

  - level: Implements the Level aggregate holding metadata and ordered sectors.
  - level_parser: Provides LevelParser, which detects the document version,
    dispatches between the legacy and current layouts, and creates new levels
    and worldmaps with unused filenames.
  - reader: Contains the S-expression document reader and writer.
  - sectors: Defines the Sector model and the parser that builds sectors.
  - statistics: Counts coins, badguys and secrets once a level is complete.
  - storage / translation: Injectable collaborators for file access and
    translation directory registration.
  - utils: Offers configuration constants, helpers and argument parsing for
    the command line tool.
"""

from supertux_levels.level import Level
from supertux_levels.level_parser import (
    LevelError,
    LevelLoadError,
    LevelNameResult,
    LevelParser,
    NotALevelError,
    get_level_name,
    probe_level_name,
)

__all__ = [
    "Level",
    "LevelError",
    "LevelLoadError",
    "LevelNameResult",
    "LevelParser",
    "NotALevelError",
    "get_level_name",
    "probe_level_name",
]
