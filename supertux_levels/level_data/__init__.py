"""Sample level documents bundled with the package.

Provides a lookup helper so tests and tools can locate the shipped ``.stl``
and ``.stwm`` files without hard-coding installation paths.
"""

from pathlib import Path

from supertux_levels.utils.config import Config


def get_level_path(name: str) -> Path:
    """Returns the path of a bundled level document.

    Args:
        name (str): Filename of the document, with or without its extension.

    Returns:
        Path: Absolute path to the document.

    Raises:
        FileNotFoundError: If no bundled document matches ``name``.
    """
    root = Path(__file__).resolve().parent
    candidates = [root / name] + [root / f"{name}{ext}" for ext in (Config.LEVEL_EXTENSION, Config.WORLDMAP_EXTENSION)]
    for candidate in candidates:
        if candidate.is_file():
            return candidate
    raise FileNotFoundError(f"Level '{name}' not found in {root}")
