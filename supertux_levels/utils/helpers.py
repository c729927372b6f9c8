import os
from typing import List

from supertux_levels.storage import Storage
from supertux_levels.utils.config import Config


def is_level_file(filename: str) -> bool:
    """Returns True for filenames with a level or worldmap extension."""
    return filename.lower().endswith((Config.LEVEL_EXTENSION, Config.WORLDMAP_EXTENSION))


def find_level_files(storage: Storage, directory: str) -> List[str]:
    """Lists level and worldmap documents directly inside ``directory``.

    Args:
        storage (Storage): Storage used to enumerate the directory.
        directory (str): Directory to scan.

    Returns:
        List[str]: Paths (``directory`` joined with the entry name) in sorted order.

    Raises:
        FileNotFoundError: If ``directory`` does not exist.
    """
    if not storage.exists(directory):
        raise FileNotFoundError(f"Level directory not found: {directory}")
    return [os.path.join(directory, entry) for entry in storage.listdir(directory) if is_level_file(entry)]


def adjust_save_path(directory: str, filename: str) -> str:
    """Joins ``directory`` and ``filename`` and makes sure the directory exists.

    Freshly created levels only carry a directory-less filename; the directory
    they were allocated in is the place they get saved to.

    Args:
        directory (str): Target directory, created if missing.
        filename (str): Bare level filename such as ``level3.stl``.

    Returns:
        str: Full path to write the level to.
    """
    os.makedirs(directory, exist_ok=True)
    return os.path.join(directory, filename)
