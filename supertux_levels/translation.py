import logging
import os
from typing import List, Optional

logger = logging.getLogger(__name__)


class TranslationRegistry:
    """Tracks directories that hold translations for loaded levels.

    Level directories ship their own ``.po`` files next to the level
    documents; the game's dictionary manager searches every registered
    directory when resolving translatable strings.
    """

    def __init__(self) -> None:
        self._directories: List[str] = []

    @property
    def directories(self) -> List[str]:
        return list(self._directories)

    def register_translation_directory(self, path: str) -> Optional[str]:
        """Registers the directory containing ``path``.

        Args:
            path (str): Path of a level or worldmap document.

        Returns:
            Optional[str]: The newly registered directory, or None if it was already known.
        """
        directory = os.path.dirname(str(path)) or "."
        if directory in self._directories:
            return None
        self._directories.append(directory)
        logger.debug("Registered translation directory '%s'", directory)
        return directory


# Registry shared by loaders that are not given one explicitly.
default_registry = TranslationRegistry()
