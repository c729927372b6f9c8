"""Loading and creation of level documents.

``LevelParser`` turns a document (from a file or a stream) into a ``Level``,
dispatching on the ``version`` field between the legacy single-sector layout
and the current layout with nested ``sector`` nodes. It also creates brand new
levels and worldmaps, picking a filename that is not used yet in the target
directory.

Collaborators are injected rather than global: a ``Storage`` for file access,
a ``TranslationRegistry`` for per-level translation directories and a
``logging.Logger`` for notices and warnings.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import IO, Any, Optional, Tuple

from supertux_levels.level import Level
from supertux_levels.reader.document import ReaderDocument
from supertux_levels.reader.mapping import ReaderMapping
from supertux_levels.sectors.sector_parser import SectorParser
from supertux_levels.storage import LocalStorage, Storage
from supertux_levels.translation import TranslationRegistry, default_registry
from supertux_levels.utils.config import Config


class LevelError(RuntimeError):
    """Base class for fatal level loading errors."""


class NotALevelError(LevelError):
    """The document root is not a ``supertux-level`` node."""


class LevelLoadError(LevelError):
    """Loading a level from a file failed; the message names the file."""


@dataclass(frozen=True)
class LevelNameResult:
    """Outcome of a metadata probe.

    Attributes:
        name (str): Level name, empty when unknown.
        error (Optional[str]): Description of the failure, None on success.
    """

    name: str = ""
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class LevelParser:
    """Fills a single ``Level`` from a document or from scratch.

    Args:
        level (Level): Level being populated.
        editable (bool): Whether sectors are loaded for editing.
        storage (Optional[Storage]): File access; defaults to ``LocalStorage()``.
        translations (Optional[TranslationRegistry]): Translation directory registrar.
        logger (Optional[logging.Logger]): Destination for notices and warnings.
    """

    def __init__(
        self,
        level: Level,
        editable: bool = False,
        storage: Optional[Storage] = None,
        translations: Optional[TranslationRegistry] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.level = level
        self.editable = editable
        self.storage = storage if storage is not None else LocalStorage()
        self.translations = translations if translations is not None else default_registry
        self.logger = logger if logger is not None else logging.getLogger(__name__)

    # ------------------------------------------------------------------
    # Metadata probe
    # ------------------------------------------------------------------
    @classmethod
    def probe_level_name(
        cls,
        filename: str,
        storage: Optional[Storage] = None,
        translations: Optional[TranslationRegistry] = None,
        logger: Optional[logging.Logger] = None,
    ) -> LevelNameResult:
        """Reads only the root tag and ``name`` field of a level document.

        Any failure produces a result carrying the error text and a logged
        warning instead of raising; a document with a different root tag
        produces an empty name without a warning.
        """
        parser = cls(Level(), storage=storage, translations=translations, logger=logger)
        try:
            parser.translations.register_translation_directory(filename)
            doc = parser._read_document(filename)
            root = doc.get_root()
            if root.name != Config.LEVEL_ROOT_TAG:
                return LevelNameResult()
            return LevelNameResult(name=root.get_mapping().get_string("name", ""))
        except Exception as e:
            parser.logger.warning("Problem getting name of '%s': %s", filename, e)
            return LevelNameResult(error=str(e))

    @classmethod
    def get_level_name(cls, filename: str, **collaborators: Any) -> str:
        """Returns the level name stored in ``filename`` or ``""`` if it cannot be read."""
        return cls.probe_level_name(filename, **collaborators).name

    # ------------------------------------------------------------------
    # Construction entry points
    # ------------------------------------------------------------------
    @classmethod
    def from_stream(cls, stream: IO[Any], context: str, editable: bool = False, **collaborators: Any) -> Level:
        """Loads a level from an open stream; ``context`` only labels diagnostics."""
        level = Level()
        cls(level, editable, **collaborators).load_stream(stream, context)
        return level

    @classmethod
    def from_file(cls, filename: str, editable: bool = False, **collaborators: Any) -> Level:
        """Loads a level from ``filename``.

        Raises:
            LevelLoadError: If the file cannot be read or is not a valid level.
        """
        level = Level()
        cls(level, editable, **collaborators).load_file(filename)
        return level

    @classmethod
    def from_nothing(cls, basedir: str, **collaborators: Any) -> Level:
        """Creates a blank level named after the first free ``level<N>.stl`` in ``basedir``."""
        level = Level()
        parser = cls(level, False, **collaborators)
        num, level_file = parser.find_free_filename(basedir, "level", Config.LEVEL_EXTENSION)
        parser.create(level_file, f"Level {num}", worldmap=False)
        return level

    @classmethod
    def from_nothing_worldmap(cls, basedir: str, name: str, **collaborators: Any) -> Level:
        """Creates a blank worldmap, preferring ``worldmap.stwm`` when it is still free."""
        level = Level()
        parser = cls(level, False, **collaborators)
        level_file = "worldmap" + Config.WORLDMAP_EXTENSION
        if parser.storage.exists(os.path.join(basedir, level_file)):
            _, level_file = parser.find_free_filename(basedir, "worldmap", Config.WORLDMAP_EXTENSION)
        parser.create(level_file, name, worldmap=True)
        return level

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------
    def load_stream(self, stream: IO[Any], context: str) -> None:
        self.load_document(ReaderDocument.from_stream(stream, context))

    def load_file(self, filepath: str) -> None:
        self.level.filename = filepath
        self.translations.register_translation_directory(filepath)
        try:
            self.load_document(self._read_document(filepath))
        except Exception as e:
            raise LevelLoadError(f"Problem when reading level '{filepath}': {e}") from e

    def load_document(self, doc: ReaderDocument) -> None:
        """Populates the level from a parsed document.

        Raises:
            NotALevelError: If the root node is not ``supertux-level``.
            ParserError: If a field or sector is malformed.
        """
        root = doc.get_root()
        if root.name != Config.LEVEL_ROOT_TAG:
            raise NotALevelError(f"[{doc.get_filename()}] file is not a {Config.LEVEL_ROOT_TAG} file.")

        mapping = root.get_mapping()
        version = mapping.get_int("version", Config.LEGACY_FORMAT_VERSION)
        if version == Config.LEGACY_FORMAT_VERSION:
            self.logger.info("[%s] level uses old format: version %d", doc.get_filename(), version)
            self._load_old_format(mapping)
        elif version == Config.CURRENT_FORMAT_VERSION:
            self._load_current_format(mapping, doc.get_filename())
        else:
            self.logger.warning("[%s] level format version %d is not supported", doc.get_filename(), version)

        self.level.stats.init(self.level)

    def _load_old_format(self, mapping: ReaderMapping) -> None:
        level = self.level
        level.name = mapping.get_string("name", level.name)
        level.author = mapping.get_string("author", level.author)

        sector = SectorParser.from_reader_old_format(level, mapping, self.editable)
        level.add_sector(sector)

    def _load_current_format(self, mapping: ReaderMapping, source: str) -> None:
        level = self.level
        level.tileset = mapping.get_string("tileset", level.tileset)
        level.name = mapping.get_string("name", level.name)
        level.author = mapping.get_string("author", level.author)
        level.contact = mapping.get_string("contact", level.contact)
        level.license = mapping.get_string("license", level.license)
        level.target_time = mapping.get_float("target-time", level.target_time)

        for key, obj in mapping.items():
            if key == "sector":
                sector = SectorParser.from_reader(level, obj.get_mapping(), self.editable)
                try:
                    level.add_sector(sector)
                except ValueError as e:
                    raise ValueError(f"[{source}] {e}") from e

        if not level.license:
            self.logger.warning(
                '[%s] The level author "%s" did not specify a license for this level "%s". '
                "You might not be allowed to share it.",
                source, level.author, level.name,
            )

    def _read_document(self, filepath: str) -> ReaderDocument:
        with self.storage.open(filepath) as handle:
            return ReaderDocument.from_stream(handle, filepath)

    # ------------------------------------------------------------------
    # Creation
    # ------------------------------------------------------------------
    def find_free_filename(self, basedir: str, stem: str, extension: str) -> Tuple[int, str]:
        """Probes ``basedir/<stem><N><extension>`` for N = 1, 2, ... until one is free.

        Not safe against another process creating the same file between the
        check and the save.

        Returns:
            Tuple[int, str]: The chosen number and the directory-less filename.
        """
        num = 0
        while True:
            num += 1
            level_file = f"{stem}{num}{extension}"
            if not self.storage.exists(os.path.join(basedir, level_file)):
                return num, level_file

    def create(self, filepath: str, levelname: str, worldmap: bool) -> None:
        level = self.level
        level.filename = filepath
        level.name = levelname
        level.license = Config.DEFAULT_LICENSE
        level.tileset = Config.DEFAULT_WORLDMAP_TILESET if worldmap else Config.DEFAULT_TILESET

        sector = SectorParser.from_nothing(level)
        sector.set_name(Config.DEFAULT_SECTOR_NAME)
        level.add_sector(sector)
        self.logger.debug("Created %s '%s' as %s", "worldmap" if worldmap else "level", levelname, filepath)


get_level_name = LevelParser.get_level_name
probe_level_name = LevelParser.probe_level_name
