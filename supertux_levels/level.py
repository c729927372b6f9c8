from __future__ import annotations

from pathlib import Path
from typing import IO, Any, Dict, List, Optional, Union

from supertux_levels.reader.writer import Writer
from supertux_levels.sectors.sector import Sector
from supertux_levels.statistics import Statistics
from supertux_levels.utils.config import Config


class Level:
    """A loadable level or worldmap: metadata plus an ordered list of sectors.

    A Level starts empty and is filled in by exactly one ``LevelParser`` call
    (a load or a create). The first sector is the entry sector by convention.

    Attributes:
        filename (str): Path the level was loaded from or will be saved to.
        name (str): Display name.
        author (str): Author name.
        contact (str): Author contact details.
        license (str): License the level is shared under; may be empty.
        target_time (float): Par time in seconds, ``Config.TARGET_TIME_UNSET`` when absent.
        tileset (str): Tileset resource used by all sectors.
        sectors (List[Sector]): Sectors in document order.
        stats (Statistics): Totals initialised once all sectors are attached.
    """

    def __init__(self) -> None:
        self.filename = ""
        self.name = Config.DEFAULT_LEVEL_NAME
        self.author = Config.DEFAULT_AUTHOR
        self.contact = ""
        self.license = ""
        self.target_time = Config.TARGET_TIME_UNSET
        self.tileset = Config.DEFAULT_TILESET
        self.sectors: List[Sector] = []
        self.stats = Statistics()

    def __repr__(self) -> str:
        return f"Level(name={self.name!r}, filename={self.filename!r}, sectors={len(self.sectors)})"

    def add_sector(self, sector: Sector) -> None:
        """Takes ownership of ``sector`` and appends it.

        Raises:
            ValueError: If a sector with the same name is already present.
        """
        if self.get_sector(sector.name) is not None:
            raise ValueError(f"level '{self.name}' already has a sector named '{sector.name}'")
        self.sectors.append(sector)

    def get_sector(self, key: Union[str, int]) -> Optional[Sector]:
        """Looks a sector up by name or by position."""
        if isinstance(key, int):
            if 0 <= key < len(self.sectors):
                return self.sectors[key]
            return None
        return next((sector for sector in self.sectors if sector.name == key), None)

    def get_sector_count(self) -> int:
        return len(self.sectors)

    def get_sector_names(self) -> List[str]:
        return [sector.name for sector in self.sectors]

    @property
    def is_worldmap(self) -> bool:
        return self.filename.endswith(Config.WORLDMAP_EXTENSION) or self.tileset == Config.DEFAULT_WORLDMAP_TILESET

    def get_metadata(self) -> Dict[str, Any]:
        """Returns the descriptive fields of the level as a dict."""
        return {
            "filename": self.filename,
            "name": self.name,
            "author": self.author,
            "contact": self.contact,
            "license": self.license,
            "target_time": self.target_time,
            "tileset": self.tileset,
            "sectors": self.get_sector_names(),
        }

    def write(self, writer: Writer) -> None:
        writer.start_list(Config.LEVEL_ROOT_TAG)
        writer.write("version", Config.CURRENT_FORMAT_VERSION)
        writer.write("name", self.name, translatable=True)
        writer.write("author", self.author)
        if self.contact:
            writer.write("contact", self.contact)
        writer.write("license", self.license)
        if self.target_time != Config.TARGET_TIME_UNSET:
            writer.write("target-time", self.target_time)
        writer.write("tileset", self.tileset)
        for sector in self.sectors:
            sector.write(writer)
        writer.end_list(Config.LEVEL_ROOT_TAG)

    def save(self, target: Union[str, Path, IO[str]]) -> None:
        """Writes the level as a current-format document.

        Args:
            target: File path or text stream. Paths are overwritten in place.
        """
        if isinstance(target, (str, Path)):
            with open(target, "w", encoding="utf-8") as handle:
                self.write(Writer(handle))
        else:
            self.write(Writer(target))
