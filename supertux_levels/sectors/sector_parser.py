"""Builds ``Sector`` objects from document mappings.

Three entry points mirror the ways a sector comes into existence: a nested
``(sector ...)`` node of a current-format level, the root of a legacy
single-sector level, or nothing at all when a new level is created.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

from supertux_levels.reader.errors import ParserError
from supertux_levels.reader.mapping import ReaderMapping, object_properties
from supertux_levels.utils.config import Config

from .sector import GameObject, Sector, SpawnPoint, TileMap

if TYPE_CHECKING:  # pragma: no cover - assist typing only
    from supertux_levels.level import Level

logger = logging.getLogger(__name__)

# Keys read as sector attributes rather than turned into game objects.
_SECTOR_FIELDS = frozenset({"name", "music", "gravity", "init-script", "ambient-light"})

# Legacy root keys that belong to the level or to the tilemaps.
_LEGACY_SKIPPED = frozenset({
    "version", "name", "author", "width", "height", "time",
    "interactive-tm", "background-tm", "foreground-tm",
    "start_pos_x", "start_pos_y", "music", "gravity", "objects",
})

_LEGACY_TILEMAPS = (
    ("background-tm", "background", False, Config.BACKGROUND_Z_POS),
    ("interactive-tm", "interactive", True, Config.INTERACTIVE_Z_POS),
    ("foreground-tm", "foreground", False, Config.FOREGROUND_Z_POS),
)


def _tilemap_from_values(
    mapping: ReaderMapping,
    name: str,
    width: int,
    height: int,
    tiles_key: str,
    solid: bool,
    z_pos: int,
) -> TileMap:
    tiles = mapping.get_int_list(tiles_key, [])
    try:
        return TileMap.from_flat(name, width, height, tiles, solid=solid, z_pos=z_pos)
    except ValueError as e:
        raise ParserError(str(e), context=mapping.context, line=mapping.node.line) from e


class SectorParser:
    """Populates one sector from a mapping.

    Args:
        sector (Sector): Sector being filled in.
        editable (bool): Whether the level is loaded for editing.
    """

    def __init__(self, sector: Sector, editable: bool) -> None:
        self.sector = sector
        self.editable = editable

    @classmethod
    def from_reader(cls, level: "Level", mapping: ReaderMapping, editable: bool) -> Sector:
        """Builds a sector from a current-format ``(sector ...)`` node.

        Args:
            level (Level): Level the sector will belong to.
            mapping (ReaderMapping): Mapping of the sector node.
            editable (bool): Whether the level is loaded for editing.

        Returns:
            Sector: A sector that no longer references the parser.

        Raises:
            ParserError: If the sector has no name or holds malformed content.
        """
        name = mapping.get_string("name")
        if not name:
            raise ParserError("sector has no name", context=mapping.context, line=mapping.node.line)
        parser = cls(Sector(name=name, editable=editable), editable)
        parser.parse(mapping)
        logger.debug("Parsed sector '%s' of level '%s'", name, level.name)
        return parser.sector

    @classmethod
    def from_reader_old_format(cls, level: "Level", mapping: ReaderMapping, editable: bool) -> Sector:
        """Builds the single sector of a legacy level from its root mapping."""
        parser = cls(Sector(name=Config.DEFAULT_SECTOR_NAME, editable=editable), editable)
        parser.parse_old_format(mapping)
        logger.debug("Parsed legacy sector of level '%s'", level.name)
        return parser.sector

    @classmethod
    def from_nothing(cls, level: "Level") -> Sector:
        """Creates an empty sector; the caller is expected to name it."""
        parser = cls(Sector(name="", editable=False), False)
        parser.create_sector()
        return parser.sector

    def parse(self, mapping: ReaderMapping) -> None:
        sector = self.sector
        sector.music = mapping.get_string("music", sector.music)
        sector.gravity = mapping.get_float("gravity", sector.gravity)
        sector.init_script = mapping.get_string("init-script", sector.init_script)
        ambient = mapping.get_float_list("ambient-light")
        if ambient is not None:
            sector.ambient_light = tuple(ambient)

        for key, obj in mapping.items():
            if key in _SECTOR_FIELDS:
                continue
            if key == "tilemap":
                sector.tilemaps.append(self._parse_tilemap(obj.get_mapping()))
            elif key == "spawnpoint":
                sector.spawnpoints.append(self._parse_spawnpoint(obj.get_mapping()))
            else:
                sector.add_object(GameObject(kind=key, properties=object_properties(obj)))

    def parse_old_format(self, mapping: ReaderMapping) -> None:
        sector = self.sector
        sector.music = mapping.get_string("music", sector.music)
        sector.gravity = mapping.get_float("gravity", sector.gravity)

        width = mapping.get_int("width", 0)
        height = mapping.get_int("height", 0)
        for key, name, solid, z_pos in _LEGACY_TILEMAPS:
            if mapping.has(key):
                sector.tilemaps.append(_tilemap_from_values(mapping, name, width, height, key, solid, z_pos))

        sector.spawnpoints.append(
            SpawnPoint(
                name=Config.DEFAULT_SECTOR_NAME,
                x=mapping.get_float("start_pos_x", 0.0),
                y=mapping.get_float("start_pos_y", 0.0),
            )
        )

        objects = mapping.get_mapping("objects")
        if objects is not None:
            for key, obj in objects.items():
                sector.add_object(GameObject(kind=key, properties=object_properties(obj)))

        # Everything else on the root (background, particles, camera...) is sector scenery.
        for key, obj in mapping.items():
            if key in _LEGACY_SKIPPED:
                continue
            sector.add_object(GameObject(kind=key, properties=object_properties(obj)))

    def create_sector(self) -> None:
        sector = self.sector
        sector.music = Config.DEFAULT_MUSIC
        sector.gravity = Config.DEFAULT_GRAVITY
        width, height = Config.DEFAULT_SECTOR_WIDTH, Config.DEFAULT_SECTOR_HEIGHT
        for _, name, solid, z_pos in _LEGACY_TILEMAPS:
            sector.tilemaps.append(TileMap.empty(name, width, height, solid=solid, z_pos=z_pos))
        sector.spawnpoints.append(
            SpawnPoint(name=Config.DEFAULT_SECTOR_NAME, x=Config.DEFAULT_SPAWN_X, y=Config.DEFAULT_SPAWN_Y)
        )
        sector.add_object(GameObject(kind="camera", properties={"mode": "normal"}))

    def _parse_tilemap(self, mapping: ReaderMapping) -> TileMap:
        width = mapping.get_int("width")
        height = mapping.get_int("height")
        if width is None or height is None:
            raise ParserError("tilemap needs width and height", context=mapping.context, line=mapping.node.line)
        return _tilemap_from_values(
            mapping,
            mapping.get_string("name", ""),
            width,
            height,
            "tiles",
            mapping.get_bool("solid", False),
            mapping.get_int("z-pos", 0),
        )

    def _parse_spawnpoint(self, mapping: ReaderMapping) -> SpawnPoint:
        name: Optional[str] = mapping.get_string("name")
        if name is None:
            raise ParserError("spawnpoint has no name", context=mapping.context, line=mapping.node.line)
        return SpawnPoint(name=name, x=mapping.get_float("x", 0.0), y=mapping.get_float("y", 0.0))
