from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

import numpy as np

from supertux_levels.reader.writer import Writer
from supertux_levels.utils.config import Config


@dataclass
class TileMap:
    """Rectangular grid of tile ids.

    Attributes:
        name (str): Layer name, e.g. ``interactive``.
        tiles (np.ndarray): ``(height, width)`` integer array; 0 is an empty tile.
        solid (bool): Whether the layer takes part in collision.
        z_pos (int): Draw order relative to other layers.
    """

    name: str
    tiles: np.ndarray
    solid: bool = False
    z_pos: int = 0

    @classmethod
    def from_flat(
        cls,
        name: str,
        width: int,
        height: int,
        values: Iterable[int],
        solid: bool = False,
        z_pos: int = 0,
    ) -> TileMap:
        """Builds a tilemap from row-major tile ids.

        Raises:
            ValueError: If the number of values does not equal ``width * height``.
        """
        data = np.asarray(list(values), dtype=np.int32)
        if width < 0 or height < 0:
            raise ValueError(f"tilemap '{name}' has negative size {width}x{height}")
        if data.size != width * height:
            raise ValueError(
                f"tilemap '{name}' declares {width}x{height} tiles but holds {data.size} values"
            )
        return cls(name=name, tiles=data.reshape((height, width)), solid=solid, z_pos=z_pos)

    @classmethod
    def empty(cls, name: str, width: int, height: int, solid: bool = False, z_pos: int = 0) -> TileMap:
        return cls(name=name, tiles=np.zeros((height, width), dtype=np.int32), solid=solid, z_pos=z_pos)

    @property
    def width(self) -> int:
        return int(self.tiles.shape[1])

    @property
    def height(self) -> int:
        return int(self.tiles.shape[0])

    def count(self, tile_ids: Iterable[int]) -> int:
        """Number of cells holding any of ``tile_ids``."""
        return int(np.isin(self.tiles, list(tile_ids)).sum())

    def write(self, writer: Writer) -> None:
        writer.start_list("tilemap")
        writer.write("name", self.name)
        writer.write("solid", self.solid)
        writer.write("z-pos", self.z_pos)
        writer.write("width", self.width)
        writer.write("height", self.height)
        writer.write_rows("tiles", self.tiles.ravel(), self.width)
        writer.end_list("tilemap")


@dataclass
class SpawnPoint:
    name: str
    x: float
    y: float

    def write(self, writer: Writer) -> None:
        writer.start_list("spawnpoint")
        writer.write("name", self.name)
        writer.write("x", self.x)
        writer.write("y", self.y)
        writer.end_list("spawnpoint")


@dataclass
class GameObject:
    """Any sector entry that is not a tilemap or spawnpoint (badguys, coins, camera...)."""

    kind: str
    properties: Dict[str, Any] = field(default_factory=dict)

    @property
    def name(self) -> str:
        return str(self.properties.get("name", ""))

    def write(self, writer: Writer) -> None:
        if set(self.properties) == {"value"}:
            writer.write(self.kind, self.properties["value"])
        else:
            writer.write(self.kind, self.properties)


@dataclass
class Sector:
    """Independently playable area of a level.

    Attributes:
        name (str): Sector name; ``main`` is the conventional entry sector.
        editable (bool): Whether the sector was loaded for editing.
        music (str): Music file path.
        gravity (float): Gravity applied in this sector.
        init_script (str): Script run when the sector is entered.
        ambient_light (Optional[Tuple[float, ...]]): RGB(A) ambient light if set.
        tilemaps (List[TileMap]): Tile layers in document order.
        spawnpoints (List[SpawnPoint]): Named spawn positions.
        objects (List[GameObject]): Remaining game objects in document order.
    """

    name: str
    editable: bool = False
    music: str = ""
    gravity: float = Config.DEFAULT_GRAVITY
    init_script: str = ""
    ambient_light: Optional[Tuple[float, ...]] = None
    tilemaps: List[TileMap] = field(default_factory=list)
    spawnpoints: List[SpawnPoint] = field(default_factory=list)
    objects: List[GameObject] = field(default_factory=list)

    def set_name(self, name: str) -> None:
        self.name = name

    def get_tilemap(self, name: str) -> Optional[TileMap]:
        return next((tilemap for tilemap in self.tilemaps if tilemap.name == name), None)

    def get_spawnpoint(self, name: str) -> Optional[SpawnPoint]:
        return next((spawn for spawn in self.spawnpoints if spawn.name == name), None)

    def get_objects(self, kind: str) -> List[GameObject]:
        return [obj for obj in self.objects if obj.kind == kind]

    def add_object(self, obj: GameObject) -> None:
        self.objects.append(obj)

    def write(self, writer: Writer) -> None:
        """Writes the sector as a current-format ``(sector ...)`` node."""
        writer.start_list("sector")
        writer.write("name", self.name)
        if self.music:
            writer.write("music", self.music)
        writer.write("gravity", self.gravity)
        if self.init_script:
            writer.write("init-script", self.init_script)
        if self.ambient_light is not None:
            writer.write("ambient-light", list(self.ambient_light))
        for spawnpoint in self.spawnpoints:
            spawnpoint.write(writer)
        for tilemap in self.tilemaps:
            tilemap.write(writer)
        for obj in self.objects:
            obj.write(writer)
        writer.end_list("sector")

