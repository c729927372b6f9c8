"""Sector model and the parser that builds sectors from level documents."""

from .sector import GameObject, Sector, SpawnPoint, TileMap
from .sector_parser import SectorParser

__all__ = [
    "GameObject",
    "Sector",
    "SectorParser",
    "SpawnPoint",
    "TileMap",
]
