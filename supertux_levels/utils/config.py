class Config:
    # Document format
    LEVEL_ROOT_TAG = "supertux-level"
    LEGACY_FORMAT_VERSION = 1
    CURRENT_FORMAT_VERSION = 2
    LEVEL_EXTENSION = ".stl"
    WORLDMAP_EXTENSION = ".stwm"

    # Metadata seeded into freshly created levels
    DEFAULT_LICENSE = "CC-BY-SA 4.0 International"
    DEFAULT_TILESET = "images/tiles.strf"
    DEFAULT_WORLDMAP_TILESET = "images/worldmap.strf"
    DEFAULT_LEVEL_NAME = "noname"
    DEFAULT_AUTHOR = "Mr. X"
    TARGET_TIME_UNSET = 0.0  # No par time set for the level

    # Empty sector layout
    DEFAULT_SECTOR_NAME = "main"
    DEFAULT_SECTOR_WIDTH = 100  # Tiles
    DEFAULT_SECTOR_HEIGHT = 35  # Tiles
    DEFAULT_SPAWN_X = 64.0
    DEFAULT_SPAWN_Y = 480.0
    DEFAULT_GRAVITY = 10.0
    DEFAULT_MUSIC = "music/chipdisko.ogg"
    BACKGROUND_Z_POS = -100
    INTERACTIVE_Z_POS = 0
    FOREGROUND_Z_POS = 100

    # Writer
    INDENT_WIDTH = 2
