import io
import logging

import pytest

from supertux_levels import Level, LevelLoadError, LevelParser, NotALevelError
from supertux_levels.level_data import get_level_path
from supertux_levels.reader import ParserError
from supertux_levels.storage import LocalStorage
from supertux_levels.translation import TranslationRegistry
from supertux_levels.utils.config import Config

LOGGER_NAME = "supertux_levels.level_parser"

CURRENT_LEVEL = """
(supertux-level
  (version 2)
  (name (_ "Three Rooms"))
  (author "Bar")
  (contact "bar@example.org")
  (license "GPL 2+ / CC-by-sa 3.0")
  (target-time 45)
  (tileset "images/ice_world.strf")
  (sector (name "A") (mrbomb (x 1) (y 1)))
  (sector (name "B") (coin (x 1) (y 1)))
  (sector (name "C") (secretarea (x 0) (y 0)))
)
"""

LEGACY_LEVEL = """
(supertux-level
  (version 1)
  (name "Foo")
  (author "Bar")
  (width 2)
  (height 1)
  (interactive-tm 1 1)
)
"""


def load(text, **kwargs):
    kwargs.setdefault("translations", TranslationRegistry())
    return LevelParser.from_stream(io.StringIO(text), "test-level", **kwargs)


def warnings_from(caplog):
    return [r for r in caplog.records if r.name == LOGGER_NAME and r.levelno == logging.WARNING]


def test_current_format_keeps_sector_order(caplog):
    caplog.set_level(logging.INFO, logger=LOGGER_NAME)
    level = load(CURRENT_LEVEL)

    assert level.get_sector_names() == ["A", "B", "C"]
    assert level.get_sector(0).name == "A"
    assert level.name == "Three Rooms"
    assert level.author == "Bar"
    assert level.contact == "bar@example.org"
    assert level.license == "GPL 2+ / CC-by-sa 3.0"
    assert level.target_time == 45.0
    assert level.tileset == "images/ice_world.strf"
    # Streams carry no filename.
    assert level.filename == ""
    assert not warnings_from(caplog)


def test_statistics_are_initialised_from_all_sectors():
    level = load(CURRENT_LEVEL)
    assert level.stats.initialized
    assert level.stats.total_badguys == 1
    assert level.stats.total_coins == 1
    assert level.stats.total_secrets == 1
    assert level.stats.target_time == 45.0


def test_legacy_format(caplog):
    caplog.set_level(logging.INFO, logger=LOGGER_NAME)
    level = load(LEGACY_LEVEL)

    assert level.name == "Foo"
    assert level.author == "Bar"
    assert level.get_sector_count() == 1
    assert level.get_sector("main") is not None
    assert any("old format" in r.getMessage() and "test-level" in r.getMessage() for r in caplog.records)


def test_missing_version_takes_the_legacy_path(caplog):
    caplog.set_level(logging.INFO, logger=LOGGER_NAME)
    text = CURRENT_LEVEL.replace("(version 2)", "")
    level = load(text)

    assert any("old format: version 1" in r.getMessage() for r in caplog.records)
    assert level.get_sector_names() == [Config.DEFAULT_SECTOR_NAME]
    assert level.name == "Three Rooms"


def test_missing_license_warns_once(caplog):
    caplog.set_level(logging.INFO, logger=LOGGER_NAME)
    text = CURRENT_LEVEL.replace('(license "GPL 2+ / CC-by-sa 3.0")', '(license "")')
    level = load(text)

    assert level.license == ""
    assert level.get_sector_count() == 3
    records = warnings_from(caplog)
    assert len(records) == 1
    message = records[0].getMessage()
    assert '"Bar"' in message
    assert '"Three Rooms"' in message


def test_unsupported_version_warns_and_yields_no_sectors(caplog):
    caplog.set_level(logging.INFO, logger=LOGGER_NAME)
    level = load(CURRENT_LEVEL.replace("(version 2)", "(version 99)"))

    records = warnings_from(caplog)
    assert len(records) == 1
    assert "99" in records[0].getMessage()
    assert "not supported" in records[0].getMessage()
    assert level.get_sector_count() == 0
    # Defaults survive and statistics still run.
    assert level.name == Config.DEFAULT_LEVEL_NAME
    assert level.stats.initialized


def test_wrong_root_tag_is_fatal():
    with pytest.raises(NotALevelError, match="not a supertux-level file") as excinfo:
        load('(foo (version 2) (name "x"))')
    assert "[test-level]" in str(excinfo.value)


def test_injected_logger_receives_notices():
    logger = logging.getLogger("tests.injected")
    records = []

    class Collect(logging.Handler):
        def emit(self, record):
            records.append(record)

    handler = Collect(level=logging.DEBUG)
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    try:
        load(CURRENT_LEVEL.replace("(version 2)", "(version 3)"), logger=logger)
    finally:
        logger.removeHandler(handler)
    assert [r.levelno for r in records] == [logging.WARNING]


def test_sector_errors_propagate_from_streams():
    text = CURRENT_LEVEL.replace('(sector (name "B") (coin (x 1) (y 1)))', "(sector (coin (x 1) (y 1)))")
    with pytest.raises(ParserError, match="no name"):
        load(text)


def test_duplicate_sector_names_are_rejected():
    text = CURRENT_LEVEL.replace('(name "C")', '(name "A")')
    with pytest.raises(ValueError, match="already has a sector") as excinfo:
        load(text)
    assert "[test-level]" in str(excinfo.value)


def test_from_file_sets_filename_and_registers_translations(tmp_path):
    path = tmp_path / "world" / "three.stl"
    path.parent.mkdir()
    path.write_text(CURRENT_LEVEL, encoding="utf-8")
    registry = TranslationRegistry()

    level = LevelParser.from_file(str(path), translations=registry)

    assert level.filename == str(path)
    assert level.get_sector_count() == 3
    assert registry.directories == [str(path.parent)]


def test_from_file_wraps_errors_with_the_path(tmp_path):
    path = tmp_path / "broken.stl"
    path.write_text('(supertux-level (version 2) (name "x")', encoding="utf-8")

    with pytest.raises(LevelLoadError) as excinfo:
        LevelParser.from_file(str(path), translations=TranslationRegistry())

    assert str(path) in str(excinfo.value)
    assert isinstance(excinfo.value.__cause__, ParserError)


def test_from_file_wraps_wrong_root_tag(tmp_path):
    path = tmp_path / "other.stl"
    path.write_text("(foo (version 2))", encoding="utf-8")

    with pytest.raises(LevelLoadError, match="not a supertux-level file") as excinfo:
        LevelParser.from_file(str(path), translations=TranslationRegistry())
    assert isinstance(excinfo.value.__cause__, NotALevelError)


def test_from_file_missing_file(tmp_path):
    with pytest.raises(LevelLoadError, match="missing.stl"):
        LevelParser.from_file(str(tmp_path / "missing.stl"), translations=TranslationRegistry())


def test_relative_paths_resolve_through_storage(tmp_path):
    (tmp_path / "rel.stl").write_text(LEGACY_LEVEL, encoding="utf-8")
    level = LevelParser.from_file("rel.stl", storage=LocalStorage(tmp_path), translations=TranslationRegistry())
    assert level.filename == "rel.stl"
    assert level.name == "Foo"


def test_bundled_levels_load():
    forest = LevelParser.from_file(str(get_level_path("forest_path")), translations=TranslationRegistry())
    assert forest.get_sector_names() == ["main", "bonus"]
    assert forest.stats.total_coins == 2
    assert forest.stats.total_badguys == 2

    meadow = LevelParser.from_file(str(get_level_path("old_meadow.stl")), translations=TranslationRegistry())
    assert meadow.name == "Old Meadow"
    assert meadow.get_sector_count() == 1
    assert meadow.stats.total_badguys == 2


def test_fresh_level_defaults():
    level = Level()
    assert level.filename == ""
    assert level.sectors == []
    assert level.target_time == Config.TARGET_TIME_UNSET
    assert not level.stats.initialized


def test_unsupported_version_skips_sector_content():
    text = '(supertux-level (version 99) (name "Future") (sector (coin 1)) (sector (name "A")) (sector (name "A")))'
    level = load(text)
    assert level.get_sector_count() == 0
    assert level.stats.initialized


def test_invalid_utf8_stream_names_the_source():
    stream = io.BytesIO(b'(supertux-level (version 2) (name "Caf\xe9"))')
    with pytest.raises(ParserError, match="UTF-8") as excinfo:
        LevelParser.from_stream(stream, "latin1-level", translations=TranslationRegistry())
    assert "latin1-level" in str(excinfo.value)


def test_metadata_lists_fields_and_sectors():
    metadata = load(CURRENT_LEVEL).get_metadata()
    assert metadata["name"] == "Three Rooms"
    assert metadata["contact"] == "bar@example.org"
    assert metadata["target_time"] == 45.0
    assert metadata["sectors"] == ["A", "B", "C"]
