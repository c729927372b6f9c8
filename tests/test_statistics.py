from supertux_levels.level import Level
from supertux_levels.sectors import GameObject, Sector
from supertux_levels.statistics import Statistics


def make_level(*sectors):
    level = Level()
    for sector in sectors:
        level.add_sector(sector)
    return level


def test_counts_across_sectors():
    first = Sector(name="main", objects=[GameObject("coin"), GameObject("snowball"), GameObject("camera")])
    second = Sector(name="bonus", objects=[GameObject("heavycoin"), GameObject("secretarea"), GameObject("mrbomb")])
    level = make_level(first, second)
    level.target_time = 90.0

    stats = Statistics()
    stats.init(level)

    assert stats.initialized
    assert stats.to_dict() == {
        "total_coins": 2,
        "total_badguys": 2,
        "total_secrets": 1,
        "target_time": 90.0,
    }


def test_init_recounts():
    sector = Sector(name="main", objects=[GameObject("coin")])
    level = make_level(sector)
    stats = Statistics()
    stats.init(level)
    sector.add_object(GameObject("coin"))
    stats.init(level)
    assert stats.total_coins == 2


def test_zero_sector_level():
    stats = Statistics()
    stats.init(Level())
    assert stats.initialized
    assert stats.total_coins == stats.total_badguys == stats.total_secrets == 0
