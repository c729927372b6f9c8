from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Dict

if TYPE_CHECKING:  # pragma: no cover - assist typing only
    from supertux_levels.level import Level

logger = logging.getLogger(__name__)

COIN_KINDS = frozenset({"coin", "heavycoin"})
SECRET_KINDS = frozenset({"secretarea"})
BADGUY_KINDS = frozenset({
    "angrystone", "bouncingsnowball", "captainsnowball", "dart", "dispenser",
    "fish", "flame", "flyingsnowball", "ghosttree", "goldbomb", "haywire",
    "iceflame", "igel", "jumpy", "kamikazesnowball", "kugelblitz", "mole",
    "mrbomb", "mrcandle", "mriceblock", "mrtree", "owl", "plant", "poisonivy",
    "skullyhop", "skydive", "smartball", "smartblock", "snail", "snowball",
    "snowman", "spidermite", "spiky", "sspiky", "stalactite", "stumpy",
    "toad", "totem", "walkingleaf", "willowisp", "yeti", "zeekling",
})


class Statistics:
    """Per-level totals used by the game to score a play-through.

    The totals are only meaningful once every sector has been attached to the
    level, so ``init`` is called as the final step of loading or creating one.
    """

    def __init__(self) -> None:
        self.initialized = False
        self.total_coins = 0
        self.total_badguys = 0
        self.total_secrets = 0
        self.target_time = 0.0

    def init(self, level: "Level") -> None:
        """Counts coins, badguys and secret areas across all sectors of ``level``."""
        self.total_coins = 0
        self.total_badguys = 0
        self.total_secrets = 0
        for sector in level.sectors:
            for obj in sector.objects:
                if obj.kind in COIN_KINDS:
                    self.total_coins += 1
                elif obj.kind in BADGUY_KINDS:
                    self.total_badguys += 1
                elif obj.kind in SECRET_KINDS:
                    self.total_secrets += 1
        self.target_time = level.target_time
        self.initialized = True
        logger.debug(
            "Statistics for '%s': %d coins, %d badguys, %d secrets",
            level.name, self.total_coins, self.total_badguys, self.total_secrets,
        )

    def to_dict(self) -> Dict[str, float]:
        return {
            "total_coins": self.total_coins,
            "total_badguys": self.total_badguys,
            "total_secrets": self.total_secrets,
            "target_time": self.target_time,
        }
