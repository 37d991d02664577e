"""
Economy tiers: the discrete classification that drives prices.

A tier is derived from a single prosperity value. The same thresholds
classify both the stored (raw) prosperity and the government-adjusted
(effective) prosperity. All thresholds come from EconomyConfig.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from emberwood.core.config import EconomyConfig


class TierId(Enum):
    """The three economic tiers, in ascending order of prosperity."""
    STRUGGLING = "struggling"
    STABLE = "stable"
    THRIVING = "thriving"

    @classmethod
    def parse(cls, value: Any) -> TierId | None:
        """Return the tier for an id or enum, or *None* if unrecognized."""
        if isinstance(value, TierId):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass(frozen=True)
class Tier:
    """Static price data for one tier."""
    id: TierId
    name: str
    merchant_price_multiplier: float
    rest_cost_base: int
    price_descriptor: str
    description: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id.value,
            "name": self.name,
            "merchant_price_multiplier": self.merchant_price_multiplier,
            "rest_cost_base": self.rest_cost_base,
            "price_descriptor": self.price_descriptor,
            "description": self.description,
        }


class TierTable:
    """
    Classifies prosperity into tiers.

    ``prosperity < struggling_below`` is struggling, ``prosperity >
    thriving_above`` is thriving, everything between (inclusive) is
    stable. With the default thresholds: 0-34, 35-70, 71-100.
    """

    def __init__(self, config: EconomyConfig):
        self.config = config
        self._tiers: dict[TierId, Tier] = {}
        for tier_id in TierId:
            row = config.tiers[tier_id.value]
            self._tiers[tier_id] = Tier(
                id=tier_id,
                name=row["name"],
                merchant_price_multiplier=float(row["merchant_price_multiplier"]),
                rest_cost_base=int(row["rest_cost_base"]),
                price_descriptor=row.get("price_descriptor", ""),
                description=row.get("description", ""),
            )

    def tier_id_for(self, prosperity: float) -> TierId:
        """Classify a prosperity value."""
        if prosperity < self.config.struggling_below:
            return TierId.STRUGGLING
        elif prosperity > self.config.thriving_above:
            return TierId.THRIVING
        return TierId.STABLE

    def classify(self, prosperity: float) -> Tier:
        return self._tiers[self.tier_id_for(prosperity)]

    def get(self, tier_id: TierId | str) -> Tier:
        """Return a tier by id; unknown ids resolve to the stable tier."""
        parsed = TierId.parse(tier_id)
        return self._tiers[parsed or TierId.STABLE]

    def all(self) -> list[Tier]:
        """All tiers, struggling first."""
        return [self._tiers[t] for t in TierId]
