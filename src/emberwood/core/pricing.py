"""
Price quotes derived from the effective economy tier.

Merchant prices scale a base price by the tier multiplier (wandering
merchants add a flat surcharge); tavern rest starts at the tier's base
cost and may be scaled by an active town hall decree.
"""

from __future__ import annotations

from enum import Enum
from typing import TYPE_CHECKING, Any

from emberwood.core.decrees import DecreeStatus, decree_status
from emberwood.core.deriver import EconomyDeriver
from emberwood.core.numbers import finite_number, round_half_up

if TYPE_CHECKING:
    from emberwood.core.config import EconomyConfig
    from emberwood.core.decrees import DecreeEffectReader
    from emberwood.core.state import EconomyState, GovernmentEffect, TownHallEffect
    from emberwood.core.tiers import Tier


class MarketContext(str, Enum):
    """Where a purchase happens."""
    VILLAGE = "village"
    WANDERING = "wandering"

    @classmethod
    def parse(cls, value: Any) -> MarketContext | None:
        """Return the context for a name or enum, or *None* if unknown."""
        if isinstance(value, MarketContext):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


def rest_cost_for(tier: Tier, decree: TownHallEffect | None, today: int) -> int:
    """Rest cost for a tier given an already-observed decree (no side effects)."""
    cost = tier.rest_cost_base
    if (
        decree_status(decree, today) is DecreeStatus.ACTIVE
        and decree.rest_cost_multiplier is not None
    ):
        cost = max(0, round_half_up(cost * decree.rest_cost_multiplier))
    return cost


class PriceQuoter:
    """Computes merchant prices and rest costs."""

    def __init__(self, config: EconomyConfig, deriver: EconomyDeriver | None = None):
        self.config = config
        self.deriver = deriver or EconomyDeriver(config)

    def get_merchant_price(
        self,
        base_price: float,
        state: EconomyState,
        government: GovernmentEffect | None = None,
        context: MarketContext | str = MarketContext.VILLAGE,
    ) -> int:
        """Price for a shop item; always an integer >= 1."""
        summary = self.deriver.derive_summary(state, government)
        mult = summary.tier.merchant_price_multiplier

        # Wandering merchants charge a bit more
        if MarketContext.parse(context) is MarketContext.WANDERING:
            mult += self.config.wandering_surcharge

        return max(1, round_half_up(finite_number(base_price) * mult))

    def get_rest_cost(
        self,
        state: EconomyState,
        government: GovernmentEffect | None = None,
        today: int = 0,
        decrees: DecreeEffectReader | None = None,
        settlement_id: str | None = None,
    ) -> int:
        """
        Tavern rest cost for ``today``.

        Reading the decree through ``decrees`` deletes it once it has
        expired, so this quote can mutate the decree board.
        """
        summary = self.deriver.derive_summary(state, government)
        decree = None
        if decrees is not None:
            decree = decrees.observe(settlement_id or self.config.settlement_id, today)
        return rest_cost_for(summary.tier, decree, today)
