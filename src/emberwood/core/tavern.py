"""Tavern rest: pay the tier-driven cost and sleep until the next morning."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from emberwood.core.numbers import finite_number
from emberwood.core.pricing import MarketContext

if TYPE_CHECKING:
    from emberwood.core.service import VillageEconomyService
    from emberwood.core.state import EffectiveSummary


@dataclass(frozen=True)
class RestReceipt:
    """Outcome of a rest attempt."""
    rested: bool
    cost: int
    gold_remaining: float
    day: int | None = None


def describe_economy(summary: EffectiveSummary) -> str:
    tier = summary.tier
    return f"Village economy: {tier.name} – rooms and food are {tier.price_descriptor}."


def rest_until_morning(
    service: VillageEconomyService, gold: float, next_day: int,
) -> RestReceipt:
    """
    Rent a room if the guest can afford it.

    The cost is quoted at the moment of paying. Paying counts as a
    village purchase, then the economy ticks for ``next_day``.
    """
    gold = finite_number(gold)
    cost = service.get_rest_cost()
    if gold < cost:
        return RestReceipt(rested=False, cost=cost, gold_remaining=gold)

    service.handle_after_purchase(cost, MarketContext.VILLAGE)
    service.handle_day_tick(next_day)
    return RestReceipt(rested=True, cost=cost, gold_remaining=gold - cost, day=next_day)
