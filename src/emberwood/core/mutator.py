"""
Write path of the economy: the three state transitions.

Each handler takes the old raw state plus an event payload and returns
a ``Transition`` holding the new state and the event to emit. A no-op
returns the very same state object and no event. Handlers never raise
for numeric input: malformed numbers are coerced, and unknown areas or
contexts are no-ops.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, Any, Mapping

import numpy as np

from emberwood.core.decrees import DecreeStatus, decree_status
from emberwood.core.events import AfterBattle, AfterPurchase, DayTicked, EconomyEvent
from emberwood.core.numbers import clamp_round, finite_number, round_half_up
from emberwood.core.pricing import MarketContext
from emberwood.core.state import DecreeNudge
from emberwood.core.tiers import TierTable

if TYPE_CHECKING:
    from emberwood.core.config import EconomyConfig
    from emberwood.core.state import EconomyState, TownHallEffect

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Enemy:
    """The part of a defeated enemy the economy cares about."""
    is_boss: bool = False

    @classmethod
    def from_raw(cls, raw: Any) -> Enemy:
        """Accept an Enemy, a mapping with isBoss/is_boss, any object with is_boss, or None."""
        if isinstance(raw, Enemy):
            return raw
        if raw is None:
            return cls()
        if isinstance(raw, Mapping):
            return cls(is_boss=bool(raw.get("is_boss", raw.get("isBoss", False))))
        return cls(is_boss=bool(getattr(raw, "is_boss", False)))


@dataclass(frozen=True)
class Transition:
    """Result of a mutator call."""
    state: EconomyState
    event: EconomyEvent | None = None

    @property
    def changed(self) -> bool:
        return self.event is not None


class EconomyMutator:
    """Day tick, after-battle, and after-purchase transitions."""

    def __init__(
        self,
        config: EconomyConfig,
        rng: np.random.Generator | None = None,
        tiers: TierTable | None = None,
    ):
        self.config = config
        self.rng = rng if rng is not None else np.random.default_rng(config.random_seed)
        self.tiers = tiers or TierTable(config)

    # ------------------------------------------------------------------
    # Day tick
    # ------------------------------------------------------------------
    def handle_day_tick(
        self,
        state: EconomyState,
        absolute_day: Any,
        decree: TownHallEffect | None = None,
        settlement_id: str | None = None,
    ) -> Transition:
        """
        Apply one day of drift plus any active decree deltas.

        Guarded: a tick for the day already recorded in
        ``last_day_updated`` is a no-op, as is a non-finite day.
        """
        day_value = finite_number(absolute_day, fallback=math.nan)
        if math.isnan(day_value):
            logger.debug("Ignoring day tick with malformed day %r", absolute_day)
            return Transition(state)
        day = int(math.floor(day_value))

        if state.last_day_updated == day:
            logger.debug("Day %s already applied; skipping tick", day)
            return Transition(state)

        # Slight random drift in prosperity (biased a bit upward)
        drift = (self.rng.random() - self.config.drift_bias) * self.config.drift_scale
        prosperity = clamp_round(state.prosperity + drift, 0, 100)

        prosperity_delta = trade_delta = security_delta = 0
        nudge = state.last_decree_nudge
        # Only decrees raised from a petition move the metrics
        if decree_status(decree, day) is DecreeStatus.ACTIVE and decree.petition_id:
            prosperity_delta = round_half_up(finite_number(decree.econ_prosperity_delta))
            trade_delta = round_half_up(finite_number(decree.econ_trade_delta))
            security_delta = round_half_up(finite_number(decree.econ_security_delta))
            if prosperity_delta or trade_delta or security_delta:
                nudge = DecreeNudge(
                    day=day,
                    decree_id=decree.petition_id,
                    deltas={
                        "prosperity": prosperity_delta,
                        "trade": trade_delta,
                        "security": security_delta,
                    },
                )

        prosperity = clamp_round(prosperity + prosperity_delta, 0, 100)
        new_state = replace(
            state,
            prosperity=prosperity,
            trade=clamp_round(state.trade + trade_delta, 0, 100),
            security=clamp_round(state.security + security_delta, 0, 100),
            tier_id=self.tiers.tier_id_for(prosperity),
            last_day_updated=day,
            last_decree_nudge=nudge,
        )

        applied = nudge if nudge is not state.last_decree_nudge else None
        event = DayTicked(
            settlement_id=settlement_id or self.config.settlement_id,
            day=day,
            prosperity=new_state.prosperity,
            tier_id=new_state.tier_id.value,
            decree_nudge=applied.to_dict() if applied else None,
        )
        return Transition(new_state, event)

    # ------------------------------------------------------------------
    # After battle
    # ------------------------------------------------------------------
    def handle_after_battle(
        self,
        state: EconomyState,
        enemy: Any,
        area: Any,
        settlement_id: str | None = None,
    ) -> Transition:
        """Victories on dangerous routes raise security and prosperity."""
        # Only monsters outside the village affect the safety of trade routes
        if not isinstance(area, str) or area not in self.config.dangerous_areas:
            return Transition(state)

        foe = Enemy.from_raw(enemy)
        bonus = self.config.boss_bonus if foe.is_boss else self.config.regular_bonus
        prosperity_gain = bonus * self.config.battle_prosperity_factor

        prosperity = clamp_round(state.prosperity + prosperity_gain, 0, 100)
        new_state = replace(
            state,
            security=clamp_round(state.security + bonus, 0, 100),
            prosperity=prosperity,
            tier_id=self.tiers.tier_id_for(prosperity),
        )
        event = AfterBattle(
            settlement_id=settlement_id or self.config.settlement_id,
            enemy={"is_boss": foe.is_boss},
            area=area,
            security_delta=bonus,
            prosperity_delta=prosperity_gain,
            new_tier_id=new_state.tier_id.value,
        )
        return Transition(new_state, event)

    # ------------------------------------------------------------------
    # After purchase
    # ------------------------------------------------------------------
    def handle_after_purchase(
        self,
        state: EconomyState,
        gold_spent: Any,
        context: MarketContext | str = MarketContext.VILLAGE,
        settlement_id: str | None = None,
    ) -> Transition:
        """
        Spending in the village helps trade and prosperity a little.

        Both deltas are capped so one large purchase cannot dominate.
        Coin spent at a wandering merchant leaves the local economy and
        changes nothing.
        """
        gold = finite_number(gold_spent)
        if gold <= 0:
            return Transition(state)
        if MarketContext.parse(context) is not MarketContext.VILLAGE:
            return Transition(state)

        cfg = self.config
        trade_delta = min(cfg.purchase_trade_cap, gold / cfg.purchase_trade_divisor)
        prosperity_delta = min(
            cfg.purchase_prosperity_cap, gold / cfg.purchase_prosperity_divisor,
        )

        prosperity = clamp_round(state.prosperity + prosperity_delta, 0, 100)
        new_state = replace(
            state,
            trade=clamp_round(state.trade + trade_delta, 0, 100),
            prosperity=prosperity,
            tier_id=self.tiers.tier_id_for(prosperity),
        )
        event = AfterPurchase(
            settlement_id=settlement_id or cfg.settlement_id,
            gold_spent=gold,
            context=MarketContext.VILLAGE.value,
            trade_delta=trade_delta,
            prosperity_delta=prosperity_delta,
            new_tier_id=new_state.tier_id.value,
        )
        return Transition(new_state, event)
