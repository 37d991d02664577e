"""
Engine-integrated village economy service.

Wraps the deriver, quoter, and mutator so that every state change goes
through an ``EconomyStore`` as an immutable replacement and every
successful transition emits exactly one event on the bus. Reads never
touch stored metrics (the rest-cost quote may expire a decree).
"""

from __future__ import annotations

import logging
import math
from typing import TYPE_CHECKING, Any, Callable

from emberwood.core.config import EconomyConfig
from emberwood.core.decrees import DecreeBoard, DecreeEffectReader
from emberwood.core.deriver import EconomyDeriver
from emberwood.core.mutator import EconomyMutator, Transition
from emberwood.core.numbers import finite_number
from emberwood.core.pricing import MarketContext, PriceQuoter
from emberwood.core.state import EconomyState, EffectiveSummary, GovernmentEffect
from emberwood.core.tiers import Tier, TierTable

if TYPE_CHECKING:
    import numpy as np

    from emberwood.core.deriver import GovernmentEffectProvider
    from emberwood.core.events import EconomyEvent, EventBus

logger = logging.getLogger(__name__)


class EconomyStore:
    """Per-settlement storage of raw state. Values are replaced, never edited."""

    def __init__(self) -> None:
        self._states: dict[str, EconomyState] = {}

    def get(self, settlement_id: str) -> EconomyState | None:
        return self._states.get(settlement_id)

    def set(self, settlement_id: str, state: EconomyState) -> None:
        self._states[settlement_id] = state

    def has(self, settlement_id: str) -> bool:
        return settlement_id in self._states

    def settlement_ids(self) -> list[str]:
        return list(self._states)

    def to_dict(self) -> dict[str, dict[str, Any]]:
        return {sid: s.to_dict() for sid, s in self._states.items()}


class StaticGovernmentProvider:
    """Government effects set directly by the host, keyed by settlement."""

    def __init__(self, effects: dict[str, Any] | None = None):
        self._effects: dict[str, Any] = dict(effects or {})

    def set_effect(self, settlement_id: str, effect: Any) -> None:
        self._effects[settlement_id] = effect

    def clear_effect(self, settlement_id: str) -> None:
        self._effects.pop(settlement_id, None)

    def get_village_government_effect(self, settlement_id: str) -> Any:
        return self._effects.get(settlement_id)


class VillageEconomyService:
    """
    Economy service for one settlement.

    All state mutations go through ``store.set`` with new state values
    and all significant changes are published on ``bus`` for other
    systems to react.
    """

    def __init__(
        self,
        settlement_id: str,
        store: EconomyStore,
        bus: EventBus,
        rng: np.random.Generator | None,
        government: GovernmentEffectProvider | None = None,
        decrees: DecreeBoard | None = None,
        clock: Callable[[], int] | None = None,
        config: EconomyConfig | None = None,
    ):
        if rng is None:
            raise ValueError("VillageEconomyService requires an RNG")
        self.settlement_id = settlement_id
        self.store = store
        self.bus = bus
        self.government = government
        self.decrees = decrees if decrees is not None else DecreeBoard()
        self.clock = clock
        self.config = config or EconomyConfig(settlement_id=settlement_id)

        self.tiers = TierTable(self.config)
        self.deriver = EconomyDeriver(self.config, self.tiers)
        self.quoter = PriceQuoter(self.config, self.deriver)
        self.mutator = EconomyMutator(self.config, rng, self.tiers)
        self.decree_reader = DecreeEffectReader(self.decrees)

    # ------------------------------------------------------------------
    # State access
    # ------------------------------------------------------------------
    def init_economy(self) -> EconomyState:
        """Create the settlement's default state if it does not exist yet."""
        state = self.store.get(self.settlement_id)
        if state is None:
            state = EconomyState.initial(self.config)
            self.store.set(self.settlement_id, state)
            logger.debug("Initialized economy for %s", self.settlement_id)
        return state

    @property
    def state(self) -> EconomyState:
        return self.init_economy()

    def today(self) -> int:
        if self.clock is not None:
            return int(self.clock())
        return self.state.last_day_updated or 0

    def _government(self) -> GovernmentEffect:
        return self.deriver.lookup_government(self.government, self.settlement_id)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    def get_summary(self) -> EffectiveSummary:
        return self.deriver.derive_summary(self.state, self._government())

    def get_merchant_price(
        self, base_price: float, context: MarketContext | str = MarketContext.VILLAGE,
    ) -> int:
        return self.quoter.get_merchant_price(
            base_price, self.state, self._government(), context,
        )

    def get_rest_cost(self) -> int:
        """Rest cost for today. May delete an expired decree."""
        return self.quoter.get_rest_cost(
            self.state,
            self._government(),
            today=self.today(),
            decrees=self.decree_reader,
            settlement_id=self.settlement_id,
        )

    def get_tiers(self) -> list[Tier]:
        return self.tiers.all()

    # ------------------------------------------------------------------
    # State-modifying operations
    # ------------------------------------------------------------------
    def _commit(self, transition: Transition) -> EconomyEvent | None:
        if transition.event is None:
            return None
        self.store.set(self.settlement_id, transition.state)
        self.bus.publish(transition.event)
        return transition.event

    def handle_day_tick(self, absolute_day: Any) -> EconomyEvent | None:
        """Daily drift plus decree nudges. Repeated calls for one day are no-ops."""
        state = self.state
        decree = None
        day = finite_number(absolute_day, fallback=math.nan)
        if not math.isnan(day) and state.last_day_updated != math.floor(day):
            decree = self.decree_reader.observe(self.settlement_id, math.floor(day))
        return self._commit(self.mutator.handle_day_tick(
            state, absolute_day, decree, settlement_id=self.settlement_id,
        ))

    def handle_after_battle(self, enemy: Any, area: Any) -> EconomyEvent | None:
        return self._commit(self.mutator.handle_after_battle(
            self.state, enemy, area, settlement_id=self.settlement_id,
        ))

    def handle_after_purchase(
        self, gold_spent: Any, context: MarketContext | str = MarketContext.VILLAGE,
    ) -> EconomyEvent | None:
        return self._commit(self.mutator.handle_after_purchase(
            self.state, gold_spent, context, settlement_id=self.settlement_id,
        ))
