"""
Read path of the economy: raw state + government influence -> effective view.

All other systems (bank, merchants, tavern rest) should go through the
effective summary instead of the stored metrics. Derivation is pure:
the same state and the same government snapshot always give the same
summary, and neither input is modified.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Protocol

from emberwood.core.numbers import clamp_round, round_half_up
from emberwood.core.state import EconomyState, EffectiveSummary, GovernmentEffect
from emberwood.core.tiers import TierTable

if TYPE_CHECKING:
    from emberwood.core.config import EconomyConfig

logger = logging.getLogger(__name__)


class GovernmentEffectProvider(Protocol):
    """Anything that can report the kingdom's influence on a settlement."""

    def get_village_government_effect(self, settlement_id: str) -> Any:
        """Return a GovernmentEffect, a loose mapping, or *None*. May raise."""


class EconomyDeriver:
    """Derives effective metrics and tier from raw state."""

    def __init__(self, config: EconomyConfig, tiers: TierTable | None = None):
        self.config = config
        self.tiers = tiers or TierTable(config)

    def derive_summary(
        self,
        state: EconomyState,
        government: GovernmentEffect | None = None,
    ) -> EffectiveSummary:
        """
        Nudge raw metrics by the government modifiers and classify.

        Without data, effective equals raw. Otherwise prosperity moves by
        ``round(p * pMod)``, trade by the damped ``round(t * pMod * 0.7)``,
        and security by ``round(s * sMod)``, each clamped to [0, 100].
        """
        # Modifiers are finite and within the bound from here on
        government = GovernmentEffect.from_raw(government, self.config.modifier_bound)

        prosperity = state.prosperity
        security = state.security
        trade = state.trade

        if government.has_data:
            p_mod = government.prosperity_modifier
            s_mod = government.safety_modifier
            prosperity = clamp_round(
                state.prosperity + round_half_up(state.prosperity * p_mod), 0, 100,
            )
            trade = clamp_round(
                state.trade
                + round_half_up(state.trade * p_mod * self.config.trade_damping),
                0, 100,
            )
            security = clamp_round(
                state.security + round_half_up(state.security * s_mod), 0, 100,
            )

        return EffectiveSummary(
            prosperity=prosperity,
            security=security,
            trade=trade,
            tier=self.tiers.classify(prosperity),
            last_day_updated=state.last_day_updated,
            government=government,
        )

    def lookup_government(
        self,
        provider: GovernmentEffectProvider | None,
        settlement_id: str,
    ) -> GovernmentEffect:
        """
        Ask the provider for its influence, degrading to NO_DATA.

        A missing provider, a raised exception, or an unusable result all
        mean raw values are served unchanged.
        """
        if provider is None:
            return GovernmentEffect.NO_DATA
        try:
            raw = provider.get_village_government_effect(settlement_id)
        except Exception:
            logger.warning(
                "Government effect lookup failed for %s; using raw economy",
                settlement_id, exc_info=True,
            )
            return GovernmentEffect.NO_DATA
        return GovernmentEffect.from_raw(raw, bound=self.config.modifier_bound)
