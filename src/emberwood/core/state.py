"""
Economy records: raw settlement state, government influence, decrees,
and the derived effective summary.

Every record is a frozen dataclass. Transitions build new records with
``dataclasses.replace``; nothing here is mutated in place.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any, ClassVar, Mapping

from emberwood.core.numbers import clamp, clamp_round, finite_number
from emberwood.core.tiers import Tier, TierId, TierTable

if TYPE_CHECKING:
    from emberwood.core.config import EconomyConfig


def _pick(raw: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    """First present key among camelCase/snake_case spellings."""
    for k in keys:
        if k in raw:
            return raw[k]
    return default


def _optional_number(value: Any) -> float | None:
    n = finite_number(value, fallback=math.nan)
    return None if math.isnan(n) else n


@dataclass(frozen=True)
class DecreeNudge:
    """Audit entry for the decree deltas applied on one day tick."""
    day: int
    decree_id: str | None
    deltas: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {"day": self.day, "decree_id": self.decree_id, "deltas": dict(self.deltas)}

    @classmethod
    def from_dict(cls, d: Mapping[str, Any]) -> DecreeNudge:
        return cls(
            day=int(finite_number(d.get("day"))),
            decree_id=_pick(d, "decree_id", "decreeId", "petitionId"),
            deltas={k: int(finite_number(v)) for k, v in (d.get("deltas") or {}).items()},
        )


@dataclass(frozen=True)
class EconomyState:
    """Raw, persisted metrics for one settlement (all in [0, 100])."""
    tier_id: TierId
    prosperity: int
    security: int
    trade: int
    last_day_updated: int | None = None
    last_decree_nudge: DecreeNudge | None = None

    @classmethod
    def initial(cls, config: EconomyConfig) -> EconomyState:
        """Defaults used the first time a settlement is accessed."""
        return cls(
            tier_id=TierId.parse(config.default_tier) or TierId.STABLE,
            prosperity=config.default_prosperity,
            security=config.default_security,
            trade=config.default_trade,
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "tier_id": self.tier_id.value,
            "prosperity": self.prosperity,
            "security": self.security,
            "trade": self.trade,
            "last_day_updated": self.last_day_updated,
            "last_decree_nudge": (
                self.last_decree_nudge.to_dict() if self.last_decree_nudge else None
            ),
        }

    @classmethod
    def from_dict(cls, d: Mapping[str, Any], config: EconomyConfig) -> EconomyState:
        """
        Rebuild a state from a loose mapping.

        Missing metrics take the configured defaults; malformed ones go
        through ``clamp_round`` (non-finite becomes 0). An unrecognized
        tier id is recomputed from the raw prosperity.
        """
        prosperity = clamp_round(
            _pick(d, "prosperity", default=config.default_prosperity), 0, 100,
        )
        security = clamp_round(
            _pick(d, "security", default=config.default_security), 0, 100,
        )
        trade = clamp_round(_pick(d, "trade", default=config.default_trade), 0, 100)

        tier_id = TierId.parse(_pick(d, "tier_id", "tierId"))
        if tier_id is None:
            tier_id = TierTable(config).tier_id_for(prosperity)

        last_day = _optional_number(_pick(d, "last_day_updated", "lastDayUpdated"))
        nudge = _pick(d, "last_decree_nudge", "lastDecreeNudge")
        return cls(
            tier_id=tier_id,
            prosperity=prosperity,
            security=security,
            trade=trade,
            last_day_updated=int(last_day) if last_day is not None else None,
            last_decree_nudge=DecreeNudge.from_dict(nudge) if nudge else None,
        )


@dataclass(frozen=True)
class GovernmentEffect:
    """
    Village-level influence from the kingdom government.

    ``NO_DATA`` (``has_data=False``) means "apply nothing" and is distinct
    from an effect whose modifiers happen to be zero.
    """
    has_data: bool = False
    prosperity_modifier: float = 0.0
    safety_modifier: float = 0.0

    NO_DATA: ClassVar[GovernmentEffect]

    @classmethod
    def from_raw(cls, raw: Any, bound: float = 0.3) -> GovernmentEffect:
        """
        Coerce a provider result into an effect.

        Accepts an existing effect, a mapping with camelCase or snake_case
        keys, or *None*. Modifiers are made finite and clamped to
        ``[-bound, +bound]``.
        """
        if raw is None:
            return cls.NO_DATA
        if isinstance(raw, GovernmentEffect):
            has_data = raw.has_data
            p_mod, s_mod = raw.prosperity_modifier, raw.safety_modifier
        elif isinstance(raw, Mapping):
            has_data = bool(_pick(raw, "has_data", "hasData", default=False))
            p_mod = _pick(raw, "prosperity_modifier", "prosperityModifier", default=0.0)
            s_mod = _pick(raw, "safety_modifier", "safetyModifier", default=0.0)
        else:
            return cls.NO_DATA

        if not has_data:
            return cls.NO_DATA
        return cls(
            has_data=True,
            prosperity_modifier=clamp(finite_number(p_mod), -bound, bound),
            safety_modifier=clamp(finite_number(s_mod), -bound, bound),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "has_data": self.has_data,
            "prosperity_modifier": self.prosperity_modifier,
            "safety_modifier": self.safety_modifier,
        }


GovernmentEffect.NO_DATA = GovernmentEffect()


@dataclass(frozen=True)
class TownHallEffect:
    """
    A time-boxed decree written by the town hall.

    Active while ``today <= expires_on_day``. A decree without a numeric
    expiry day is inert: it is neither applied nor cleaned up.
    """
    expires_on_day: int | None
    petition_id: str | None = None
    rest_cost_multiplier: float | None = None
    econ_prosperity_delta: float | None = None
    econ_trade_delta: float | None = None
    econ_security_delta: float | None = None

    @classmethod
    def from_raw(cls, raw: Any) -> TownHallEffect | None:
        if raw is None or isinstance(raw, TownHallEffect):
            return raw
        if not isinstance(raw, Mapping):
            return None
        expires = _optional_number(_pick(raw, "expires_on_day", "expiresOnDay"))
        return cls(
            expires_on_day=int(expires) if expires is not None else None,
            petition_id=_pick(raw, "petition_id", "petitionId"),
            rest_cost_multiplier=_optional_number(
                _pick(raw, "rest_cost_multiplier", "restCostMultiplier"),
            ),
            econ_prosperity_delta=_optional_number(
                _pick(raw, "econ_prosperity_delta", "econProsperityDelta"),
            ),
            econ_trade_delta=_optional_number(
                _pick(raw, "econ_trade_delta", "econTradeDelta"),
            ),
            econ_security_delta=_optional_number(
                _pick(raw, "econ_security_delta", "econSecurityDelta"),
            ),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "expires_on_day": self.expires_on_day,
            "petition_id": self.petition_id,
            "rest_cost_multiplier": self.rest_cost_multiplier,
            "econ_prosperity_delta": self.econ_prosperity_delta,
            "econ_trade_delta": self.econ_trade_delta,
            "econ_security_delta": self.econ_security_delta,
        }


@dataclass(frozen=True)
class EffectiveSummary:
    """Government-adjusted view of a settlement. Never persisted."""
    prosperity: int
    security: int
    trade: int
    tier: Tier
    last_day_updated: int | None = None
    government: GovernmentEffect = GovernmentEffect.NO_DATA

    @property
    def tier_id(self) -> TierId:
        return self.tier.id

    def to_dict(self) -> dict[str, Any]:
        return {
            "prosperity": self.prosperity,
            "security": self.security,
            "trade": self.trade,
            "tier_id": self.tier.id.value,
            "tier": self.tier.to_dict(),
            "last_day_updated": self.last_day_updated,
            "government": self.government.to_dict(),
        }
