"""
Master configuration for the Emberwood village economy.

ALL tunable numbers live here: tier thresholds and prices, drift shape,
battle bonuses, purchase caps, and starting metrics. Logic modules read
them from an ``EconomyConfig`` instance and never hardcode them.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any


@dataclass
class EconomyConfig:
    """
    Every threshold, weight, and cap of the settlement economy.

    Use ``to_dict()`` / ``from_dict()`` for serialization and comparison.
    """

    # === Identity ===
    settlement_id: str = "village"
    random_seed: int | None = None

    # === Tier thresholds (crisp; same for raw and effective prosperity) ===
    struggling_below: int = 35  # prosperity < 35 -> struggling
    thriving_above: int = 70    # prosperity > 70 -> thriving

    # === Tier table ===
    tiers: dict[str, dict[str, Any]] = field(default_factory=lambda: {
        "struggling": {
            "name": "Struggling",
            "merchant_price_multiplier": 1.2,
            "rest_cost_base": 18,
            "price_descriptor": "a bit steep",
            "description": "Coin is tight and goods are scarce.",
        },
        "stable": {
            "name": "Stable",
            "merchant_price_multiplier": 1.0,
            "rest_cost_base": 15,
            "price_descriptor": "about normal",
            "description": "Trade flows steadily and people get by.",
        },
        "thriving": {
            "name": "Thriving",
            "merchant_price_multiplier": 0.9,
            "rest_cost_base": 12,
            "price_descriptor": "surprisingly fair",
            "description": "Caravans are constant and the market hums.",
        },
    })

    # === Government influence ===
    modifier_bound: float = 0.3  # modifiers live in [-bound, +bound]
    trade_damping: float = 0.7   # trade feels 70% of the prosperity nudge

    # === Daily drift: (U(0,1) - bias) * scale ===
    drift_bias: float = 0.45
    drift_scale: float = 6.0

    # === Battles ===
    dangerous_areas: list[str] = field(default_factory=lambda: ["forest", "ruins"])
    boss_bonus: int = 8
    regular_bonus: int = 2
    battle_prosperity_factor: float = 0.6

    # === Purchases ===
    purchase_trade_divisor: float = 20.0
    purchase_trade_cap: float = 5.0
    purchase_prosperity_divisor: float = 25.0
    purchase_prosperity_cap: float = 4.0

    # === Merchants ===
    wandering_surcharge: float = 0.10

    # === Starting metrics ===
    default_tier: str = "stable"
    default_prosperity: int = 50
    default_security: int = 40
    default_trade: int = 50

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------
    def to_dict(self) -> dict[str, Any]:
        """Serialize to a JSON-compatible dict."""
        d: dict[str, Any] = {}
        for k, v in self.__dict__.items():
            if k.startswith("_"):
                continue
            d[k] = v
        return d

    @classmethod
    def from_dict(cls, d: dict[str, Any]) -> EconomyConfig:
        """Deserialize from a dict. Unknown keys are ignored."""
        known = cls.__dataclass_fields__
        return cls(**{
            k: v for k, v in d.items()
            if not k.startswith("_") and k in known
        })

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, default=str)

    @classmethod
    def from_json(cls, s: str) -> EconomyConfig:
        return cls.from_dict(json.loads(s))

    def diff(self, other: EconomyConfig) -> dict[str, tuple[Any, Any]]:
        """Return parameters that differ between two configs."""
        diffs: dict[str, tuple[Any, Any]] = {}
        for k in self.to_dict():
            v1 = getattr(self, k)
            v2 = getattr(other, k)
            if v1 != v2:
                diffs[k] = (v1, v2)
        return diffs
