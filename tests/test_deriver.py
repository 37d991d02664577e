"""Tests for the EconomyDeriver read path."""

import logging
import math

import pytest

from emberwood.core.config import EconomyConfig
from emberwood.core.deriver import EconomyDeriver
from emberwood.core.state import EconomyState, GovernmentEffect
from emberwood.core.tiers import TierId


def _state(prosperity=50, security=40, trade=50, **kwargs) -> EconomyState:
    return EconomyState(
        tier_id=kwargs.pop("tier_id", TierId.STABLE),
        prosperity=prosperity, security=security, trade=trade, **kwargs,
    )


def _gov(p=0.0, s=0.0) -> GovernmentEffect:
    return GovernmentEffect(has_data=True, prosperity_modifier=p, safety_modifier=s)


@pytest.fixture
def deriver():
    return EconomyDeriver(EconomyConfig())


class TestWithoutGovernment:
    def test_effective_equals_raw(self, deriver):
        summary = deriver.derive_summary(_state(62, 33, 47))
        assert (summary.prosperity, summary.security, summary.trade) == (62, 33, 47)
        assert summary.tier_id is TierId.STABLE

    def test_no_data_effect_is_ignored(self, deriver):
        s = _state(80)
        assert deriver.derive_summary(s, GovernmentEffect.NO_DATA).prosperity == 80

    def test_carries_last_day(self, deriver):
        assert deriver.derive_summary(_state(last_day_updated=9)).last_day_updated == 9


class TestWithGovernment:
    def test_negative_modifier_drops_tier(self, deriver):
        summary = deriver.derive_summary(_state(prosperity=80), _gov(p=-0.3))
        assert summary.prosperity == 56
        assert summary.tier_id is TierId.STABLE

    def test_raw_state_untouched(self, deriver):
        s = _state(prosperity=80)
        deriver.derive_summary(s, _gov(p=-0.3))
        assert s.prosperity == 80
        assert s.tier_id is TierId.STABLE

    def test_trade_is_damped(self, deriver):
        summary = deriver.derive_summary(_state(prosperity=40, trade=80), _gov(p=0.25))
        assert summary.prosperity == 50   # 40 + 10
        assert summary.trade == 94        # 80 + round(80 * 0.25 * 0.7)

    def test_security_uses_safety_modifier(self, deriver):
        summary = deriver.derive_summary(_state(security=40), _gov(s=-0.25))
        assert summary.security == 30

    def test_clamped_to_100(self, deriver):
        summary = deriver.derive_summary(_state(prosperity=90), _gov(p=0.3))
        assert summary.prosperity == 100
        assert summary.tier_id is TierId.THRIVING

    def test_positive_modifier_lifts_tier(self, deriver):
        summary = deriver.derive_summary(_state(prosperity=60), _gov(p=0.2))
        assert summary.prosperity == 72
        assert summary.tier_id is TierId.THRIVING

    def test_repeatable(self, deriver):
        s, g = _state(prosperity=67, trade=33), _gov(p=0.15, s=-0.1)
        assert deriver.derive_summary(s, g) == deriver.derive_summary(s, g)

    def test_nan_modifiers_leave_raw_values(self, deriver):
        summary = deriver.derive_summary(
            _state(prosperity=80, security=40), _gov(p=math.nan, s=math.inf),
        )
        assert (summary.prosperity, summary.security, summary.trade) == (80, 40, 50)
        assert summary.government.prosperity_modifier == 0.0

    def test_direct_modifier_clamped_to_bound(self, deriver):
        summary = deriver.derive_summary(_state(prosperity=80), _gov(p=-0.9))
        assert summary.prosperity == 56


class _RaisingProvider:
    def get_village_government_effect(self, settlement_id):
        raise RuntimeError("government module not wired")


class _DictProvider:
    def __init__(self, effect):
        self.effect = effect

    def get_village_government_effect(self, settlement_id):
        return self.effect


class TestGovernmentLookup:
    def test_missing_provider(self, deriver):
        assert deriver.lookup_government(None, "village") is GovernmentEffect.NO_DATA

    def test_raising_provider_degrades(self, deriver, caplog):
        with caplog.at_level(logging.WARNING, logger="emberwood.core.deriver"):
            eff = deriver.lookup_government(_RaisingProvider(), "village")
        assert eff is GovernmentEffect.NO_DATA
        assert "Government effect lookup failed" in caplog.text

    def test_loose_mapping_is_coerced(self, deriver):
        provider = _DictProvider({"hasData": True, "prosperityModifier": -0.3})
        eff = deriver.lookup_government(provider, "village")
        assert eff.has_data
        assert deriver.derive_summary(_state(prosperity=80), eff).prosperity == 56

    def test_garbage_result_is_no_data(self, deriver):
        eff = deriver.lookup_government(_DictProvider("lots"), "village")
        assert eff is GovernmentEffect.NO_DATA
