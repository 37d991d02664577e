"""Tests for the PriceQuoter."""

import math

import pytest

from emberwood.core.config import EconomyConfig
from emberwood.core.decrees import DecreeBoard, DecreeEffectReader
from emberwood.core.pricing import MarketContext, PriceQuoter, rest_cost_for
from emberwood.core.state import EconomyState, GovernmentEffect, TownHallEffect
from emberwood.core.tiers import TierId, TierTable


def _state(prosperity=50, security=40, trade=50) -> EconomyState:
    return EconomyState(
        tier_id=TierId.STABLE, prosperity=prosperity, security=security, trade=trade,
    )


@pytest.fixture
def quoter():
    return PriceQuoter(EconomyConfig())


class TestMerchantPrice:
    def test_stable_village(self, quoter):
        assert quoter.get_merchant_price(100, _state(), None, "village") == 100

    def test_stable_wandering(self, quoter):
        assert quoter.get_merchant_price(100, _state(), None, "wandering") == 110

    def test_enum_context(self, quoter):
        assert quoter.get_merchant_price(100, _state(), None, MarketContext.WANDERING) == 110

    def test_struggling_and_thriving(self, quoter):
        assert quoter.get_merchant_price(100, _state(prosperity=20)) == 120
        assert quoter.get_merchant_price(100, _state(prosperity=90)) == 90

    def test_uses_effective_tier(self, quoter):
        gov = GovernmentEffect(has_data=True, prosperity_modifier=-0.3)
        # raw 80 is thriving, effective 56 is stable
        assert quoter.get_merchant_price(100, _state(prosperity=80), gov) == 100

    @pytest.mark.parametrize("context", ["village", "wandering"])
    def test_floor_of_one(self, quoter, context):
        assert quoter.get_merchant_price(0, _state(prosperity=90), None, context) == 1
        assert quoter.get_merchant_price(-50, _state(), None, context) == 1

    @pytest.mark.parametrize("prosperity", [0, 34, 35, 70, 71, 100])
    def test_wandering_never_cheaper(self, quoter, prosperity):
        s = _state(prosperity=prosperity)
        assert (quoter.get_merchant_price(1, s, None, "wandering")
                >= quoter.get_merchant_price(1, s, None, "village"))

    def test_non_finite_base_price(self, quoter):
        assert quoter.get_merchant_price(math.nan, _state()) == 1

    def test_unknown_context_has_no_surcharge(self, quoter):
        assert quoter.get_merchant_price(100, _state(), None, "caravan") == 100

    def test_nan_government_modifier_treated_as_zero(self, quoter):
        gov = GovernmentEffect(has_data=True, prosperity_modifier=math.nan)
        assert quoter.get_merchant_price(100, _state(), gov) == 100

    def test_overflowing_base_price_falls_to_floor(self, quoter):
        assert quoter.get_merchant_price(1.7e308, _state(prosperity=20)) == 1


class TestRestCost:
    def _reader(self, **decree):
        board = DecreeBoard()
        board.post("village", TownHallEffect(petition_id="p-1", **decree))
        return board, DecreeEffectReader(board)

    def test_base_cost_per_tier(self, quoter):
        assert quoter.get_rest_cost(_state(prosperity=20)) == 18
        assert quoter.get_rest_cost(_state(prosperity=50)) == 15
        assert quoter.get_rest_cost(_state(prosperity=90)) == 12

    def test_active_decree_multiplies(self, quoter):
        _, reader = self._reader(expires_on_day=5, rest_cost_multiplier=2.0)
        assert quoter.get_rest_cost(_state(), today=3, decrees=reader) == 30

    def test_decree_still_active_on_expiry_day(self, quoter):
        _, reader = self._reader(expires_on_day=5, rest_cost_multiplier=2.0)
        assert quoter.get_rest_cost(_state(), today=5, decrees=reader) == 30

    def test_multiplier_rounds_half_up(self, quoter):
        _, reader = self._reader(expires_on_day=5, rest_cost_multiplier=1.5)
        assert quoter.get_rest_cost(_state(), today=0, decrees=reader) == 23

    def test_expired_decree_removed_and_ignored(self, quoter):
        board, reader = self._reader(expires_on_day=5, rest_cost_multiplier=2.0)
        assert quoter.get_rest_cost(_state(), today=6, decrees=reader) == 15
        assert board.get("village") is None
        assert quoter.get_rest_cost(_state(), today=6, decrees=reader) == 15
        assert board.get("village") is None

    def test_decree_without_multiplier(self, quoter):
        board, reader = self._reader(expires_on_day=5, econ_trade_delta=3)
        assert quoter.get_rest_cost(_state(), today=1, decrees=reader) == 15
        assert board.get("village") is not None

    def test_uses_effective_tier(self, quoter):
        gov = GovernmentEffect(has_data=True, prosperity_modifier=-0.3)
        assert quoter.get_rest_cost(_state(prosperity=80), gov) == 15

    def test_negative_multiplier_never_below_zero(self, quoter):
        board = DecreeBoard()
        board.post("village", {"expiresOnDay": 5, "restCostMultiplier": -2})
        reader = DecreeEffectReader(board)
        assert quoter.get_rest_cost(_state(), today=1, decrees=reader) == 0

    def test_zero_multiplier_means_free_rest(self, quoter):
        _, reader = self._reader(expires_on_day=5, rest_cost_multiplier=0.0)
        assert quoter.get_rest_cost(_state(), today=1, decrees=reader) == 0


class TestRestCostFor:
    def test_pure_variant(self):
        table = TierTable(EconomyConfig())
        decree = TownHallEffect(expires_on_day=2, rest_cost_multiplier=0.5)
        assert rest_cost_for(table.get("struggling"), decree, 2) == 9
        assert rest_cost_for(table.get("struggling"), decree, 3) == 18
        assert rest_cost_for(table.get("struggling"), None, 0) == 18
