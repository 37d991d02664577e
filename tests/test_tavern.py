"""Tests for tavern rest and the economy description line."""

from emberwood.core.events import EventBus
from emberwood.core.service import EconomyStore, VillageEconomyService
from emberwood.core.state import EconomyState
from emberwood.core.tavern import describe_economy, rest_until_morning
from emberwood.core.tiers import TierId


def _make_service(rng, state=None):
    store = EconomyStore()
    if state is not None:
        store.set("village", state)
    return VillageEconomyService("village", store=store, bus=EventBus(), rng=rng)


class TestRestUntilMorning:
    def test_not_enough_gold(self, zero_drift_rng):
        service = _make_service(zero_drift_rng)
        before = service.state
        receipt = rest_until_morning(service, gold=10, next_day=1)
        assert not receipt.rested
        assert receipt.cost == 15
        assert receipt.gold_remaining == 10
        assert service.state is before

    def test_rest_pays_and_ticks(self, zero_drift_rng):
        service = _make_service(zero_drift_rng)
        receipt = rest_until_morning(service, gold=100, next_day=1)
        assert receipt.rested
        assert receipt.cost == 15
        assert receipt.gold_remaining == 85
        assert receipt.day == 1
        state = service.state
        assert state.trade == 51
        assert state.prosperity == 51
        assert state.last_day_updated == 1

    def test_cost_follows_tier(self, zero_drift_rng):
        service = _make_service(
            zero_drift_rng, EconomyState(TierId.STRUGGLING, 20, 40, 50),
        )
        assert rest_until_morning(service, gold=17, next_day=1).cost == 18
        assert not rest_until_morning(service, gold=17, next_day=1).rested

    def test_garbage_gold_cannot_pay(self, zero_drift_rng):
        receipt = rest_until_morning(_make_service(zero_drift_rng), gold="lots", next_day=1)
        assert not receipt.rested
        assert receipt.gold_remaining == 0


class TestDescribeEconomy:
    def test_stable(self, zero_drift_rng):
        summary = _make_service(zero_drift_rng).get_summary()
        assert describe_economy(summary) == (
            "Village economy: Stable – rooms and food are about normal."
        )

    def test_thriving(self, zero_drift_rng):
        service = _make_service(zero_drift_rng, EconomyState(TierId.THRIVING, 90, 40, 50))
        assert "surprisingly fair" in describe_economy(service.get_summary())
