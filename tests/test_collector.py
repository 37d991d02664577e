"""Tests for EconomyHistory."""

import pytest

from emberwood.core.events import EventBus
from emberwood.core.service import EconomyStore, VillageEconomyService
from emberwood.metrics.collector import EconomyHistory, EconomyRecord


def _make_recorded(rng, settlement_filter=None):
    bus = EventBus()
    history = EconomyHistory(settlement_filter)
    history.attach(bus)
    service = VillageEconomyService("village", EconomyStore(), bus, rng=rng)
    return service, history, bus


class TestRecording:
    def test_records_each_event_kind(self, zero_drift_rng):
        service, history, _ = _make_recorded(zero_drift_rng)
        service.handle_day_tick(1)
        service.handle_after_battle({"isBoss": False}, "forest")
        service.handle_after_purchase(40, "village")
        kinds = [r.kind for r in history.records]
        assert kinds == [
            "village:economyTick",
            "village:economyAfterBattle",
            "village:economyAfterPurchase",
        ]
        assert all(isinstance(r, EconomyRecord) for r in history.records)
        assert [r.sequence for r in history.records] == [0, 1, 2]

    def test_no_ops_not_recorded(self, zero_drift_rng):
        service, history, _ = _make_recorded(zero_drift_rng)
        service.handle_day_tick(1)
        service.handle_day_tick(1)
        service.handle_after_purchase(50, "wandering")
        assert len(history.records) == 1

    def test_purchase_fields(self, zero_drift_rng):
        service, history, _ = _make_recorded(zero_drift_rng)
        service.handle_after_purchase(40, "village")
        rec = history.records[0]
        assert rec.gold_spent == 40
        assert rec.trade_delta == pytest.approx(2.0)
        assert rec.details == {"context": "village"}

    def test_settlement_filter(self, zero_drift_rng):
        service, history, bus = _make_recorded(zero_drift_rng, settlement_filter="riverside")
        service.handle_day_tick(1)
        assert history.records == []

    def test_detach(self, zero_drift_rng):
        service, history, bus = _make_recorded(zero_drift_rng)
        history.detach(bus)
        service.handle_day_tick(1)
        assert history.records == []


class TestSeriesAndStats:
    def test_time_series(self, zero_drift_rng):
        service, history, _ = _make_recorded(zero_drift_rng)
        for day in range(1, 4):
            service.handle_day_tick(day)
        assert history.get_time_series("day") == [1, 2, 3]
        assert history.get_time_series("prosperity") == [50, 50, 50]

    def test_summary_stats(self, zero_drift_rng):
        service, history, _ = _make_recorded(zero_drift_rng)
        service.handle_day_tick(1)
        service.handle_after_purchase(100, "village")
        service.handle_day_tick(2)
        stats = history.summary_stats()
        assert stats["ticks"] == 2
        assert stats["prosperity"]["mean"] == pytest.approx(52.0)
        assert stats["prosperity"]["max"] == 54.0
        assert stats["tier_days"] == {"struggling": 0, "stable": 2, "thriving": 0}
        assert stats["event_counts"]["village:economyAfterPurchase"] == 1
        assert stats["gold_spent"] == 100.0

    def test_empty_stats(self):
        stats = EconomyHistory().summary_stats()
        assert stats["ticks"] == 0
        assert stats["prosperity"]["mean"] == 0.0

    def test_export(self, zero_drift_rng):
        service, history, _ = _make_recorded(zero_drift_rng)
        service.handle_day_tick(1)
        exported = history.export()
        assert exported[0]["kind"] == "village:economyTick"
        assert exported[0]["day"] == 1
        assert exported[0]["settlement_id"] == "village"
