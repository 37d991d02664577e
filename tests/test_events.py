"""Tests for economy events and the event bus."""

from emberwood.core.events import (
    AfterBattle, AfterPurchase, DayTicked, EconomyEventKind, EventBus,
)


def _tick(day=1) -> DayTicked:
    return DayTicked(settlement_id="village", day=day, prosperity=50, tier_id="stable")


class TestEventKinds:
    def test_wire_names(self):
        assert EconomyEventKind.DAY_TICKED.value == "village:economyTick"
        assert EconomyEventKind.AFTER_BATTLE.value == "village:economyAfterBattle"
        assert EconomyEventKind.AFTER_PURCHASE.value == "village:economyAfterPurchase"

    def test_payload_kinds(self):
        assert DayTicked.kind is EconomyEventKind.DAY_TICKED
        assert AfterBattle.kind is EconomyEventKind.AFTER_BATTLE
        assert AfterPurchase.kind is EconomyEventKind.AFTER_PURCHASE

    def test_to_dict_includes_kind(self):
        d = _tick(4).to_dict()
        assert d["kind"] == "village:economyTick"
        assert d["day"] == 4
        assert d["decree_nudge"] is None


class TestEventBus:
    def test_publish_reaches_kind_and_wire_name(self):
        bus = EventBus()
        seen = []
        bus.on(EconomyEventKind.DAY_TICKED, seen.append)
        bus.on("village:economyTick", seen.append)
        assert bus.publish(_tick()) == 2
        assert len(seen) == 2

    def test_handlers_run_in_order(self):
        bus = EventBus()
        order = []
        bus.on("t", lambda p: order.append("a"))
        bus.on("t", lambda p: order.append("b"))
        bus.emit("t")
        assert order == ["a", "b"]

    def test_failing_handler_does_not_stop_others(self, caplog):
        bus = EventBus()
        seen = []

        def boom(payload):
            raise RuntimeError("listener broke")

        bus.on("t", boom)
        bus.on("t", seen.append)
        bus.emit("t", 1)
        assert seen == [1]
        assert "Handler for t failed" in caplog.text

    def test_off_single_and_all(self):
        bus = EventBus()
        seen = []
        bus.on("t", seen.append)
        bus.on("t", print)
        bus.off("t", print)
        assert bus.handler_count("t") == 1
        bus.off("t")
        assert bus.emit("t", 1) == 0
        assert seen == []

    def test_emit_without_handlers(self):
        assert EventBus().emit("nobody:listens") == 0
