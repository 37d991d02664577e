#!/usr/bin/env python3
"""Run a baseline Emberwood village economy for a month and print results."""

from emberwood.core.config import EconomyConfig
from emberwood.core.host import GameHost
from emberwood.core.tavern import describe_economy, rest_until_morning
from emberwood.metrics.collector import EconomyHistory
from emberwood.plugins import PluginRegistry, RngBridgePlugin, VillageServicesPlugin


def main():
    config = EconomyConfig(settlement_id="village", random_seed=42)
    days = 30

    host = GameHost(config)
    registry = PluginRegistry(host)
    registry.register(RngBridgePlugin())
    registry.register(VillageServicesPlugin())
    registry.enable("ew.rngBridge")
    registry.enable("ew.villageServices")

    history = EconomyHistory()
    history.attach(host.bus)
    economy = host.get("village.economy")

    print(f"=== Emberwood economy: {config.settlement_id} ===")
    print(f"Days: {days}")
    print(f"Seed: {config.random_seed}")
    print(describe_economy(economy.get_summary()))
    print()

    print(f"{'Day':>4} {'Pros':>5} {'Sec':>4} {'Trade':>5} {'Tier':>11} "
          f"{'Price':>6} {'Rest':>5}")
    print("-" * 46)

    gold = 200.0
    for day in range(1, days + 1):
        # A hunt on odd days, a shopping trip on even days, and a boss every week
        if day % 7 == 0:
            host.emit("combat:victory", {"enemy": {"isBoss": True}, "area": "ruins"})
        elif day % 2:
            host.emit("combat:victory", {"enemy": {"isBoss": False}, "area": "forest"})
        else:
            host.emit("merchant:purchase", {"goldSpent": 30, "context": "village"})

        receipt = rest_until_morning(economy, gold, host.clock.day + 1)
        # Resting already ticked tomorrow; the day change that follows is a no-op
        gold = receipt.gold_remaining + 25
        host.advance_day()

        state = economy.state
        print(
            f"{host.clock.day:4d} {state.prosperity:5d} {state.security:4d} "
            f"{state.trade:5d} {state.tier_id.value:>11} "
            f"{economy.get_merchant_price(100):6d} {economy.get_rest_cost():5d}"
        )

    stats = history.summary_stats()
    print()
    print(f"=== Final State (Day {host.clock.day}) ===")
    print(describe_economy(economy.get_summary()))
    print(f"Prosperity mean: {stats['prosperity']['mean']:.1f} "
          f"(min {stats['prosperity']['min']:.0f}, max {stats['prosperity']['max']:.0f})")
    print(f"Gold spent in village: {stats['gold_spent']:.0f}")

    print("\nDays per tier:")
    for tier_id, count in stats["tier_days"].items():
        pct = count / max(stats["ticks"], 1) * 100
        print(f"  {tier_id:12s}: {count:4d} ({pct:5.1f}%)")


if __name__ == "__main__":
    main()
