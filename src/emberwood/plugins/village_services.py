"""
Wires the village economy into the host.

Registers a ``VillageEconomyService`` as ``village.economy`` and routes
host events to it:

    combat:victory     {enemy, area}        -> handle_after_battle
    merchant:purchase  {goldSpent, context} -> handle_after_purchase
    time:dayChanged    {newDay}             -> handle_day_tick
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from emberwood.core.numbers import is_finite_number
from emberwood.core.service import VillageEconomyService
from emberwood.plugins.base import EnginePlugin

if TYPE_CHECKING:
    from emberwood.core.host import GameHost

logger = logging.getLogger(__name__)

SERVICE_NAME = "village.economy"


def _field(payload: Any, *keys: str) -> Any:
    if not isinstance(payload, dict):
        return None
    for k in keys:
        if k in payload:
            return payload[k]
    return None


class VillageServicesPlugin(EnginePlugin):
    """Registers the economy service and subscribes it to host events."""

    def __init__(self, settlement_id: str | None = None) -> None:
        self.settlement_id = settlement_id
        self.economy: VillageEconomyService | None = None
        self._subscriptions: list[tuple[str, Any]] = []

    @property
    def id(self) -> str:
        return "ew.villageServices"

    @property
    def requires(self) -> list[str]:
        return ["ew.rngBridge"]

    def init(self, host: GameHost) -> None:
        settlement_id = self.settlement_id or host.config.settlement_id
        self.economy = VillageEconomyService(
            settlement_id,
            store=host.economies,
            bus=host.bus,
            rng=host.get("rng"),
            government=host.government,
            decrees=host.decrees,
            clock=host.clock,
            config=host.config,
        )
        host.register_service(SERVICE_NAME, self.economy)
        self.economy.init_economy()
        logger.info("Village services registered for %s", settlement_id)

    def start(self, host: GameHost) -> None:
        self._subscribe(host, "combat:victory", self._on_combat_victory)
        self._subscribe(host, "merchant:purchase", self._on_purchase)
        self._subscribe(host, "time:dayChanged", self._on_day_changed)
        logger.info("Village services started and listening for events")

    def stop(self, host: GameHost) -> None:
        for topic, handler in self._subscriptions:
            host.off(topic, handler)
        self._subscriptions = []
        logger.info("Village services stopped")

    def dispose(self, host: GameHost) -> None:
        if host.get(SERVICE_NAME) is not None:
            host.unregister_service(SERVICE_NAME)
        self.economy = None

    # ------------------------------------------------------------------
    # Event routing
    # ------------------------------------------------------------------
    def _subscribe(self, host: GameHost, topic: str, handler: Any) -> None:
        host.on(topic, handler)
        self._subscriptions.append((topic, handler))

    def _on_combat_victory(self, payload: Any) -> None:
        enemy = _field(payload, "enemy")
        area = _field(payload, "area")
        if self.economy is not None and enemy is not None and area:
            self.economy.handle_after_battle(enemy, area)

    def _on_purchase(self, payload: Any) -> None:
        gold = _field(payload, "goldSpent", "gold_spent")
        if self.economy is not None and gold:
            context = _field(payload, "context") or "village"
            self.economy.handle_after_purchase(gold, context)

    def _on_day_changed(self, payload: Any) -> None:
        new_day = _field(payload, "newDay", "new_day")
        if self.economy is not None and is_finite_number(new_day):
            self.economy.handle_day_tick(new_day)
