"""
Minimal host engine for the economy.

Owns what the surrounding game would own: the event bus, a service
registry, the economy store, the decree board, the government provider,
and the day clock. Plugins wire the economy into it (see
``emberwood.plugins``).
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from emberwood.core.config import EconomyConfig
from emberwood.core.decrees import DecreeBoard
from emberwood.core.events import EventBus
from emberwood.core.service import EconomyStore, StaticGovernmentProvider

if TYPE_CHECKING:
    from emberwood.core.deriver import GovernmentEffectProvider


class GameClock:
    """Day counter owned by the host. The economy only reads it."""

    def __init__(self, day: int = 0):
        self.day = day

    def __call__(self) -> int:
        return self.day


class GameHost:
    """Services, event bus, and shared stores for one game."""

    def __init__(
        self,
        config: EconomyConfig | None = None,
        government: GovernmentEffectProvider | None = None,
        clock: GameClock | None = None,
    ):
        self.config = config or EconomyConfig()
        self.bus = EventBus()
        self.economies = EconomyStore()
        self.decrees = DecreeBoard()
        self.government = government if government is not None else StaticGovernmentProvider()
        self.clock = clock or GameClock()
        self._services: dict[str, Any] = {}

    # --- Services ---

    def register_service(self, name: str, service: Any) -> None:
        self._services[name] = service

    def unregister_service(self, name: str) -> None:
        if name not in self._services:
            raise KeyError(f"Service '{name}' is not registered")
        del self._services[name]

    def get(self, name: str) -> Any:
        """Return a registered service, or *None*."""
        return self._services.get(name)

    @property
    def service_names(self) -> list[str]:
        return list(self._services)

    # --- Events ---

    def on(self, topic: Any, handler: Any) -> None:
        self.bus.on(topic, handler)

    def off(self, topic: Any, handler: Any = None) -> None:
        self.bus.off(topic, handler)

    def emit(self, topic: Any, payload: Any = None) -> int:
        return self.bus.emit(topic, payload)

    # --- Time ---

    def advance_day(self, days: int = 1) -> int:
        """Move the clock forward and announce the new day."""
        for _ in range(days):
            previous = self.clock.day
            self.clock.day += 1
            self.emit("time:dayChanged", {"oldDay": previous, "newDay": self.clock.day})
        return self.clock.day
