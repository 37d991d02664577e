"""
Economy domain events and a small synchronous event bus.

The closed ``EconomyEventKind`` enum names every event the economy
emits; each kind has one typed payload. The bus also carries plain
string topics from the host game (``time:dayChanged`` and friends).
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Callable, ClassVar, Union

logger = logging.getLogger(__name__)


class EconomyEventKind(Enum):
    """Every event the economy emits, keyed by its wire name."""
    DAY_TICKED = "village:economyTick"
    AFTER_BATTLE = "village:economyAfterBattle"
    AFTER_PURCHASE = "village:economyAfterPurchase"


@dataclass(frozen=True)
class DayTicked:
    """One successful (non-guarded) day tick."""
    kind: ClassVar[EconomyEventKind] = EconomyEventKind.DAY_TICKED
    settlement_id: str
    day: int
    prosperity: int
    tier_id: str
    decree_nudge: dict[str, Any] | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, **asdict(self)}


@dataclass(frozen=True)
class AfterBattle:
    """A victory on a dangerous route made the roads safer."""
    kind: ClassVar[EconomyEventKind] = EconomyEventKind.AFTER_BATTLE
    settlement_id: str
    enemy: dict[str, Any]
    area: str
    security_delta: int
    prosperity_delta: float
    new_tier_id: str

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, **asdict(self)}


@dataclass(frozen=True)
class AfterPurchase:
    """Coin spent in the village fed local trade."""
    kind: ClassVar[EconomyEventKind] = EconomyEventKind.AFTER_PURCHASE
    settlement_id: str
    gold_spent: float
    context: str
    trade_delta: float
    prosperity_delta: float
    new_tier_id: str

    def to_dict(self) -> dict[str, Any]:
        return {"kind": self.kind.value, **asdict(self)}


EconomyEvent = Union[DayTicked, AfterBattle, AfterPurchase]
Topic = Union[EconomyEventKind, str]
Handler = Callable[[Any], None]


def _topic_key(topic: Topic) -> str:
    return topic.value if isinstance(topic, EconomyEventKind) else str(topic)


class EventBus:
    """
    Synchronous publish/subscribe.

    Handlers run in subscription order on the emitter's call stack. A
    failing handler is logged and does not stop the remaining handlers.
    """

    def __init__(self) -> None:
        self._handlers: dict[str, list[Handler]] = {}

    def on(self, topic: Topic, handler: Handler) -> None:
        self._handlers.setdefault(_topic_key(topic), []).append(handler)

    def off(self, topic: Topic, handler: Handler | None = None) -> None:
        """Remove one handler, or every handler for the topic."""
        key = _topic_key(topic)
        if handler is None:
            self._handlers.pop(key, None)
            return
        handlers = self._handlers.get(key, [])
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, topic: Topic, payload: Any = None) -> int:
        """Deliver ``payload`` to every handler. Returns the number notified."""
        handlers = list(self._handlers.get(_topic_key(topic), []))
        for handler in handlers:
            try:
                handler(payload)
            except Exception:
                logger.exception("Handler for %s failed", _topic_key(topic))
        return len(handlers)

    def publish(self, event: EconomyEvent) -> int:
        """Emit a typed economy event on its own kind."""
        return self.emit(event.kind, event)

    def handler_count(self, topic: Topic) -> int:
        return len(self._handlers.get(_topic_key(topic), []))
