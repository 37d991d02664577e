"""
Economy history: records every economy event for one host.

Subscribes to the three economy events on the bus and keeps an ordered
log, with time series extraction and aggregate statistics for
visualization.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

import numpy as np

from emberwood.core.events import (
    AfterBattle, AfterPurchase, DayTicked, EconomyEvent, EconomyEventKind,
)
from emberwood.core.tiers import TierId

if TYPE_CHECKING:
    from emberwood.core.events import EventBus


@dataclass
class EconomyRecord:
    """One recorded economy event."""
    sequence: int
    kind: str
    settlement_id: str
    day: int | None = None
    prosperity: int | None = None
    tier_id: str | None = None
    security_delta: float = 0.0
    trade_delta: float = 0.0
    prosperity_delta: float = 0.0
    gold_spent: float = 0.0
    decree_nudge: dict[str, Any] | None = None
    details: dict[str, Any] = field(default_factory=dict)


class EconomyHistory:
    """
    Collects economy events across the life of a host.

    Call ``attach(bus)`` to start listening and ``detach(bus)`` to stop.
    """

    def __init__(self, settlement_id: str | None = None):
        self.settlement_id = settlement_id
        self.records: list[EconomyRecord] = []

    def attach(self, bus: EventBus) -> None:
        for kind in EconomyEventKind:
            bus.on(kind, self.record)

    def detach(self, bus: EventBus) -> None:
        for kind in EconomyEventKind:
            bus.off(kind, self.record)

    def record(self, event: EconomyEvent) -> EconomyRecord | None:
        """Append one event. Events for other settlements are ignored."""
        if self.settlement_id is not None and event.settlement_id != self.settlement_id:
            return None

        rec = EconomyRecord(
            sequence=len(self.records),
            kind=event.kind.value,
            settlement_id=event.settlement_id,
        )
        if isinstance(event, DayTicked):
            rec.day = event.day
            rec.prosperity = event.prosperity
            rec.tier_id = event.tier_id
            rec.decree_nudge = event.decree_nudge
        elif isinstance(event, AfterBattle):
            rec.tier_id = event.new_tier_id
            rec.security_delta = event.security_delta
            rec.prosperity_delta = event.prosperity_delta
            rec.details = {"area": event.area, "enemy": dict(event.enemy)}
        elif isinstance(event, AfterPurchase):
            rec.tier_id = event.new_tier_id
            rec.trade_delta = event.trade_delta
            rec.prosperity_delta = event.prosperity_delta
            rec.gold_spent = event.gold_spent
            rec.details = {"context": event.context}
        self.records.append(rec)
        return rec

    def ticks(self) -> list[EconomyRecord]:
        return [r for r in self.records if r.kind == EconomyEventKind.DAY_TICKED.value]

    def get_time_series(self, field_name: str) -> list[Any]:
        """Extract one field across all day ticks."""
        return [getattr(r, field_name) for r in self.ticks()]

    def export(self) -> list[dict[str, Any]]:
        """Export records as JSON-compatible dicts."""
        return [
            {
                "sequence": r.sequence,
                "kind": r.kind,
                "settlement_id": r.settlement_id,
                "day": r.day,
                "prosperity": r.prosperity,
                "tier_id": r.tier_id,
                "security_delta": r.security_delta,
                "trade_delta": r.trade_delta,
                "prosperity_delta": r.prosperity_delta,
                "gold_spent": r.gold_spent,
                "decree_nudge": r.decree_nudge,
                "details": r.details,
            }
            for r in self.records
        ]

    def summary_stats(self) -> dict[str, Any]:
        """Prosperity statistics over ticks plus event and tier counts."""
        prosperity = np.array(self.get_time_series("prosperity"), dtype=float)
        tier_days = {t.value: 0 for t in TierId}
        for r in self.ticks():
            if r.tier_id in tier_days:
                tier_days[r.tier_id] += 1

        event_counts = {k.value: 0 for k in EconomyEventKind}
        for r in self.records:
            event_counts[r.kind] += 1

        if len(prosperity) == 0:
            stats = {"mean": 0.0, "std": 0.0, "min": 0.0, "max": 0.0}
        else:
            stats = {
                "mean": float(np.mean(prosperity)),
                "std": float(np.std(prosperity)),
                "min": float(np.min(prosperity)),
                "max": float(np.max(prosperity)),
            }
        return {
            "ticks": len(prosperity),
            "prosperity": stats,
            "tier_days": tier_days,
            "event_counts": event_counts,
            "gold_spent": float(sum(r.gold_spent for r in self.records)),
        }
