"""
Town hall decrees: time-boxed modifiers written by the government.

The government subsystem posts decrees onto a ``DecreeBoard``; the
economy reads them on every rest-cost query and every day tick and
removes a decree the first time it is observed past its expiry day.
There is no background sweep.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from emberwood.core.state import TownHallEffect

logger = logging.getLogger(__name__)


class DecreeStatus(Enum):
    """Where a decree stands relative to a given day."""
    ABSENT = "absent"
    ACTIVE = "active"
    EXPIRED = "expired"
    INERT = "inert"  # no numeric expiry day; ignored and kept


def decree_status(effect: TownHallEffect | None, today: int) -> DecreeStatus:
    """Classify a decree for ``today`` (active while today <= expires_on_day)."""
    if effect is None:
        return DecreeStatus.ABSENT
    if effect.expires_on_day is None:
        return DecreeStatus.INERT
    if today <= effect.expires_on_day:
        return DecreeStatus.ACTIVE
    return DecreeStatus.EXPIRED


class DecreeBoard:
    """In-memory store of the current decree per settlement."""

    def __init__(self) -> None:
        self._decrees: dict[str, TownHallEffect] = {}

    def post(self, settlement_id: str, effect: TownHallEffect | dict[str, Any]) -> TownHallEffect:
        """Replace the settlement's decree. Loose mappings are coerced."""
        decree = TownHallEffect.from_raw(effect)
        if decree is None:
            raise ValueError(f"Cannot post decree for '{settlement_id}': {effect!r}")
        self._decrees[settlement_id] = decree
        return decree

    def get(self, settlement_id: str) -> TownHallEffect | None:
        return self._decrees.get(settlement_id)

    def remove(self, settlement_id: str) -> bool:
        """Delete the settlement's decree. Returns whether one existed."""
        return self._decrees.pop(settlement_id, None) is not None

    def __contains__(self, settlement_id: object) -> bool:
        return settlement_id in self._decrees


class DecreeEffectReader:
    """Reads decrees and expires them lazily."""

    def __init__(self, board: DecreeBoard):
        self.board = board

    def observe(self, settlement_id: str, today: int) -> TownHallEffect | None:
        """
        Return the active decree for ``today``, or *None*.

        Side effect: an expired decree is deleted from the board.
        """
        effect = self.board.get(settlement_id)
        status = decree_status(effect, today)
        if status is DecreeStatus.ACTIVE:
            return effect
        if status is DecreeStatus.EXPIRED:
            self.board.remove(settlement_id)
            logger.debug(
                "Decree %s for %s expired on day %s; removed on day %s",
                effect.petition_id, settlement_id, effect.expires_on_day, today,
            )
        return None

    def collect_expired(self, settlement_id: str, today: int) -> bool:
        """Maintenance pass: remove the decree if expired. Returns True if removed."""
        effect = self.board.get(settlement_id)
        if decree_status(effect, today) is DecreeStatus.EXPIRED:
            self.observe(settlement_id, today)
            return True
        return False
