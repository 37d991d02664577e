"""
Session manager for economy sandboxes.

Each session wraps a GameHost with the RNG bridge and village services
plugins enabled, one economy service per settlement, and an
EconomyHistory listening on the host bus. Sessions live in memory only.
"""

from __future__ import annotations

import logging
import uuid
from dataclasses import dataclass, field, replace
from typing import Any

from emberwood.core.config import EconomyConfig
from emberwood.core.host import GameHost
from emberwood.core.service import VillageEconomyService
from emberwood.metrics.collector import EconomyHistory
from emberwood.plugins import PluginRegistry, RngBridgePlugin, VillageServicesPlugin
from emberwood.plugins.village_services import SERVICE_NAME

logger = logging.getLogger(__name__)


@dataclass
class EconomySession:
    """A running economy sandbox."""

    id: str
    name: str
    config: EconomyConfig
    host: GameHost
    plugins: PluginRegistry
    history: EconomyHistory
    services: dict[str, VillageEconomyService] = field(default_factory=dict)

    @property
    def day(self) -> int:
        return self.host.clock.day

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "day": self.day,
            "settlements": list(self.services),
            "config": self.config.to_dict(),
        }


class SessionManager:
    """Manages multiple in-memory economy sessions."""

    def __init__(self, default_seed: int | None = None):
        self.sessions: dict[str, EconomySession] = {}
        self.default_seed = default_seed

    def create_session(
        self,
        config: EconomyConfig | None = None,
        name: str | None = None,
        settlements: list[str] | None = None,
    ) -> EconomySession:
        """Create a session whose primary settlement is ``config.settlement_id``."""
        if config is None:
            config = EconomyConfig(random_seed=self.default_seed)
        elif config.random_seed is None and self.default_seed is not None:
            config = replace(config, random_seed=self.default_seed)

        host = GameHost(config)
        registry = PluginRegistry(host)
        village = VillageServicesPlugin()
        registry.register(RngBridgePlugin())
        registry.register(village)
        registry.enable("ew.rngBridge")
        registry.enable("ew.villageServices")

        history = EconomyHistory()
        history.attach(host.bus)

        session = EconomySession(
            id=uuid.uuid4().hex[:8],
            name=name or config.settlement_id,
            config=config,
            host=host,
            plugins=registry,
            history=history,
        )
        primary = host.get(SERVICE_NAME)
        session.services[primary.settlement_id] = primary

        for settlement_id in settlements or []:
            if settlement_id not in session.services:
                session.services[settlement_id] = self._build_service(
                    session, settlement_id,
                )

        self.sessions[session.id] = session
        logger.info(
            "Created economy session %s with settlements %s",
            session.id, list(session.services),
        )
        return session

    def _build_service(
        self, session: EconomySession, settlement_id: str,
    ) -> VillageEconomyService:
        host = session.host
        service = VillageEconomyService(
            settlement_id,
            store=host.economies,
            bus=host.bus,
            rng=host.get("rng"),
            government=host.government,
            decrees=host.decrees,
            clock=host.clock,
            config=session.config,
        )
        service.init_economy()
        return service

    def get_session(self, session_id: str) -> EconomySession:
        """Raises KeyError if not found."""
        try:
            return self.sessions[session_id]
        except KeyError:
            raise KeyError(f"Session '{session_id}' not found") from None

    def get_service(self, session_id: str, settlement_id: str) -> VillageEconomyService:
        """Raises KeyError if the session or settlement is unknown."""
        session = self.get_session(session_id)
        try:
            return session.services[settlement_id]
        except KeyError:
            raise KeyError(
                f"Settlement '{settlement_id}' not found in session '{session_id}'"
            ) from None

    def list_sessions(self) -> list[EconomySession]:
        return list(self.sessions.values())

    def delete_session(self, session_id: str) -> None:
        session = self.get_session(session_id)
        for plugin_id in reversed(session.plugins.enabled_ids):
            session.plugins.disable(plugin_id)
        session.history.detach(session.host.bus)
        del self.sessions[session_id]

    def advance(self, session_id: str, days: int = 1) -> EconomySession:
        """Advance the session clock; the primary settlement ticks via its plugin."""
        session = self.get_session(session_id)
        session.host.advance_day(days)
        return session
