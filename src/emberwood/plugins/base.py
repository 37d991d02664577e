"""
Base class for host plugins.

All plugins implement this ABC. Default lifecycle hooks are no-ops so
plugins only override what they need.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from emberwood.core.host import GameHost


class EnginePlugin(ABC):
    """
    Abstract base for plugins that wire systems into the host.

    Lifecycle hooks fire in this order:
        init → start → [game runs] → stop → dispose

    ``init`` registers services, ``start`` subscribes to host events,
    ``stop`` unsubscribes, ``dispose`` unregisters services.
    """

    @property
    @abstractmethod
    def id(self) -> str:
        """Unique identifier for this plugin."""

    @property
    def requires(self) -> list[str]:
        """Ids of plugins that must be enabled first."""
        return []

    def init(self, host: GameHost) -> None:
        """Called once when the plugin is enabled."""

    def start(self, host: GameHost) -> None:
        """Called after ``init``; subscribe to host events here."""

    def stop(self, host: GameHost) -> None:
        """Called when the plugin is disabled, before ``dispose``."""

    def dispose(self, host: GameHost) -> None:
        """Release services registered in ``init``."""
