"""
Plugin registry with dependency resolution.

Manages registration, enabling/disabling, and dependency checking for
host plugins. Enabling runs a plugin's ``init`` and ``start`` hooks;
disabling runs ``stop`` and ``dispose``.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from emberwood.plugins.base import EnginePlugin

if TYPE_CHECKING:
    from emberwood.core.host import GameHost

logger = logging.getLogger(__name__)


class PluginRegistry:
    """
    Manages host plugins with dependency resolution.

    Usage::

        registry = PluginRegistry(host)
        registry.register(RngBridgePlugin(seed=42))
        registry.register(VillageServicesPlugin())
        registry.enable("ew.rngBridge")
        registry.enable("ew.villageServices")   # checks ew.rngBridge is enabled
    """

    def __init__(self, host: GameHost) -> None:
        self.host = host
        self._plugins: dict[str, EnginePlugin] = {}
        self._enabled: dict[str, bool] = {}

    def register(self, plugin: EnginePlugin) -> None:
        """Register a plugin as available (not yet enabled)."""
        self._plugins[plugin.id] = plugin
        self._enabled[plugin.id] = False

    def enable(self, plugin_id: str) -> None:
        """Enable a registered plugin after checking dependencies."""
        if plugin_id not in self._plugins:
            raise KeyError(f"Plugin '{plugin_id}' is not registered")
        if self._enabled[plugin_id]:
            return

        plugin = self._plugins[plugin_id]
        for dep in plugin.requires:
            if not self._enabled.get(dep, False):
                raise ValueError(
                    f"Plugin '{plugin_id}' requires '{dep}' to be enabled first"
                )
        plugin.init(self.host)
        plugin.start(self.host)
        self._enabled[plugin_id] = True
        logger.info("Plugin %s enabled", plugin_id)

    def disable(self, plugin_id: str) -> None:
        """Disable a plugin, checking that no dependents rely on it."""
        if plugin_id not in self._plugins:
            raise KeyError(f"Plugin '{plugin_id}' is not registered")
        if not self._enabled[plugin_id]:
            return

        # Check reverse dependencies
        for other_id, other in self._plugins.items():
            if self._enabled.get(other_id, False) and other_id != plugin_id:
                if plugin_id in other.requires:
                    raise ValueError(
                        f"Cannot disable '{plugin_id}': "
                        f"plugin '{other_id}' depends on it"
                    )
        plugin = self._plugins[plugin_id]
        plugin.stop(self.host)
        plugin.dispose(self.host)
        self._enabled[plugin_id] = False
        logger.info("Plugin %s disabled", plugin_id)

    def is_enabled(self, plugin_id: str) -> bool:
        return self._enabled.get(plugin_id, False)

    def get(self, plugin_id: str) -> EnginePlugin | None:
        """Return a registered plugin by id, or *None*."""
        return self._plugins.get(plugin_id)

    def get_enabled(self) -> list[EnginePlugin]:
        """Return all enabled plugins in registration order."""
        return [
            plugin for pid, plugin in self._plugins.items()
            if self._enabled.get(pid, False)
        ]

    @property
    def registered_ids(self) -> list[str]:
        return list(self._plugins.keys())

    @property
    def enabled_ids(self) -> list[str]:
        return [p for p, enabled in self._enabled.items() if enabled]
