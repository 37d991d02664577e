"""Host plugins that wire the economy into a game."""

from emberwood.plugins.base import EnginePlugin
from emberwood.plugins.registry import PluginRegistry
from emberwood.plugins.rng_bridge import RngBridgePlugin
from emberwood.plugins.village_services import VillageServicesPlugin

__all__ = [
    "EnginePlugin",
    "PluginRegistry",
    "RngBridgePlugin",
    "VillageServicesPlugin",
]
