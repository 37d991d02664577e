"""Registers the host's seeded random generator as the ``rng`` service."""

from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from emberwood.plugins.base import EnginePlugin

if TYPE_CHECKING:
    from emberwood.core.host import GameHost


class RngBridgePlugin(EnginePlugin):
    """Provides ``np.random.Generator`` to other plugins."""

    def __init__(self, seed: int | None = None) -> None:
        self.seed = seed

    @property
    def id(self) -> str:
        return "ew.rngBridge"

    def init(self, host: GameHost) -> None:
        seed = self.seed if self.seed is not None else host.config.random_seed
        host.register_service("rng", np.random.default_rng(seed))

    def dispose(self, host: GameHost) -> None:
        if host.get("rng") is not None:
            host.unregister_service("rng")
