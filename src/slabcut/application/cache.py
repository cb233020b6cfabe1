"""Fingerprint-keyed cache of optimisation results.

The engine itself is stateless; callers that see repeated identical
requests (the REST API) keep results here to skip recomputation.
"""

from __future__ import annotations

import logging
from collections import OrderedDict

from slabcut.infrastructure.metrics import OptimizationResult

logger = logging.getLogger(__name__)


class OptimizationCache:
    """Bounded LRU cache of results keyed by input fingerprint.

    The fingerprint covers pieces, kerf and slab size. Rotation and edge
    allowance are added to the key here since they also change the layout.
    """

    def __init__(self, max_entries: int = 128) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.max_entries = max_entries
        self._entries: OrderedDict[str, OptimizationResult] = OrderedDict()
        self.hits = 0
        self.misses = 0

    @staticmethod
    def make_key(fingerprint: str, allow_rotation: bool, edge_allowance: float = 0.0) -> str:
        return f"{fingerprint}:r{int(allow_rotation)}:e{edge_allowance:g}"

    def get(self, key: str) -> OptimizationResult | None:
        result = self._entries.get(key)
        if result is None:
            self.misses += 1
            return None
        self._entries.move_to_end(key)
        self.hits += 1
        logger.debug("Cache hit for %s", key[:16])
        return result

    def put(self, key: str, result: OptimizationResult) -> None:
        self._entries[key] = result
        self._entries.move_to_end(key)
        while len(self._entries) > self.max_entries:
            evicted, _ = self._entries.popitem(last=False)
            logger.debug("Evicted %s", evicted[:16])

    def clear(self) -> None:
        self._entries.clear()
        self.hits = 0
        self.misses = 0

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries
