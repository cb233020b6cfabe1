"""Service factory for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from slabcut.domain.services import DecompositionConfig, LaminationConfig

if TYPE_CHECKING:
    from slabcut.application.cache import OptimizationCache
    from slabcut.application.commands import OptimizeSlabsCommand
    from slabcut.application.multi_material import MultiMaterialOptimizer


@dataclass
class ServiceFactory:
    """Factory for creating service instances.

    Centralizes service instantiation so the CLI and web layers share one
    configuration, and tests can swap in their own.

    Attributes:
        decomposition_config: Oversize splitting limits.
        lamination_config: Strip sizing rules.
        min_free_dimension: Free rectangles narrower than this are dropped.
        cache_size: Entries kept by the result cache.
    """

    decomposition_config: DecompositionConfig = field(default_factory=DecompositionConfig)
    lamination_config: LaminationConfig = field(default_factory=LaminationConfig)
    min_free_dimension: float = 0.0
    cache_size: int = 128

    _cache: "OptimizationCache | None" = field(default=None, init=False, repr=False)

    def create_optimize_command(self) -> "OptimizeSlabsCommand":
        """Create OptimizeSlabsCommand with this factory's configuration."""
        from slabcut.application.commands import OptimizeSlabsCommand

        return OptimizeSlabsCommand(
            decomposition_config=self.decomposition_config,
            lamination_config=self.lamination_config,
            min_free_dimension=self.min_free_dimension,
        )

    def create_multi_material_optimizer(self) -> "MultiMaterialOptimizer":
        from slabcut.application.multi_material import MultiMaterialOptimizer

        return MultiMaterialOptimizer(self.create_optimize_command())

    def get_cache(self) -> "OptimizationCache":
        """Get or create the shared result cache."""
        if self._cache is None:
            from slabcut.application.cache import OptimizationCache

            self._cache = OptimizationCache(self.cache_size)
        return self._cache


# Default factory instance
_default_factory: ServiceFactory | None = None


def get_factory() -> ServiceFactory:
    """Get the default service factory."""
    global _default_factory
    if _default_factory is None:
        _default_factory = ServiceFactory()
    return _default_factory


def set_factory(factory: ServiceFactory | None) -> None:
    """Set a custom factory (for testing)."""
    global _default_factory
    _default_factory = factory


def reset_factory() -> None:
    """Reset the factory to default (for testing cleanup)."""
    global _default_factory
    _default_factory = None
