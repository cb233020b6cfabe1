"""FastAPI dependency injection for slab optimisation services."""

from functools import lru_cache
from typing import Annotated

from fastapi import Depends

from slabcut.application.cache import OptimizationCache
from slabcut.application.commands import OptimizeSlabsCommand
from slabcut.application.factory import ServiceFactory, get_factory
from slabcut.application.multi_material import MultiMaterialOptimizer


@lru_cache(maxsize=1)
def get_service_factory() -> ServiceFactory:
    """Get cached ServiceFactory instance."""
    return get_factory()


def get_optimize_command(
    factory: Annotated[ServiceFactory, Depends(get_service_factory)],
) -> OptimizeSlabsCommand:
    """Dependency for OptimizeSlabsCommand."""
    return factory.create_optimize_command()


def get_multi_material_optimizer(
    factory: Annotated[ServiceFactory, Depends(get_service_factory)],
) -> MultiMaterialOptimizer:
    return factory.create_multi_material_optimizer()


def get_result_cache(
    factory: Annotated[ServiceFactory, Depends(get_service_factory)],
) -> OptimizationCache:
    """Dependency for the shared result cache."""
    return factory.get_cache()


# Type aliases for cleaner endpoint signatures
ServiceFactoryDep = Annotated[ServiceFactory, Depends(get_service_factory)]
OptimizeCommandDep = Annotated[OptimizeSlabsCommand, Depends(get_optimize_command)]
MultiMaterialOptimizerDep = Annotated[
    MultiMaterialOptimizer, Depends(get_multi_material_optimizer)
]
ResultCacheDep = Annotated[OptimizationCache, Depends(get_result_cache)]
