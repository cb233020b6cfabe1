"""Application layer - use cases and orchestration."""

from .commands import OptimizeSlabsCommand
from .dtos import OptimizationRequest
from .multi_material import Material, MultiMaterialOptimizer, MultiMaterialRequest

__all__ = [
    "Material",
    "MultiMaterialOptimizer",
    "MultiMaterialRequest",
    "OptimizationRequest",
    "OptimizeSlabsCommand",
]
