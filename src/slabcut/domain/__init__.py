"""Domain layer - pieces, units and the pre-placement services."""

from .errors import DecompositionLimitExceeded, UnplaceableUnit, ValidationError
from .slab_sizes import SLAB_SIZES, SlabSize, get_slab_size
from .value_objects import (
    CutPlan,
    EdgePosition,
    FinishedEdges,
    JoinStrategy,
    LegDimensions,
    LShapeConfig,
    PackableUnit,
    Piece,
    ShapeType,
    SplitAxis,
    UnitKind,
    UShapeConfig,
)

__all__ = [
    "CutPlan",
    "DecompositionLimitExceeded",
    "EdgePosition",
    "FinishedEdges",
    "JoinStrategy",
    "LegDimensions",
    "LShapeConfig",
    "PackableUnit",
    "Piece",
    "SLAB_SIZES",
    "ShapeType",
    "SlabSize",
    "SplitAxis",
    "UShapeConfig",
    "UnitKind",
    "UnplaceableUnit",
    "ValidationError",
    "get_slab_size",
]
