"""Value objects for the slab optimisation domain.

All classes are re-exported from sub-modules for convenience.
"""

from __future__ import annotations

from ._pieces import (
    EdgePosition,
    FinishedEdges,
    LegDimensions,
    LShapeConfig,
    Piece,
    ShapeConfig,
    ShapeType,
    UShapeConfig,
)
from ._units import (
    CutPlan,
    JoinLocation,
    JoinOrientation,
    JoinStrategy,
    PackableUnit,
    SplitAxis,
    UnitKind,
)

__all__ = [
    "CutPlan",
    "EdgePosition",
    "FinishedEdges",
    "JoinLocation",
    "JoinOrientation",
    "JoinStrategy",
    "LegDimensions",
    "LShapeConfig",
    "PackableUnit",
    "Piece",
    "ShapeConfig",
    "ShapeType",
    "SplitAxis",
    "UShapeConfig",
    "UnitKind",
]
