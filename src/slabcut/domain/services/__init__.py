"""Domain services for slab optimisation.

This package provides the pure computation steps that run before placement:
- Rectangle math and geometry fingerprints
- L/U shape decomposition into rectangular legs
- Oversize splitting into joined segments
- Lamination strip derivation
"""

from .decomposer import (
    DecompositionConfig,
    LegDecomposition,
    OversizeDecomposer,
    PieceDecomposition,
    split_lengths,
)
from .geometry import (
    Rect,
    compute_fingerprint,
    fits,
    fits_any_orientation,
    kerf_padded,
)
from .lamination import LaminationConfig, LaminationStripGenerator, partition_edge
from .shapes import (
    Leg,
    ShapeEdge,
    bounding_box,
    decompose_shape,
    finishable_edges,
    is_edge_finished,
    shape_area,
)

__all__ = [
    "DecompositionConfig",
    "LaminationConfig",
    "LaminationStripGenerator",
    "Leg",
    "LegDecomposition",
    "OversizeDecomposer",
    "PieceDecomposition",
    "Rect",
    "ShapeEdge",
    "bounding_box",
    "compute_fingerprint",
    "decompose_shape",
    "finishable_edges",
    "fits",
    "fits_any_orientation",
    "is_edge_finished",
    "kerf_padded",
    "partition_edge",
    "shape_area",
    "split_lengths",
]
