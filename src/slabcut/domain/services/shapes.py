"""Decomposition of L and U shaped pieces into rectangular legs.

Each shape family has a fixed decomposition rule and a fixed table of
finishable edges. Each run of an edge is owned by exactly one leg. Join
faces between legs are never finished and never appear in the tables.

Edge geometry is described relative to the owning leg:
- ``axis``: the leg dimension the edge runs along (LENGTH or WIDTH)
- ``far_side``: True when the edge sits at the far end of the other axis
  (top side for LENGTH edges, right end for WIDTH edges)
"""

from __future__ import annotations

from dataclasses import dataclass

from ..value_objects import (
    EdgePosition,
    LShapeConfig,
    Piece,
    ShapeType,
    SplitAxis,
    UShapeConfig,
)

__all__ = [
    "Leg",
    "ShapeEdge",
    "decompose_shape",
    "finishable_edges",
    "is_edge_finished",
    "shape_area",
    "bounding_box",
]


@dataclass(frozen=True)
class Leg:
    """A rectangular leg of a piece.

    Rectangles decompose into a single leg with ``index`` None.
    """

    index: int | None
    label: str
    length: float
    width: float

    @property
    def area(self) -> float:
        return self.length * self.width


@dataclass(frozen=True)
class ShapeEdge:
    """A finishable outer edge and the leg that owns it."""

    key: str
    leg_index: int | None
    length: float
    axis: SplitAxis
    far_side: bool


def decompose_shape(piece: Piece) -> list[Leg]:
    """Split a piece into its rectangular legs.

    L-shape: Leg A is leg1 in full (it owns the corner square); Leg B is the
    part of leg2 below leg1. U-shape: left leg and right leg in full, back
    spanning between them.

    Args:
        piece: Piece to decompose.

    Returns:
        Legs in index order.
    """
    shape = piece.shape
    if isinstance(shape, LShapeConfig):
        return [
            Leg(0, "Leg A", shape.leg1.length, shape.leg1.width),
            Leg(1, "Leg B", shape.leg2.length - shape.leg1.width, shape.leg2.width),
        ]
    if isinstance(shape, UShapeConfig):
        return [
            Leg(0, "Left Leg", shape.left_leg.length, shape.left_leg.width),
            Leg(1, "Back", shape.back.length, shape.back.width),
            Leg(2, "Right Leg", shape.right_leg.length, shape.right_leg.width),
        ]
    return [Leg(None, "", piece.length, piece.width)]


def _l_shape_edges(shape: LShapeConfig) -> list[ShapeEdge]:
    """Edge table for an L shape.

    The inner step face runs along leg A, so leg A owns ``inner``. This
    differs from grouping ``inner`` with leg B by label: ownership here
    follows the leg the face is cut on, which is where its strip is glued.
    """
    drop = shape.leg2.length - shape.leg1.width
    return [
        ShapeEdge("top", 0, shape.leg1.length, SplitAxis.LENGTH, True),
        ShapeEdge("left", 0, shape.leg1.width, SplitAxis.WIDTH, False),
        ShapeEdge("inner", 0, shape.leg1.length - shape.leg2.width, SplitAxis.LENGTH, False),
        ShapeEdge("r_top", 1, shape.leg2.width, SplitAxis.WIDTH, True),
        ShapeEdge("r_btm", 1, drop, SplitAxis.LENGTH, True),
        ShapeEdge("bottom", 1, drop, SplitAxis.LENGTH, False),
    ]


def _u_shape_edges(shape: UShapeConfig) -> list[ShapeEdge]:
    """Edge table for a U shape.

    The outer ``bottom`` face runs under all three legs, so it appears once
    per leg with the run that leg carries: the end of each side leg and the
    full length of the back.
    """
    left, back, right = shape.left_leg, shape.back, shape.right_leg
    return [
        ShapeEdge("top_left", 0, left.width, SplitAxis.WIDTH, True),
        ShapeEdge("outer_left", 0, left.length, SplitAxis.LENGTH, False),
        ShapeEdge("inner_left", 0, left.length - back.width, SplitAxis.LENGTH, True),
        ShapeEdge("bottom", 0, left.width, SplitAxis.WIDTH, False),
        ShapeEdge("bottom", 1, back.length, SplitAxis.LENGTH, False),
        ShapeEdge("back_inner", 1, back.length, SplitAxis.LENGTH, True),
        ShapeEdge("top_right", 2, right.width, SplitAxis.WIDTH, True),
        ShapeEdge("outer_right", 2, right.length, SplitAxis.LENGTH, True),
        ShapeEdge("inner_right", 2, right.length - back.width, SplitAxis.LENGTH, False),
        ShapeEdge("bottom", 2, right.width, SplitAxis.WIDTH, False),
    ]


def finishable_edges(piece: Piece) -> list[ShapeEdge]:
    """All finishable outer edges of a piece with their owning legs.

    Rectangles have four edges (top, bottom, left, right) and L-shapes six.
    U-shapes have eight named edges, with ``bottom`` listed once per leg.
    Edges of zero length are omitted.
    """
    shape = piece.shape
    if isinstance(shape, LShapeConfig):
        edges = _l_shape_edges(shape)
    elif isinstance(shape, UShapeConfig):
        edges = _u_shape_edges(shape)
    else:
        edges = [
            ShapeEdge(EdgePosition.TOP.value, None, piece.length, SplitAxis.LENGTH, True),
            ShapeEdge(EdgePosition.BOTTOM.value, None, piece.length, SplitAxis.LENGTH, False),
            ShapeEdge(EdgePosition.LEFT.value, None, piece.width, SplitAxis.WIDTH, False),
            ShapeEdge(EdgePosition.RIGHT.value, None, piece.width, SplitAxis.WIDTH, True),
        ]
    return [e for e in edges if e.length > 0]


def is_edge_finished(piece: Piece, key: str) -> bool:
    """Whether an edge is finished and not wall-abutting.

    For L/U shapes a named edge is finished when listed in
    ``shape_edges``; the plain top/bottom/left/right flags also apply to
    shape edges with the same key.
    """
    if key in piece.no_strip_edges:
        return False
    if piece.shape_type is not ShapeType.RECTANGLE and key in piece.shape_edges:
        return True
    return piece.finished_edges.is_finished(key)


def shape_area(piece: Piece) -> float:
    """Actual stone area in square mm (sum of legs, no corner overlap)."""
    return sum(leg.area for leg in decompose_shape(piece))


def bounding_box(piece: Piece) -> tuple[float, float]:
    """Outer (length, width) of the assembled piece."""
    shape = piece.shape
    if isinstance(shape, LShapeConfig):
        return (shape.leg1.length, shape.leg2.length)
    if isinstance(shape, UShapeConfig):
        return (
            shape.left_leg.width + shape.back.length + shape.right_leg.width,
            max(shape.left_leg.length, shape.right_leg.length),
        )
    return (piece.length, piece.width)
