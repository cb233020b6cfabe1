"""Piece catalogue value objects: pieces, edges and shape configurations."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from ..errors import ValidationError


class EdgePosition(str, Enum):
    """The four outer edges of a rectangular piece."""

    TOP = "top"
    BOTTOM = "bottom"
    LEFT = "left"
    RIGHT = "right"


class ShapeType(str, Enum):
    """Supported piece outlines."""

    RECTANGLE = "rectangle"
    L_SHAPE = "l_shape"
    U_SHAPE = "u_shape"


@dataclass(frozen=True)
class FinishedEdges:
    """Which edges of a piece are finished (polished or profiled).

    Finished edges on thick pieces receive a lamination strip underneath to
    build up the visible edge thickness.
    """

    top: bool = False
    bottom: bool = False
    left: bool = False
    right: bool = False

    @classmethod
    def all(cls) -> "FinishedEdges":
        """All four edges finished."""
        return cls(top=True, bottom=True, left=True, right=True)

    def is_finished(self, edge: str) -> bool:
        """Check a single edge by key ("top", "bottom", "left" or "right")."""
        try:
            return bool(getattr(self, EdgePosition(edge).value))
        except ValueError:
            return False

    @property
    def finished(self) -> tuple[str, ...]:
        """Keys of finished edges in top, bottom, left, right order."""
        return tuple(e.value for e in EdgePosition if getattr(self, e.value))


@dataclass(frozen=True)
class LegDimensions:
    """Length and width of one rectangular leg of an L or U shaped piece."""

    length: float
    width: float

    def __post_init__(self) -> None:
        if self.length <= 0 or self.width <= 0:
            raise ValidationError("Leg dimensions must be positive")


@dataclass(frozen=True)
class LShapeConfig:
    """L-shaped piece: leg1 runs along the top, leg2 drops from its right end.

    leg2.length is measured to the outer edge of leg1, so it includes the
    corner square.
    """

    leg1: LegDimensions
    leg2: LegDimensions

    @property
    def shape_type(self) -> ShapeType:
        return ShapeType.L_SHAPE

    def __post_init__(self) -> None:
        if self.leg2.length <= self.leg1.width:
            raise ValidationError(
                "L-shape leg2 length must exceed leg1 width"
            )
        if self.leg2.width > self.leg1.length:
            raise ValidationError(
                "L-shape leg2 width cannot exceed leg1 length"
            )


@dataclass(frozen=True)
class UShapeConfig:
    """U-shaped piece: two legs joined by a back running between them.

    Leg lengths are measured to the outer edge of the back; the back length
    covers only the span between the legs.
    """

    left_leg: LegDimensions
    back: LegDimensions
    right_leg: LegDimensions

    @property
    def shape_type(self) -> ShapeType:
        return ShapeType.U_SHAPE

    def __post_init__(self) -> None:
        for leg in (self.left_leg, self.right_leg):
            if leg.length <= self.back.width:
                raise ValidationError(
                    "U-shape leg length must exceed the back width"
                )


ShapeConfig = LShapeConfig | UShapeConfig


@dataclass(frozen=True)
class Piece:
    """A rectangle (or L/U outline) requested by the caller.

    Pieces are immutable inputs. The engine only reads them to derive
    packable units.

    Attributes:
        id: Unique identifier within a run.
        length: Length in mm (runs along the slab width axis).
        width: Width in mm (runs along the slab height axis).
        thickness: Finished thickness in mm.
        material_id: Optional material identifier used for grouping.
        finished_edges: Finish flags for the four outer edges.
        no_strip_edges: Edge keys that abut a wall and never get a strip.
        edge_types: Edge key to edge type name (e.g. "40mm Mitre").
        label: Display name, defaults to the id.
        can_rotate: Whether this piece may be turned 90 degrees on a slab.
        shape: L/U shape configuration, None for plain rectangles.
        shape_edges: Finished named leg-edges of an L/U shape
            (e.g. "inner", "r_btm").
    """

    id: str
    length: float
    width: float
    thickness: float = 20.0
    material_id: str | None = None
    finished_edges: FinishedEdges = field(default_factory=FinishedEdges)
    no_strip_edges: frozenset[str] = frozenset()
    edge_types: dict[str, str] = field(default_factory=dict, hash=False)
    label: str = ""
    can_rotate: bool = True
    shape: ShapeConfig | None = None
    shape_edges: frozenset[str] = frozenset()

    def __post_init__(self) -> None:
        if not self.id:
            raise ValidationError("Piece id must not be empty")
        if self.length <= 0 or self.width <= 0:
            raise ValidationError(
                f"Piece '{self.id}' dimensions must be positive"
            )
        if self.thickness < 0:
            raise ValidationError(
                f"Piece '{self.id}' thickness must be non-negative"
            )
        if not self.label:
            object.__setattr__(self, "label", self.id)

    @property
    def shape_type(self) -> ShapeType:
        return self.shape.shape_type if self.shape else ShapeType.RECTANGLE

    @property
    def area(self) -> float:
        """Bounding rectangle area in square mm."""
        return self.length * self.width

    def edge_type(self, edge: str) -> str | None:
        """Edge type name for an edge key, if one was given."""
        return self.edge_types.get(edge)
