"""Packable units and oversize cut plans."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class UnitKind(str, Enum):
    """Kinds of rectangle the placement engine handles."""

    MAIN = "main"
    SEGMENT = "segment"
    LAMINATION_STRIP = "strip"

    @property
    def sort_rank(self) -> int:
        """Tie-break rank when sorting units of equal area."""
        return _KIND_RANK[self]


_KIND_RANK = {
    UnitKind.MAIN: 0,
    UnitKind.SEGMENT: 1,
    UnitKind.LAMINATION_STRIP: 2,
}


class SplitAxis(str, Enum):
    """Axis an oversize piece was split along."""

    LENGTH = "length"
    WIDTH = "width"


class JoinStrategy(str, Enum):
    """How an oversize piece is joined back together."""

    NONE = "none"
    LENGTHWISE = "lengthwise"
    WIDTHWISE = "widthwise"
    MULTI_JOIN = "multi_join"


class JoinOrientation(str, Enum):
    """Direction a join seam runs across the finished piece."""

    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


@dataclass(frozen=True)
class PackableUnit:
    """A rectangle that the placement engine assigns to a slab.

    ``width`` is the x extent and ``height`` the y extent before any
    rotation. Provenance is kept as explicit ids and indices rather than
    object references.

    Attributes:
        id: Unique unit identifier.
        kind: Main piece, oversize segment or lamination strip.
        piece_id: Id of the catalogue piece this unit derives from.
        width: X extent in mm (un-rotated).
        height: Y extent in mm (un-rotated).
        label: Display label.
        parent_id: Parent unit or piece id (None for plain pieces).
        leg_index: Leg index for units derived from an L/U shape.
        segment_index: Zero-based segment index for oversize fragments.
        segment_count: Number of segments the parent was split into.
        split_axis: Axis the parent was split along.
        join_strategy: Strategy used to split the parent.
        edge: Edge key a lamination strip sits under.
        part_index: Zero-based fragment index of a split strip.
        part_count: Number of fragments the strip edge was split into.
        thickness: Thickness in mm.
        material_id: Material identifier carried from the piece.
        can_rotate: Whether rotation is permitted for this unit.
    """

    id: str
    kind: UnitKind
    piece_id: str
    width: float
    height: float
    label: str = ""
    parent_id: str | None = None
    leg_index: int | None = None
    segment_index: int | None = None
    segment_count: int | None = None
    split_axis: SplitAxis | None = None
    join_strategy: JoinStrategy = JoinStrategy.NONE
    edge: str | None = None
    part_index: int | None = None
    part_count: int | None = None
    thickness: float = 0.0
    material_id: str | None = None
    can_rotate: bool = True

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Unit '{self.id}' dimensions must be positive")
        if not self.label:
            object.__setattr__(self, "label", self.id)

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def is_strip(self) -> bool:
        return self.kind is UnitKind.LAMINATION_STRIP

    @property
    def strip_length(self) -> float:
        """Length of the edge a strip covers (its longer side)."""
        return max(self.width, self.height)


@dataclass(frozen=True)
class JoinLocation:
    """A seam where two segments of an oversize piece meet.

    Attributes:
        position: Distance from the piece's left (or bottom) edge in mm.
        orientation: Direction the seam runs.
        length: Length of the seam in mm.
    """

    position: float
    orientation: JoinOrientation
    length: float


@dataclass(frozen=True)
class CutPlan:
    """How one oversize piece or leg is divided into segments.

    Attributes:
        unit_id: Id of the piece or leg that was split.
        piece_id: Originating piece id.
        label: Display label of the split piece or leg.
        strategy: Join strategy used.
        axis: Axis the split runs along.
        segment_lengths: Segment sizes along the split axis.
        cross_dimension: Size of every segment across the split axis.
        joins: Seam locations.
        warnings: Fabrication advisories for this split.
    """

    unit_id: str
    piece_id: str
    label: str
    strategy: JoinStrategy
    axis: SplitAxis
    segment_lengths: tuple[float, ...]
    cross_dimension: float
    joins: tuple[JoinLocation, ...]
    warnings: tuple[str, ...] = ()

    @property
    def segment_count(self) -> int:
        return len(self.segment_lengths)

    @property
    def join_length(self) -> float:
        """Total seam length in mm."""
        return sum(j.length for j in self.joins)
