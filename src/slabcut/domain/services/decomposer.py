"""Oversize decomposition of pieces into slab-sized units.

Pieces are first broken into rectangular legs (L/U shapes), then every leg
that does not fit the usable slab area is split along one axis into the
minimum number of joined segments. Each seam consumes one kerf width.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

from ..errors import DecompositionLimitExceeded, UnplaceableUnit
from ..value_objects import (
    CutPlan,
    JoinLocation,
    JoinOrientation,
    JoinStrategy,
    PackableUnit,
    Piece,
    SplitAxis,
    UnitKind,
)
from .geometry import EPSILON, fits_any_orientation
from .shapes import Leg, decompose_shape

logger = logging.getLogger(__name__)

WATERFALL_WARNING = "Widthwise join - ensure waterfall continuity if applicable"
CENTRE_JOIN_WARNING = "Join is near centre of piece - consider adjusting if possible"


@dataclass(frozen=True)
class DecompositionConfig:
    """Tuning for oversize splitting.

    Attributes:
        max_segments: Most segments a single leg may be split into.
        rounding: Segment lengths (except the last) are rounded up to a
            multiple of this many mm.
        centre_warning_distance: Joins closer than this to the centre of
            the split dimension raise a warning.
    """

    max_segments: int = 6
    rounding: float = 1.0
    centre_warning_distance: float = 200.0

    def __post_init__(self) -> None:
        if self.max_segments < 2:
            raise ValueError("max_segments must be at least 2")
        if self.rounding <= 0:
            raise ValueError("rounding must be positive")
        if self.centre_warning_distance < 0:
            raise ValueError("centre_warning_distance must be non-negative")


@dataclass(frozen=True)
class LegDecomposition:
    """Result for one leg (or a whole rectangle).

    Attributes:
        leg: The rectangular leg.
        unit_id: Id of the leg as a unit, used as the segment parent id.
        units: Units emitted for the leg, in segment order. Empty when the
            leg could not be decomposed.
        axis: Split axis, None if the leg was not split.
        segment_lengths: Segment sizes along ``axis``.
    """

    leg: Leg
    unit_id: str
    units: tuple[PackableUnit, ...]
    axis: SplitAxis | None = None
    segment_lengths: tuple[float, ...] = ()

    @property
    def is_split(self) -> bool:
        return self.axis is not None


@dataclass(frozen=True)
class PieceDecomposition:
    """Everything the decomposer produced for one piece."""

    piece: Piece
    legs: tuple[LegDecomposition, ...]
    cut_plans: tuple[CutPlan, ...] = ()
    unplaced: tuple[UnplaceableUnit, ...] = ()
    warnings: tuple[str, ...] = ()

    @property
    def units(self) -> tuple[PackableUnit, ...]:
        return tuple(u for leg in self.legs for u in leg.units)


def split_lengths(
    length: float,
    cap: float,
    kerf: float,
    rounding: float = 1.0,
) -> list[float]:
    """Divide a dimension into the minimum number of segments of at most cap.

    Every segment but the last is ``ceil(total / n)`` rounded up to
    ``rounding`` and capped at ``cap``; the last absorbs the remainder.
    Segment lengths plus one kerf per join add back to ``length``.

    Args:
        length: Dimension to split in mm.
        cap: Largest segment that fits in mm.
        kerf: Blade width consumed by each join.
        rounding: Rounding step for segment lengths.

    Returns:
        Segment lengths, at least two.
    """
    n = max(2, math.ceil((length + kerf) / (cap + kerf) - EPSILON))
    total = length - (n - 1) * kerf
    base = min(cap, math.ceil(total / n / rounding - EPSILON) * rounding)
    last = total - base * (n - 1)
    if last <= 0:
        base = total / n
        last = total - base * (n - 1)
    return [base] * (n - 1) + [last]


class OversizeDecomposer:
    """Splits pieces into units that each fit the usable slab area.

    Attributes:
        usable_width: Usable slab width (slab width minus edge allowance
            on both sides, minus one kerf).
        usable_height: Usable slab height, same deductions.
        kerf: Blade width in mm.
        allow_rotation: Whether units may be turned on the slab.
        config: Splitting limits and rounding.
    """

    def __init__(
        self,
        usable_width: float,
        usable_height: float,
        kerf: float,
        allow_rotation: bool = True,
        config: DecompositionConfig | None = None,
    ) -> None:
        self.usable_width = usable_width
        self.usable_height = usable_height
        self.kerf = kerf
        self.allow_rotation = allow_rotation
        self.config = config or DecompositionConfig()

    @classmethod
    def for_slab(
        cls,
        slab_width: float,
        slab_height: float,
        kerf: float,
        edge_allowance: float = 0.0,
        allow_rotation: bool = True,
        config: DecompositionConfig | None = None,
    ) -> "OversizeDecomposer":
        """Build a decomposer from raw slab dimensions."""
        margin = 2 * edge_allowance + kerf
        return cls(
            usable_width=slab_width - margin,
            usable_height=slab_height - margin,
            kerf=kerf,
            allow_rotation=allow_rotation,
            config=config,
        )

    def decompose(self, piece: Piece) -> PieceDecomposition:
        """Decompose one piece into main and segment units.

        Args:
            piece: Catalogue piece.

        Returns:
            PieceDecomposition with one LegDecomposition per leg. Legs that
            cannot be split into fitting segments are reported in
            ``unplaced`` instead of raising.
        """
        legs = decompose_shape(piece)
        rotatable = self.allow_rotation and piece.can_rotate

        leg_results: list[LegDecomposition] = []
        plans: list[CutPlan] = []
        unplaced: list[UnplaceableUnit] = []
        warnings: list[str] = []

        for leg in legs:
            if leg.index is None:
                unit_id, label = piece.id, piece.label
            else:
                unit_id = f"{piece.id}-part-{leg.index + 1}"
                label = f"{piece.label} - {leg.label}"

            fits, _ = fits_any_orientation(
                leg.length, leg.width, self.usable_width, self.usable_height, rotatable
            )
            if fits:
                unit = self._make_unit(
                    piece, leg, unit_id, label, leg.length, leg.width
                )
                leg_results.append(LegDecomposition(leg, unit_id, (unit,)))
                continue

            try:
                result, plan = self._split_leg(piece, leg, unit_id, label, rotatable)
            except DecompositionLimitExceeded as exc:
                logger.warning("Cannot decompose '%s': %s", unit_id, exc)
                unplaced.append(UnplaceableUnit(unit_id, piece.id, str(exc)))
                leg_results.append(LegDecomposition(leg, unit_id, ()))
                continue

            if result is None:
                reason = (
                    f"'{unit_id}' ({leg.length:g}x{leg.width:g}) exceeds the usable "
                    f"slab area ({self.usable_width:g}x{self.usable_height:g}) "
                    "in both dimensions"
                )
                logger.warning("%s; two-axis splitting is not supported", reason)
                unplaced.append(UnplaceableUnit(unit_id, piece.id, reason))
                leg_results.append(LegDecomposition(leg, unit_id, ()))
                continue

            leg_results.append(result)
            plans.append(plan)
            warnings.extend(f"{label}: {w}" for w in plan.warnings)

        return PieceDecomposition(
            piece=piece,
            legs=tuple(leg_results),
            cut_plans=tuple(plans),
            unplaced=tuple(unplaced),
            warnings=tuple(warnings),
        )

    def _make_unit(
        self,
        piece: Piece,
        leg: Leg,
        unit_id: str,
        label: str,
        width: float,
        height: float,
        kind: UnitKind = UnitKind.MAIN,
        parent_id: str | None = None,
        **extra,
    ) -> PackableUnit:
        if parent_id is None and leg.index is not None:
            parent_id = piece.id
        return PackableUnit(
            id=unit_id,
            kind=kind,
            piece_id=piece.id,
            width=width,
            height=height,
            label=label,
            parent_id=parent_id,
            leg_index=leg.index,
            thickness=piece.thickness,
            material_id=piece.material_id,
            can_rotate=piece.can_rotate,
            **extra,
        )

    def _axis_cap(self, cross: float, along_w: float, along_h: float, rotatable: bool) -> float | None:
        """Largest segment size along the split axis, or None if infeasible.

        ``along_w`` is the cap when the cross dimension runs along the slab
        height, ``along_h`` the cap when the segment is turned.
        """
        caps = []
        if cross <= along_h + EPSILON:
            caps.append(along_w)
        if rotatable and cross <= along_w + EPSILON:
            caps.append(along_h)
        return max(caps) if caps else None

    def choose_axis(
        self, length: float, width: float, rotatable: bool
    ) -> tuple[SplitAxis, float] | None:
        """Pick the split axis and segment cap for an oversize leg.

        Only one feasible axis: use it. Both feasible: split the longer
        dimension (length on ties). Neither: None.
        """
        w, h = self.usable_width, self.usable_height
        options: dict[SplitAxis, float] = {}
        length_cap = self._axis_cap(width, w, h, rotatable)
        if length_cap is not None and length > length_cap + EPSILON:
            options[SplitAxis.LENGTH] = length_cap
        width_cap = self._axis_cap(length, h, w, rotatable)
        if width_cap is not None and width > width_cap + EPSILON:
            options[SplitAxis.WIDTH] = width_cap

        if not options:
            return None
        if len(options) == 2:
            axis = SplitAxis.LENGTH if length >= width else SplitAxis.WIDTH
        else:
            (axis,) = options
        return axis, options[axis]

    def _split_leg(
        self,
        piece: Piece,
        leg: Leg,
        unit_id: str,
        label: str,
        rotatable: bool,
    ) -> tuple[LegDecomposition | None, CutPlan | None]:
        choice = self.choose_axis(leg.length, leg.width, rotatable)
        if choice is None:
            return None, None
        axis, cap = choice

        dimension = leg.length if axis is SplitAxis.LENGTH else leg.width
        cross = leg.width if axis is SplitAxis.LENGTH else leg.length
        lengths = split_lengths(dimension, cap, self.kerf, self.config.rounding)
        n = len(lengths)
        if n > self.config.max_segments:
            raise DecompositionLimitExceeded(unit_id, n, self.config.max_segments)

        if n > 2:
            strategy = JoinStrategy.MULTI_JOIN
        elif axis is SplitAxis.LENGTH:
            strategy = JoinStrategy.LENGTHWISE
        else:
            strategy = JoinStrategy.WIDTHWISE

        units = []
        for i, seg in enumerate(lengths):
            width, height = (seg, cross) if axis is SplitAxis.LENGTH else (cross, seg)
            units.append(
                self._make_unit(
                    piece,
                    leg,
                    f"{unit_id}-seg-{i + 1}",
                    f"{label} (segment {i + 1} of {n})",
                    width,
                    height,
                    kind=UnitKind.SEGMENT,
                    parent_id=unit_id,
                    segment_index=i,
                    segment_count=n,
                    split_axis=axis,
                    join_strategy=strategy,
                )
            )
        orientation = (
            JoinOrientation.VERTICAL if axis is SplitAxis.LENGTH else JoinOrientation.HORIZONTAL
        )
        joins = []
        position = 0.0
        for seg in lengths[:-1]:
            position += seg
            joins.append(JoinLocation(position, orientation, cross))
            position += self.kerf

        warnings = []
        centre = dimension / 2
        if any(
            abs(j.position - centre) < self.config.centre_warning_distance for j in joins
        ):
            warnings.append(CENTRE_JOIN_WARNING)
        if axis is SplitAxis.WIDTH:
            warnings.append(WATERFALL_WARNING)

        plan = CutPlan(
            unit_id=unit_id,
            piece_id=piece.id,
            label=label,
            strategy=strategy,
            axis=axis,
            segment_lengths=tuple(lengths),
            cross_dimension=cross,
            joins=tuple(joins),
            warnings=tuple(warnings),
        )
        logger.info(
            "Split '%s' (%gx%g) %s into %d segments",
            unit_id,
            leg.length,
            leg.width,
            axis.value,
            n,
        )
        return LegDecomposition(leg, unit_id, tuple(units), axis, tuple(lengths)), plan
