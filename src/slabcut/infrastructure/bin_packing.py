"""Slab packing data models and the placement engine.

This module provides data structures for slab layouts and unit placements,
plus the maximal-rectangles placement engine that assigns packable units to
slabs.

All dataclasses are frozen (immutable). The engine's per-slab free space is
held in immutable states that are replaced after every placement.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from slabcut.domain.errors import UnplaceableUnit, ValidationError
from slabcut.domain.services.geometry import EPSILON, Rect, fits, kerf_padded
from slabcut.domain.value_objects import PackableUnit

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SlabConfig:
    """Raw slab dimensions.

    Attributes:
        width: Slab width in mm (x axis).
        height: Slab height in mm (y axis).
        edge_allowance: Unusable material at each slab edge in mm.
    """

    width: float = 3200.0
    height: float = 1600.0
    edge_allowance: float = 0.0

    def __post_init__(self) -> None:
        errors = []
        if self.width <= 0:
            errors.append("Slab width must be positive")
        if self.height <= 0:
            errors.append("Slab height must be positive")
        if self.edge_allowance < 0:
            errors.append("Edge allowance must be non-negative")
        elif 2 * self.edge_allowance >= min(self.width, self.height) > 0:
            errors.append("Edge allowance leaves no usable slab area")
        if errors:
            raise ValidationError(errors)

    @property
    def usable_width(self) -> float:
        """Width available for placement after edge allowance."""
        return self.width - (2 * self.edge_allowance)

    @property
    def usable_height(self) -> float:
        """Height available for placement after edge allowance."""
        return self.height - (2 * self.edge_allowance)

    @property
    def area(self) -> float:
        """Full slab area in square mm."""
        return self.width * self.height

    @property
    def usable_rect(self) -> Rect:
        return Rect(
            self.edge_allowance,
            self.edge_allowance,
            self.usable_width,
            self.usable_height,
        )


@dataclass(frozen=True)
class EngineConfig:
    """Placement engine settings.

    Attributes:
        kerf: Saw blade width in mm, reserved to the right of and above
            every placed unit.
        allow_rotation: Whether units may be turned 90 degrees.
        min_free_dimension: Free rectangles narrower than this are dropped.
    """

    kerf: float = 3.0
    allow_rotation: bool = True
    min_free_dimension: float = 0.0

    def __post_init__(self) -> None:
        if self.kerf < 0:
            raise ValidationError("Kerf must be non-negative")
        if self.min_free_dimension < 0:
            raise ValidationError("Minimum free dimension must be non-negative")


@dataclass(frozen=True)
class Placement:
    """A unit placed at a specific position on a slab.

    Coordinates are slab coordinates (origin at the slab corner, so the
    edge allowance is included).

    Attributes:
        unit: The unit being placed.
        slab_index: Zero-based slab index.
        x: Horizontal position of the unit's left edge in mm.
        y: Vertical position of the unit's bottom edge in mm.
        rotated: True if the unit is turned 90 degrees.
    """

    unit: PackableUnit
    slab_index: int
    x: float
    y: float
    rotated: bool = False

    def __post_init__(self) -> None:
        if self.x < 0 or self.y < 0:
            raise ValueError("Position coordinates must be non-negative")
        if self.slab_index < 0:
            raise ValueError("Slab index must be non-negative")

    @property
    def unit_id(self) -> str:
        return self.unit.id

    @property
    def placed_width(self) -> float:
        """Width of unit as placed (accounts for rotation)."""
        return self.unit.height if self.rotated else self.unit.width

    @property
    def placed_height(self) -> float:
        """Height of unit as placed (accounts for rotation)."""
        return self.unit.width if self.rotated else self.unit.height

    @property
    def right_edge(self) -> float:
        return self.x + self.placed_width

    @property
    def top_edge(self) -> float:
        return self.y + self.placed_height

    @property
    def area(self) -> float:
        return self.placed_width * self.placed_height


@dataclass(frozen=True)
class SlabLayout:
    """Placements on a single slab.

    Attributes:
        slab_index: Zero-based index of this slab in the run.
        slab_config: Slab dimensions.
        placements: Placements on this slab, in placement order.
    """

    slab_index: int
    slab_config: SlabConfig
    placements: tuple[Placement, ...]

    @property
    def used_area(self) -> float:
        """Total area of placed units in square mm (kerf excluded)."""
        return sum(p.area for p in self.placements)

    @property
    def waste_area(self) -> float:
        return self.slab_config.area - self.used_area

    @property
    def waste_percentage(self) -> float:
        """Percentage of the full slab area that is waste."""
        area = self.slab_config.area
        if area == 0:
            return 0.0
        return self.waste_area / area * 100

    @property
    def unit_count(self) -> int:
        return len(self.placements)


@dataclass(frozen=True)
class PackingResult:
    """Complete output of a placement run.

    Attributes:
        placements: All placements in placement order.
        layouts: One layout per opened slab.
        unplaced: Units that fit no slab even when empty.
    """

    placements: tuple[Placement, ...]
    layouts: tuple[SlabLayout, ...]
    unplaced: tuple[UnplaceableUnit, ...] = ()

    @property
    def slab_count(self) -> int:
        return len(self.layouts)


@dataclass(frozen=True)
class _SlabState:
    """Free space on one slab during packing.

    Attributes:
        index: Slab index (0-based).
        free_rects: Maximal free rectangles in bottom-left order.
        placements: Placements made on this slab so far.
    """

    index: int
    free_rects: tuple[Rect, ...]
    placements: tuple[Placement, ...] = field(default=())

    def find_position(self, width: float, height: float) -> Rect | None:
        """First free rectangle (lowest y, then x) that can take the size."""
        for rect in self.free_rects:
            if fits(width, height, rect.width, rect.height):
                return rect
        return None

    def place(self, placement: Placement, kerf: float, min_free: float) -> "_SlabState":
        """Return the state after reserving a placement's padded footprint."""
        used = kerf_padded(placement, kerf)
        free = _split_free_rects(self.free_rects, used)
        free = _prune_free_rects(free, min_free)
        return _SlabState(
            index=self.index,
            free_rects=free,
            placements=self.placements + (placement,),
        )


def _split_free_rects(free_rects: Sequence[Rect], used: Rect) -> list[Rect]:
    """Replace every free rectangle overlapping ``used`` by its maximal leftovers."""
    result: list[Rect] = []
    for rect in free_rects:
        if not rect.intersects(used):
            result.append(rect)
            continue
        if used.x > rect.x + EPSILON:
            result.append(Rect(rect.x, rect.y, used.x - rect.x, rect.height))
        if used.right < rect.right - EPSILON:
            result.append(Rect(used.right, rect.y, rect.right - used.right, rect.height))
        if used.y > rect.y + EPSILON:
            result.append(Rect(rect.x, rect.y, rect.width, used.y - rect.y))
        if used.top < rect.top - EPSILON:
            result.append(Rect(rect.x, used.top, rect.width, rect.top - used.top))
    return result


def _prune_free_rects(free_rects: Sequence[Rect], min_free: float) -> tuple[Rect, ...]:
    """Drop slivers and rectangles contained in another, then sort by (y, x)."""
    floor = max(min_free, EPSILON)
    candidates = [r for r in free_rects if r.width >= floor and r.height >= floor]
    kept: list[Rect] = []
    for i, rect in enumerate(candidates):
        contained = False
        for j, other in enumerate(candidates):
            if i == j or not other.contains(rect):
                continue
            # Identical rectangles: keep the first occurrence only
            if rect.contains(other) and i < j:
                continue
            contained = True
            break
        if not contained:
            kept.append(rect)
    return tuple(sorted(kept, key=lambda r: (r.y, r.x)))


class PlacementEngine:
    """Maximal-rectangles placement of units onto fixed-size slabs.

    Each slab keeps a list of maximal free rectangles. Units are placed in
    descending-area order at the lowest, then leftmost, free rectangle that
    can take the unit plus one kerf on its right and top. Existing slabs are
    tried in order before a new slab is opened.

    Attributes:
        slab: Slab dimensions.
        config: Kerf, rotation and free-space settings.
    """

    def __init__(self, slab: SlabConfig, config: EngineConfig | None = None) -> None:
        """Initialize the engine.

        Args:
            slab: Slab dimensions shared by every slab in the run.
            config: Engine settings, defaults to EngineConfig().
        """
        self.slab = slab
        self.config = config or EngineConfig()

    def pack(self, units: Sequence[PackableUnit]) -> PackingResult:
        """Place units onto as few slabs as the heuristic finds.

        Args:
            units: Units to place. Ids are expected to be unique.

        Returns:
            PackingResult with placements in placement order, one layout per
            slab, and any units that fit no slab.
        """
        if not units:
            return PackingResult(placements=(), layouts=())

        ordered = self.sort_units(units)
        logger.debug("Placing %d units", len(ordered))

        slabs: list[_SlabState] = []
        placements: list[Placement] = []
        unplaced: list[UnplaceableUnit] = []

        for unit in ordered:
            placement = self._place_on_existing(unit, slabs)
            if placement is None:
                placement = self._place_on_new_slab(unit, slabs)
            if placement is None:
                reason = (
                    f"{unit.width:g}x{unit.height:g} does not fit the usable slab "
                    f"area {self.slab.usable_width:g}x{self.slab.usable_height:g} "
                    f"with {self.config.kerf:g}mm kerf"
                )
                logger.warning("Unit '%s' cannot be placed: %s", unit.id, reason)
                unplaced.append(UnplaceableUnit(unit.id, unit.piece_id, reason))
                continue
            placements.append(placement)

        layouts = tuple(
            SlabLayout(
                slab_index=state.index,
                slab_config=self.slab,
                placements=state.placements,
            )
            for state in slabs
        )
        for layout in layouts:
            logger.debug(
                "Slab %d: %d units, %.1f%% waste",
                layout.slab_index,
                layout.unit_count,
                layout.waste_percentage,
            )

        return PackingResult(
            placements=tuple(placements),
            layouts=layouts,
            unplaced=tuple(unplaced),
        )

    @staticmethod
    def sort_units(units: Sequence[PackableUnit]) -> list[PackableUnit]:
        """Sort by area, then longest side (both descending), then kind.

        The sort is stable, so equal units keep their input order.
        """
        return sorted(
            units,
            key=lambda u: (-u.area, -max(u.width, u.height), u.kind.sort_rank),
        )

    def _orientations(self, unit: PackableUnit) -> list[tuple[float, float, bool]]:
        options = [(unit.width, unit.height, False)]
        if self.config.allow_rotation and unit.can_rotate and unit.width != unit.height:
            options.append((unit.height, unit.width, True))
        return options

    def _place_on_existing(
        self, unit: PackableUnit, slabs: list[_SlabState]
    ) -> Placement | None:
        kerf = self.config.kerf
        for position, state in enumerate(slabs):
            for width, height, rotated in self._orientations(unit):
                rect = state.find_position(width + kerf, height + kerf)
                if rect is None:
                    continue
                placement = Placement(unit, state.index, rect.x, rect.y, rotated)
                slabs[position] = state.place(
                    placement, kerf, self.config.min_free_dimension
                )
                logger.debug(
                    "Placed '%s' on slab %d at (%g, %g)%s",
                    unit.id,
                    state.index,
                    rect.x,
                    rect.y,
                    " rotated" if rotated else "",
                )
                return placement
        return None

    def _place_on_new_slab(
        self, unit: PackableUnit, slabs: list[_SlabState]
    ) -> Placement | None:
        kerf = self.config.kerf
        usable = self.slab.usable_rect
        for width, height, rotated in self._orientations(unit):
            if not fits(width + kerf, height + kerf, usable.width, usable.height):
                continue
            state = _SlabState(index=len(slabs), free_rects=(usable,))
            placement = Placement(unit, state.index, usable.x, usable.y, rotated)
            slabs.append(state.place(placement, kerf, self.config.min_free_dimension))
            logger.debug("Opened slab %d for '%s'", state.index, unit.id)
            return placement
        return None
