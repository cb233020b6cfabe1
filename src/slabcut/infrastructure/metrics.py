"""Utilization metrics and result assembly.

Turns a PackingResult plus the decomposition byproducts (cut plans,
lamination strips, unplaceable units) into the immutable
OptimizationResult returned to callers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

from slabcut.domain.errors import UnplaceableUnit
from slabcut.domain.value_objects import CutPlan, PackableUnit

from .bin_packing import PackingResult, Placement, SlabLayout

logger = logging.getLogger(__name__)

SQ_MM_PER_SQ_M = 1_000_000


@dataclass(frozen=True)
class SlabUsage:
    """Utilization of one slab.

    Attributes:
        index: Zero-based slab index.
        used_area: Placed unit area in square mm (kerf excluded).
        waste_area: Slab area minus used area.
        waste_percentage: Waste as a percentage (0-100) of slab area.
        unit_count: Number of units on the slab.
    """

    index: int
    used_area: float
    waste_area: float
    waste_percentage: float
    unit_count: int

    @classmethod
    def from_layout(cls, layout: SlabLayout) -> "SlabUsage":
        return cls(
            index=layout.slab_index,
            used_area=layout.used_area,
            waste_area=layout.waste_area,
            waste_percentage=layout.waste_percentage,
            unit_count=layout.unit_count,
        )


@dataclass(frozen=True)
class StripEntry:
    """One lamination strip in the summary."""

    unit_id: str
    edge: str
    length: float
    width: float
    part_index: int | None = None
    part_count: int | None = None
    label: str = ""

    @property
    def area(self) -> float:
        return self.length * self.width


@dataclass(frozen=True)
class LaminationGroup:
    """Strips belonging to one parent unit."""

    parent_id: str
    piece_id: str
    strips: tuple[StripEntry, ...]

    @property
    def total_length(self) -> float:
        return sum(s.length for s in self.strips)


@dataclass(frozen=True)
class LaminationSummary:
    """Lamination strips grouped by parent unit.

    Attributes:
        total_strips: Number of strips generated.
        total_area_m2: Combined strip area in square metres.
        groups: Groups sorted by parent id; strips within a group are
            sorted by edge, then part index.
    """

    total_strips: int = 0
    total_area_m2: float = 0.0
    groups: tuple[LaminationGroup, ...] = ()

    def for_parent(self, parent_id: str) -> LaminationGroup | None:
        for group in self.groups:
            if group.parent_id == parent_id:
                return group
        return None


@dataclass(frozen=True)
class OptimizationResult:
    """Complete, immutable result of one optimisation run.

    Attributes:
        placements: Placements in placement order.
        slabs: Per-slab utilization.
        total_used_area: Placed area over all slabs in square mm.
        total_waste_area: Waste over all slabs in square mm.
        total_waste_percentage: Waste as a percentage of total slab area.
        lamination_summary: Strips grouped by parent unit.
        unplaced_units: Units that could not be placed, with reasons.
        cut_plans: Split details for oversize pieces and legs.
        warnings: Fabrication advisories raised during the run.
        fingerprint: Hash of the inputs that produced this result.
    """

    placements: tuple[Placement, ...]
    slabs: tuple[SlabUsage, ...]
    total_used_area: float
    total_waste_area: float
    total_waste_percentage: float
    lamination_summary: LaminationSummary
    unplaced_units: tuple[UnplaceableUnit, ...] = ()
    cut_plans: tuple[CutPlan, ...] = ()
    warnings: tuple[str, ...] = ()
    fingerprint: str = ""

    @property
    def slab_count(self) -> int:
        return len(self.slabs)

    @property
    def unplaced(self) -> tuple[str, ...]:
        """Ids of units that were not placed."""
        return tuple(u.unit_id for u in self.unplaced_units)

    def placements_on(self, slab_index: int) -> tuple[Placement, ...]:
        return tuple(p for p in self.placements if p.slab_index == slab_index)

    def placement_for(self, unit_id: str) -> Placement | None:
        for placement in self.placements:
            if placement.unit_id == unit_id:
                return placement
        return None


def summarize_strips(strips: Sequence[PackableUnit]) -> LaminationSummary:
    """Group strips under their parent unit.

    Args:
        strips: Lamination strip units (other kinds are ignored).

    Returns:
        LaminationSummary with groups sorted by parent id.
    """
    grouped: dict[str, list[PackableUnit]] = {}
    for strip in strips:
        if not strip.is_strip:
            continue
        grouped.setdefault(strip.parent_id or strip.piece_id, []).append(strip)

    groups = []
    for parent_id in sorted(grouped):
        members = sorted(
            grouped[parent_id],
            key=lambda s: (s.edge or "", s.part_index if s.part_index is not None else -1),
        )
        groups.append(
            LaminationGroup(
                parent_id=parent_id,
                piece_id=members[0].piece_id,
                strips=tuple(
                    StripEntry(
                        unit_id=s.id,
                        edge=s.edge or "",
                        length=s.strip_length,
                        width=min(s.width, s.height),
                        part_index=s.part_index,
                        part_count=s.part_count,
                        label=s.label,
                    )
                    for s in members
                ),
            )
        )

    total_area = sum(s.area for g in groups for s in g.strips)
    return LaminationSummary(
        total_strips=sum(len(g.strips) for g in groups),
        total_area_m2=total_area / SQ_MM_PER_SQ_M,
        groups=tuple(groups),
    )


class MetricsAssembler:
    """Builds an OptimizationResult from packing output."""

    def assemble(
        self,
        packing: PackingResult,
        strips: Sequence[PackableUnit] = (),
        cut_plans: Sequence[CutPlan] = (),
        unplaced: Sequence[UnplaceableUnit] = (),
        warnings: Sequence[str] = (),
        fingerprint: str = "",
    ) -> OptimizationResult:
        """Compute per-slab and run totals.

        Args:
            packing: Placement engine output.
            strips: All generated lamination strips.
            cut_plans: Cut plans from oversize decomposition.
            unplaced: Units the decomposer could not produce; the engine's
                own unplaced units are appended after these.
            warnings: Advisories collected before placement.
            fingerprint: Input fingerprint.

        Returns:
            The assembled OptimizationResult.
        """
        slabs = tuple(SlabUsage.from_layout(layout) for layout in packing.layouts)
        total_area = sum(layout.slab_config.area for layout in packing.layouts)
        used = sum(s.used_area for s in slabs)
        waste = total_area - used
        waste_pct = waste / total_area * 100 if total_area else 0.0

        all_unplaced = tuple(unplaced) + packing.unplaced
        run_warnings = list(warnings)
        if all_unplaced:
            run_warnings.append(
                f"{len(all_unplaced)} unit(s) could not be placed: "
                + ", ".join(u.unit_id for u in all_unplaced)
            )

        logger.info(
            "Assembled result: %d slabs, %.1f%% waste, %d unplaced",
            len(slabs),
            waste_pct,
            len(all_unplaced),
        )

        return OptimizationResult(
            placements=packing.placements,
            slabs=slabs,
            total_used_area=used,
            total_waste_area=waste,
            total_waste_percentage=waste_pct,
            lamination_summary=summarize_strips(strips),
            unplaced_units=all_unplaced,
            cut_plans=tuple(cut_plans),
            warnings=tuple(run_warnings),
            fingerprint=fingerprint,
        )
