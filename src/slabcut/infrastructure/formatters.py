"""Output formatters and exporters for optimisation results."""

from __future__ import annotations

import json
from typing import Any

from slabcut.domain.value_objects import CutPlan

from .bin_packing import Placement
from .metrics import LaminationSummary, OptimizationResult


class SlabReportFormatter:
    """Formats the per-slab placement report."""

    def format(self, result: OptimizationResult) -> str:
        """Format placements grouped by slab with a totals footer."""
        if not result.slabs:
            lines = ["SLAB LAYOUT", "=" * 78, "No slabs used."]
            if result.unplaced:
                lines.append(f"Unplaced: {', '.join(result.unplaced)}")
            return "\n".join(lines)

        lines = ["SLAB LAYOUT", "=" * 78]
        for usage in result.slabs:
            placements = result.placements_on(usage.index)
            lines.append("")
            lines.append(
                f"Slab {usage.index + 1}: {usage.unit_count} pieces, "
                f"{usage.waste_percentage:.1f}% waste"
            )
            lines.append(
                f"  {'Unit':<28} {'Kind':<8} {'X':>7} {'Y':>7} "
                f"{'W':>7} {'H':>7}  Rot"
            )
            lines.append("  " + "-" * 74)
            for p in placements:
                lines.append(self._format_placement(p))

        lines.append("")
        lines.append("-" * 78)
        lines.append(f"Slabs used:  {result.slab_count}")
        lines.append(f"Used area:   {result.total_used_area / 1_000_000:.3f} m²")
        lines.append(f"Waste area:  {result.total_waste_area / 1_000_000:.3f} m²")
        lines.append(f"Waste:       {result.total_waste_percentage:.1f}%")
        if result.unplaced:
            lines.append(f"Unplaced:    {', '.join(result.unplaced)}")
        return "\n".join(lines)

    def _format_placement(self, p: Placement) -> str:
        return (
            f"  {p.unit.label[:28]:<28} {p.unit.kind.value:<8} {p.x:>7.0f} {p.y:>7.0f} "
            f"{p.placed_width:>7.0f} {p.placed_height:>7.0f}  {'yes' if p.rotated else ''}"
        )


class LaminationReportFormatter:
    """Formats the lamination strip manifest grouped by parent unit."""

    def format(self, summary: LaminationSummary) -> str:
        if not summary.groups:
            return "No lamination strips."

        lines = [
            "LAMINATION STRIPS",
            "=" * 60,
        ]
        for group in summary.groups:
            lines.append(f"{group.parent_id}")
            for strip in group.strips:
                part = ""
                if strip.part_count and strip.part_count > 1:
                    part = f" (part {strip.part_index + 1} of {strip.part_count})"
                lines.append(
                    f"  {strip.edge:<12} {strip.length:>8.0f} x {strip.width:<5.0f}{part}"
                )
        lines.append("-" * 60)
        lines.append(
            f"{summary.total_strips} strips, {summary.total_area_m2:.3f} m² total"
        )
        return "\n".join(lines)


class CutPlanFormatter:
    """Formats oversize cut plans with join positions and warnings."""

    def format(self, plans: tuple[CutPlan, ...] | list[CutPlan]) -> str:
        if not plans:
            return "No oversize pieces."

        lines = ["OVERSIZE PIECES", "=" * 60]
        for plan in plans:
            segments = " + ".join(f"{s:g}" for s in plan.segment_lengths)
            lines.append(
                f"{plan.label}: {plan.strategy.value} split along {plan.axis.value}, "
                f"{plan.segment_count} segments ({segments})"
            )
            for join in plan.joins:
                lines.append(
                    f"  join at {join.position:g}mm ({join.orientation.value}, "
                    f"{join.length:g}mm)"
                )
            for warning in plan.warnings:
                lines.append(f"  ! {warning}")
        return "\n".join(lines)


def placement_to_dict(p: Placement) -> dict[str, Any]:
    """Serialise a placement for JSON output."""
    return {
        "unit_id": p.unit_id,
        "kind": p.unit.kind.value,
        "piece_id": p.unit.piece_id,
        "parent_id": p.unit.parent_id,
        "label": p.unit.label,
        "slab_index": p.slab_index,
        "x": p.x,
        "y": p.y,
        "placed_width": p.placed_width,
        "placed_height": p.placed_height,
        "rotated": p.rotated,
    }


def cut_plan_to_dict(plan: CutPlan) -> dict[str, Any]:
    return {
        "unit_id": plan.unit_id,
        "piece_id": plan.piece_id,
        "strategy": plan.strategy.value,
        "axis": plan.axis.value,
        "segment_lengths": list(plan.segment_lengths),
        "cross_dimension": plan.cross_dimension,
        "joins": [
            {
                "position": j.position,
                "orientation": j.orientation.value,
                "length": j.length,
            }
            for j in plan.joins
        ],
        "join_length": plan.join_length,
        "warnings": list(plan.warnings),
    }


def result_to_dict(result: OptimizationResult) -> dict[str, Any]:
    """Serialise an optimisation result to plain JSON-compatible data."""
    summary = result.lamination_summary
    return {
        "fingerprint": result.fingerprint,
        "placements": [placement_to_dict(p) for p in result.placements],
        "slabs": [
            {
                "index": s.index,
                "used_area": s.used_area,
                "waste_area": s.waste_area,
                "waste_percentage": s.waste_percentage,
                "unit_count": s.unit_count,
            }
            for s in result.slabs
        ],
        "totals": {
            "slab_count": result.slab_count,
            "used_area": result.total_used_area,
            "waste_area": result.total_waste_area,
            "waste_percentage": result.total_waste_percentage,
        },
        "unplaced": list(result.unplaced),
        "unplaced_units": [
            {"unit_id": u.unit_id, "piece_id": u.piece_id, "reason": u.reason}
            for u in result.unplaced_units
        ],
        "lamination_summary": {
            "total_strips": summary.total_strips,
            "total_area_m2": summary.total_area_m2,
            "groups": [
                {
                    "parent_id": g.parent_id,
                    "piece_id": g.piece_id,
                    "strips": [
                        {
                            "unit_id": s.unit_id,
                            "edge": s.edge,
                            "length": s.length,
                            "width": s.width,
                            "part_index": s.part_index,
                            "part_count": s.part_count,
                        }
                        for s in g.strips
                    ],
                }
                for g in summary.groups
            ],
        },
        "cut_plans": [cut_plan_to_dict(p) for p in result.cut_plans],
        "warnings": list(result.warnings),
    }


class JsonExporter:
    """Exports optimisation results as JSON."""

    def export(self, result: OptimizationResult) -> str:
        """Export the result as an indented JSON string."""
        return json.dumps(result_to_dict(result), indent=2)
