"""Lamination strip generation for thick pieces.

A thick stone benchtop is usually a 20 mm slab with a strip glued under
each finished edge to build up the visible thickness. This module derives
those strips as extra packable units.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from ..value_objects import PackableUnit, Piece, SplitAxis, UnitKind
from .decomposer import LegDecomposition, PieceDecomposition
from .geometry import EPSILON
from .shapes import ShapeEdge, finishable_edges, is_edge_finished

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LaminationConfig:
    """Strip sizing rules.

    Attributes:
        threshold: Minimum piece thickness in mm that gets strips.
        strip_width: Width of a standard strip in mm.
        mitre_strip_width: Width of a strip under a mitred edge in mm.
        strip_thickness: Thickness of the strip material in mm.
    """

    threshold: float = 40.0
    strip_width: float = 60.0
    mitre_strip_width: float = 40.0
    strip_thickness: float = 20.0

    def __post_init__(self) -> None:
        if self.threshold < 0:
            raise ValueError("Lamination threshold must be non-negative")
        if self.strip_width <= 0 or self.mitre_strip_width <= 0:
            raise ValueError("Strip widths must be positive")
        if self.strip_thickness <= 0:
            raise ValueError("Strip thickness must be positive")

    def width_for(self, edge_type: str | None) -> float:
        """Strip width for an edge type name ("mitre" edges are narrower)."""
        if edge_type and "mitre" in edge_type.lower():
            return self.mitre_strip_width
        return self.strip_width

    def applies_to(self, piece: Piece) -> bool:
        return piece.thickness >= self.threshold


def partition_edge(edge_length: float, segment_lengths: list[float] | tuple[float, ...],
                   kerf: float) -> list[tuple[int, float]]:
    """Split an edge to match segment boundaries.

    Segment ``i`` occupies ``[start_i, start_i + length_i]`` along the edge,
    with one kerf between segments. The fragment under each segment is the
    part of the edge inside that interval; the fragment under the last
    segment runs to the end of the edge.

    Args:
        edge_length: Total edge length in mm.
        segment_lengths: Segment sizes along the edge.
        kerf: Blade width consumed by each join.

    Returns:
        (segment index, fragment length) pairs, zero-length fragments omitted.
    """
    fragments: list[tuple[int, float]] = []
    start = 0.0
    last = len(segment_lengths) - 1
    for i, seg in enumerate(segment_lengths):
        if start >= edge_length - EPSILON:
            break
        end = edge_length if i == last else min(start + seg, edge_length)
        if end - start > EPSILON:
            fragments.append((i, end - start))
        start += seg + kerf
    return fragments


class LaminationStripGenerator:
    """Derives lamination strips from decomposed pieces.

    Strips are emitted per finished edge of the piece, not per unit, so an
    edge that spans a split is partitioned over the segments it covers.
    """

    def __init__(self, config: LaminationConfig | None = None, kerf: float = 0.0) -> None:
        self.config = config or LaminationConfig()
        self.kerf = kerf

    def generate(self, decomposition: PieceDecomposition) -> list[PackableUnit]:
        """Generate strips for one decomposed piece.

        Args:
            decomposition: Decomposer output for the piece.

        Returns:
            Strip units in edge-table order. Empty for thin pieces.
        """
        piece = decomposition.piece
        if not self.config.applies_to(piece):
            return []

        legs = {leg.leg.index: leg for leg in decomposition.legs}
        strips: list[PackableUnit] = []
        for edge in finishable_edges(piece):
            if not is_edge_finished(piece, edge.key):
                continue
            owner = legs.get(edge.leg_index)
            if owner is None or not owner.units:
                logger.debug(
                    "Skipping %s strip for '%s': leg was not decomposed",
                    edge.key,
                    piece.id,
                )
                continue
            strips.extend(self._strips_for_edge(piece, edge, owner))

        logger.debug("Generated %d lamination strips for '%s'", len(strips), piece.id)
        return strips

    def _strips_for_edge(
        self, piece: Piece, edge: ShapeEdge, owner: LegDecomposition
    ) -> list[PackableUnit]:
        width = self.config.width_for(piece.edge_type(edge.key))

        if not owner.is_split:
            return [
                self._strip(piece, edge, owner.unit_id, f"{owner.unit_id}-lam-{edge.key}",
                            edge.length, width)
            ]

        if owner.axis is edge.axis:
            fragments = partition_edge(edge.length, owner.segment_lengths, self.kerf)
            count = len(fragments)
            return [
                self._strip(
                    piece,
                    edge,
                    owner.units[index].id,
                    f"{owner.unit_id}-lam-{edge.key}-{part + 1}",
                    length,
                    width,
                    part_index=part,
                    part_count=count,
                )
                for part, (index, length) in enumerate(fragments)
            ]

        # Edge runs across the split: it sits on the end segment on its side
        segment = owner.units[-1] if edge.far_side else owner.units[0]
        return [
            self._strip(piece, edge, segment.id, f"{segment.id}-lam-{edge.key}",
                        edge.length, width)
        ]

    def _strip(
        self,
        piece: Piece,
        edge: ShapeEdge,
        parent_id: str,
        strip_id: str,
        length: float,
        width: float,
        part_index: int | None = None,
        part_count: int | None = None,
    ) -> PackableUnit:
        label = f"{piece.label} {edge.key} strip"
        if part_count is not None and part_count > 1:
            label = f"{label} (part {part_index + 1} of {part_count})"
        if edge.axis is SplitAxis.LENGTH:
            unit_width, unit_height = length, width
        else:
            unit_width, unit_height = width, length
        return PackableUnit(
            id=strip_id,
            kind=UnitKind.LAMINATION_STRIP,
            piece_id=piece.id,
            width=unit_width,
            height=unit_height,
            label=label,
            parent_id=parent_id,
            leg_index=edge.leg_index,
            edge=edge.key,
            part_index=part_index,
            part_count=part_count,
            thickness=self.config.strip_thickness,
            material_id=piece.material_id,
            can_rotate=piece.can_rotate,
        )
