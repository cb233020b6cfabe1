"""Tests for lamination strip generation."""

from __future__ import annotations

import pytest

from slabcut.domain.services import (
    LaminationConfig,
    LaminationStripGenerator,
    OversizeDecomposer,
    partition_edge,
)
from slabcut.domain.value_objects import (
    FinishedEdges,
    LegDimensions,
    LShapeConfig,
    Piece,
    UnitKind,
)


@pytest.fixture
def decomposer() -> OversizeDecomposer:
    return OversizeDecomposer.for_slab(3000, 1400, 3)


@pytest.fixture
def generator() -> LaminationStripGenerator:
    return LaminationStripGenerator(kerf=3)


class TestLaminationConfig:
    """Tests for LaminationConfig."""

    def test_defaults(self) -> None:
        config = LaminationConfig()
        assert config.threshold == 40
        assert config.strip_width == 60
        assert config.mitre_strip_width == 40

    def test_mitre_width(self) -> None:
        config = LaminationConfig()
        assert config.width_for("40mm Mitre") == 40
        assert config.width_for("Arris") == 60
        assert config.width_for(None) == 60

    def test_threshold_inclusive(self) -> None:
        config = LaminationConfig(threshold=30)
        assert config.applies_to(Piece(id="p", length=100, width=100, thickness=30))
        assert not config.applies_to(Piece(id="p", length=100, width=100, thickness=20))

    def test_invalid_strip_width(self) -> None:
        with pytest.raises(ValueError, match="Strip widths"):
            LaminationConfig(strip_width=0)


class TestPartitionEdge:
    """Tests for partition_edge."""

    def test_full_edge(self) -> None:
        assert partition_edge(3500, [1749, 1748], 3) == [(0, 1749), (1, 1748)]

    def test_short_edge_under_first_segment(self) -> None:
        assert partition_edge(1000, [1749, 1748], 3) == [(0, 1000)]

    def test_edge_ending_in_kerf(self) -> None:
        assert partition_edge(1750, [1749, 1748], 3) == [(0, 1749)]

    def test_fragments_sum_with_kerf(self) -> None:
        fragments = partition_edge(7000, [2332, 2332, 2330], 3)
        assert [i for i, _ in fragments] == [0, 1, 2]
        assert sum(length for _, length in fragments) + 2 * 3 == 7000


class TestRectangleStrips:
    """Strips for plain rectangles."""

    def test_thin_piece_has_no_strips(
        self, decomposer: OversizeDecomposer, generator: LaminationStripGenerator
    ) -> None:
        piece = Piece(id="p", length=2000, width=600, finished_edges=FinishedEdges.all())
        assert generator.generate(decomposer.decompose(piece)) == []

    def test_finished_edges_only(
        self,
        decomposer: OversizeDecomposer,
        generator: LaminationStripGenerator,
        thick_benchtop: Piece,
    ) -> None:
        strips = generator.generate(decomposer.decompose(thick_benchtop))
        assert [s.id for s in strips] == ["island-lam-top", "island-lam-left"]
        top, left = strips
        assert (top.width, top.height) == (2000, 60)
        assert (left.width, left.height) == (60, 600)
        assert top.kind is UnitKind.LAMINATION_STRIP
        assert top.parent_id == "island"
        assert top.edge == "top"
        assert top.thickness == 20
        assert top.part_index is None

    def test_mitre_edge_is_narrower(
        self, decomposer: OversizeDecomposer, generator: LaminationStripGenerator
    ) -> None:
        piece = Piece(
            id="p",
            length=2000,
            width=600,
            thickness=40,
            finished_edges=FinishedEdges(top=True),
            edge_types={"top": "40mm Mitre"},
        )
        (strip,) = generator.generate(decomposer.decompose(piece))
        assert strip.height == 40


class TestSplitPieceStrips:
    """Strips for a 3500x600 piece split lengthwise into 1749 + 1748."""

    @pytest.fixture
    def strips(self, decomposer: OversizeDecomposer, generator: LaminationStripGenerator):
        piece = Piece(
            id="long",
            length=3500,
            width=600,
            thickness=40,
            finished_edges=FinishedEdges(top=True, left=True, right=True),
        )
        return {s.id: s for s in generator.generate(decomposer.decompose(piece))}

    def test_edge_along_split_is_partitioned(self, strips) -> None:
        first, second = strips["long-lam-top-1"], strips["long-lam-top-2"]
        assert (first.width, second.width) == (1749, 1748)
        assert (first.parent_id, second.parent_id) == ("long-seg-1", "long-seg-2")
        assert (first.part_index, first.part_count) == (0, 2)
        assert (second.part_index, second.part_count) == (1, 2)
        assert "part 2 of 2" in second.label

    def test_cross_edges_follow_their_side(self, strips) -> None:
        assert strips["long-seg-1-lam-left"].parent_id == "long-seg-1"
        assert strips["long-seg-2-lam-right"].parent_id == "long-seg-2"
        assert strips["long-seg-1-lam-left"].height == 600

    def test_strip_count(self, strips) -> None:
        assert len(strips) == 4


class TestShapedPieceStrips:
    """Strips for L-shaped pieces."""

    @pytest.fixture
    def l_piece(self) -> Piece:
        return Piece(
            id="k",
            length=2400,
            width=1800,
            thickness=40,
            shape=LShapeConfig(LegDimensions(2400, 600), LegDimensions(1800, 600)),
            finished_edges=FinishedEdges(top=True),
            shape_edges=frozenset({"inner", "r_btm"}),
        )

    def test_strips_attach_to_owning_leg(
        self,
        decomposer: OversizeDecomposer,
        generator: LaminationStripGenerator,
        l_piece: Piece,
    ) -> None:
        strips = generator.generate(decomposer.decompose(l_piece))
        assert [(s.id, s.parent_id, s.strip_length) for s in strips] == [
            ("k-part-1-lam-top", "k-part-1", 2400),
            ("k-part-1-lam-inner", "k-part-1", 1800),
            ("k-part-2-lam-r_btm", "k-part-2", 1200),
        ]
        assert [s.leg_index for s in strips] == [0, 0, 1]

    def test_unplaceable_leg_gets_no_strips(
        self, decomposer: OversizeDecomposer, generator: LaminationStripGenerator
    ) -> None:
        piece = Piece(
            id="k",
            length=30000,
            width=1800,
            thickness=40,
            shape=LShapeConfig(LegDimensions(30000, 600), LegDimensions(1800, 600)),
            finished_edges=FinishedEdges(top=True),
            shape_edges=frozenset({"r_btm"}),
        )
        decomposition = decomposer.decompose(piece)
        assert [u.unit_id for u in decomposition.unplaced] == ["k-part-1"]
        strips = generator.generate(decomposition)
        assert [s.id for s in strips] == ["k-part-2-lam-r_btm"]
