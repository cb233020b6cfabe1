"""Tests for text reports and JSON export."""

from __future__ import annotations

import json

import pytest

from slabcut.application.commands import OptimizeSlabsCommand
from slabcut.application.dtos import OptimizationRequest
from slabcut.domain.value_objects import FinishedEdges, Piece
from slabcut.infrastructure.formatters import (
    CutPlanFormatter,
    JsonExporter,
    LaminationReportFormatter,
    SlabReportFormatter,
    result_to_dict,
)
from slabcut.infrastructure.metrics import LaminationSummary


@pytest.fixture
def result():
    """Result for one plain piece and one split, laminated piece."""
    pieces = [
        Piece(id="bench", length=2000, width=600),
        Piece(
            id="long",
            length=3500,
            width=600,
            thickness=40,
            finished_edges=FinishedEdges(top=True),
        ),
    ]
    return OptimizeSlabsCommand().execute(
        OptimizationRequest(pieces=pieces, slab_width=3000, slab_height=1400, kerf=3)
    )


class TestSlabReportFormatter:
    """Tests for SlabReportFormatter."""

    def test_lists_slabs_and_totals(self, result) -> None:
        text = SlabReportFormatter().format(result)
        assert "SLAB LAYOUT" in text
        assert "Slab 1:" in text
        assert f"Slabs used:  {result.slab_count}" in text
        assert "long (segment 1 of 2)" in text

    def test_no_slabs(self) -> None:
        empty = OptimizeSlabsCommand().execute(
            OptimizationRequest(pieces=[Piece(id="x", length=9000, width=9000)])
        )
        text = SlabReportFormatter().format(empty)
        assert "No slabs used." in text
        assert "Unplaced: x" in text


class TestLaminationReportFormatter:
    """Tests for LaminationReportFormatter."""

    def test_parts_listed(self, result) -> None:
        text = LaminationReportFormatter().format(result.lamination_summary)
        assert "long-seg-1" in text
        assert "(part 2 of 2)" in text
        assert "2 strips" in text

    def test_empty(self) -> None:
        assert LaminationReportFormatter().format(LaminationSummary()) == "No lamination strips."


class TestCutPlanFormatter:
    """Tests for CutPlanFormatter."""

    def test_segments_and_joins(self, result) -> None:
        text = CutPlanFormatter().format(result.cut_plans)
        assert "long: lengthwise split along length, 2 segments (1749 + 1748)" in text
        assert "join at 1749mm (vertical, 600mm)" in text
        assert "! Join is near centre" in text

    def test_empty(self) -> None:
        assert CutPlanFormatter().format(()) == "No oversize pieces."


class TestJsonExport:
    """Tests for result_to_dict and JsonExporter."""

    def test_round_trips_through_json(self, result) -> None:
        data = json.loads(JsonExporter().export(result))
        assert data == json.loads(json.dumps(result_to_dict(result)))

    def test_structure(self, result) -> None:
        data = result_to_dict(result)
        assert data["fingerprint"] == result.fingerprint
        assert data["totals"]["slab_count"] == result.slab_count
        assert {p["unit_id"] for p in data["placements"]} >= {"bench", "long-seg-1", "long-seg-2"}
        assert data["cut_plans"][0]["strategy"] == "lengthwise"
        assert data["cut_plans"][0]["joins"][0]["orientation"] == "vertical"
        assert data["lamination_summary"]["total_strips"] == 2
        strips = data["lamination_summary"]["groups"][0]["strips"]
        assert strips[0]["part_count"] == 2
