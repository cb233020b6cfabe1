"""Integration tests for the optimize, fingerprint and plan CLI commands."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest
from typer.testing import CliRunner

from slabcut.cli.main import app
from slabcut.domain.services import compute_fingerprint
from slabcut.domain.value_objects import Piece


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI runner for testing."""
    return CliRunner()


class TestOptimizeCommand:
    """Tests for the optimize command."""

    def test_text_report(
        self, runner: CliRunner, write_job: Callable[..., Path], minimal_job: dict[str, Any]
    ) -> None:
        result = runner.invoke(app, ["optimize", str(write_job(minimal_job))])
        assert result.exit_code == 0, result.output
        assert "SLAB LAYOUT" in result.output
        assert "Slabs used:  1" in result.output

    def test_text_report_sections(
        self, runner: CliRunner, write_job: Callable[..., Path], oversize_job: dict[str, Any]
    ) -> None:
        oversize_job["pieces"][0].update({"thickness": 40, "finished_edges": {"top": True}})
        result = runner.invoke(app, ["optimize", str(write_job(oversize_job))])
        assert result.exit_code == 0, result.output
        assert "OVERSIZE PIECES" in result.output
        assert "LAMINATION STRIPS" in result.output
        assert "WARNINGS" in result.output

    def test_json_to_file(
        self,
        runner: CliRunner,
        write_job: Callable[..., Path],
        oversize_job: dict[str, Any],
        tmp_path: Path,
    ) -> None:
        out = tmp_path / "layout.json"
        result = runner.invoke(
            app, ["optimize", str(write_job(oversize_job)), "-f", "json", "-o", str(out)]
        )
        assert result.exit_code == 0, result.output
        assert f"Wrote {out}" in result.output
        data = json.loads(out.read_text(encoding="utf-8"))
        assert [p["unit_id"] for p in data["placements"]] == ["long-seg-1", "long-seg-2"]
        assert data["cut_plans"][0]["segment_lengths"] == [1749, 1748]

    def test_kerf_override(
        self,
        runner: CliRunner,
        write_job: Callable[..., Path],
        minimal_job: dict[str, Any],
        tmp_path: Path,
    ) -> None:
        out = tmp_path / "layout.json"
        result = runner.invoke(
            app,
            ["optimize", str(write_job(minimal_job)), "--format", "json", "-o", str(out), "-k", "5"],
        )
        assert result.exit_code == 0, result.output
        data = json.loads(out.read_text(encoding="utf-8"))
        expected = compute_fingerprint([Piece(id="bench", length=2000, width=600)], 5, 3000, 1400)
        assert data["fingerprint"] == expected

    def test_no_rotation(
        self,
        runner: CliRunner,
        write_job: Callable[..., Path],
        minimal_job: dict[str, Any],
        tmp_path: Path,
    ) -> None:
        minimal_job["pieces"][0].update({"length": 600, "width": 2000})
        out = tmp_path / "layout.json"
        result = runner.invoke(
            app,
            ["optimize", str(write_job(minimal_job)), "-f", "json", "-o", str(out), "--no-rotation"],
        )
        assert result.exit_code == 0, result.output
        data = json.loads(out.read_text(encoding="utf-8"))
        assert data["cut_plans"][0]["axis"] == "width"
        assert not any(p["rotated"] for p in data["placements"])

    def test_unknown_format(
        self, runner: CliRunner, write_job: Callable[..., Path], minimal_job: dict[str, Any]
    ) -> None:
        result = runner.invoke(app, ["optimize", str(write_job(minimal_job)), "-f", "svg"])
        assert result.exit_code == 1
        assert "Unknown format" in result.output

    def test_missing_file(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(app, ["optimize", str(tmp_path / "missing.json")])
        assert result.exit_code == 1
        assert "File not found" in result.output

    def test_request_error(
        self, runner: CliRunner, write_job: Callable[..., Path], minimal_job: dict[str, Any]
    ) -> None:
        minimal_job["pieces"] = []
        result = runner.invoke(app, ["optimize", str(write_job(minimal_job))])
        assert result.exit_code == 1
        assert "Error: At least one piece is required" in result.output

    def test_unplaced_warning(
        self, runner: CliRunner, write_job: Callable[..., Path], minimal_job: dict[str, Any]
    ) -> None:
        minimal_job["pieces"].append({"id": "floor", "length": 5000, "width": 3500})
        result = runner.invoke(app, ["optimize", str(write_job(minimal_job))])
        assert result.exit_code == 0
        assert "Warning: 1 unit(s) not placed" in result.output

    def test_multi_material_text(
        self,
        runner: CliRunner,
        write_job: Callable[..., Path],
        multi_material_job: dict[str, Any],
    ) -> None:
        result = runner.invoke(app, ["optimize", str(write_job(multi_material_job))])
        assert result.exit_code == 0, result.output
        assert "MATERIAL: Calacatta (3000x1400 slabs)" in result.output
        assert "MATERIAL: Absolute Black (2800x1600 slabs)" in result.output
        assert "TOTAL: 2 slabs" in result.output

    def test_multi_material_json(
        self,
        runner: CliRunner,
        write_job: Callable[..., Path],
        multi_material_job: dict[str, Any],
        tmp_path: Path,
    ) -> None:
        out = tmp_path / "layout.json"
        result = runner.invoke(
            app, ["optimize", str(write_job(multi_material_job)), "-f", "json", "-o", str(out)]
        )
        assert result.exit_code == 0, result.output
        data = json.loads(out.read_text(encoding="utf-8"))
        assert [g["material_id"] for g in data["groups"]] == ["calacatta", "black"]
        assert data["total_slab_count"] == 2


class TestFingerprintCommand:
    """Tests for the fingerprint command."""

    def test_prints_hash(
        self, runner: CliRunner, write_job: Callable[..., Path], minimal_job: dict[str, Any]
    ) -> None:
        result = runner.invoke(app, ["fingerprint", str(write_job(minimal_job))])
        assert result.exit_code == 0
        expected = compute_fingerprint([Piece(id="bench", length=2000, width=600)], 3, 3000, 1400)
        assert result.output.strip() == expected

    def test_missing_file(self, runner: CliRunner, tmp_path: Path) -> None:
        result = runner.invoke(app, ["fingerprint", str(tmp_path / "missing.json")])
        assert result.exit_code == 1


class TestPlanCommand:
    """Tests for the plan command."""

    def test_fitting_piece(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["plan", "-l", "2000", "-w", "600"])
        assert result.exit_code == 0
        assert "2000x600 fits on a single 3200x1600 slab." in result.output

    def test_oversize_piece(self, runner: CliRunner) -> None:
        result = runner.invoke(
            app,
            ["plan", "-l", "3500", "-w", "600", "--slab-width", "3000", "--slab-height", "1400"],
        )
        assert result.exit_code == 0
        assert "lengthwise split along length, 2 segments (1749 + 1748)" in result.output
        assert "join at 1749mm (vertical, 600mm)" in result.output

    def test_unplaceable_piece(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["plan", "-l", "9000", "-w", "9000"])
        assert result.exit_code == 1
        assert "Cannot place" in result.output

    def test_invalid_dimensions(self, runner: CliRunner) -> None:
        result = runner.invoke(app, ["plan", "-l", "0", "-w", "600"])
        assert result.exit_code == 1
        assert "Error:" in result.output
