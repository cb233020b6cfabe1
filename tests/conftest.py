"""Pytest configuration and shared fixtures for slab optimisation tests."""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Callable

import pytest

from slabcut.application.commands import OptimizeSlabsCommand
from slabcut.application.dtos import OptimizationRequest
from slabcut.domain.value_objects import FinishedEdges, Piece


def pytest_configure(config: pytest.Config) -> None:
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "slow: tests that take a long time to run")


# =============================================================================
# Shared fixtures for command creation
# =============================================================================


@pytest.fixture
def optimize_command() -> OptimizeSlabsCommand:
    """Create an OptimizeSlabsCommand using the factory."""
    from slabcut.application.factory import ServiceFactory

    return ServiceFactory().create_optimize_command()


@pytest.fixture
def small_slab_request() -> Callable[..., OptimizationRequest]:
    """Build requests against the 3000x1400 test slab with a 3mm kerf."""

    def _build(pieces: list[Piece], **overrides: Any) -> OptimizationRequest:
        params: dict[str, Any] = {
            "slab_width": 3000.0,
            "slab_height": 1400.0,
            "kerf": 3.0,
            "allow_rotation": True,
        }
        params.update(overrides)
        return OptimizationRequest(pieces=pieces, **params)

    return _build


@pytest.fixture
def benchtop() -> Piece:
    """A plain 2000x600 benchtop."""
    return Piece(id="bench", length=2000, width=600)


@pytest.fixture
def thick_benchtop() -> Piece:
    """A 40mm benchtop with top and left finished and the bottom against a wall."""
    return Piece(
        id="island",
        length=2000,
        width=600,
        thickness=40,
        finished_edges=FinishedEdges(top=True, left=True, bottom=True),
        no_strip_edges=frozenset({"bottom"}),
    )


# =============================================================================
# Job file fixtures
# =============================================================================


@pytest.fixture
def minimal_job() -> dict[str, Any]:
    """A valid single-piece job."""
    return {
        "schema_version": "1.0",
        "slab": {"width": 3000, "height": 1400},
        "optimizer": {"kerf": 3},
        "pieces": [{"id": "bench", "length": 2000, "width": 600}],
    }


@pytest.fixture
def oversize_job() -> dict[str, Any]:
    """A job with one piece longer than the slab."""
    return {
        "schema_version": "1.0",
        "slab": {"width": 3000, "height": 1400},
        "optimizer": {"kerf": 3},
        "pieces": [{"id": "long", "length": 3500, "width": 600}],
    }


@pytest.fixture
def multi_material_job() -> dict[str, Any]:
    """A job mixing an engineered quartz and a granite piece."""
    return {
        "schema_version": "1.1",
        "optimizer": {"kerf": 3},
        "materials": [
            {"id": "calacatta", "name": "Calacatta", "slab_length": 3000, "slab_width": 1400},
            {"id": "black", "name": "Absolute Black", "category": "granite"},
        ],
        "pieces": [
            {"id": "bench", "length": 2000, "width": 600, "material_id": "calacatta"},
            {"id": "vanity", "length": 1200, "width": 500, "material_id": "black"},
            {"id": "splash", "length": 2000, "width": 300, "material_id": "calacatta"},
        ],
    }


@pytest.fixture
def write_job(tmp_path: Path) -> Callable[..., Path]:
    """Write a job dictionary (or raw text) to a file and return its path."""

    def _write(data: dict[str, Any] | str, name: str = "job.json") -> Path:
        path = tmp_path / name
        text = data if isinstance(data, str) else json.dumps(data)
        path.write_text(text, encoding="utf-8")
        return path

    return _write
