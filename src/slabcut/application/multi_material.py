"""Per-material optimisation for catalogues that mix stone types.

Pieces of different materials can never share a slab, so the catalogue is
grouped by material and each group is optimised on its own slab size.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from slabcut.domain.errors import ValidationError
from slabcut.domain.slab_sizes import get_slab_size
from slabcut.domain.value_objects import Piece
from slabcut.infrastructure.formatters import result_to_dict
from slabcut.infrastructure.metrics import OptimizationResult

from .commands import OptimizeSlabsCommand
from .dtos import OptimizationRequest

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Material:
    """A stone material pieces can be cut from.

    Attributes:
        id: Material identifier referenced by ``Piece.material_id``.
        name: Display name.
        slab_length: Slab length in mm, if known for this material.
        slab_width: Slab width in mm, if known for this material.
        category: Brand or fabrication category used to look up a
            default slab size.
    """

    id: str
    name: str = ""
    slab_length: float | None = None
    slab_width: float | None = None
    category: str | None = None

    @property
    def display_name(self) -> str:
        return self.name or f"Material {self.id}"

    def slab_dimensions(self) -> tuple[float, float]:
        """(slab width, slab height) for the optimiser.

        Explicit dimensions win, then the category default, then the
        jumbo engineered quartz size.
        """
        default = get_slab_size(self.category)
        return (
            self.slab_length or default.length,
            self.slab_width or default.width,
        )


@dataclass
class MultiMaterialRequest:
    """Input DTO for a mixed-material run."""

    pieces: list[Piece] = field(default_factory=list)
    materials: list[Material] = field(default_factory=list)
    primary_material_id: str | None = None
    kerf: float = 3.0
    allow_rotation: bool = True
    edge_allowance: float = 0.0

    def validate(self) -> list[str]:
        errors: list[str] = []
        if not self.pieces:
            errors.append("At least one piece is required")
        if self.kerf < 0:
            errors.append("Kerf must be non-negative")
        seen: set[str] = set()
        for piece in self.pieces:
            if piece.id in seen:
                errors.append(f"Duplicate piece id '{piece.id}'")
            seen.add(piece.id)
        ids = [m.id for m in self.materials]
        if len(ids) != len(set(ids)):
            errors.append("Material ids must be unique")
        return errors


@dataclass(frozen=True)
class MaterialGroupResult:
    """Optimisation result for one material group."""

    material_id: str
    material_name: str
    slab_width: float
    slab_height: float
    piece_ids: tuple[str, ...]
    result: OptimizationResult

    @property
    def slab_count(self) -> int:
        return self.result.slab_count

    @property
    def waste_percentage(self) -> float:
        return self.result.total_waste_percentage


@dataclass(frozen=True)
class MultiMaterialResult:
    """Combined result across all material groups.

    Attributes:
        groups: Per-material results in first-seen material order.
        unassigned: Ids of pieces with no material that were skipped.
        warnings: Run warnings, group warnings prefixed with the material.
    """

    groups: tuple[MaterialGroupResult, ...]
    unassigned: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()

    @property
    def total_slab_count(self) -> int:
        return sum(g.slab_count for g in self.groups)

    @property
    def total_waste_percentage(self) -> float:
        """Waste over the combined slab area of every group."""
        total_area = sum(
            g.slab_width * g.slab_height * g.slab_count for g in self.groups
        )
        if total_area == 0:
            return 0.0
        waste = sum(g.result.total_waste_area for g in self.groups)
        return waste / total_area * 100


class MultiMaterialOptimizer:
    """Groups pieces by material and optimises each group separately.

    Attributes:
        command: Single-material optimisation command used per group.
    """

    def __init__(self, command: OptimizeSlabsCommand | None = None) -> None:
        self.command = command or OptimizeSlabsCommand()

    def optimize(self, request: MultiMaterialRequest) -> MultiMaterialResult:
        """Run one optimisation per material group.

        Args:
            request: Pieces, materials and shared kerf settings.

        Returns:
            MultiMaterialResult with one group per material used.

        Raises:
            ValidationError: If the request or any group is malformed.
        """
        errors = request.validate()
        if errors:
            raise ValidationError(errors)

        materials = {m.id: m for m in request.materials}
        groups: dict[str, list[Piece]] = {}
        unassigned: list[Piece] = []
        for piece in request.pieces:
            material_id = piece.material_id or request.primary_material_id
            if not material_id:
                unassigned.append(piece)
                continue
            groups.setdefault(material_id, []).append(piece)

        warnings: list[str] = []
        if unassigned:
            names = ", ".join(p.label for p in unassigned)
            warnings.append(
                f"{len(unassigned)} piece(s) have no material assigned - "
                f"cannot optimise: {names}"
            )
            logger.warning("%d unassigned pieces: %s", len(unassigned), names)

        results: list[MaterialGroupResult] = []
        for material_id, pieces in groups.items():
            material = materials.get(material_id, Material(id=material_id))
            slab_width, slab_height = material.slab_dimensions()
            logger.info(
                "Group '%s': %d pieces, slab %gx%g",
                material.display_name,
                len(pieces),
                slab_width,
                slab_height,
            )
            result = self.command.execute(
                OptimizationRequest(
                    pieces=pieces,
                    slab_width=slab_width,
                    slab_height=slab_height,
                    kerf=request.kerf,
                    allow_rotation=request.allow_rotation,
                    edge_allowance=request.edge_allowance,
                )
            )
            results.append(
                MaterialGroupResult(
                    material_id=material_id,
                    material_name=material.display_name,
                    slab_width=slab_width,
                    slab_height=slab_height,
                    piece_ids=tuple(p.id for p in pieces),
                    result=result,
                )
            )
            warnings.extend(f"[{material.display_name}] {w}" for w in result.warnings)

        return MultiMaterialResult(
            groups=tuple(results),
            unassigned=tuple(p.id for p in unassigned),
            warnings=tuple(warnings),
        )


def multi_result_to_dict(result: MultiMaterialResult) -> dict[str, Any]:
    """Serialise a multi-material result to plain JSON-compatible data."""
    return {
        "groups": [
            {
                "material_id": g.material_id,
                "material_name": g.material_name,
                "slab_width": g.slab_width,
                "slab_height": g.slab_height,
                "piece_ids": list(g.piece_ids),
                "result": result_to_dict(g.result),
            }
            for g in result.groups
        ],
        "total_slab_count": result.total_slab_count,
        "total_waste_percentage": result.total_waste_percentage,
        "unassigned": list(result.unassigned),
        "warnings": list(result.warnings),
    }
