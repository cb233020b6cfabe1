"""Validation structures and fabrication advisory checks for jobs.

Pydantic already rejects structurally invalid jobs. The checks here run on a
parsed JobConfiguration and report request errors (nothing can be computed)
and advisories such as pieces that will have to be split and joined.
"""

from dataclasses import dataclass, field
from typing import Any

from slabcut.application.config.adapter import (
    config_to_factory,
    config_to_materials,
    config_to_pieces,
    config_to_request,
)
from slabcut.application.config.schema import JobConfiguration
from slabcut.application.multi_material import Material
from slabcut.domain.errors import ValidationError
from slabcut.domain.services import OversizeDecomposer


@dataclass
class ValidationIssue:
    """A blocking problem with a job.

    Attributes:
        path: JSON path to the offending field (e.g., "pieces[2]")
        message: Human-readable description of the problem
        value: The value that caused it
    """

    path: str
    message: str
    value: Any = None


@dataclass
class ValidationWarning:
    """A non-blocking advisory.

    Attributes:
        path: JSON path to the concerning field
        message: Human-readable description of the concern
        suggestion: Optional suggested remediation
    """

    path: str
    message: str
    suggestion: str | None = None


@dataclass
class ValidationResult:
    """Container for validation errors and warnings."""

    errors: list[ValidationIssue] = field(default_factory=list)
    warnings: list[ValidationWarning] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    @property
    def has_warnings(self) -> bool:
        return len(self.warnings) > 0

    @property
    def exit_code(self) -> int:
        """Get the CLI exit code based on validation status.

        Returns:
            0 if valid with no warnings
            1 if there are errors
            2 if valid but has warnings
        """
        if self.errors:
            return 1
        if self.warnings:
            return 2
        return 0

    def add_error(self, path: str, message: str, value: Any = None) -> "ValidationResult":
        self.errors.append(ValidationIssue(path=path, message=message, value=value))
        return self

    def add_warning(
        self, path: str, message: str, suggestion: str | None = None
    ) -> "ValidationResult":
        self.warnings.append(
            ValidationWarning(path=path, message=message, suggestion=suggestion)
        )
        return self

    def merge(self, other: "ValidationResult") -> "ValidationResult":
        self.errors.extend(other.errors)
        self.warnings.extend(other.warnings)
        return self


def check_material_references(config: JobConfiguration) -> ValidationResult:
    """Check that pieces in a multi-material job resolve to a material."""
    result = ValidationResult()
    if not config.is_multi_material:
        return result

    known = {m.id for m in config.materials}
    if config.primary_material_id and known and config.primary_material_id not in known:
        result.add_warning(
            "primary_material_id",
            f"Primary material '{config.primary_material_id}' is not listed in materials",
            "The default slab size will be used for it",
        )
    for i, piece in enumerate(config.pieces):
        material_id = piece.material_id or config.primary_material_id
        if material_id is None:
            result.add_warning(
                f"pieces[{i}].material_id",
                f"Piece '{piece.id}' has no material and will not be optimised",
                "Set material_id or primary_material_id",
            )
        elif known and material_id not in known:
            result.add_warning(
                f"pieces[{i}].material_id",
                f"Piece '{piece.id}' uses unlisted material '{material_id}'",
                "The default slab size will be used for it",
            )
    return result


def check_oversize_advisories(config: JobConfiguration) -> ValidationResult:
    """Report pieces that will be split, or that cannot be placed at all.

    Each piece is checked against the slab size of its own material, so a
    multi-material job is judged the same way the optimiser will run it.
    """
    result = ValidationResult()
    request = config_to_request(config)
    decomposition_config = config_to_factory(config).decomposition_config
    materials = {m.id: m for m in config_to_materials(config)}

    decomposers: dict[tuple[float, float], OversizeDecomposer] = {}
    for i, piece in enumerate(config_to_pieces(config)):
        slab_width, slab_height = request.slab_width, request.slab_height
        if config.is_multi_material:
            material_id = piece.material_id or config.primary_material_id
            if material_id is None:
                continue
            material = materials.get(material_id, Material(id=material_id))
            slab_width, slab_height = material.slab_dimensions()

        key = (slab_width, slab_height)
        if key not in decomposers:
            decomposers[key] = OversizeDecomposer.for_slab(
                slab_width,
                slab_height,
                request.kerf,
                edge_allowance=request.edge_allowance,
                allow_rotation=request.allow_rotation,
                config=decomposition_config,
            )
        decomposition = decomposers[key].decompose(piece)

        for plan in decomposition.cut_plans:
            result.add_warning(
                f"pieces[{i}]",
                f"{plan.label}: oversize, split into {plan.segment_count} segments "
                f"({plan.strategy.value})",
            )
            for warning in plan.warnings:
                result.add_warning(f"pieces[{i}]", warning)
        for unit in decomposition.unplaced:
            result.add_warning(
                f"pieces[{i}]",
                f"{unit.unit_id}: cannot be placed ({unit.reason})",
                "Use a larger slab or reduce the piece",
            )
    return result


def validate_config(config: JobConfiguration) -> ValidationResult:
    """Perform full validation of a parsed job.

    Args:
        config: A JobConfiguration instance (already validated by Pydantic)

    Returns:
        ValidationResult containing any errors or warnings. Advisory checks
        only run once the request itself is valid.
    """
    result = ValidationResult()
    try:
        request = config_to_request(config)
    except ValidationError as e:
        for message in e.errors:
            result.add_error("pieces", message)
        return result

    for message in request.validate():
        result.add_error("", message)
    if not result.is_valid:
        return result

    result.merge(check_material_references(config))
    result.merge(check_oversize_advisories(config))
    return result
