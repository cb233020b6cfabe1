"""Domain exceptions and non-fatal failure records for slab optimisation."""

from __future__ import annotations

from dataclasses import dataclass


class ValidationError(ValueError):
    """Raised when an optimisation request is malformed.

    Raised before any decomposition or placement work starts. Carries the
    full list of problems found so callers can report them together.

    Attributes:
        errors: Human-readable error messages.
    """

    def __init__(self, errors: list[str] | str) -> None:
        if isinstance(errors, str):
            errors = [errors]
        self.errors = list(errors)
        super().__init__("; ".join(self.errors))


class DecompositionLimitExceeded(Exception):
    """Raised when a piece would need more joins than the decomposer allows."""

    def __init__(self, unit_id: str, required: int, limit: int) -> None:
        self.unit_id = unit_id
        self.required = required
        self.limit = limit
        super().__init__(
            f"'{unit_id}' needs {required} segments, limit is {limit}"
        )


@dataclass(frozen=True)
class UnplaceableUnit:
    """A unit that could not be placed on any slab.

    Not fatal to a run: every other unit is still placed and this record is
    returned so the caller can warn instead of silently dropping product.

    Attributes:
        unit_id: Identifier of the unit (or piece/leg) that was not placed.
        piece_id: Identifier of the originating piece.
        reason: Why the unit could not be placed.
    """

    unit_id: str
    piece_id: str
    reason: str
