"""Data Transfer Objects for the application layer."""

from __future__ import annotations

from dataclasses import dataclass, field

from slabcut.domain.value_objects import Piece


@dataclass
class OptimizationRequest:
    """Input DTO for one optimisation run.

    Attributes:
        pieces: Catalogue pieces to place.
        slab_width: Slab width in mm.
        slab_height: Slab height in mm.
        kerf: Blade width in mm.
        allow_rotation: Whether units may be turned 90 degrees.
        edge_allowance: Unusable material at each slab edge in mm.
    """

    pieces: list[Piece] = field(default_factory=list)
    slab_width: float = 3200.0
    slab_height: float = 1600.0
    kerf: float = 3.0
    allow_rotation: bool = True
    edge_allowance: float = 0.0

    def validate(self) -> list[str]:
        """Validate input and return list of error messages."""
        errors: list[str] = []
        if self.slab_width <= 0:
            errors.append("Slab width must be positive")
        if self.slab_height <= 0:
            errors.append("Slab height must be positive")
        if self.kerf < 0:
            errors.append("Kerf must be non-negative")
        if self.edge_allowance < 0:
            errors.append("Edge allowance must be non-negative")
        elif (
            self.slab_width > 0
            and self.slab_height > 0
            and 2 * self.edge_allowance + self.kerf >= min(self.slab_width, self.slab_height)
        ):
            errors.append("Edge allowance and kerf leave no usable slab area")
        if not self.pieces:
            errors.append("At least one piece is required")

        seen: set[str] = set()
        for piece in self.pieces:
            if piece.length <= 0 or piece.width <= 0:
                errors.append(f"Piece '{piece.id}' dimensions must be positive")
            if piece.id in seen:
                errors.append(f"Duplicate piece id '{piece.id}'")
            seen.add(piece.id)
        return errors

    @property
    def is_valid(self) -> bool:
        return not self.validate()
