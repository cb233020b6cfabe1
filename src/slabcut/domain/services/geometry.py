"""Rectangle math and geometry fingerprints.

Pure functions used by the decomposer and placement engine:
- Rect: axis-aligned rectangle with containment/intersection tests
- fits: orientation-aware fit test
- compute_fingerprint: stable hash over everything that affects a layout
"""

from __future__ import annotations

import hashlib
from dataclasses import dataclass
from typing import Iterable

from ..value_objects import Piece

__all__ = [
    "Rect",
    "fits",
    "fits_any_orientation",
    "kerf_padded",
    "compute_fingerprint",
]

# Tolerance for float comparisons on mm dimensions
EPSILON = 1e-6


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle in slab coordinates (origin bottom-left)."""

    x: float
    y: float
    width: float
    height: float

    @property
    def right(self) -> float:
        return self.x + self.width

    @property
    def top(self) -> float:
        return self.y + self.height

    @property
    def area(self) -> float:
        return self.width * self.height

    @property
    def perimeter(self) -> float:
        return 2 * (self.width + self.height)

    def contains(self, other: "Rect") -> bool:
        """True if ``other`` lies entirely inside this rectangle."""
        return (
            other.x >= self.x - EPSILON
            and other.y >= self.y - EPSILON
            and other.right <= self.right + EPSILON
            and other.top <= self.top + EPSILON
        )

    def intersects(self, other: "Rect") -> bool:
        """True if the interiors overlap. Touching edges do not count."""
        return (
            self.x < other.right - EPSILON
            and other.x < self.right - EPSILON
            and self.y < other.top - EPSILON
            and other.y < self.top - EPSILON
        )

    def padded(self, kerf: float) -> "Rect":
        """Grow the trailing (right and top) edges by the kerf width."""
        return Rect(self.x, self.y, self.width + kerf, self.height + kerf)


def fits(width: float, height: float, space_width: float, space_height: float) -> bool:
    """Check whether a width x height rectangle fits a space as given."""
    return width <= space_width + EPSILON and height <= space_height + EPSILON


def fits_any_orientation(
    width: float,
    height: float,
    space_width: float,
    space_height: float,
    allow_rotation: bool = True,
) -> tuple[bool, bool]:
    """Check fit, trying the rotated orientation second.

    Returns:
        Tuple of (fits, rotated). ``rotated`` is only True when the
        un-rotated orientation does not fit but the swapped one does.
    """
    if fits(width, height, space_width, space_height):
        return (True, False)
    if allow_rotation and fits(height, width, space_width, space_height):
        return (True, True)
    return (False, False)


def kerf_padded(placement, kerf: float) -> Rect:
    """Footprint a placement reserves on its slab, blade width included.

    Args:
        placement: Any object with x, y, placed_width and placed_height.
        kerf: Blade width in mm.
    """
    return Rect(
        placement.x, placement.y, placement.placed_width, placement.placed_height
    ).padded(kerf)


def _format_number(value: float) -> str:
    # 2000 and 2000.0 must fingerprint identically
    return f"{value:g}"


def _piece_token(piece: Piece) -> str:
    edges = "".join("1" if piece.finished_edges.is_finished(e) else "0"
                    for e in ("top", "bottom", "left", "right"))
    parts = [
        piece.id,
        "x".join(_format_number(v) for v in (piece.length, piece.width, piece.thickness)),
        f"m{piece.material_id}",
        f"e{edges}",
        f"r{int(piece.can_rotate)}",
    ]
    if piece.no_strip_edges:
        parts.append("w" + ",".join(sorted(piece.no_strip_edges)))
    if piece.edge_types:
        parts.append(
            "t" + ",".join(f"{k}={v}" for k, v in sorted(piece.edge_types.items()))
        )
    if piece.shape is not None:
        legs = [
            f"{_format_number(leg.length)}x{_format_number(leg.width)}"
            for leg in vars(piece.shape).values()
        ]
        parts.append(f"s{piece.shape_type.value}[{';'.join(legs)}]")
    if piece.shape_edges:
        parts.append("n" + ",".join(sorted(piece.shape_edges)))
    return ":".join(parts)


def compute_fingerprint(
    pieces: Iterable[Piece],
    kerf: float,
    slab_width: float,
    slab_height: float,
) -> str:
    """Build a stable hash over piece geometry, kerf and slab size.

    Pieces are sorted by id first, so the order of the input does not change
    the result. Two requests with equal fingerprints produce identical
    layouts, so callers can use the value as a cache key.

    Args:
        pieces: Catalogue pieces.
        kerf: Blade width in mm.
        slab_width: Slab width in mm.
        slab_height: Slab height in mm.

    Returns:
        Hex SHA-256 digest.
    """
    tokens = [_piece_token(p) for p in sorted(pieces, key=lambda p: p.id)]
    key = (
        f"k{_format_number(kerf)}"
        f"|s{_format_number(slab_width)}x{_format_number(slab_height)}"
        f"|{'|'.join(tokens)}"
    )
    return hashlib.sha256(key.encode("utf-8")).hexdigest()
