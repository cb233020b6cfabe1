"""Standard slab sizes by stone category."""

from __future__ import annotations

import re
from dataclasses import dataclass


@dataclass(frozen=True)
class SlabSize:
    """Raw slab dimensions for a stone category.

    Attributes:
        length: Slab length in mm (the optimizer's slab width).
        width: Slab width in mm (the optimizer's slab height).
        name: Display name.
    """

    length: float
    width: float
    name: str

    def usable(self, edge_trim: float = 20.0) -> tuple[float, float]:
        """Largest (length, width) of a piece after trimming each slab edge."""
        return (self.length - 2 * edge_trim, self.width - 2 * edge_trim)


SLAB_SIZES: dict[str, SlabSize] = {
    "ENGINEERED_QUARTZ_JUMBO": SlabSize(3200, 1600, "Engineered Quartz (Jumbo)"),
    "ENGINEERED_QUARTZ_STANDARD": SlabSize(3050, 1440, "Engineered Quartz (Standard)"),
    "NATURAL_STONE": SlabSize(2800, 1600, "Natural Stone"),
    "PORCELAIN": SlabSize(3200, 1600, "Porcelain"),
}

DEFAULT_SLAB_KEY = "ENGINEERED_QUARTZ_JUMBO"

# Brand and category names, normalised to lowercase letters only
_CATEGORY_MAP = {
    "caesarstone": "ENGINEERED_QUARTZ_JUMBO",
    "silestone": "ENGINEERED_QUARTZ_JUMBO",
    "essastone": "ENGINEERED_QUARTZ_STANDARD",
    "smartstone": "ENGINEERED_QUARTZ_JUMBO",
    "engineeredquartz": "ENGINEERED_QUARTZ_JUMBO",
    "granite": "NATURAL_STONE",
    "marble": "NATURAL_STONE",
    "quartzite": "NATURAL_STONE",
    "naturalstone": "NATURAL_STONE",
    "porcelain": "PORCELAIN",
    "dekton": "PORCELAIN",
    "neolith": "PORCELAIN",
}


def get_slab_size(category: str | None) -> SlabSize:
    """Look up the slab size for a brand or category name.

    Matching ignores case and non-letters, so "Engineered Quartz" and
    "ENGINEERED_QUARTZ" are the same category. Unknown or missing
    categories fall back to jumbo engineered quartz.

    Args:
        category: Brand, category or catalogue key.

    Returns:
        The matching SlabSize.
    """
    if not category:
        return SLAB_SIZES[DEFAULT_SLAB_KEY]
    if category.upper() in SLAB_SIZES:
        return SLAB_SIZES[category.upper()]
    normalised = re.sub(r"[^a-z]", "", category.lower())
    return SLAB_SIZES[_CATEGORY_MAP.get(normalised, DEFAULT_SLAB_KEY)]
