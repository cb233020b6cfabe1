"""Tests for the slab size catalogue."""

from __future__ import annotations

import pytest

from slabcut.domain.slab_sizes import DEFAULT_SLAB_KEY, SLAB_SIZES, get_slab_size


class TestGetSlabSize:
    """Tests for get_slab_size."""

    @pytest.mark.parametrize("category", [None, "", "Unobtainium"])
    def test_default(self, category: str | None) -> None:
        assert get_slab_size(category) == SLAB_SIZES[DEFAULT_SLAB_KEY]

    def test_catalogue_key(self) -> None:
        assert get_slab_size("natural_stone") == SLAB_SIZES["NATURAL_STONE"]

    @pytest.mark.parametrize(
        "category,key",
        [
            ("Caesarstone", "ENGINEERED_QUARTZ_JUMBO"),
            ("Essastone", "ENGINEERED_QUARTZ_STANDARD"),
            ("Granite", "NATURAL_STONE"),
            ("Natural Stone", "NATURAL_STONE"),
            ("Dekton", "PORCELAIN"),
            ("Engineered Quartz", "ENGINEERED_QUARTZ_JUMBO"),
        ],
    )
    def test_brand_lookup(self, category: str, key: str) -> None:
        assert get_slab_size(category) == SLAB_SIZES[key]

    def test_standard_quartz_dimensions(self) -> None:
        size = get_slab_size("essastone")
        assert (size.length, size.width) == (3050, 1440)


class TestSlabSize:
    """Tests for SlabSize."""

    def test_usable_after_trim(self) -> None:
        assert SLAB_SIZES["NATURAL_STONE"].usable() == (2760, 1560)
        assert SLAB_SIZES["NATURAL_STONE"].usable(edge_trim=0) == (2800, 1600)
