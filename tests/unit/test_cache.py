"""Tests for the optimisation result cache and service factory."""

from __future__ import annotations

import pytest

from slabcut.application.cache import OptimizationCache
from slabcut.application.commands import OptimizeSlabsCommand
from slabcut.application.factory import (
    ServiceFactory,
    get_factory,
    reset_factory,
    set_factory,
)
from slabcut.application.multi_material import MultiMaterialOptimizer
from slabcut.domain.services import DecompositionConfig


@pytest.fixture
def results(optimize_command: OptimizeSlabsCommand, small_slab_request, benchtop):
    """Two distinct results to store."""
    first = optimize_command.execute(small_slab_request([benchtop]))
    second = optimize_command.execute(small_slab_request([benchtop], kerf=4))
    return first, second


class TestOptimizationCache:
    """Tests for OptimizationCache."""

    def test_make_key(self) -> None:
        assert OptimizationCache.make_key("abc", True) == "abc:r1:e0"
        assert OptimizationCache.make_key("abc", False, 20.0) == "abc:r0:e20"

    def test_miss_then_hit(self, results) -> None:
        cache = OptimizationCache()
        assert cache.get("k") is None
        cache.put("k", results[0])
        assert cache.get("k") is results[0]
        assert (cache.hits, cache.misses) == (1, 1)
        assert "k" in cache

    def test_evicts_least_recently_used(self, results) -> None:
        cache = OptimizationCache(max_entries=2)
        cache.put("a", results[0])
        cache.put("b", results[1])
        cache.get("a")
        cache.put("c", results[1])
        assert "a" in cache
        assert "b" not in cache
        assert len(cache) == 2

    def test_clear(self, results) -> None:
        cache = OptimizationCache()
        cache.put("a", results[0])
        cache.get("a")
        cache.clear()
        assert len(cache) == 0
        assert cache.hits == 0

    def test_invalid_size(self) -> None:
        with pytest.raises(ValueError):
            OptimizationCache(max_entries=0)


class TestServiceFactory:
    """Tests for ServiceFactory."""

    def test_creates_configured_command(self) -> None:
        config = DecompositionConfig(max_segments=3)
        command = ServiceFactory(decomposition_config=config).create_optimize_command()
        assert isinstance(command, OptimizeSlabsCommand)
        assert command.decomposition_config is config

    def test_multi_material_optimizer(self) -> None:
        optimizer = ServiceFactory().create_multi_material_optimizer()
        assert isinstance(optimizer, MultiMaterialOptimizer)

    def test_cache_is_shared(self) -> None:
        factory = ServiceFactory(cache_size=4)
        assert factory.get_cache() is factory.get_cache()
        assert factory.get_cache().max_entries == 4

    def test_default_factory_override(self) -> None:
        custom = ServiceFactory()
        try:
            set_factory(custom)
            assert get_factory() is custom
        finally:
            reset_factory()
        assert get_factory() is not custom
