"""Tests for job file schema validation and loading."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Callable

import pytest

from slabcut.application.config import (
    ConfigError,
    JobConfiguration,
    LShapeConfigSchema,
    load_config,
    load_config_from_dict,
)
from slabcut.application.config.loader import _format_json_path


class TestFormatJsonPath:
    """Tests for _format_json_path."""

    def test_nested_keys(self) -> None:
        assert _format_json_path(("slab", "width")) == "slab.width"

    def test_list_index(self) -> None:
        assert _format_json_path(("pieces", 0, "length")) == "pieces[0].length"

    def test_leading_index(self) -> None:
        assert _format_json_path((2,)) == "[2]"


class TestLoadConfig:
    """Tests for load_config."""

    def test_valid_file(self, write_job: Callable[..., Path], minimal_job: dict[str, Any]) -> None:
        config = load_config(write_job(minimal_job))
        assert isinstance(config, JobConfiguration)
        assert config.slab.width == 3000
        assert config.pieces[0].id == "bench"
        assert config.optimizer.allow_rotation is True

    def test_file_not_found(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path / "missing.json")
        assert exc_info.value.error_type == "file_not_found"
        assert exc_info.value.path == tmp_path / "missing.json"

    def test_invalid_json(self, write_job: Callable[..., Path]) -> None:
        with pytest.raises(ConfigError) as exc_info:
            load_config(write_job('{"schema_version": "1.0",\n  "pieces": [}'))
        error = exc_info.value
        assert error.error_type == "json_parse"
        assert error.details[0]["line"] == 2

    def test_validation_error_paths(
        self, write_job: Callable[..., Path], minimal_job: dict[str, Any]
    ) -> None:
        minimal_job["pieces"][0]["length"] = -5
        with pytest.raises(ConfigError) as exc_info:
            load_config(write_job(minimal_job))
        error = exc_info.value
        assert error.error_type == "validation"
        assert error.details[0]["path"] == "pieces[0].length"
        assert "pieces[0].length" in str(error)


class TestJobSchema:
    """Tests for JobConfiguration validation rules."""

    def test_unsupported_major_version(self, minimal_job: dict[str, Any]) -> None:
        minimal_job["schema_version"] = "2.0"
        with pytest.raises(ConfigError, match="Unsupported schema version"):
            load_config_from_dict(minimal_job)

    def test_newer_minor_version_accepted(self, minimal_job: dict[str, Any]) -> None:
        minimal_job["schema_version"] = "1.7"
        assert load_config_from_dict(minimal_job).schema_version == "1.7"

    def test_duplicate_piece_ids(self, minimal_job: dict[str, Any]) -> None:
        minimal_job["pieces"].append({"id": "bench", "length": 100, "width": 100})
        with pytest.raises(ConfigError, match="Duplicate piece ids"):
            load_config_from_dict(minimal_job)

    def test_unknown_edge_key(self, minimal_job: dict[str, Any]) -> None:
        minimal_job["pieces"][0]["no_strip_edges"] = ["back"]
        with pytest.raises(ConfigError, match="Unknown edge keys"):
            load_config_from_dict(minimal_job)

    def test_extra_fields_forbidden(self, minimal_job: dict[str, Any]) -> None:
        minimal_job["slab"]["colour"] = "white"
        with pytest.raises(ConfigError) as exc_info:
            load_config_from_dict(minimal_job)
        assert exc_info.value.details[0]["path"] == "slab.colour"

    def test_kerf_upper_bound(self, minimal_job: dict[str, Any]) -> None:
        minimal_job["optimizer"]["kerf"] = 25
        with pytest.raises(ConfigError):
            load_config_from_dict(minimal_job)

    def test_l_shape_parsed(self, minimal_job: dict[str, Any]) -> None:
        minimal_job["pieces"][0]["shape"] = {
            "type": "l_shape",
            "leg1": {"length": 2400, "width": 600},
            "leg2": {"length": 1800, "width": 600},
        }
        config = load_config_from_dict(minimal_job)
        assert isinstance(config.pieces[0].shape, LShapeConfigSchema)

    def test_invalid_l_shape(self, minimal_job: dict[str, Any]) -> None:
        minimal_job["pieces"][0]["shape"] = {
            "type": "l_shape",
            "leg1": {"length": 2400, "width": 600},
            "leg2": {"length": 500, "width": 600},
        }
        with pytest.raises(ConfigError, match="leg2 length must exceed leg1 width"):
            load_config_from_dict(minimal_job)

    def test_is_multi_material(
        self, minimal_job: dict[str, Any], multi_material_job: dict[str, Any]
    ) -> None:
        assert load_config_from_dict(minimal_job).is_multi_material is False
        assert load_config_from_dict(multi_material_job).is_multi_material is True
