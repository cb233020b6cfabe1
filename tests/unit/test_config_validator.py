"""Tests for job validation and fabrication advisories."""

from __future__ import annotations

from typing import Any

from slabcut.application.config import ValidationResult, load_config_from_dict, validate_config


class TestValidationResult:
    """Tests for ValidationResult."""

    def test_exit_codes(self) -> None:
        assert ValidationResult().exit_code == 0
        assert ValidationResult().add_warning("p", "w").exit_code == 2
        assert ValidationResult().add_warning("p", "w").add_error("p", "e").exit_code == 1

    def test_merge(self) -> None:
        merged = ValidationResult().add_error("a", "x").merge(
            ValidationResult().add_warning("b", "y")
        )
        assert len(merged.errors) == 1
        assert merged.has_warnings


class TestValidateConfig:
    """Tests for validate_config."""

    def test_valid_job(self, minimal_job: dict[str, Any]) -> None:
        result = validate_config(load_config_from_dict(minimal_job))
        assert result.is_valid
        assert not result.has_warnings

    def test_oversize_warning(self, oversize_job: dict[str, Any]) -> None:
        result = validate_config(load_config_from_dict(oversize_job))
        assert result.is_valid
        assert result.exit_code == 2
        messages = [w.message for w in result.warnings]
        assert "long: oversize, split into 2 segments (lengthwise)" in messages
        assert all(w.path == "pieces[0]" for w in result.warnings)

    def test_unplaceable_warning(self, minimal_job: dict[str, Any]) -> None:
        minimal_job["pieces"][0].update({"length": 9000, "width": 9000})
        result = validate_config(load_config_from_dict(minimal_job))
        assert any("cannot be placed" in w.message for w in result.warnings)

    def test_empty_catalogue_is_error(self, minimal_job: dict[str, Any]) -> None:
        minimal_job["pieces"] = []
        result = validate_config(load_config_from_dict(minimal_job))
        assert not result.is_valid
        assert [e.message for e in result.errors] == ["At least one piece is required"]

    def test_allowance_and_kerf_too_large(self, minimal_job: dict[str, Any]) -> None:
        minimal_job["slab"] = {"width": 100, "height": 100, "edge_allowance": 49}
        result = validate_config(load_config_from_dict(minimal_job))
        assert "Edge allowance and kerf leave no usable slab area" in [
            e.message for e in result.errors
        ]

    def test_material_references(self, multi_material_job: dict[str, Any]) -> None:
        multi_material_job["pieces"].append({"id": "orphan", "length": 500, "width": 500})
        multi_material_job["pieces"].append(
            {"id": "odd", "length": 500, "width": 500, "material_id": "onyx"}
        )
        result = validate_config(load_config_from_dict(multi_material_job))
        assert result.is_valid
        paths = {w.path: w.message for w in result.warnings}
        assert "no material" in paths["pieces[3].material_id"]
        assert "unlisted material 'onyx'" in paths["pieces[4].material_id"]

    def test_oversize_checked_per_material(self, multi_material_job: dict[str, Any]) -> None:
        # Both would fit the 3200x1600 default slab
        multi_material_job["pieces"][0]["length"] = 3100
        multi_material_job["pieces"][1]["length"] = 2900
        result = validate_config(load_config_from_dict(multi_material_job))
        oversize = [w.path for w in result.warnings if "oversize" in w.message]
        assert oversize == ["pieces[0]", "pieces[1]"]
