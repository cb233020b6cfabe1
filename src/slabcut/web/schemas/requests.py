"""Pydantic request schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field

from slabcut.application.config.schema import MaterialConfig, PieceConfig


class OptimizeRequest(BaseModel):
    """Request for optimising a single-material catalogue.

    Slab and kerf values are checked by the engine, so out-of-range values
    produce the engine's validation error rather than a schema error.
    """

    slab_width: float = Field(default=3200.0, description="Slab width in mm")
    slab_height: float = Field(default=1600.0, description="Slab height in mm")
    kerf: float = Field(default=3.0, description="Blade width in mm")
    allow_rotation: bool = Field(default=True, description="Allow 90 degree rotation")
    edge_allowance: float = Field(default=0.0, description="Unusable mm at each slab edge")
    pieces: list[PieceConfig] = Field(default_factory=list, description="Piece catalogue")


class MultiMaterialOptimizeRequest(BaseModel):
    """Request for optimising a catalogue that mixes materials."""

    pieces: list[PieceConfig] = Field(default_factory=list, description="Piece catalogue")
    materials: list[MaterialConfig] = Field(
        default_factory=list, description="Materials referenced by pieces"
    )
    primary_material_id: str | None = Field(
        default=None, description="Material for pieces without one"
    )
    kerf: float = Field(default=3.0, description="Blade width in mm")
    allow_rotation: bool = Field(default=True, description="Allow 90 degree rotation")
    edge_allowance: float = Field(default=0.0, description="Unusable mm at each slab edge")


class ConfigValidateRequest(BaseModel):
    """Request for validating a job configuration."""

    config: dict[str, Any] = Field(..., description="Full job configuration JSON")
