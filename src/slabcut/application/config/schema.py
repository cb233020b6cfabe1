"""Pydantic configuration schema models for slab optimisation jobs.

This module defines the schema for JSON job files. It uses Pydantic v2 for
validation and serialization. The same models are accepted as REST request
bodies.
"""

from typing import Annotated, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

# Supported schema versions for job files
# Version 1.0: Rectangles, kerf, rotation and lamination
# Version 1.1: Added L/U shapes, edge allowance and multi-material jobs
SUPPORTED_VERSIONS: frozenset[str] = frozenset({"1.0", "1.1"})

SHAPE_EDGE_KEYS: frozenset[str] = frozenset(
    {
        "top", "bottom", "left", "right",
        "r_top", "inner", "r_btm",
        "top_left", "outer_left", "inner_left", "back_inner",
        "top_right", "outer_right", "inner_right",
    }
)


class FinishedEdgesConfig(BaseModel):
    """Finish flags for the four outer edges of a piece."""

    model_config = ConfigDict(extra="forbid")

    top: bool = False
    bottom: bool = False
    left: bool = False
    right: bool = False


class LegConfig(BaseModel):
    """Dimensions of one rectangular leg of an L or U shape."""

    model_config = ConfigDict(extra="forbid")

    length: float = Field(..., gt=0, description="Leg length in mm")
    width: float = Field(..., gt=0, description="Leg width in mm")


class LShapeConfigSchema(BaseModel):
    """L-shaped piece: leg1 along the top, leg2 dropping from its right end."""

    model_config = ConfigDict(extra="forbid")

    type: Literal["l_shape"] = "l_shape"
    leg1: LegConfig
    leg2: LegConfig

    @model_validator(mode="after")
    def validate_legs(self) -> "LShapeConfigSchema":
        if self.leg2.length <= self.leg1.width:
            raise ValueError("leg2 length must exceed leg1 width")
        if self.leg2.width > self.leg1.length:
            raise ValueError("leg2 width cannot exceed leg1 length")
        return self


class UShapeConfigSchema(BaseModel):
    """U-shaped piece: two legs joined by a back."""

    model_config = ConfigDict(extra="forbid")

    type: Literal["u_shape"] = "u_shape"
    left_leg: LegConfig
    back: LegConfig
    right_leg: LegConfig

    @model_validator(mode="after")
    def validate_legs(self) -> "UShapeConfigSchema":
        for name in ("left_leg", "right_leg"):
            if getattr(self, name).length <= self.back.width:
                raise ValueError(f"{name} length must exceed back width")
        return self


ShapeConfigSchema = Annotated[
    Union[LShapeConfigSchema, UShapeConfigSchema], Field(discriminator="type")
]


class PieceConfig(BaseModel):
    """One catalogue piece.

    Attributes:
        id: Unique piece identifier.
        length: Length in mm (runs along the slab width).
        width: Width in mm (runs along the slab height).
        thickness: Finished thickness in mm.
        material_id: Material for multi-material jobs.
        label: Display name (defaults to id).
        can_rotate: Whether the piece may be turned on the slab.
        finished_edges: Finish flags for the outer edges.
        no_strip_edges: Wall-abutting edges that never get a strip.
        edge_types: Edge key to edge type name.
        shape: Optional L or U shape; length/width then give the bounding box.
        shape_edges: Finished named edges of an L or U shape.
    """

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    length: float = Field(..., gt=0, description="Length in mm")
    width: float = Field(..., gt=0, description="Width in mm")
    thickness: float = Field(default=20.0, ge=0, description="Thickness in mm")
    material_id: str | None = None
    label: str = ""
    can_rotate: bool = True
    finished_edges: FinishedEdgesConfig = Field(default_factory=FinishedEdgesConfig)
    no_strip_edges: list[str] = Field(default_factory=list)
    edge_types: dict[str, str] = Field(default_factory=dict)
    shape: ShapeConfigSchema | None = None
    shape_edges: list[str] = Field(default_factory=list)

    @field_validator("no_strip_edges", "shape_edges")
    @classmethod
    def validate_edge_keys(cls, v: list[str]) -> list[str]:
        unknown = sorted(set(v) - SHAPE_EDGE_KEYS)
        if unknown:
            raise ValueError(f"Unknown edge keys: {unknown}")
        return v


class SlabConfigSchema(BaseModel):
    """Slab dimensions.

    Width and height may be omitted when a category is given; the size is
    then looked up in the slab size catalogue.
    """

    model_config = ConfigDict(extra="forbid")

    width: float | None = Field(default=None, gt=0, description="Slab width in mm")
    height: float | None = Field(default=None, gt=0, description="Slab height in mm")
    edge_allowance: float = Field(default=0.0, ge=0, description="Edge allowance in mm")
    category: str | None = Field(default=None, description="Stone category or brand")


class OptimizerConfigSchema(BaseModel):
    """Placement engine settings."""

    model_config = ConfigDict(extra="forbid")

    kerf: float = Field(default=3.0, ge=0, le=20, description="Blade width in mm")
    allow_rotation: bool = True
    min_free_dimension: float = Field(default=0.0, ge=0)


class LaminationConfigSchema(BaseModel):
    """Lamination strip sizing."""

    model_config = ConfigDict(extra="forbid")

    threshold: float = Field(default=40.0, ge=0)
    strip_width: float = Field(default=60.0, gt=0)
    mitre_strip_width: float = Field(default=40.0, gt=0)
    strip_thickness: float = Field(default=20.0, gt=0)


class DecompositionConfigSchema(BaseModel):
    """Oversize splitting limits."""

    model_config = ConfigDict(extra="forbid")

    max_segments: int = Field(default=6, ge=2, le=20)
    rounding: float = Field(default=1.0, gt=0)
    centre_warning_distance: float = Field(default=200.0, ge=0)


class MaterialConfig(BaseModel):
    """A stone material for multi-material jobs."""

    model_config = ConfigDict(extra="forbid")

    id: str = Field(..., min_length=1)
    name: str = ""
    slab_length: float | None = Field(default=None, gt=0)
    slab_width: float | None = Field(default=None, gt=0)
    category: str | None = None


class JobConfiguration(BaseModel):
    """Root configuration model for an optimisation job.

    Attributes:
        schema_version: Version string in format "major.minor" (e.g., "1.0")
        slab: Slab dimensions
        optimizer: Kerf and rotation settings
        lamination: Strip sizing (optional)
        decomposition: Oversize splitting limits (optional)
        materials: Materials for multi-material jobs (v1.1+)
        primary_material_id: Material for pieces without one (v1.1+)
        pieces: The piece catalogue

    Example:
        >>> config = JobConfiguration(
        ...     schema_version="1.0",
        ...     slab=SlabConfigSchema(width=3000, height=1400),
        ...     pieces=[PieceConfig(id="p1", length=2000, width=600)],
        ... )
    """

    model_config = ConfigDict(extra="forbid")

    schema_version: str = Field(..., pattern=r"^\d+\.\d+$")
    slab: SlabConfigSchema = Field(default_factory=SlabConfigSchema)
    optimizer: OptimizerConfigSchema = Field(default_factory=OptimizerConfigSchema)
    lamination: LaminationConfigSchema | None = None
    decomposition: DecompositionConfigSchema | None = None
    materials: list[MaterialConfig] = Field(default_factory=list)
    primary_material_id: str | None = None
    pieces: list[PieceConfig] = Field(default_factory=list)

    @field_validator("schema_version")
    @classmethod
    def validate_supported_version(cls, v: str) -> str:
        """Validate that schema version is supported.

        Newer minor versions of a supported major version are accepted for
        forward compatibility.
        """
        if v in SUPPORTED_VERSIONS:
            return v

        major_version = int(v.split(".")[0])
        supported_majors = {int(sv.split(".")[0]) for sv in SUPPORTED_VERSIONS}
        if major_version in supported_majors:
            return v

        raise ValueError(
            f"Unsupported schema version '{v}'. "
            f"Supported versions: {sorted(SUPPORTED_VERSIONS)}"
        )

    @model_validator(mode="after")
    def validate_unique_ids(self) -> "JobConfiguration":
        ids = [p.id for p in self.pieces]
        duplicates = sorted({i for i in ids if ids.count(i) > 1})
        if duplicates:
            raise ValueError(f"Duplicate piece ids: {duplicates}")
        return self

    @property
    def is_multi_material(self) -> bool:
        """True when pieces reference more than one material."""
        used = {p.material_id or self.primary_material_id for p in self.pieces}
        used.discard(None)
        return len(used) > 1 or bool(self.materials)
