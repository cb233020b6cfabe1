"""Pydantic response schemas for the REST API."""

from typing import Any

from pydantic import BaseModel, Field


class PlacementSchema(BaseModel):
    """A unit placed on a slab."""

    unit_id: str = Field(..., description="Unit identifier")
    kind: str = Field(..., description="main, segment or strip")
    piece_id: str = Field(..., description="Originating piece id")
    parent_id: str | None = Field(default=None, description="Parent unit or piece id")
    label: str = Field(..., description="Display label")
    slab_index: int = Field(..., description="Zero-based slab index")
    x: float = Field(..., description="Left edge in mm")
    y: float = Field(..., description="Bottom edge in mm")
    placed_width: float = Field(..., description="Width as placed in mm")
    placed_height: float = Field(..., description="Height as placed in mm")
    rotated: bool = Field(..., description="Turned 90 degrees")


class SlabUsageSchema(BaseModel):
    """Utilization of one slab."""

    index: int
    used_area: float = Field(..., description="Placed area in mm²")
    waste_area: float = Field(..., description="Waste area in mm²")
    waste_percentage: float = Field(..., description="Waste as 0-100")
    unit_count: int


class TotalsSchema(BaseModel):
    """Run totals."""

    slab_count: int
    used_area: float
    waste_area: float
    waste_percentage: float


class UnplacedUnitSchema(BaseModel):
    unit_id: str
    piece_id: str
    reason: str


class StripSchema(BaseModel):
    unit_id: str
    edge: str
    length: float
    width: float
    part_index: int | None = None
    part_count: int | None = None


class LaminationGroupSchema(BaseModel):
    parent_id: str
    piece_id: str
    strips: list[StripSchema]


class LaminationSummarySchema(BaseModel):
    """Lamination strips grouped by parent unit."""

    total_strips: int = 0
    total_area_m2: float = 0.0
    groups: list[LaminationGroupSchema] = Field(default_factory=list)


class JoinSchema(BaseModel):
    position: float
    orientation: str
    length: float


class CutPlanSchema(BaseModel):
    """How an oversize piece or leg was split."""

    unit_id: str
    piece_id: str
    strategy: str
    axis: str
    segment_lengths: list[float]
    cross_dimension: float
    joins: list[JoinSchema]
    join_length: float
    warnings: list[str] = Field(default_factory=list)


class OptimizationResultSchema(BaseModel):
    """Response for an optimisation run."""

    fingerprint: str = Field(..., description="Hash of the optimisation inputs")
    cached: bool = Field(default=False, description="Served from the result cache")
    placements: list[PlacementSchema]
    slabs: list[SlabUsageSchema]
    totals: TotalsSchema
    unplaced: list[str] = Field(default_factory=list, description="Ids of unplaced units")
    unplaced_units: list[UnplacedUnitSchema] = Field(default_factory=list)
    lamination_summary: LaminationSummarySchema
    cut_plans: list[CutPlanSchema] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class MaterialGroupSchema(BaseModel):
    """Result for one material group."""

    material_id: str
    material_name: str
    slab_width: float
    slab_height: float
    piece_ids: list[str]
    result: OptimizationResultSchema


class MultiMaterialResultSchema(BaseModel):
    """Response for a multi-material run."""

    groups: list[MaterialGroupSchema]
    total_slab_count: int
    total_waste_percentage: float
    unassigned: list[str] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)


class FingerprintSchema(BaseModel):
    fingerprint: str = Field(..., description="Hex SHA-256 of the optimisation inputs")


class ValidationResultSchema(BaseModel):
    """Response for job validation."""

    is_valid: bool = Field(..., description="Whether the job is valid")
    errors: list[dict[str, Any]] = Field(default_factory=list, description="Blocking errors")
    warnings: list[dict[str, Any]] = Field(
        default_factory=list, description="Non-blocking warnings"
    )


class ErrorResponseSchema(BaseModel):
    """Standard error response."""

    error: str = Field(..., description="Error message")
    error_type: str = Field(..., description="Error type identifier")
    details: list[dict[str, Any]] | dict[str, Any] | None = Field(
        default=None, description="Additional error details"
    )
