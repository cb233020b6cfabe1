"""Pydantic schemas for the REST API."""

from slabcut.web.schemas.requests import (
    ConfigValidateRequest,
    MultiMaterialOptimizeRequest,
    OptimizeRequest,
)
from slabcut.web.schemas.responses import (
    CutPlanSchema,
    ErrorResponseSchema,
    FingerprintSchema,
    LaminationSummarySchema,
    MaterialGroupSchema,
    MultiMaterialResultSchema,
    OptimizationResultSchema,
    PlacementSchema,
    SlabUsageSchema,
    TotalsSchema,
    ValidationResultSchema,
)

__all__ = [
    # Requests
    "ConfigValidateRequest",
    "MultiMaterialOptimizeRequest",
    "OptimizeRequest",
    # Responses
    "CutPlanSchema",
    "ErrorResponseSchema",
    "FingerprintSchema",
    "LaminationSummarySchema",
    "MaterialGroupSchema",
    "MultiMaterialResultSchema",
    "OptimizationResultSchema",
    "PlacementSchema",
    "SlabUsageSchema",
    "TotalsSchema",
    "ValidationResultSchema",
]
