"""Infrastructure layer - placement engine, metrics and formatters."""

from .bin_packing import (
    EngineConfig,
    PackingResult,
    Placement,
    PlacementEngine,
    SlabConfig,
    SlabLayout,
)
from .formatters import (
    CutPlanFormatter,
    JsonExporter,
    LaminationReportFormatter,
    SlabReportFormatter,
    result_to_dict,
)
from .metrics import (
    LaminationGroup,
    LaminationSummary,
    MetricsAssembler,
    OptimizationResult,
    SlabUsage,
    StripEntry,
)

__all__ = [
    "CutPlanFormatter",
    "EngineConfig",
    "JsonExporter",
    "LaminationGroup",
    "LaminationReportFormatter",
    "LaminationSummary",
    "MetricsAssembler",
    "OptimizationResult",
    "PackingResult",
    "Placement",
    "PlacementEngine",
    "SlabConfig",
    "SlabLayout",
    "SlabReportFormatter",
    "SlabUsage",
    "StripEntry",
    "result_to_dict",
]
