"""Job file schema and loading for slab optimisation.

Public API:
    - JobConfiguration: Root job model
    - PieceConfig: Catalogue piece model
    - load_config: Load a job from a JSON file
    - load_config_from_dict: Load a job from a dictionary
    - ConfigError: Exception for job file errors
    - validate_config: Request errors and fabrication advisories
    - config_to_*: Converters to DTOs and domain objects

Example:
    >>> from pathlib import Path
    >>> from slabcut.application.config import load_config, ConfigError
    >>>
    >>> try:
    ...     config = load_config(Path("kitchen.json"))
    ...     print(f"{len(config.pieces)} pieces")
    ... except ConfigError as e:
    ...     print(f"Error: {e}")
"""

from slabcut.application.config.adapter import (
    config_to_engine_config,
    config_to_factory,
    config_to_materials,
    config_to_multi_material_request,
    config_to_pieces,
    config_to_request,
    config_to_slab_config,
    config_to_slab_dimensions,
    piece_config_to_piece,
)
from slabcut.application.config.loader import (
    ConfigError,
    load_config,
    load_config_from_dict,
)
from slabcut.application.config.schema import (
    SUPPORTED_VERSIONS,
    DecompositionConfigSchema,
    FinishedEdgesConfig,
    JobConfiguration,
    LaminationConfigSchema,
    LegConfig,
    LShapeConfigSchema,
    MaterialConfig,
    OptimizerConfigSchema,
    PieceConfig,
    SlabConfigSchema,
    UShapeConfigSchema,
)
from slabcut.application.config.validator import (
    ValidationIssue,
    ValidationResult,
    ValidationWarning,
    validate_config,
)

__all__ = [
    "SUPPORTED_VERSIONS",
    "ConfigError",
    "DecompositionConfigSchema",
    "FinishedEdgesConfig",
    "JobConfiguration",
    "LShapeConfigSchema",
    "LaminationConfigSchema",
    "LegConfig",
    "MaterialConfig",
    "OptimizerConfigSchema",
    "PieceConfig",
    "SlabConfigSchema",
    "UShapeConfigSchema",
    "ValidationIssue",
    "ValidationResult",
    "ValidationWarning",
    "config_to_engine_config",
    "config_to_factory",
    "config_to_materials",
    "config_to_multi_material_request",
    "config_to_pieces",
    "config_to_request",
    "config_to_slab_config",
    "config_to_slab_dimensions",
    "load_config",
    "load_config_from_dict",
    "piece_config_to_piece",
    "validate_config",
]
