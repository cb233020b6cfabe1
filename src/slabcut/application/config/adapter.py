"""Adapter to convert JobConfiguration to DTOs and domain objects.

The job schema mirrors the JSON file layout; the functions here map it onto
the flat request DTOs and frozen domain value objects used by the commands.
"""

from slabcut.application.config.schema import (
    JobConfiguration,
    LShapeConfigSchema,
    PieceConfig,
    UShapeConfigSchema,
)
from slabcut.application.dtos import OptimizationRequest
from slabcut.application.factory import ServiceFactory
from slabcut.application.multi_material import Material, MultiMaterialRequest
from slabcut.domain.services import DecompositionConfig, LaminationConfig
from slabcut.domain.slab_sizes import get_slab_size
from slabcut.domain.value_objects import (
    FinishedEdges,
    LegDimensions,
    LShapeConfig,
    Piece,
    ShapeConfig,
    UShapeConfig,
)
from slabcut.infrastructure.bin_packing import EngineConfig, SlabConfig


def _shape_to_domain(
    shape: LShapeConfigSchema | UShapeConfigSchema | None,
) -> ShapeConfig | None:
    if shape is None:
        return None
    if isinstance(shape, LShapeConfigSchema):
        return LShapeConfig(
            leg1=LegDimensions(shape.leg1.length, shape.leg1.width),
            leg2=LegDimensions(shape.leg2.length, shape.leg2.width),
        )
    return UShapeConfig(
        left_leg=LegDimensions(shape.left_leg.length, shape.left_leg.width),
        back=LegDimensions(shape.back.length, shape.back.width),
        right_leg=LegDimensions(shape.right_leg.length, shape.right_leg.width),
    )


def piece_config_to_piece(config: PieceConfig) -> Piece:
    """Convert one PieceConfig to a domain Piece."""
    edges = config.finished_edges
    return Piece(
        id=config.id,
        length=config.length,
        width=config.width,
        thickness=config.thickness,
        material_id=config.material_id,
        finished_edges=FinishedEdges(
            top=edges.top, bottom=edges.bottom, left=edges.left, right=edges.right
        ),
        no_strip_edges=frozenset(config.no_strip_edges),
        edge_types=dict(config.edge_types),
        label=config.label,
        can_rotate=config.can_rotate,
        shape=_shape_to_domain(config.shape),
        shape_edges=frozenset(config.shape_edges),
    )


def config_to_pieces(config: JobConfiguration) -> list[Piece]:
    """Convert the job's piece catalogue to domain Pieces, in file order."""
    return [piece_config_to_piece(p) for p in config.pieces]


def config_to_slab_dimensions(config: JobConfiguration) -> tuple[float, float]:
    """Resolve (slab width, slab height).

    Explicit dimensions win; missing ones come from the slab category.
    """
    default = get_slab_size(config.slab.category)
    return (
        config.slab.width or default.length,
        config.slab.height or default.width,
    )


def config_to_slab_config(config: JobConfiguration) -> SlabConfig:
    width, height = config_to_slab_dimensions(config)
    return SlabConfig(width=width, height=height, edge_allowance=config.slab.edge_allowance)


def config_to_engine_config(config: JobConfiguration) -> EngineConfig:
    """Convert optimizer settings to an EngineConfig."""
    return EngineConfig(
        kerf=config.optimizer.kerf,
        allow_rotation=config.optimizer.allow_rotation,
        min_free_dimension=config.optimizer.min_free_dimension,
    )


def config_to_request(
    config: JobConfiguration,
    kerf: float | None = None,
    allow_rotation: bool | None = None,
) -> OptimizationRequest:
    """Build a single-material OptimizationRequest.

    Args:
        config: Validated job.
        kerf: Override for the job's kerf.
        allow_rotation: Override for the job's rotation flag.
    """
    width, height = config_to_slab_dimensions(config)
    return OptimizationRequest(
        pieces=config_to_pieces(config),
        slab_width=width,
        slab_height=height,
        kerf=config.optimizer.kerf if kerf is None else kerf,
        allow_rotation=(
            config.optimizer.allow_rotation if allow_rotation is None else allow_rotation
        ),
        edge_allowance=config.slab.edge_allowance,
    )


def config_to_materials(config: JobConfiguration) -> list[Material]:
    return [
        Material(
            id=m.id,
            name=m.name,
            slab_length=m.slab_length,
            slab_width=m.slab_width,
            category=m.category,
        )
        for m in config.materials
    ]


def config_to_multi_material_request(config: JobConfiguration) -> MultiMaterialRequest:
    return MultiMaterialRequest(
        pieces=config_to_pieces(config),
        materials=config_to_materials(config),
        primary_material_id=config.primary_material_id,
        kerf=config.optimizer.kerf,
        allow_rotation=config.optimizer.allow_rotation,
        edge_allowance=config.slab.edge_allowance,
    )


def config_to_factory(config: JobConfiguration) -> ServiceFactory:
    """Build a ServiceFactory carrying the job's tuning sections."""
    factory = ServiceFactory(min_free_dimension=config.optimizer.min_free_dimension)
    if config.lamination is not None:
        factory.lamination_config = LaminationConfig(**config.lamination.model_dump())
    if config.decomposition is not None:
        factory.decomposition_config = DecompositionConfig(
            **config.decomposition.model_dump()
        )
    return factory
