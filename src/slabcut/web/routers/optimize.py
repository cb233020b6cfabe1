"""Slab optimisation endpoints."""

import logging

from fastapi import APIRouter

from slabcut.application.config import piece_config_to_piece
from slabcut.application.dtos import OptimizationRequest
from slabcut.application.multi_material import (
    Material,
    MultiMaterialRequest,
    multi_result_to_dict,
)
from slabcut.domain.services import compute_fingerprint
from slabcut.infrastructure.formatters import result_to_dict
from slabcut.web.dependencies import (
    MultiMaterialOptimizerDep,
    OptimizeCommandDep,
    ResultCacheDep,
)
from slabcut.web.schemas.requests import MultiMaterialOptimizeRequest, OptimizeRequest
from slabcut.web.schemas.responses import (
    FingerprintSchema,
    MultiMaterialResultSchema,
    OptimizationResultSchema,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/optimize", tags=["optimize"])


def _to_request(request: OptimizeRequest) -> OptimizationRequest:
    return OptimizationRequest(
        pieces=[piece_config_to_piece(p) for p in request.pieces],
        slab_width=request.slab_width,
        slab_height=request.slab_height,
        kerf=request.kerf,
        allow_rotation=request.allow_rotation,
        edge_allowance=request.edge_allowance,
    )


@router.post("", response_model=OptimizationResultSchema)
async def optimize_slabs(
    request: OptimizeRequest,
    command: OptimizeCommandDep,
    cache: ResultCacheDep,
) -> OptimizationResultSchema:
    """Lay out a piece catalogue on slabs of one material.

    Identical requests are served from the result cache.

    Args:
        request: Pieces plus slab and kerf settings.
        command: Injected optimisation command.
        cache: Injected result cache.

    Returns:
        Placements, slab usage, lamination summary and unplaced units.
    """
    dto = _to_request(request)
    fingerprint = compute_fingerprint(dto.pieces, dto.kerf, dto.slab_width, dto.slab_height)
    key = cache.make_key(fingerprint, dto.allow_rotation, dto.edge_allowance)

    result = cache.get(key)
    cached = result is not None
    if result is None:
        result = command.execute(dto)
        cache.put(key, result)
    else:
        logger.info("Serving cached layout for %s", fingerprint[:12])

    return OptimizationResultSchema.model_validate(
        {**result_to_dict(result), "cached": cached}
    )


@router.post("/multi-material", response_model=MultiMaterialResultSchema)
async def optimize_multi_material(
    request: MultiMaterialOptimizeRequest,
    optimizer: MultiMaterialOptimizerDep,
) -> MultiMaterialResultSchema:
    """Optimise a catalogue that mixes materials, one slab run per material."""
    dto = MultiMaterialRequest(
        pieces=[piece_config_to_piece(p) for p in request.pieces],
        materials=[
            Material(
                id=m.id,
                name=m.name,
                slab_length=m.slab_length,
                slab_width=m.slab_width,
                category=m.category,
            )
            for m in request.materials
        ],
        primary_material_id=request.primary_material_id,
        kerf=request.kerf,
        allow_rotation=request.allow_rotation,
        edge_allowance=request.edge_allowance,
    )
    result = optimizer.optimize(dto)
    return MultiMaterialResultSchema.model_validate(multi_result_to_dict(result))


@router.post("/fingerprint", response_model=FingerprintSchema)
async def fingerprint(request: OptimizeRequest) -> FingerprintSchema:
    """Hash of the inputs that determine a layout."""
    pieces = [piece_config_to_piece(p) for p in request.pieces]
    return FingerprintSchema(
        fingerprint=compute_fingerprint(
            pieces, request.kerf, request.slab_width, request.slab_height
        )
    )
