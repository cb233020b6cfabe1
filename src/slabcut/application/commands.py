"""Application commands (use cases) for slab optimisation."""

from __future__ import annotations

import logging

from slabcut.domain.errors import UnplaceableUnit, ValidationError
from slabcut.domain.services import (
    DecompositionConfig,
    LaminationConfig,
    LaminationStripGenerator,
    OversizeDecomposer,
    compute_fingerprint,
)
from slabcut.domain.value_objects import CutPlan, PackableUnit
from slabcut.infrastructure.bin_packing import EngineConfig, PlacementEngine, SlabConfig
from slabcut.infrastructure.metrics import MetricsAssembler, OptimizationResult

from .dtos import OptimizationRequest

logger = logging.getLogger(__name__)


class OptimizeSlabsCommand:
    """Command to lay out a piece catalogue on slabs.

    Runs the full pipeline: validation, oversize decomposition, lamination
    strip derivation, placement and metrics. Each call is independent; the
    command holds only configuration.
    """

    def __init__(
        self,
        decomposition_config: DecompositionConfig | None = None,
        lamination_config: LaminationConfig | None = None,
        min_free_dimension: float = 0.0,
        assembler: MetricsAssembler | None = None,
    ) -> None:
        self.decomposition_config = decomposition_config or DecompositionConfig()
        self.lamination_config = lamination_config or LaminationConfig()
        self.min_free_dimension = min_free_dimension
        self.assembler = assembler or MetricsAssembler()

    def execute(self, request: OptimizationRequest) -> OptimizationResult:
        """Execute the optimisation.

        Args:
            request: Pieces plus slab and kerf settings.

        Returns:
            OptimizationResult with placements, slab usage, lamination
            summary and any unplaced units.

        Raises:
            ValidationError: If the request is malformed. Nothing is
                computed in that case.
        """
        errors = request.validate()
        if errors:
            logger.debug("Rejected request: %s", errors)
            raise ValidationError(errors)

        slab = SlabConfig(
            width=request.slab_width,
            height=request.slab_height,
            edge_allowance=request.edge_allowance,
        )
        engine = PlacementEngine(
            slab,
            EngineConfig(
                kerf=request.kerf,
                allow_rotation=request.allow_rotation,
                min_free_dimension=self.min_free_dimension,
            ),
        )
        decomposer = OversizeDecomposer.for_slab(
            request.slab_width,
            request.slab_height,
            request.kerf,
            edge_allowance=request.edge_allowance,
            allow_rotation=request.allow_rotation,
            config=self.decomposition_config,
        )
        laminator = LaminationStripGenerator(self.lamination_config, kerf=request.kerf)

        units: list[PackableUnit] = []
        strips: list[PackableUnit] = []
        cut_plans: list[CutPlan] = []
        unplaced: list[UnplaceableUnit] = []
        warnings: list[str] = []

        for piece in request.pieces:
            decomposition = decomposer.decompose(piece)
            units.extend(decomposition.units)
            cut_plans.extend(decomposition.cut_plans)
            unplaced.extend(decomposition.unplaced)
            warnings.extend(decomposition.warnings)
            strips.extend(laminator.generate(decomposition))

        logger.info(
            "Optimising %d pieces: %d units, %d lamination strips, %d oversize splits",
            len(request.pieces),
            len(units),
            len(strips),
            len(cut_plans),
        )

        packing = engine.pack(units + strips)
        fingerprint = compute_fingerprint(
            request.pieces, request.kerf, request.slab_width, request.slab_height
        )
        return self.assembler.assemble(
            packing,
            strips=strips,
            cut_plans=cut_plans,
            unplaced=unplaced,
            warnings=warnings,
            fingerprint=fingerprint,
        )
