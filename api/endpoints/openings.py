# File: api/endpoints/openings.py
from fastapi import APIRouter
from typing import Dict, Any
import logging

from api.models.opening_models import (
    ElementKeyModel,
    OpeningPlanRequest,
    OpeningPlanResponse,
    PlacementModel,
    Point3D,
    SkipModel,
)
from api.utils.errors import InvalidPlanConfigError, handle_exception
from wall_opening_generator.config.opening_config import OpeningConfig
from wall_opening_generator.crossing.planar_ray_caster import (
    MappingLevelResolver,
    PlanarRayCaster,
)
from wall_opening_generator.generator.opening_generator import (
    OpeningBatchReport,
    OpeningGenerator,
)

# Set up logging
logger = logging.getLogger("wall_openings.api")

router = APIRouter()


def _skip_to_model(record) -> SkipModel:
    return SkipModel(
        duct_id=record.duct_id,
        reason=record.reason,
        message=record.message,
        wall_key=None if record.wall_key is None else ElementKeyModel(**record.wall_key.to_dict()),
    )


def report_to_response(report: OpeningBatchReport) -> OpeningPlanResponse:
    """
    Convert a generator report to the response model.

    Args:
        report: Plan-only OpeningBatchReport

    Returns:
        OpeningPlanResponse
    """
    placements = []
    for placed in report.placed:
        request = placed.request
        x, y, z = request.insertion_point
        placements.append(PlacementModel(
            duct_id=placed.duct_id,
            insertion_point=Point3D(x=x, y=y, z=z),
            host_key=ElementKeyModel(**request.host_key.to_dict()),
            level_id=request.level_id,
            width=request.width,
            height=request.height,
        ))

    return OpeningPlanResponse(
        placements=placements,
        skipped_ducts=[_skip_to_model(s) for s in report.skipped_ducts],
        skipped_crossings=[_skip_to_model(s) for s in report.skipped_crossings],
        summary=report.to_dict()["summary"],
    )


def build_plan_config(overrides: Dict[str, Any]) -> OpeningConfig:
    """
    Build the run configuration from request overrides.

    Raises:
        InvalidPlanConfigError: If a key is unknown or a value is invalid
    """
    try:
        return OpeningConfig.from_dict(overrides)
    except ValueError as e:
        raise InvalidPlanConfigError(str(e), overrides) from e


@router.post("/plan", response_model=OpeningPlanResponse)
async def plan_openings(plan_request: OpeningPlanRequest):
    """
    Plan openings for ducts crossing straight walls.

    Nothing is created: the response lists where each opening would go
    (insertion point, host wall, level, width, height) together with the
    ducts and crossings that were skipped and why.
    """
    logger.info(
        f"Opening plan requested for {len(plan_request.ducts)} ducts "
        f"and {len(plan_request.walls)} walls"
    )
    config = build_plan_config(plan_request.config)

    try:
        walls = [w.to_wall() for w in plan_request.walls]
        ducts = [d.to_record() for d in plan_request.ducts]

        generator = OpeningGenerator(
            PlanarRayCaster(walls),
            MappingLevelResolver.from_walls(walls),
            config=config,
        )
        report = generator.generate(ducts, walls)
    except Exception as e:
        raise handle_exception(e, resource_type="opening plan")

    logger.info(
        f"Planned {len(report.placed)} openings "
        f"({len(report.skipped_ducts)} ducts, {len(report.skipped_crossings)} crossings skipped)"
    )
    return report_to_response(report)


@router.get("/defaults", response_model=Dict[str, Any])
async def opening_defaults():
    """Return the default run configuration used by host scripts."""
    return OpeningConfig().to_dict()
