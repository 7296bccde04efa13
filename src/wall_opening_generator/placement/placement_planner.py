# File: src/wall_opening_generator/placement/placement_planner.py
"""
Opening placement planning.

Turns a deduplicated crossing into a PlacementRequest: the opening is
centered on the duct centerline at the crossing distance, hosted by the
crossed wall on that wall's level, and sized to the duct diameter.

Only round ducts are supported. Rectangular and oval ducts are rejected
with InvalidDuctGeometry rather than sized from a guessed rule.
"""

from typing import Optional
import logging
import math

from wall_opening_generator.core.errors import InvalidDuctGeometry, UnresolvedHost
from wall_opening_generator.core.host_interfaces import LevelResolver
from wall_opening_generator.core.opening_types import (
    Crossing,
    DuctRecord,
    DuctShape,
    PlacementRequest,
    Segment,
)

logger = logging.getLogger(__name__)


def validate_duct_diameter(duct_diameter: Optional[float]) -> float:
    """
    Check that a duct diameter can size an opening.

    Args:
        duct_diameter: Diameter in model units

    Returns:
        The diameter as float

    Raises:
        InvalidDuctGeometry: If missing, non-finite or <= 0
    """
    if duct_diameter is None:
        raise InvalidDuctGeometry("Duct diameter is missing")

    diameter = float(duct_diameter)
    if not math.isfinite(diameter) or diameter <= 0:
        raise InvalidDuctGeometry(
            f"Duct diameter must be positive, got {duct_diameter}",
            extra={"diameter": duct_diameter},
        )
    return diameter


def opening_size_for_duct(duct: DuctRecord) -> float:
    """
    Get the opening size (width = height) for a duct.

    Args:
        duct: Duct record

    Returns:
        Opening width/height in model units

    Raises:
        InvalidDuctGeometry: For non-round ducts or invalid diameters
    """
    if duct.shape != DuctShape.ROUND:
        raise InvalidDuctGeometry(
            f"Duct {duct.id} has {duct.shape} section; only round ducts are supported",
            extra={"duct_id": duct.id, "shape": duct.shape.value},
        )
    return validate_duct_diameter(duct.diameter)


def plan_opening(
    segment: Segment,
    crossing: Crossing,
    duct_diameter: float,
    level_resolver: LevelResolver
) -> PlacementRequest:
    """
    Build the placement request for one crossing.

    Args:
        segment: Centerline of the duct that produced the crossing
        crossing: Deduplicated crossing
        duct_diameter: Round duct diameter
        level_resolver: Wall -> level lookup

    Returns:
        PlacementRequest with width = height = duct_diameter

    Raises:
        InvalidDuctGeometry: If duct_diameter <= 0
        UnresolvedHost: If the wall's level cannot be resolved
    """
    diameter = validate_duct_diameter(duct_diameter)

    try:
        level_id = level_resolver.level_of(crossing.key)
    except UnresolvedHost:
        raise
    except Exception as e:
        raise UnresolvedHost(
            f"Level lookup failed for wall {crossing.key}: {e}",
            extra={"key": str(crossing.key)},
        ) from e

    if level_id is None:
        raise UnresolvedHost(
            f"Wall {crossing.key} has no associated level",
            extra={"key": str(crossing.key)},
        )

    insertion_point = segment.point_at(crossing.proximity)

    return PlacementRequest(
        insertion_point=insertion_point,
        host_key=crossing.key,
        level_id=level_id,
        width=diameter,
        height=diameter,
    )
