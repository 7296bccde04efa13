"""
Crossing detection between duct centerlines and walls.

Example:
    >>> from wall_opening_generator.crossing import (
    ...     PlanarWall, PlanarRayCaster, find_crossings, segment_from_endpoints,
    ... )
    >>> segment = segment_from_endpoints((0, 0, 3), (10, 0, 3))
    >>> crossings = find_crossings(segment, walls, PlanarRayCaster(walls))
"""

from .crossing_finder import (
    validate_segment,
    segment_from_endpoints,
    filter_by_length,
    deduplicate_crossings,
    find_crossings,
)
from .planar_ray_caster import (
    RectangularFace,
    PlanarWall,
    PlanarRayCaster,
    PlanarWallSupplier,
    MappingLevelResolver,
)

__all__ = [
    # Crossing finder
    "validate_segment",
    "segment_from_endpoints",
    "filter_by_length",
    "deduplicate_crossings",
    "find_crossings",
    # Planar implementation
    "RectangularFace",
    "PlanarWall",
    "PlanarRayCaster",
    "PlanarWallSupplier",
    "MappingLevelResolver",
]
