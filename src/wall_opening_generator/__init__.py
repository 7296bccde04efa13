"""
Wall opening generator.

Places rectangular openings in architectural walls wherever a duct from the
mechanical model passes through them.

Subpackages:
    core: Value types, errors and host interfaces
    crossing: Crossing detection and the planar ray caster
    placement: Opening placement planning
    generator: Batch orchestration and run reports
    config: Run configuration
    revit: Revit host adapters (only functional inside Revit)

Example:
    >>> from wall_opening_generator.crossing import (
    ...     PlanarWall, PlanarRayCaster, MappingLevelResolver,
    ... )
    >>> from wall_opening_generator.generator import generate_openings
    >>> report = generate_openings(
    ...     ducts, walls, PlanarRayCaster(walls), MappingLevelResolver.from_walls(walls)
    ... )
"""

__version__ = "0.1.0"
