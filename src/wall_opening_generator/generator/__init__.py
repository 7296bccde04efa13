"""
Run orchestration for duct opening generation.

Example:
    >>> from wall_opening_generator.generator import generate_openings
    >>> report = generate_openings(ducts, walls, ray_caster, level_resolver)
    >>> print(report.get_report_info_string())
"""

from .opening_generator import (
    SkipReason,
    SkipRecord,
    PlacedOpening,
    OpeningBatchReport,
    OpeningGenerator,
    generate_openings,
)

__all__ = [
    "SkipReason",
    "SkipRecord",
    "PlacedOpening",
    "OpeningBatchReport",
    "OpeningGenerator",
    "generate_openings",
]
