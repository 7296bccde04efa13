"""
Opening placement planning for wall crossings.
"""

from .placement_planner import (
    validate_duct_diameter,
    opening_size_for_duct,
    plan_opening,
)

__all__ = [
    "validate_duct_diameter",
    "opening_size_for_duct",
    "plan_opening",
]
