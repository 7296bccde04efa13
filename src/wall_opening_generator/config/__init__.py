# File: src/wall_opening_generator/config/__init__.py
"""
Configuration for the wall opening generator.
"""

from .opening_config import (
    OpeningConfig,
    load_opening_config,
    ENV_PREFIX,
)

__all__ = [
    "OpeningConfig",
    "load_opening_config",
    "ENV_PREFIX",
]
