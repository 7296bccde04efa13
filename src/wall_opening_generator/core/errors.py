# File: src/wall_opening_generator/core/errors.py
"""
Exception types for opening generation.

Geometry, data and ray cast errors (InvalidSegment, InvalidDuctGeometry,
HostQueryError) skip a single duct. Placement errors (UnresolvedHost,
OpeningCreationError) skip a single crossing. SetupError subclasses cancel
the whole run before any model mutation.
"""

from typing import Any, Dict, Optional


class OpeningGeneratorError(Exception):
    """
    Base class for all opening generator errors.

    Carries a machine-readable code alongside the message so that run
    reports can aggregate failures by reason.
    """
    code = "opening_generator_error"

    def __init__(self, message: str, extra: Optional[Dict[str, Any]] = None):
        """
        Initialize with message and optional context.

        Args:
            message: Human-readable error message
            extra: Optional additional context (ids, values)
        """
        self.message = message
        self.extra = extra or {}
        super().__init__(message)


class InvalidSegment(OpeningGeneratorError):
    """Duct centerline is degenerate or not a valid bounded ray."""
    code = "invalid_segment"


class InvalidDuctGeometry(OpeningGeneratorError):
    """Duct section cannot be turned into an opening size."""
    code = "invalid_duct_geometry"


class HostQueryError(OpeningGeneratorError):
    """Host intersection query failed for a duct."""
    code = "host_query_failed"


class UnresolvedHost(OpeningGeneratorError):
    """Crossed wall cannot be attributed to a level."""
    code = "unresolved_host"


class OpeningCreationError(OpeningGeneratorError):
    """Host model refused to create or size an opening instance."""
    code = "creation_failed"


class SetupError(OpeningGeneratorError):
    """Run preconditions are not met; nothing was modified."""
    code = "setup_error"


class DocumentNotFoundError(SetupError):
    """Secondary (mechanical) document is not open."""
    code = "document_not_found"


class FamilyNotFoundError(SetupError):
    """Opening family is not loaded in the primary document."""
    code = "family_not_found"


class ViewNotFoundError(SetupError):
    """No usable 3D view exists for ray casting."""
    code = "view_not_found"
