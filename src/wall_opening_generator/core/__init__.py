"""
Core abstractions for the wall opening generator.

This module provides the host-independent building blocks:
- Value types (segments, crossings, placement requests, duct records)
- The error taxonomy used to skip ducts and crossings
- Interfaces to the host modeling environment
"""

from .opening_types import (
    Point3,
    Vector3,
    LevelId,
    ElementKey,
    Segment,
    Crossing,
    PlacementRequest,
    DuctShape,
    DuctRecord,
    SurfaceCandidate,
)

from .errors import (
    OpeningGeneratorError,
    InvalidSegment,
    InvalidDuctGeometry,
    HostQueryError,
    UnresolvedHost,
    OpeningCreationError,
    SetupError,
    DocumentNotFoundError,
    FamilyNotFoundError,
    ViewNotFoundError,
)

from .host_interfaces import (
    CandidateFilter,
    TransactionFactory,
    CandidateSupplier,
    RayCaster,
    LevelResolver,
    OpeningCreator,
    null_transaction,
)

__all__ = [
    # Types
    "Point3",
    "Vector3",
    "LevelId",
    "ElementKey",
    "Segment",
    "Crossing",
    "PlacementRequest",
    "DuctShape",
    "DuctRecord",
    "SurfaceCandidate",
    # Errors
    "OpeningGeneratorError",
    "InvalidSegment",
    "InvalidDuctGeometry",
    "HostQueryError",
    "UnresolvedHost",
    "OpeningCreationError",
    "SetupError",
    "DocumentNotFoundError",
    "FamilyNotFoundError",
    "ViewNotFoundError",
    # Host interfaces
    "CandidateFilter",
    "TransactionFactory",
    "CandidateSupplier",
    "RayCaster",
    "LevelResolver",
    "OpeningCreator",
    "null_transaction",
]
