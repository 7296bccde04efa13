"""
Revit host adapters.

These modules import the Revit API conditionally and are only functional
inside Revit (pyRevit or Rhino.Inside.Revit). The core packages never
import them.
"""

from .document_lookup import (
    find_secondary_document,
    find_opening_family_symbol,
    find_3d_view,
    collect_ducts,
    duct_to_record,
    element_id_value,
    xyz_to_tuple,
)
from .revit_collaborators import (
    reference_to_key,
    RevitWallCandidate,
    RevitWallSupplier,
    ReferenceIntersectorRayCaster,
    RevitLevelResolver,
    RevitOpeningCreator,
    revit_transaction,
    make_transaction_factory,
    activate_family_symbol,
)

__all__ = [
    # Lookups
    "find_secondary_document",
    "find_opening_family_symbol",
    "find_3d_view",
    "collect_ducts",
    "duct_to_record",
    "element_id_value",
    "xyz_to_tuple",
    # Collaborators
    "reference_to_key",
    "RevitWallCandidate",
    "RevitWallSupplier",
    "ReferenceIntersectorRayCaster",
    "RevitLevelResolver",
    "RevitOpeningCreator",
    "revit_transaction",
    "make_transaction_factory",
    "activate_family_symbol",
]
