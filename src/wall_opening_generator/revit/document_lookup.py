# File: src/wall_opening_generator/revit/document_lookup.py
"""
Revit document queries that prepare an opening run.

Locates the mechanical (secondary) document, the opening family type and a
3D view usable for ray casting, and reads ducts into DuctRecords. Every
lookup raises a SetupError subclass when its target is missing so the run
can be cancelled before any transaction is opened.

All Revit imports are conditional; functions that need the API raise
SetupError when it is unavailable.

Usage (inside Rhino.Inside.Revit / pyRevit only):
    from wall_opening_generator.revit.document_lookup import (
        find_secondary_document, find_opening_family_symbol, find_3d_view,
        collect_ducts,
    )

    mech_doc = find_secondary_document(doc.Application, "ОВ")
    symbol = find_opening_family_symbol(doc, "Отверстия")
    view = find_3d_view(doc)
    ducts = collect_ducts(mech_doc)
"""

import logging
from typing import Any, List, Optional

from wall_opening_generator.core.errors import (
    DocumentNotFoundError,
    FamilyNotFoundError,
    SetupError,
    ViewNotFoundError,
)
from wall_opening_generator.core.opening_types import DuctRecord, DuctShape, Point3

logger = logging.getLogger(__name__)

# =============================================================================
# Conditional Revit Imports
# =============================================================================

REVIT_AVAILABLE = False
REVIT_ERROR: Optional[str] = None

try:
    import clr
    clr.AddReference("RevitAPI")
    from Autodesk.Revit.DB import (
        BuiltInCategory,
        FamilySymbol,
        FilteredElementCollector,
        View3D,
    )
    from Autodesk.Revit.DB.Mechanical import Duct
    REVIT_AVAILABLE = True
except Exception as e:
    REVIT_ERROR = str(e)
    BuiltInCategory = None
    FamilySymbol = None
    FilteredElementCollector = None
    View3D = None
    Duct = None


def _require_revit() -> None:
    if not REVIT_AVAILABLE:
        raise SetupError(f"Revit API not available: {REVIT_ERROR}")


def xyz_to_tuple(xyz: Any) -> Point3:
    """Convert a Revit XYZ to an (x, y, z) tuple."""
    return (float(xyz.X), float(xyz.Y), float(xyz.Z))


def element_id_value(element_id: Any) -> int:
    """Return the integer value of an ElementId (Revit 2024+ exposes .Value)."""
    for attr in ("Value", "IntegerValue"):
        value = getattr(element_id, attr, None)
        if value is not None:
            return int(value)
    return int(element_id)


# =============================================================================
# Documents, Families, Views
# =============================================================================

def find_secondary_document(application: Any, marker: str) -> Any:
    """
    Find the open document whose title contains a marker.

    Args:
        application: Revit Application (``doc.Application``)
        marker: Substring of the mechanical model title (e.g. "ОВ")

    Returns:
        First matching Document

    Raises:
        DocumentNotFoundError: If no open document matches
    """
    for document in application.Documents:
        title = getattr(document, "Title", "") or ""
        if marker in title:
            logger.info(f"Using '{title}' as mechanical model")
            return document

    raise DocumentNotFoundError(
        f"No open document with '{marker}' in its title",
        extra={"marker": marker},
    )


def find_opening_family_symbol(
    doc: Any,
    family_name: str,
    category_name: str = "OST_GenericModel"
) -> Any:
    """
    Find a type of the opening family in a document.

    Args:
        doc: Architectural Revit Document
        family_name: Exact family name (e.g. "Отверстия")
        category_name: BuiltInCategory member name of the family

    Returns:
        First FamilySymbol of the family

    Raises:
        FamilyNotFoundError: If the family is not loaded
        SetupError: If the Revit API is unavailable
    """
    _require_revit()

    category = getattr(BuiltInCategory, category_name)
    collector = (
        FilteredElementCollector(doc)
        .OfClass(FamilySymbol)
        .OfCategory(category)
    )

    for symbol in collector:
        if symbol.FamilyName == family_name:
            logger.info(f"Using opening type '{symbol.Name}' of family '{family_name}'")
            return symbol

    raise FamilyNotFoundError(
        f"Family '{family_name}' is not loaded",
        extra={"family_name": family_name},
    )


def find_3d_view(doc: Any) -> Any:
    """
    Find a non-template 3D view for reference intersection.

    Args:
        doc: Architectural Revit Document

    Returns:
        First View3D that is not a template

    Raises:
        ViewNotFoundError: If the document has no such view
        SetupError: If the Revit API is unavailable
    """
    _require_revit()

    for view in FilteredElementCollector(doc).OfClass(View3D):
        if not view.IsTemplate:
            return view

    raise ViewNotFoundError("No non-template 3D view found")


# =============================================================================
# Ducts
# =============================================================================

def _duct_shape(duct: Any) -> DuctShape:
    """Read the section shape from the duct type, defaulting to round."""
    try:
        shape_name = str(duct.DuctType.Shape).lower()
    except Exception:
        return DuctShape.ROUND

    if "rect" in shape_name:
        return DuctShape.RECTANGULAR
    if "oval" in shape_name:
        return DuctShape.OVAL
    return DuctShape.ROUND


def duct_to_record(duct: Any) -> Optional[DuctRecord]:
    """
    Convert a Revit Duct to a DuctRecord.

    Args:
        duct: Revit Duct element

    Returns:
        DuctRecord, or None if the duct has no location curve
    """
    curve = getattr(getattr(duct, "Location", None), "Curve", None)
    if curve is None:
        return None

    shape = _duct_shape(duct)
    record = DuctRecord(
        id=element_id_value(duct.Id),
        start=xyz_to_tuple(curve.GetEndPoint(0)),
        end=xyz_to_tuple(curve.GetEndPoint(1)),
        shape=shape,
    )

    # Diameter throws on non-round ducts
    if shape == DuctShape.ROUND:
        record.diameter = float(duct.Diameter)
    else:
        record.width = float(duct.Width)
        record.height = float(duct.Height)

    return record


def collect_ducts(doc: Any) -> List[DuctRecord]:
    """
    Read all ducts of a document.

    Args:
        doc: Mechanical Revit Document

    Returns:
        List of DuctRecords (ducts without a location curve are left out)

    Raises:
        SetupError: If the Revit API is unavailable
    """
    _require_revit()

    records = []
    for duct in FilteredElementCollector(doc).OfClass(Duct):
        record = duct_to_record(duct)
        if record is None:
            logger.warning(f"Duct {duct.Id} has no location curve; ignored")
            continue
        records.append(record)

    logger.info(f"Collected {len(records)} ducts")
    return records
