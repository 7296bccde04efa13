# File: src/wall_opening_generator/revit/revit_collaborators.py
"""
Revit implementations of the host interfaces.

- ReferenceIntersectorRayCaster: RayCaster over walls visible in a 3D view
- RevitWallSupplier: CandidateSupplier over the walls of a document
- RevitLevelResolver: LevelResolver reading Wall.LevelId
- RevitOpeningCreator: OpeningCreator placing wall-hosted family instances
- revit_transaction / activate_family_symbol: transaction bookkeeping

References returned by ReferenceIntersector identify an element by
(ElementId, LinkedElementId). For elements of the host document the
linked id is invalid; for elements inside a Revit link the ElementId is the
link instance. reference_to_key maps both cases onto ElementKey.

All Revit imports are conditional so the mapping helpers stay testable
outside Revit.
"""

import logging
from contextlib import contextmanager
from typing import Any, Dict, Iterator, List, Optional

from wall_opening_generator.core.errors import (
    HostQueryError,
    OpeningCreationError,
    UnresolvedHost,
)
from wall_opening_generator.core.host_interfaces import (
    CandidateFilter,
    CandidateSupplier,
    LevelResolver,
    OpeningCreator,
    RayCaster,
)
from wall_opening_generator.core.opening_types import (
    Crossing,
    ElementKey,
    LevelId,
    PlacementRequest,
    Point3,
    SurfaceCandidate,
    Vector3,
)
from wall_opening_generator.revit.document_lookup import element_id_value, xyz_to_tuple

logger = logging.getLogger(__name__)

# Integer value of ElementId.InvalidElementId
INVALID_ID = -1

# =============================================================================
# Conditional Revit Imports
# =============================================================================

REVIT_AVAILABLE = False
REVIT_ERROR: Optional[str] = None

try:
    import clr
    clr.AddReference("RevitAPI")
    from Autodesk.Revit.DB import (
        ElementClassFilter,
        ElementId,
        FilteredElementCollector,
        FindReferenceTarget,
        ReferenceIntersector,
        Transaction,
        Wall,
        XYZ,
    )
    from Autodesk.Revit.DB.Structure import StructuralType
    REVIT_AVAILABLE = True
except Exception as e:
    REVIT_ERROR = str(e)
    ElementClassFilter = None
    ElementId = None
    FilteredElementCollector = None
    FindReferenceTarget = None
    ReferenceIntersector = None
    Transaction = None
    Wall = None
    XYZ = None
    StructuralType = None


# =============================================================================
# Identity Mapping
# =============================================================================

def reference_to_key(reference: Any) -> ElementKey:
    """
    Map a Revit Reference to an ElementKey.

    Args:
        reference: Revit Reference (from ReferenceWithContext.GetReference())

    Returns:
        ElementKey(local=element id) for host elements, or
        ElementKey(local=linked element id, container=link instance id)
    """
    element_id = element_id_value(reference.ElementId)
    linked = getattr(reference, "LinkedElementId", None)

    if linked is None or element_id_value(linked) == INVALID_ID:
        return ElementKey(local=element_id)

    return ElementKey(local=element_id_value(linked), container=element_id)


class RevitWallCandidate(SurfaceCandidate):
    """A host-document wall exposed as a SurfaceCandidate."""

    def __init__(self, wall: Any):
        self.wall = wall
        self._key = ElementKey(local=element_id_value(wall.Id))

    @property
    def key(self) -> ElementKey:
        return self._key

    def __repr__(self) -> str:
        return f"RevitWallCandidate({self._key})"


class RevitWallSupplier(CandidateSupplier):
    """Supplies every wall of a document as a candidate."""

    def __init__(self, doc: Any):
        self.doc = doc

    def get_candidates(self) -> List[SurfaceCandidate]:
        walls = FilteredElementCollector(self.doc).OfClass(Wall)
        candidates = [RevitWallCandidate(w) for w in walls]
        logger.info(f"Collected {len(candidates)} wall candidates")
        return candidates


# =============================================================================
# Ray Casting
# =============================================================================

class ReferenceIntersectorRayCaster(RayCaster):
    """
    RayCaster backed by Revit's ReferenceIntersector.

    Finds wall elements visible in a 3D view. Like ReferenceIntersector.Find,
    it reports hits along the unbounded ray; max_distance is not applied.
    """

    def __init__(self, view3d: Any, find_in_links: bool = False, intersector: Any = None):
        """
        Args:
            view3d: Non-template View3D of the architectural document
            find_in_links: Also report walls inside Revit links
            intersector: Pre-built intersector (skips construction)
        """
        if intersector is None:
            intersector = ReferenceIntersector(
                ElementClassFilter(Wall),
                FindReferenceTarget.Element,
                view3d,
            )
            intersector.FindReferencesInRevitLinks = find_in_links
        self.intersector = intersector

    def _find(self, origin: Point3, direction: Vector3) -> Any:
        try:
            return list(self.intersector.Find(XYZ(*origin), XYZ(*direction)))
        except Exception as e:
            raise HostQueryError(f"ReferenceIntersector.Find failed at {origin}: {e}") from e

    def cast(
        self,
        origin: Point3,
        direction: Vector3,
        max_distance: float,
        candidate_filter: Optional[CandidateFilter] = None
    ) -> List[Crossing]:
        hits = []

        for context in self._find(origin, direction):
            reference = context.GetReference()
            key = reference_to_key(reference)
            if candidate_filter is not None and not candidate_filter(key):
                continue

            proximity = float(context.Proximity)
            global_point = getattr(reference, "GlobalPoint", None)
            if global_point is not None:
                point = xyz_to_tuple(global_point)
            else:
                point = (
                    origin[0] + direction[0] * proximity,
                    origin[1] + direction[1] * proximity,
                    origin[2] + direction[2] * proximity,
                )
            hits.append(Crossing(key=key, proximity=proximity, point=point))

        return hits


# =============================================================================
# Level Resolution
# =============================================================================

class RevitLevelResolver(LevelResolver):
    """Resolves a wall's level from Wall.LevelId."""

    def __init__(self, doc: Any, link_documents: Optional[Dict[Any, Any]] = None):
        """
        Args:
            doc: Architectural Revit Document
            link_documents: Optional link instance id -> linked Document map
                for walls that live in Revit links
        """
        self.doc = doc
        self.link_documents = link_documents or {}

    def _owner_document(self, key: ElementKey) -> Any:
        if key.container is None:
            return self.doc
        if key.container not in self.link_documents:
            raise UnresolvedHost(f"Linked document for wall {key} is not available")
        return self.link_documents[key.container]

    def level_of(self, key: ElementKey) -> Optional[LevelId]:
        doc = self._owner_document(key)

        wall = doc.GetElement(ElementId(key.local))
        if wall is None:
            raise UnresolvedHost(f"Wall {key} not found")

        level_id = getattr(wall, "LevelId", None)
        if level_id is None or element_id_value(level_id) == INVALID_ID:
            raise UnresolvedHost(f"Wall {key} has no associated level")

        if doc.GetElement(level_id) is None:
            raise UnresolvedHost(f"Level of wall {key} not found")

        return element_id_value(level_id)


# =============================================================================
# Opening Creation
# =============================================================================

class RevitOpeningCreator(OpeningCreator):
    """Places wall-hosted opening instances and sets their size."""

    def __init__(self, doc: Any, width_parameter: str, height_parameter: str):
        """
        Args:
            doc: Architectural Revit Document (must be in a transaction)
            width_parameter: Instance parameter receiving the width
            height_parameter: Instance parameter receiving the height
        """
        self.doc = doc
        self.width_parameter = width_parameter
        self.height_parameter = height_parameter

    def _set_parameter(self, instance: Any, name: str, value: float) -> None:
        parameter = instance.LookupParameter(name)
        if parameter is None or parameter.IsReadOnly:
            raise OpeningCreationError(f"Opening parameter '{name}' is missing or read-only")
        parameter.Set(value)

    def create_opening(self, request: PlacementRequest, family_definition: Any = None) -> Any:
        if family_definition is None:
            raise OpeningCreationError("No opening family type given")
        if request.host_key.is_linked:
            raise OpeningCreationError(
                f"Wall {request.host_key} belongs to a linked model and cannot host an opening"
            )

        try:
            wall = self.doc.GetElement(ElementId(request.host_key.local))
            level = self.doc.GetElement(ElementId(request.level_id))
            instance = self.doc.Create.NewFamilyInstance(
                XYZ(*request.insertion_point),
                family_definition,
                wall,
                level,
                StructuralType.NonStructural,
            )
        except Exception as e:
            raise OpeningCreationError(f"Failed to place opening in wall {request.host_key}: {e}") from e

        try:
            self._set_parameter(instance, self.width_parameter, request.width)
            self._set_parameter(instance, self.height_parameter, request.height)
        except Exception as e:
            self.doc.Delete(instance.Id)
            if isinstance(e, OpeningCreationError):
                raise
            raise OpeningCreationError(f"Failed to size opening in wall {request.host_key}: {e}") from e

        return instance


# =============================================================================
# Transactions
# =============================================================================

@contextmanager
def revit_transaction(doc: Any, name: str) -> Iterator[Any]:
    """
    Run a block inside a Revit Transaction.

    Commits on clean exit and rolls back if the block raises.

    Args:
        doc: Revit Document
        name: Transaction name shown in the undo history
    """
    t = Transaction(doc, name)
    t.Start()
    try:
        yield t
        t.Commit()
    except Exception:
        if t.HasStarted():
            t.RollBack()
        raise


def make_transaction_factory(doc: Any):
    """Return a ``(name) -> context manager`` factory bound to a document."""
    def factory(name: str):
        return revit_transaction(doc, name)
    return factory


def activate_family_symbol(doc: Any, symbol: Any, transaction_name: str) -> Any:
    """
    Activate a FamilySymbol so instances can be placed.

    Activation runs in its own transaction and only when needed.

    Args:
        doc: Revit Document owning the symbol
        symbol: FamilySymbol to activate
        transaction_name: Name of the activation transaction

    Returns:
        The (now active) symbol
    """
    if not symbol.IsActive:
        with revit_transaction(doc, transaction_name):
            symbol.Activate()
            doc.Regenerate()
        logger.info(f"Activated opening type '{symbol.Name}'")
    return symbol
