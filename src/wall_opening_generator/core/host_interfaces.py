# File: src/wall_opening_generator/core/host_interfaces.py
"""
Interfaces to the host modeling environment.

The crossing finder and placement planner never talk to a modeling
application directly. They consume these capabilities instead:
- CandidateSupplier: Which walls are in play
- RayCaster: Line-versus-solid intersection query
- LevelResolver: Wall -> supporting level lookup
- OpeningCreator: Instantiates an opening from a PlacementRequest

Transaction scopes are plain callables ``(name) -> context manager``;
``null_transaction`` is the no-op scope used when nothing is mutated.
"""

from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Any, Callable, ContextManager, Iterator, List, Optional

from wall_opening_generator.core.opening_types import (
    Crossing,
    ElementKey,
    LevelId,
    PlacementRequest,
    Point3,
    SurfaceCandidate,
    Vector3,
)

CandidateFilter = Callable[[ElementKey], bool]
TransactionFactory = Callable[[str], ContextManager[Any]]


class CandidateSupplier(ABC):
    """Supplies the wall candidates a run is tested against."""

    @abstractmethod
    def get_candidates(self) -> List[SurfaceCandidate]:
        """
        Return the walls to test duct segments against.

        Returns:
            List of SurfaceCandidate objects (may be empty)
        """
        pass


class RayCaster(ABC):
    """
    Geometric intersection primitive.

    Any implementation returning (key, proximity, point) triples for a ray
    satisfies the contract. Implementations may ignore ``max_distance``;
    callers filter by length themselves.
    """

    @abstractmethod
    def cast(
        self,
        origin: Point3,
        direction: Vector3,
        max_distance: float,
        candidate_filter: Optional[CandidateFilter] = None
    ) -> List[Crossing]:
        """
        Intersect a ray with the scene.

        Args:
            origin: Ray origin (x, y, z)
            direction: Unit ray direction
            max_distance: Distance beyond which hits are not needed
            candidate_filter: Optional predicate admitting element keys

        Returns:
            Raw crossings, possibly several per wall, in traversal order
        """
        pass


class LevelResolver(ABC):
    """Resolves the level a wall is hosted on."""

    @abstractmethod
    def level_of(self, key: ElementKey) -> Optional[LevelId]:
        """
        Return the supporting level of a wall.

        Args:
            key: Wall identity

        Returns:
            Level id, or None when the wall has no level

        Raises:
            UnresolvedHost: If the wall cannot be found or has no level
        """
        pass


class OpeningCreator(ABC):
    """Creates opening instances in the host model."""

    @abstractmethod
    def create_opening(
        self,
        request: PlacementRequest,
        family_definition: Any = None
    ) -> Any:
        """
        Insert an opening and size it.

        Args:
            request: Placement parameters
            family_definition: Host-specific opening type (e.g. FamilySymbol)

        Returns:
            Host handle of the created opening

        Raises:
            OpeningCreationError: If the host rejects the placement
        """
        pass


@contextmanager
def null_transaction(name: str) -> Iterator[None]:
    """Transaction scope that performs no bookkeeping."""
    yield
