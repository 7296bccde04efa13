# File: src/wall_opening_generator/crossing/planar_ray_caster.py
"""
Pure-Python ray caster for straight box walls.

Provides a host-free implementation of the RayCaster, CandidateSupplier and
LevelResolver interfaces so that openings can be planned from exported wall
data (and tested) without a modeling application.

Each PlanarWall is an oriented box built from its location line, thickness,
base elevation and height. The caster intersects a ray with all six faces
of every admitted wall and reports one hit per face, like a host
intersector reporting face references. A ray passing through a wall
therefore yields two hits for it (entry and exit).
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional, Tuple
import logging

from wall_opening_generator.core.errors import UnresolvedHost
from wall_opening_generator.core.geometry import (
    add,
    cross_product,
    dot_product,
    normalize_vector,
    scale,
    subtract,
)
from wall_opening_generator.core.host_interfaces import (
    CandidateFilter,
    CandidateSupplier,
    LevelResolver,
    RayCaster,
)
from wall_opening_generator.core.opening_types import (
    Crossing,
    ElementKey,
    LevelId,
    Point3,
    SurfaceCandidate,
    Vector3,
)

logger = logging.getLogger(__name__)

# Face-boundary tolerance in model units
FACE_TOLERANCE = 1e-9

# Below this |d . n| the ray is treated as parallel to a face
PARALLEL_TOLERANCE = 1e-12


@dataclass(frozen=True)
class RectangularFace:
    """
    Planar rectangle spanned by two orthonormal axes.

    Attributes:
        origin: Corner of the rectangle
        u_axis: First unit edge direction
        v_axis: Second unit edge direction (orthogonal to u_axis)
        u_length: Edge length along u_axis
        v_length: Edge length along v_axis
    """
    origin: Point3
    u_axis: Vector3
    v_axis: Vector3
    u_length: float
    v_length: float

    @property
    def normal(self) -> Vector3:
        return cross_product(self.u_axis, self.v_axis)

    def intersect(
        self,
        origin: Point3,
        direction: Vector3
    ) -> Optional[Tuple[float, Point3]]:
        """
        Intersect a ray with this face.

        Args:
            origin: Ray origin
            direction: Unit ray direction

        Returns:
            (distance, point) for a hit in front of the origin, else None
        """
        normal = self.normal
        denom = dot_product(direction, normal)
        if abs(denom) < PARALLEL_TOLERANCE:
            return None

        t = dot_product(subtract(self.origin, origin), normal) / denom
        if t < -FACE_TOLERANCE:
            return None
        t = max(t, 0.0)

        point = add(origin, scale(direction, t))
        rel = subtract(point, self.origin)
        a = dot_product(rel, self.u_axis)
        b = dot_product(rel, self.v_axis)

        if a < -FACE_TOLERANCE or a > self.u_length + FACE_TOLERANCE:
            return None
        if b < -FACE_TOLERANCE or b > self.v_length + FACE_TOLERANCE:
            return None

        return t, point


@dataclass(frozen=True)
class PlanarWall(SurfaceCandidate):
    """
    Straight vertical wall with rectangular section.

    Attributes:
        wall_key: Compound identity of the wall
        start: Location line start in plan (x, y)
        end: Location line end in plan (x, y)
        thickness: Wall thickness, centered on the location line
        height: Unconnected height above base_elevation
        base_elevation: Elevation of the wall bottom
        level_id: Level the wall is hosted on (None if unknown)
    """
    wall_key: ElementKey
    start: Tuple[float, float]
    end: Tuple[float, float]
    thickness: float
    height: float
    base_elevation: float = 0.0
    level_id: Optional[LevelId] = None

    @property
    def key(self) -> ElementKey:
        return self.wall_key

    @property
    def length(self) -> float:
        dx = self.end[0] - self.start[0]
        dy = self.end[1] - self.start[1]
        return (dx**2 + dy**2) ** 0.5

    def faces(self) -> List[RectangularFace]:
        """
        Build the six faces of the wall box.

        Returns:
            Side faces, end faces, bottom and top (empty for zero-length walls)
        """
        length = self.length
        if length < 1e-10 or self.thickness <= 0 or self.height <= 0:
            return []

        u = normalize_vector((self.end[0] - self.start[0], self.end[1] - self.start[1], 0.0))
        n = (-u[1], u[0], 0.0)
        z = (0.0, 0.0, 1.0)

        corner = add(
            (self.start[0], self.start[1], self.base_elevation),
            scale(n, -self.thickness / 2.0),
        )

        return [
            RectangularFace(corner, u, z, length, self.height),
            RectangularFace(add(corner, scale(n, self.thickness)), u, z, length, self.height),
            RectangularFace(corner, n, z, self.thickness, self.height),
            RectangularFace(add(corner, scale(u, length)), n, z, self.thickness, self.height),
            RectangularFace(corner, u, n, length, self.thickness),
            RectangularFace(add(corner, scale(z, self.height)), u, n, length, self.thickness),
        ]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.wall_key.to_dict(),
            "start": list(self.start),
            "end": list(self.end),
            "thickness": self.thickness,
            "height": self.height,
            "base_elevation": self.base_elevation,
            "level_id": self.level_id,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PlanarWall":
        """
        Create PlanarWall from dictionary.

        Args:
            data: Wall dictionary. ``key`` may be a {local, container}
                mapping or a bare id for primary-document walls.

        Returns:
            PlanarWall instance
        """
        key_data = data["key"]
        if isinstance(key_data, dict):
            key = ElementKey.from_dict(key_data)
        else:
            key = ElementKey(local=key_data)

        return cls(
            wall_key=key,
            start=(float(data["start"][0]), float(data["start"][1])),
            end=(float(data["end"][0]), float(data["end"][1])),
            thickness=float(data["thickness"]),
            height=float(data["height"]),
            base_elevation=float(data.get("base_elevation", 0.0)),
            level_id=data.get("level_id"),
        )


class PlanarRayCaster(RayCaster):
    """
    Ray caster over a fixed set of PlanarWalls.

    Like a host reference intersector, it reports every hit along the
    unbounded ray and leaves length clipping to the caller.
    """

    def __init__(self, walls: Iterable[PlanarWall]):
        self._walls = list(walls)
        self._faces = {id(w): w.faces() for w in self._walls}

    def cast(
        self,
        origin: Point3,
        direction: Vector3,
        max_distance: float,
        candidate_filter: Optional[CandidateFilter] = None
    ) -> List[Crossing]:
        hits = []

        for wall in self._walls:
            if candidate_filter is not None and not candidate_filter(wall.key):
                continue
            for face in self._faces[id(wall)]:
                hit = face.intersect(origin, direction)
                if hit is None:
                    continue
                distance, point = hit
                hits.append(Crossing(key=wall.key, proximity=distance, point=point))

        # Stable sort keeps wall order for equal distances
        hits.sort(key=lambda c: c.proximity)
        return hits


class PlanarWallSupplier(CandidateSupplier):
    """Supplies a fixed list of PlanarWalls as candidates."""

    def __init__(self, walls: Iterable[PlanarWall]):
        self._walls = list(walls)

    def get_candidates(self) -> List[SurfaceCandidate]:
        return list(self._walls)


class MappingLevelResolver(LevelResolver):
    """Resolves levels from a key -> level id mapping."""

    def __init__(self, levels: Dict[ElementKey, Optional[LevelId]]):
        self._levels = dict(levels)

    @classmethod
    def from_walls(cls, walls: Iterable[PlanarWall]) -> "MappingLevelResolver":
        return cls({w.key: w.level_id for w in walls})

    def level_of(self, key: ElementKey) -> Optional[LevelId]:
        if key not in self._levels:
            raise UnresolvedHost(f"Wall {key} is not known to the level resolver")
        level_id = self._levels[key]
        if level_id is None:
            raise UnresolvedHost(f"Wall {key} has no associated level")
        return level_id
