# File: src/wall_opening_generator/core/opening_types.py
"""
Core data types for duct-through-wall opening generation.

This module defines the value objects passed between the crossing finder,
the placement planner and the host adapters:
- ElementKey: Compound (container, local) identifier of a wall
- Segment: Duct centerline as origin + unit direction + length
- Crossing: A (wall key, proximity, point) intersection result
- PlacementRequest: Everything needed to insert one opening
- DuctRecord: Duct data read from the mechanical model
- SurfaceCandidate: Abstract wall-like obstruction
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import Dict, Any, Tuple, Optional, Union

Point3 = Tuple[float, float, float]
Vector3 = Tuple[float, float, float]
LevelId = Union[int, str]


def _point_to_dict(p: Point3) -> Dict[str, float]:
    return {"x": p[0], "y": p[1], "z": p[2]}


def _point_from_dict(data: Any) -> Point3:
    """Accept {x, y, z} mappings or [x, y, z] sequences."""
    if isinstance(data, dict):
        return (
            float(data.get("x", 0.0)),
            float(data.get("y", 0.0)),
            float(data.get("z", 0.0)),
        )
    return (float(data[0]), float(data[1]), float(data[2]))


@dataclass(frozen=True)
class ElementKey:
    """
    Value-compared identity of a wall in the scene.

    Walls of the primary document have ``container=None``. Walls that live
    in a linked document carry the link instance id as ``container`` and
    their id inside the linked document as ``local``.

    Attributes:
        local: Element id inside the document that owns the element
        container: Link instance id, or None for primary-document elements
    """
    local: Union[int, str]
    container: Optional[Union[int, str]] = None

    @property
    def is_linked(self) -> bool:
        return self.container is not None

    def __str__(self) -> str:
        if self.container is None:
            return str(self.local)
        return f"{self.container}:{self.local}"

    def to_dict(self) -> Dict[str, Any]:
        return {"local": self.local, "container": self.container}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ElementKey":
        return cls(local=data["local"], container=data.get("container"))


@dataclass(frozen=True)
class Segment:
    """
    A duct centerline cast as a bounded ray.

    Attributes:
        origin: Start point of the centerline (x, y, z)
        direction: Unit vector from start toward end
        length: Centerline length in model units
    """
    origin: Point3
    direction: Vector3
    length: float

    @property
    def end(self) -> Point3:
        """Return the far endpoint of the segment."""
        return (
            self.origin[0] + self.direction[0] * self.length,
            self.origin[1] + self.direction[1] * self.length,
            self.origin[2] + self.direction[2] * self.length,
        )

    def point_at(self, distance: float) -> Point3:
        """
        Return the point at a distance along the segment direction.

        Args:
            distance: Distance from the origin in model units

        Returns:
            (x, y, z) point
        """
        return (
            self.origin[0] + self.direction[0] * distance,
            self.origin[1] + self.direction[1] * distance,
            self.origin[2] + self.direction[2] * distance,
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "origin": _point_to_dict(self.origin),
            "direction": _point_to_dict(self.direction),
            "length": self.length,
        }


@dataclass(frozen=True)
class Crossing:
    """
    A single intersection between a segment and a wall.

    Raw crossings returned by a ray caster and deduplicated crossings
    returned by the crossing finder share this type.

    Attributes:
        key: Identity of the intersected wall
        proximity: Distance from the segment origin to the crossing point
        point: Crossing point (x, y, z)
    """
    key: ElementKey
    proximity: float
    point: Point3

    def to_dict(self) -> Dict[str, Any]:
        return {
            "key": self.key.to_dict(),
            "proximity": self.proximity,
            "point": _point_to_dict(self.point),
        }


@dataclass(frozen=True)
class PlacementRequest:
    """
    Placement parameters for one rectangular wall opening.

    Not persisted; handed to an OpeningCreator and discarded.

    Attributes:
        insertion_point: Opening center on the duct centerline
        host_key: Wall that hosts the opening
        level_id: Level the host wall is placed on
        width: Opening width (equals duct diameter)
        height: Opening height (equals duct diameter)
    """
    insertion_point: Point3
    host_key: ElementKey
    level_id: LevelId
    width: float
    height: float

    def to_dict(self) -> Dict[str, Any]:
        return {
            "insertion_point": _point_to_dict(self.insertion_point),
            "host_key": self.host_key.to_dict(),
            "level_id": self.level_id,
            "width": self.width,
            "height": self.height,
        }


class DuctShape(Enum):
    """Cross-section shape of a duct."""
    ROUND = "round"
    RECTANGULAR = "rectangular"
    OVAL = "oval"

    def __str__(self) -> str:
        return self.value


@dataclass
class DuctRecord:
    """
    Duct data read from the mechanical model.

    Attributes:
        id: Duct element id (string or int)
        start: Centerline start point (x, y, z)
        end: Centerline end point (x, y, z)
        diameter: Round duct diameter, None for non-round ducts
        shape: Cross-section shape
        width: Section width for rectangular/oval ducts
        height: Section height for rectangular/oval ducts
    """
    id: Union[int, str]
    start: Point3
    end: Point3
    diameter: Optional[float] = None
    shape: DuctShape = DuctShape.ROUND
    width: Optional[float] = None
    height: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "start": _point_to_dict(self.start),
            "end": _point_to_dict(self.end),
            "diameter": self.diameter,
            "shape": self.shape.value,
            "width": self.width,
            "height": self.height,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DuctRecord":
        """
        Create DuctRecord from dictionary.

        Args:
            data: Dictionary with duct data; points may be {x, y, z}
                mappings or [x, y, z] lists

        Returns:
            DuctRecord instance
        """
        return cls(
            id=data["id"],
            start=_point_from_dict(data["start"]),
            end=_point_from_dict(data["end"]),
            diameter=data.get("diameter"),
            shape=DuctShape(data.get("shape", DuctShape.ROUND.value)),
            width=data.get("width"),
            height=data.get("height"),
        )


class SurfaceCandidate(ABC):
    """
    A wall-like obstruction that a duct may cross.

    Implementations only need to expose a stable ElementKey; the ray
    caster owns the geometry.
    """

    @property
    @abstractmethod
    def key(self) -> ElementKey:
        """Return the compound identity of this candidate."""
        pass
