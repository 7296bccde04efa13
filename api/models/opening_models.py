# File: api/models/opening_models.py
from pydantic import BaseModel, Field, field_validator, model_validator
from typing import List, Dict, Any, Optional, Union, Literal
import math

from wall_opening_generator.core.opening_types import DuctRecord, DuctShape, ElementKey
from wall_opening_generator.crossing.planar_ray_caster import PlanarWall
from wall_opening_generator.generator.opening_generator import SkipReason

IdValue = Union[int, str]


class Point3D(BaseModel):
    """3D point coordinates."""
    x: float = Field(description="X coordinate")
    y: float = Field(description="Y coordinate")
    z: float = Field(default=0.0, description="Z coordinate")

    @field_validator('x', 'y', 'z')
    @classmethod
    def validate_coordinate(cls, v: float) -> float:
        """Reject NaN and infinite coordinates."""
        if not math.isfinite(v):
            raise ValueError("Coordinate must be a finite number")
        return v

    def as_tuple(self):
        return (self.x, self.y, self.z)


class ElementKeyModel(BaseModel):
    """Compound wall identity (link instance id + element id)."""
    local: IdValue = Field(description="Element id inside its owning document")
    container: Optional[IdValue] = Field(
        default=None,
        description="Link instance id for walls of a linked model"
    )

    def to_key(self) -> ElementKey:
        return ElementKey(local=self.local, container=self.container)


class DuctInput(BaseModel):
    """Duct centerline and section."""
    id: IdValue = Field(description="Duct element id")
    start: Point3D
    end: Point3D
    shape: Literal["round", "rectangular", "oval"] = Field(
        default="round", description="Section shape"
    )
    diameter: Optional[float] = Field(
        default=None, description="Diameter of a round duct"
    )
    width: Optional[float] = Field(default=None, gt=0)
    height: Optional[float] = Field(default=None, gt=0)

    def to_record(self) -> DuctRecord:
        # Degenerate centerlines and bad diameters are reported per duct by
        # the generator rather than rejecting the whole request.
        return DuctRecord(
            id=self.id,
            start=self.start.as_tuple(),
            end=self.end.as_tuple(),
            diameter=self.diameter,
            shape=DuctShape(self.shape),
            width=self.width,
            height=self.height,
        )


class WallInput(BaseModel):
    """Straight wall with rectangular section."""
    key: ElementKeyModel
    start: Point3D = Field(description="Location line start (z ignored)")
    end: Point3D = Field(description="Location line end (z ignored)")
    thickness: float = Field(gt=0, description="Wall thickness")
    height: float = Field(gt=0, description="Wall height above base elevation")
    base_elevation: float = Field(default=0.0, description="Elevation of the wall bottom")
    level_id: Optional[IdValue] = Field(
        default=None, description="Host level; openings in walls without one are skipped"
    )

    @model_validator(mode='after')
    def validate_wall(self) -> 'WallInput':
        """Reject walls with a zero-length location line."""
        dx = self.end.x - self.start.x
        dy = self.end.y - self.start.y
        if (dx * dx + dy * dy) ** 0.5 < 1e-9:
            raise ValueError("Wall location line has zero length")
        return self

    def to_wall(self) -> PlanarWall:
        return PlanarWall(
            wall_key=self.key.to_key(),
            start=(self.start.x, self.start.y),
            end=(self.end.x, self.end.y),
            thickness=self.thickness,
            height=self.height,
            base_elevation=self.base_elevation,
            level_id=self.level_id,
        )


class OpeningPlanRequest(BaseModel):
    """Input for opening planning."""
    ducts: List[DuctInput] = Field(default=[], description="Ducts of the mechanical model")
    walls: List[WallInput] = Field(default=[], description="Walls of the architectural model")
    config: Dict[str, Any] = Field(
        default={},
        description="OpeningConfig overrides, e.g. {\"length_tolerance\": 0.1}"
    )

    @model_validator(mode='after')
    def validate_unique_ids(self) -> 'OpeningPlanRequest':
        """Reject duplicate duct ids and duplicate wall keys."""
        duct_ids = [d.id for d in self.ducts]
        if len(duct_ids) != len(set(duct_ids)):
            raise ValueError("Duct ids must be unique")

        wall_keys = [(w.key.container, w.key.local) for w in self.walls]
        if len(wall_keys) != len(set(wall_keys)):
            raise ValueError("Wall keys must be unique")
        return self


class PlacementModel(BaseModel):
    """One planned opening."""
    duct_id: IdValue
    insertion_point: Point3D
    host_key: ElementKeyModel
    level_id: IdValue
    width: float
    height: float


class SkipModel(BaseModel):
    """A duct or crossing that produced no opening."""
    duct_id: IdValue
    reason: SkipReason
    message: str
    wall_key: Optional[ElementKeyModel] = None


class OpeningPlanResponse(BaseModel):
    """Planned openings and the skip report."""
    placements: List[PlacementModel]
    skipped_ducts: List[SkipModel]
    skipped_crossings: List[SkipModel]
    summary: Dict[str, Any]
