from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from zoneguard.model.zone_types import SAFE_COLOR, Severity, ZoneType

Position = Tuple[float, float]


class _ResultModel(BaseModel):
    # snake_case in python, camelCase on model_dump(by_alias=True)
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class PointResult(_ResultModel):
    is_colliding: bool
    zone_type: Optional[ZoneType] = None
    zone_name: Optional[str] = None
    severity: Severity = Severity.SAFE
    color: str = SAFE_COLOR
    message: str = ""


class PathResult(_ResultModel):
    is_colliding: bool
    intersection_points: List[Position] = Field(default_factory=list)
    crossed_zone_types: List[ZoneType] = Field(default_factory=list)
    severity: Severity = Severity.SAFE
    message: str = ""


class AreaResult(_ResultModel):
    is_colliding: bool
    overlap_area: float = 0.0
    overlap_ratio: float = 0.0
    severity: Severity = Severity.SAFE
    message: str = ""
    # True when at least one zone's overlap is an estimate, not an exact area
    is_approximate: bool = False
    warnings: List[str] = Field(default_factory=list)


class BatchSummary(_ResultModel):
    total: int = 0
    colliding_count: int = 0
    danger_count: int = 0
    warning_count: int = 0
    safe_count: int = 0
    collisions_by_zone_type: Dict[ZoneType, int] = Field(default_factory=dict)


class Waypoint(BaseModel):
    id: str
    lng: float
    lat: float

    @property
    def coordinates(self) -> Position:
        return (self.lng, self.lat)
