from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Union

from shapely.geometry import MultiPolygon, Polygon

from zoneguard.model.zone_types import ZoneType, get_zone_priority

ZoneGeometry = Union[Polygon, MultiPolygon]

DEFAULT_ZONE_NAME = "Unknown area"


@dataclass(frozen=True)
class ZoneFeature:
    """One restricted area of the zone registry.

    geometry is in WGS84 (lng, lat) degrees. raw_type keeps the string the
    zone type was normalized from, so UNKNOWN zones can still be traced back.
    """
    geometry: ZoneGeometry
    zone_type: ZoneType
    name: str = DEFAULT_ZONE_NAME
    raw_type: Optional[str] = None
    properties: Dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def priority(self) -> int:
        return get_zone_priority(self.zone_type)

    @property
    def is_polygonal(self) -> bool:
        return isinstance(self.geometry, (Polygon, MultiPolygon))
