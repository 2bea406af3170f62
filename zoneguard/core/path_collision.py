"""Flight path vs. zone boundary crossings.

Every boundary crossing of every zone is reported; paths do not pick a
winning zone the way points do. Touch points (the path grazing a vertex or
an edge at a single point) are counted, stretches where the path runs along
a boundary are not. A path that stays strictly inside one zone never meets
a boundary and is therefore not colliding.
"""
import logging
from typing import List, Optional, Sequence, Tuple

from shapely.errors import GEOSException
from shapely.geometry import LineString, Point

from zoneguard.config import DEFAULT_SETTINGS, EngineSettings
from zoneguard.core.spatial_index import as_zone_index
from zoneguard.model.collision_result import PathResult
from zoneguard.model.zone_types import Severity
from zoneguard.tool.coords import to_positions

logger = logging.getLogger(__name__)

Position = Tuple[float, float]


def _touch_points(geom) -> List[Position]:
    """Point parts of an intersection result; line parts are dropped."""
    if geom.is_empty:
        return []
    kind = geom.geom_type
    if kind == "Point":
        return [(geom.x, geom.y)]
    if kind in ("MultiPoint", "GeometryCollection"):
        out = []
        for part in geom.geoms:
            out.extend(_touch_points(part))
        return out
    # LineString / MultiLineString: collinear overlap
    return []


def boundary_crossings(line: LineString, zone_geometry) -> List[Position]:
    """Crossing points of line with the zone's boundary, ordered along the line."""
    points = _touch_points(line.intersection(zone_geometry.boundary))
    unique = list(dict.fromkeys(points))
    unique.sort(key=lambda p: line.project(Point(p)))
    return unique


def _no_path(message: str) -> PathResult:
    return PathResult(is_colliding=False, intersection_points=[], severity=Severity.SAFE, message=message)


def check_path_collision(path_coords: Sequence, zones,
                         settings: Optional[EngineSettings] = None) -> PathResult:
    """Crossings of an ordered [lng, lat] path with all zones.

    zones may be a built ZoneIndex or anything load_zone_features accepts;
    settings only matter for the latter.
    """
    index = as_zone_index(zones, settings or DEFAULT_SETTINGS)
    positions = to_positions(path_coords)
    if positions is None:
        return _no_path("Invalid path coordinates")
    if len(positions) < 2:
        return _no_path("No valid flight path (need at least 2 points)")

    line = LineString(positions)
    intersection_points: List[Position] = []
    crossed = []
    for entry in index.query_geometry(line):
        try:
            points = boundary_crossings(line, entry.feature.geometry)
        except GEOSException as e:
            logger.warning("path intersection failed for zone %r: %s", entry.feature.name, e)
            continue
        if points:
            intersection_points.extend(points)
            if entry.feature.zone_type not in crossed:
                crossed.append(entry.feature.zone_type)

    if intersection_points:
        return PathResult(
            is_colliding=True,
            intersection_points=intersection_points,
            crossed_zone_types=crossed,
            severity=Severity.DANGER,
            message=f"Flight path crosses restricted areas at {len(intersection_points)} points",
        )
    return _no_path("Flight path does not cross any restricted area")
