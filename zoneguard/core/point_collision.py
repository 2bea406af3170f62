"""Point-in-zone queries.

A point may sit inside several zones at once. The winner is the zone with
the lowest ZONE_PRIORITY among all zones that contain it; equal priorities go
to the zone registered first. Points on a zone boundary count as inside.
"""
import logging
from typing import Iterable, List, Optional

from shapely.geometry import MultiPolygon, Point, Polygon

from zoneguard.config import DEFAULT_SETTINGS, EngineSettings
from zoneguard.core.spatial_index import ZoneIndex
from zoneguard.errors import ZoneIndexNotReadyError
from zoneguard.model.collision_result import PointResult
from zoneguard.model.zone_feature import ZoneFeature
from zoneguard.model.zone_types import SAFE_COLOR, Severity, get_zone_color, get_zone_severity
from zoneguard.service.load_zones import load_zone_features
from zoneguard.tool.coords import to_position

logger = logging.getLogger(__name__)

SAFE_MESSAGE = "Flight allowed here"
INVALID_MESSAGE = "Invalid coordinates"


def _safe_result(message: str = SAFE_MESSAGE) -> PointResult:
    return PointResult(
        is_colliding=False,
        zone_type=None,
        severity=Severity.SAFE,
        color=SAFE_COLOR,
        message=message,
    )


def _pick_winner(hits: List[ZoneFeature]) -> PointResult:
    if not hits:
        return _safe_result()
    # sorted() is stable, hits arrive in registration order
    winner = sorted(hits, key=lambda z: z.priority)[0]
    return PointResult(
        is_colliding=True,
        zone_type=winner.zone_type,
        zone_name=winner.name,
        severity=get_zone_severity(winner.zone_type),
        color=get_zone_color(winner.zone_type),
        message=f"Inside restricted area: {winner.name}",
    )


def check_point_collision(coords, index: ZoneIndex) -> PointResult:
    """Resolve one [lng, lat] against the spatial index."""
    if index is None:
        raise ZoneIndexNotReadyError("zone index has not been initialized")
    pos = to_position(coords)
    if pos is None:
        return _safe_result(INVALID_MESSAGE)

    point = Point(pos)
    hits = [
        entry.feature
        for entry in index.query_point(*pos)
        if entry.feature.geometry.covers(point)
    ]
    return _pick_winner(hits)


def check_point_collision_unoptimized(coords, zones: Iterable[ZoneFeature],
                                      settings: Optional[EngineSettings] = None) -> PointResult:
    """Same answer as check_point_collision, by scanning every zone.

    Meant for small registries and for cross-checking the index.
    """
    if zones is None:
        raise ZoneIndexNotReadyError("zone collection has not been initialized")
    if isinstance(zones, ZoneIndex):
        zones = zones.features
    else:
        zones = load_zone_features(zones, settings or DEFAULT_SETTINGS)
    pos = to_position(coords)
    if pos is None:
        return _safe_result(INVALID_MESSAGE)

    point = Point(pos)
    hits = [
        z for z in zones
        if isinstance(z.geometry, (Polygon, MultiPolygon)) and z.geometry.covers(point)
    ]
    return _pick_winner(hits)
