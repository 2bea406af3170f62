"""Candidate area vs. zone overlap.

The overlap area is summed zone by zone. Zones that overlap each other are
counted once per zone, so overlap_area can exceed the true union; the
reported ratio is capped at 1.0.

When shapely cannot build the exact intersection of a pair that does
intersect, or the zone geometry itself is invalid, the overlap of that pair
is estimated as
``fallback_overlap_fraction * min(candidate_area, zone_area)`` and the result
is flagged with ``is_approximate`` and a warning.
"""
import logging
from typing import List, Optional, Sequence

from shapely import is_valid_reason, make_valid
from shapely.errors import GEOSException
from shapely.geometry import Polygon

from zoneguard.config import DEFAULT_SETTINGS, EngineSettings
from zoneguard.core.spatial_index import as_zone_index
from zoneguard.model.collision_result import AreaResult
from zoneguard.model.zone_types import Severity
from zoneguard.tool.coords import to_positions
from zoneguard.tool.geo_area import PlanarProjector

logger = logging.getLogger(__name__)

MIN_RING_POSITIONS = 4


def _no_overlap(message: str) -> AreaResult:
    return AreaResult(is_colliding=False, overlap_area=0.0, overlap_ratio=0.0,
                      severity=Severity.SAFE, message=message)


def _outer_ring_too_short(rings) -> bool:
    if rings is None or isinstance(rings, (str, bytes)):
        return True
    try:
        outer = rings[0]
        return isinstance(outer, (str, bytes)) or len(outer) < MIN_RING_POSITIONS
    except (TypeError, IndexError, KeyError):
        return True


def build_candidate_polygon(rings: Sequence) -> Optional[Polygon]:
    """Polygon from [outer, *holes] rings, or None if the rings are unusable."""
    parsed = []
    for ring in rings:
        positions = to_positions(ring)
        if positions is None or len(positions) < MIN_RING_POSITIONS:
            return None
        if positions[0] != positions[-1]:
            return None
        parsed.append(positions)
    try:
        polygon = Polygon(parsed[0], parsed[1:])
    except (GEOSException, ValueError) as e:
        logger.debug("candidate polygon could not be built: %s", e)
        return None
    if polygon.is_empty or not polygon.is_valid:
        return None
    return polygon


def _intersection_area(candidate: Polygon, zone_geometry, projector: PlanarProjector) -> float:
    if not zone_geometry.is_valid:
        raise GEOSException(f"invalid zone geometry: {is_valid_reason(zone_geometry)}")
    return projector.area(candidate.intersection(zone_geometry))


def _fallback_area(own_area: float, zone_geometry, projector: PlanarProjector,
                   settings: EngineSettings) -> float:
    # self-intersecting zones report ~0 area as-is; measure the repaired shape
    try:
        zone_area = projector.area(make_valid(zone_geometry))
    except GEOSException:
        zone_area = own_area
    if zone_area <= 0:
        zone_area = own_area
    return min(own_area, zone_area) * settings.fallback_overlap_fraction


def check_area_collision(rings: Sequence, zones,
                         settings: Optional[EngineSettings] = None) -> AreaResult:
    """Overlap of a candidate polygon (outer ring first, closed) with all zones."""
    settings = settings or DEFAULT_SETTINGS
    index = as_zone_index(zones, settings)

    if _outer_ring_too_short(rings):
        return _no_overlap("Not enough coordinates for an area")
    polygon = build_candidate_polygon(rings)
    if polygon is None:
        return _no_overlap("Invalid polygon shape")

    projector = PlanarProjector.around(polygon)
    own_area = projector.area(polygon)

    overlap_area = 0.0
    colliding = False
    approximate = False
    warnings: List[str] = []
    for entry in index.query_geometry(polygon):
        zone = entry.feature
        try:
            if not polygon.intersects(zone.geometry):
                continue
        except GEOSException as e:
            msg = f"intersection test failed for zone {zone.name!r}: {e}"
            logger.warning(msg)
            warnings.append(msg)
            continue

        colliding = True
        try:
            overlap_area += _intersection_area(polygon, zone.geometry, projector)
        except GEOSException as e:
            estimate = _fallback_area(own_area, zone.geometry, projector, settings)
            msg = (f"exact overlap with zone {zone.name!r} could not be computed ({e}); "
                   f"using estimate of {estimate:.1f} m2")
            logger.warning(msg)
            warnings.append(msg)
            overlap_area += estimate
            approximate = True

    overlap_ratio = min(1.0, overlap_area / own_area) if own_area > 0 else 0.0

    if not colliding:
        return AreaResult(is_colliding=False, severity=Severity.SAFE,
                          message="No overlap with restricted areas",
                          warnings=warnings)

    severity = Severity.DANGER if overlap_ratio > settings.danger_overlap_ratio else Severity.WARNING
    return AreaResult(
        is_colliding=True,
        overlap_area=overlap_area,
        overlap_ratio=overlap_ratio,
        severity=severity,
        message=f"Area overlaps restricted areas by {round(overlap_ratio * 100)}%",
        is_approximate=approximate,
        warnings=warnings,
    )
