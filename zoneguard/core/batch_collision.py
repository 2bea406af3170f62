"""Batch point checks and their summary.

Every waypoint is resolved independently against the same read-only index,
so callers may split a batch across workers without extra locking.
"""
from typing import Any, Dict, Iterable, List, Mapping, Tuple

from zoneguard.core.point_collision import check_point_collision
from zoneguard.core.spatial_index import ZoneIndex
from zoneguard.model.collision_result import BatchSummary, PointResult, Waypoint
from zoneguard.model.zone_types import Severity
from zoneguard.tool.profiler import profile_each_line


def _as_item(waypoint: Any) -> Tuple[str, Any]:
    """(id, coordinates) from a Waypoint, an (id, coords) pair or a dict."""
    if isinstance(waypoint, Waypoint):
        return waypoint.id, waypoint.coordinates
    if isinstance(waypoint, Mapping):
        if "coordinates" in waypoint:
            return str(waypoint["id"]), waypoint["coordinates"]
        return str(waypoint["id"]), (waypoint.get("lng"), waypoint.get("lat"))
    wp_id, coords = waypoint
    return str(wp_id), coords


def check_waypoints_batch(waypoints: Iterable[Any], index: ZoneIndex) -> Dict[str, PointResult]:
    """Point result per waypoint id, in input order."""
    results: Dict[str, PointResult] = {}
    for waypoint in waypoints:
        wp_id, coords = _as_item(waypoint)
        results[wp_id] = check_point_collision(coords, index)
    return results


def has_any_collision(waypoints: Iterable[Any], index: ZoneIndex) -> bool:
    for waypoint in waypoints:
        _, coords = _as_item(waypoint)
        if check_point_collision(coords, index).is_colliding:
            return True
    return False


def summarize_results(results: Iterable[PointResult]) -> BatchSummary:
    total = colliding = danger = warning = safe = 0
    by_type = {}
    for result in results:
        total += 1
        if not result.is_colliding:
            safe += 1
            continue
        colliding += 1
        if result.severity is Severity.DANGER:
            danger += 1
        elif result.severity is Severity.WARNING:
            warning += 1
        if result.zone_type is not None:
            by_type[result.zone_type] = by_type.get(result.zone_type, 0) + 1
    return BatchSummary(
        total=total,
        colliding_count=colliding,
        danger_count=danger,
        warning_count=warning,
        safe_count=safe,
        collisions_by_zone_type=by_type,
    )


@profile_each_line
def check_batch(waypoints: Iterable[Any], index: ZoneIndex) -> Tuple[Dict[str, PointResult], BatchSummary]:
    """Per-id results plus their summary in one pass.

    The summary counts every input item, even when two items share an id
    and the later one replaces the earlier in the result map.
    """
    resolved = []
    for waypoint in waypoints:
        wp_id, coords = _as_item(waypoint)
        resolved.append((wp_id, check_point_collision(coords, index)))
    return dict(resolved), summarize_results(r for _, r in resolved)


def get_collision_summary(waypoints: List[Any], index: ZoneIndex) -> BatchSummary:
    return check_batch(waypoints, index)[1]
