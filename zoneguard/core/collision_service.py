"""Collision service: one zone registry, one index, all three checks.

Typical use:

    service = CollisionService(feature_collection)
    service.check_point([139.76, 35.68])
    service.check_path([[139.70, 35.60], [139.80, 35.70]])
    service.check_area([[[...], [...], [...], [...]]])

reload() swaps in a new registry and rebuilds the index wholesale.
"""
import logging
from typing import Any, Dict, Hashable, Iterable, Optional, Sequence, Tuple

from zoneguard.config import DEFAULT_SETTINGS, EngineSettings
from zoneguard.core.area_collision import check_area_collision
from zoneguard.core.batch_collision import check_batch, has_any_collision
from zoneguard.core.path_collision import check_path_collision
from zoneguard.core.point_collision import check_point_collision, check_point_collision_unoptimized
from zoneguard.core.spatial_index import ZoneIndex
from zoneguard.errors import ZoneIndexNotReadyError
from zoneguard.model.collision_result import AreaResult, BatchSummary, PathResult, PointResult
from zoneguard.model.zone_types import (
    Severity,
    ZoneType,
    get_severity_color,
    get_severity_label,
    get_zone_type_label,
)
from zoneguard.service.load_zones import load_zone_features
from zoneguard.service.zone_cache import ZoneCache
from zoneguard.tool.log import configure_logging

logger = logging.getLogger(__name__)


class CollisionService:

    def __init__(self, zones: Any = None, settings: Optional[EngineSettings] = None):
        self.settings = settings or DEFAULT_SETTINGS
        self._index: Optional[ZoneIndex] = None
        if zones is not None:
            self.reload(zones)

    @classmethod
    def from_env(cls, zones: Any = None, environ: Optional[dict] = None) -> "CollisionService":
        """Settings from ZONEGUARD_* variables; also sets the log level."""
        settings = EngineSettings.from_env(environ)
        configure_logging(settings.log_level)
        return cls(zones, settings)

    @classmethod
    def from_cache(cls, cache: ZoneCache, key: Hashable,
                   settings: Optional[EngineSettings] = None) -> "CollisionService":
        """Service over a cached collection; the key must still be fresh."""
        index = cache.get_index(key)
        if index is None:
            raise ZoneIndexNotReadyError(f"no fresh zone data cached under {key!r}")
        service = cls(settings=settings or cache.settings)
        service._index = index
        return service

    def reload(self, zones: Any) -> ZoneIndex:
        if isinstance(zones, ZoneIndex):
            self._index = zones
        else:
            self._index = ZoneIndex.build(load_zone_features(zones, self.settings))
        return self._index

    @property
    def index(self) -> ZoneIndex:
        if self._index is None:
            raise ZoneIndexNotReadyError("CollisionService has no zones loaded")
        return self._index

    @property
    def is_ready(self) -> bool:
        return self._index is not None

    def check_point(self, coords) -> PointResult:
        return check_point_collision(coords, self.index)

    def check_point_unoptimized(self, coords) -> PointResult:
        return check_point_collision_unoptimized(coords, self.index.features)

    def check_path(self, path_coords: Sequence) -> PathResult:
        return check_path_collision(path_coords, self.index)

    def check_area(self, rings: Sequence) -> AreaResult:
        return check_area_collision(rings, self.index, self.settings)

    def check_batch(self, waypoints: Iterable[Any]) -> Tuple[Dict[str, PointResult], BatchSummary]:
        runner = check_batch.profiled if self.settings.profile else check_batch
        return runner(waypoints, self.index)

    def has_any_collision(self, waypoints: Iterable[Any]) -> bool:
        return has_any_collision(waypoints, self.index)

    def get_summary(self, waypoints: Iterable[Any]) -> BatchSummary:
        return self.check_batch(waypoints)[1]

    @staticmethod
    def severity_color(severity: Severity) -> str:
        return get_severity_color(severity)

    @staticmethod
    def severity_label(severity: Severity) -> str:
        return get_severity_label(severity)

    @staticmethod
    def zone_type_label(zone_type: ZoneType) -> str:
        return get_zone_type_label(zone_type)
