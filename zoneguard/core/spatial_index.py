import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple

import numpy as np
from shapely.geometry import MultiPolygon, Point, Polygon
from shapely.strtree import STRtree

from zoneguard.config import DEFAULT_SETTINGS, EngineSettings
from zoneguard.errors import ZoneIndexNotReadyError
from zoneguard.model.zone_feature import ZoneFeature
from zoneguard.service.load_zones import load_zone_features

logger = logging.getLogger(__name__)

BBox = Tuple[float, float, float, float]


@dataclass(frozen=True)
class IndexEntry:
    bbox: BBox
    feature: ZoneFeature
    # insertion position, used as the stable tie-break between equal priorities
    order: int


class ZoneIndex:
    """Read-only bounding-box index over the polygonal zones.

    Built once from a zone list and never patched; when the registry changes
    build a new one. Queries return candidates whose bbox matches, always in
    insertion order, so callers never depend on the tree's traversal order.
    """

    def __init__(self, entries: Iterable[IndexEntry] = ()):
        self.entries: Tuple[IndexEntry, ...] = tuple(entries)
        if self.entries:
            self._tree: Optional[STRtree] = STRtree([e.feature.geometry for e in self.entries])
        else:
            # empty registry: valid index, every query reports nothing
            self._tree = None

    @classmethod
    def build(cls, features: Iterable[ZoneFeature]) -> "ZoneIndex":
        entries = []
        skipped = 0
        for feature in features:
            geom = getattr(feature, "geometry", None)
            if not isinstance(geom, (Polygon, MultiPolygon)) or geom.is_empty:
                skipped += 1
                continue
            entries.append(IndexEntry(bbox=tuple(geom.bounds), feature=feature, order=len(entries)))
        if skipped:
            logger.debug("spatial index skipped %d non-polygon features", skipped)
        logger.info("spatial index built with %d zones", len(entries))
        return cls(entries)

    def __len__(self) -> int:
        return len(self.entries)

    @property
    def is_empty(self) -> bool:
        return self._tree is None

    @property
    def features(self) -> List[ZoneFeature]:
        return [e.feature for e in self.entries]

    def _candidates(self, geom) -> List[IndexEntry]:
        if self._tree is None:
            return []
        indices = self._tree.query(geom)
        return [self.entries[i] for i in np.sort(np.asarray(indices, dtype=np.intp))]

    def query_point(self, lng: float, lat: float) -> List[IndexEntry]:
        """Entries whose bbox contains the point (degenerate box query)."""
        return self._candidates(Point(lng, lat))

    def query_geometry(self, geom) -> List[IndexEntry]:
        """Entries whose bbox intersects the bbox of geom."""
        return self._candidates(geom)


def build_spatial_index(features: Iterable[ZoneFeature]) -> ZoneIndex:
    return ZoneIndex.build(features)


def as_zone_index(zones, settings: EngineSettings = DEFAULT_SETTINGS) -> ZoneIndex:
    """Accept either a built index or a plain zone collection.

    A plain collection is normalized with settings (missing zone type policy).
    """
    if zones is None:
        raise ZoneIndexNotReadyError("zone index has not been initialized")
    if isinstance(zones, ZoneIndex):
        return zones
    return ZoneIndex.build(load_zone_features(zones, settings))
