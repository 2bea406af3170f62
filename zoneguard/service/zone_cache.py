"""Explicit cache for zone collections fetched by an external loader.

The loader puts a collection under a key (for example a prefecture code or a
layer id); the cache hands out the normalized zones and a spatial index built
from them until the TTL runs out or the caller invalidates the key. Nothing
here fetches data.
"""
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Hashable, List, Optional

from zoneguard.config import DEFAULT_SETTINGS, EngineSettings
from zoneguard.core.spatial_index import ZoneIndex
from zoneguard.model.zone_feature import ZoneFeature
from zoneguard.service.load_zones import load_zone_features

logger = logging.getLogger(__name__)


@dataclass
class _CacheEntry:
    zones: List[ZoneFeature]
    stored_at: float
    index: Optional[ZoneIndex] = None


class ZoneCache:

    def __init__(self, ttl_seconds: Optional[float] = None,
                 clock: Callable[[], float] = time.monotonic,
                 settings: EngineSettings = DEFAULT_SETTINGS):
        self.ttl_seconds = settings.zone_cache_ttl_seconds if ttl_seconds is None else float(ttl_seconds)
        self.settings = settings
        self._clock = clock
        self._entries: Dict[Hashable, _CacheEntry] = {}

    def put(self, key: Hashable, collection: Any) -> List[ZoneFeature]:
        """Store (and normalize) a collection, replacing any previous one."""
        zones = load_zone_features(collection, self.settings)
        self._entries[key] = _CacheEntry(zones=zones, stored_at=self._clock())
        logger.debug("cached %d zones under %r", len(zones), key)
        return zones

    def _live(self, key: Hashable) -> Optional[_CacheEntry]:
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.stored_at >= self.ttl_seconds:
            logger.debug("zone cache entry %r expired", key)
            self._entries.pop(key, None)
            return None
        return entry

    def is_fresh(self, key: Hashable) -> bool:
        return self._live(key) is not None

    def get(self, key: Hashable) -> Optional[List[ZoneFeature]]:
        entry = self._live(key)
        return None if entry is None else entry.zones

    def get_index(self, key: Hashable) -> Optional[ZoneIndex]:
        """Spatial index for the cached zones, built on first use."""
        entry = self._live(key)
        if entry is None:
            return None
        if entry.index is None:
            entry.index = ZoneIndex.build(entry.zones)
        return entry.index

    def invalidate(self, key: Optional[Hashable] = None) -> None:
        """Drop one key, or everything when key is None."""
        if key is None:
            self._entries.clear()
        else:
            self._entries.pop(key, None)

    def __contains__(self, key: Hashable) -> bool:
        return self.is_fresh(key)

    def __len__(self) -> int:
        """Number of keys that are still fresh."""
        return sum(1 for key in list(self._entries) if self._live(key) is not None)
