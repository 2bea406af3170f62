"""Zone ingestion: GeoJSON-like feature collections -> ZoneFeature list.

Zone type policy, applied once here and never at query time:

* ``properties.zoneType`` is read first, then ``properties.type``.
* No type at all -> ``settings.missing_zone_type`` (DID unless configured).
* A type string that is present but not one of ZoneType -> ZoneType.UNKNOWN,
  which ranks last (priority 99) but is still treated as DANGER.
"""
import logging
from typing import Any, Iterable, List, Mapping, Optional, Union

from shapely.errors import ShapelyError
from shapely.geometry import shape

from zoneguard.config import DEFAULT_SETTINGS, EngineSettings
from zoneguard.model.zone_feature import DEFAULT_ZONE_NAME, ZoneFeature
from zoneguard.model.zone_types import ZoneType

logger = logging.getLogger(__name__)

_MEMBERS = {t.value: t for t in ZoneType}


def normalize_zone_type(value: Any, missing: ZoneType = ZoneType.DID) -> ZoneType:
    if isinstance(value, ZoneType):
        return value
    if value is None:
        return missing
    text = str(value).strip().upper()
    if not text:
        return missing
    return _MEMBERS.get(text, ZoneType.UNKNOWN)


def _raw_type(props: Mapping[str, Any]) -> Optional[str]:
    for key in ("zoneType", "type"):
        value = props.get(key)
        if value is not None and str(value).strip():
            return str(value)
    return None


def _iter_features(collection) -> Iterable[Any]:
    if collection is None:
        return []
    if isinstance(collection, Mapping):
        if collection.get("type") == "Feature":
            return [collection]
        return collection.get("features") or []
    return collection


def feature_to_zone(feature: Mapping[str, Any],
                    settings: EngineSettings = DEFAULT_SETTINGS) -> Optional[ZoneFeature]:
    """Normalize one GeoJSON feature, or return None if its geometry is unusable."""
    geom_data = feature.get("geometry")
    if not geom_data:
        logger.debug("skipping feature without geometry")
        return None
    try:
        geom = geom_data if hasattr(geom_data, "geom_type") else shape(geom_data)
    except (ShapelyError, ValueError, TypeError, KeyError, IndexError, AttributeError) as e:
        logger.warning("skipping feature with unparsable geometry: %s", e)
        return None

    props = dict(feature.get("properties") or {})
    raw = _raw_type(props)
    zone_type = normalize_zone_type(raw, settings.missing_zone_type)
    if raw is not None and zone_type is ZoneType.UNKNOWN:
        logger.info("unrecognized zone type %r mapped to UNKNOWN", raw)

    name = props.get("name")
    return ZoneFeature(
        geometry=geom,
        zone_type=zone_type,
        name=str(name) if name else DEFAULT_ZONE_NAME,
        raw_type=raw,
        properties=props,
    )


def load_zone_features(collection: Union[Mapping[str, Any], Iterable[Any], None],
                       settings: EngineSettings = DEFAULT_SETTINGS) -> List[ZoneFeature]:
    """Normalize a feature collection (or an iterable of features).

    Items that already are ZoneFeature objects are passed through unchanged.
    Non-polygon geometries are kept; the spatial index drops them.
    """
    zones = []
    for feature in _iter_features(collection):
        if isinstance(feature, ZoneFeature):
            zones.append(feature)
            continue
        if not isinstance(feature, Mapping):
            logger.warning("skipping non-feature item of type %s", type(feature).__name__)
            continue
        zone = feature_to_zone(feature, settings)
        if zone is not None:
            zones.append(zone)
    logger.debug("loaded %d zone features", len(zones))
    return zones
