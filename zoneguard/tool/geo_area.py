"""Planar area of lng/lat geometries in square meters.

Geometries are projected onto a Lambert azimuthal equal-area plane centered
on a reference point, then measured with shapely. Good enough for zones and
flight areas of a few tens of kilometers; it is not an ellipsoidal geodesic
area.
"""
from functools import lru_cache

import numpy as np
import shapely
from pyproj import CRS, Transformer


@lru_cache(maxsize=256)
def _laea_transformer(lon0: float, lat0: float) -> Transformer:
    target = CRS.from_proj4(
        f"+proj=laea +lat_0={lat0} +lon_0={lon0} +datum=WGS84 +units=m +no_defs"
    )
    return Transformer.from_crs("epsg:4326", target, always_xy=True)


class PlanarProjector:
    """Projects WGS84 geometries to meters around one fixed center."""

    def __init__(self, lon0: float, lat0: float):
        # rounding keeps the transformer cache small for nearby queries
        self.lon0 = round(float(lon0), 4)
        self.lat0 = round(float(lat0), 4)
        self._transformer = _laea_transformer(self.lon0, self.lat0)

    @classmethod
    def around(cls, geom) -> "PlanarProjector":
        c = geom.centroid
        return cls(c.x, c.y)

    def _project_coords(self, xy: np.ndarray) -> np.ndarray:
        x, y = self._transformer.transform(xy[:, 0], xy[:, 1])
        return np.column_stack([x, y])

    def project(self, geom):
        return shapely.transform(geom, self._project_coords)

    def area(self, geom) -> float:
        if geom.is_empty:
            return 0.0
        return float(self.project(geom).area)


def planar_area_m2(geom) -> float:
    if geom.is_empty:
        return 0.0
    return PlanarProjector.around(geom).area(geom)
