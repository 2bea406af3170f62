def square_ring(min_x, min_y, max_x, max_y):
    return [[min_x, min_y], [max_x, min_y], [max_x, max_y], [min_x, max_y], [min_x, min_y]]


def square_feature(min_x, min_y, max_x, max_y, zone_type="AIRPORT", name=None, type_key="zoneType"):
    props = {"name": name or f"{zone_type} zone"}
    if zone_type is not None:
        props[type_key] = zone_type
    return {
        "type": "Feature",
        "geometry": {"type": "Polygon", "coordinates": [square_ring(min_x, min_y, max_x, max_y)]},
        "properties": props,
    }


def collection(*features):
    return {"type": "FeatureCollection", "features": list(features)}


def unit_airport():
    """One AIRPORT square over lng 0..1, lat 0..1."""
    return collection(square_feature(0, 0, 1, 1, "AIRPORT", "Test Airport"))
