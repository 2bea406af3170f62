import math
from typing import Any, List, Optional, Sequence, Tuple

Position = Tuple[float, float]


def to_position(value: Any) -> Optional[Position]:
    """[lng, lat] (extra ordinates such as altitude are ignored) or None."""
    if isinstance(value, (str, bytes)):
        return None
    try:
        if len(value) < 2:
            return None
        lng, lat = float(value[0]), float(value[1])
    except (TypeError, ValueError, KeyError, IndexError):
        return None
    if not (math.isfinite(lng) and math.isfinite(lat)):
        return None
    return (lng, lat)


def to_positions(values: Sequence[Any]) -> Optional[List[Position]]:
    """All positions, or None as soon as one of them is malformed."""
    if values is None or isinstance(values, (str, bytes)):
        return None
    out = []
    try:
        for v in values:
            p = to_position(v)
            if p is None:
                return None
            out.append(p)
    except TypeError:
        return None
    return out
