# shapecodec/core/geometry.py
"""
Point value type and coordinate accessors shared by the codec and services.

Points are always (lng, lat) here.  The wire format carries latitude first,
that ordering stays inside core/encoded.py.
"""
from __future__ import annotations

from typing import Any, Iterable, NamedTuple, Tuple

from shapecodec.core.contracts import BBox4


class PointLL(NamedTuple):
    lng: float
    lat: float


def lnglat(p: Any) -> Tuple[float, float]:
    """
    Read (lng, lat) from a point.

    Accepts anything with `lng`/`lat` attributes (PointLL, pydantic models)
    or any sequence indexable as [lng, lat].
    """
    try:
        return float(p.lng), float(p.lat)
    except AttributeError:
        return float(p[0]), float(p[1])


def bbox_from_points(points: Iterable[Any]) -> BBox4:
    """Compute bounding box from (lng, lat) points."""
    lngs = []
    lats = []
    for p in points:
        lng, lat = lnglat(p)
        lngs.append(lng)
        lats.append(lat)
    if not lngs:
        return BBox4(minLng=0, minLat=0, maxLng=0, maxLat=0)
    return BBox4(minLng=min(lngs), minLat=min(lats), maxLng=max(lngs), maxLat=max(lats))
