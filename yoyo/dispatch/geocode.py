# yoyo/dispatch/geocode.py
"""Stand-in geocoder and route preview for the intake map.

No provider is called. Known demo addresses resolve to fixed points; anything
else is hashed into a small box north-east of central Tel Aviv so it still
lands on the map.
"""
from __future__ import annotations

import math
from typing import List, Optional, Tuple
from urllib.parse import quote

from pydantic import BaseModel

LatLng = Tuple[float, float]

MAP_CENTER: LatLng = (32.0853, 34.7818)
MAP_ZOOM = 13
FOCUS_ZOOM = 15
EARTH_RADIUS_M = 6371000

# Checked in order; first substring hit wins.
KNOWN_ADDRESSES: List[Tuple[str, LatLng]] = [
    ("אלנבי 1", (32.065, 34.768)),
    ("רוטשילד 10", (32.063, 34.770)),
    ("דיזנגוף 100", (32.078, 34.775)),
    ("אבן גבירול 50", (32.079, 34.781)),
    ("הרצל 15", (32.060, 34.767)),
    ("קינג ג'ורג' 30", (32.074, 34.773)),
    ("יהודה הלוי 40", (32.062, 34.773)),
    ("בן יהודה 200", (32.086, 34.774)),
    ("המסגר 58", (32.059, 34.781)),
    ("אחד העם 1", (32.062, 34.767)),
]

_HASH_ORIGIN: LatLng = (32.07, 34.77)
_HASH_SCALE = 20000


def _to_int32(value: int) -> int:
    value &= 0xFFFFFFFF
    return value - 0x100000000 if value & 0x80000000 else value


def _trunc_mod(value: int, divisor: int) -> int:
    # remainder keeps the sign of the dividend
    r = abs(value) % divisor
    return -r if value < 0 else r


def address_hash(text: str) -> int:
    """Rolling hash ``h = c + ((h << 5) - h)`` over UTF-16 code units.

    The shift wraps to a signed 32-bit integer; the subtraction and addition
    do not, matching the hash browsers compute for the same string.
    """
    h = 0
    data = text.encode("utf-16-le")
    for i in range(0, len(data), 2):
        code = data[i] | (data[i + 1] << 8)
        h = code + (_to_int32(_to_int32(h) << 5) - h)
    return h


def geocode(address: Optional[str]) -> Optional[LatLng]:
    if not address or not address.strip():
        return None

    lowered = address.lower()
    for needle, coords in KNOWN_ADDRESSES:
        if needle in lowered:
            return coords

    h = address_hash(lowered)
    lat = _HASH_ORIGIN[0] + _trunc_mod(h, 1000) / _HASH_SCALE
    lng = _HASH_ORIGIN[1] + _trunc_mod(h, 2000) / _HASH_SCALE
    return (lat, lng)


def distance_km(a: LatLng, b: LatLng) -> float:
    """Great-circle distance, same sphere the map widget measures on."""
    rad = math.pi / 180
    lat1 = a[0] * rad
    lat2 = b[0] * rad
    sin_dlat = math.sin((b[0] - a[0]) * rad / 2)
    sin_dlng = math.sin((b[1] - a[1]) * rad / 2)
    h = sin_dlat * sin_dlat + math.cos(lat1) * math.cos(lat2) * sin_dlng * sin_dlng
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_M * c / 1000


class RoutePreview(BaseModel):
    pickup: Optional[LatLng] = None
    dropoff: Optional[LatLng] = None
    line: Optional[List[LatLng]] = None
    distance_km: Optional[float] = None
    fit_bounds: bool = False
    center: Optional[LatLng] = None
    zoom: Optional[int] = None


def route_preview(pickup_address: Optional[str], dropoff_address: Optional[str]) -> RoutePreview:
    pickup = geocode(pickup_address)
    dropoff = geocode(dropoff_address)

    if pickup and dropoff:
        return RoutePreview(
            pickup=pickup,
            dropoff=dropoff,
            line=[pickup, dropoff],
            distance_km=distance_km(pickup, dropoff),
            fit_bounds=True,
        )
    if pickup or dropoff:
        return RoutePreview(pickup=pickup, dropoff=dropoff, center=pickup or dropoff, zoom=FOCUS_ZOOM)
    return RoutePreview(center=MAP_CENTER, zoom=MAP_ZOOM)


def waze_url(address: str) -> str:
    return "https://www.waze.com/ul?q=" + quote(address, safe="-_.!~*'()")
