"""Spherical distance helpers and line operations in lon/lat space.

Lengths are great-circle kilometres. Offsets are applied in coordinate
space after converting kilometres to degrees of arc.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

from metro_lines.layout.constants import EARTH_RADIUS_KM, OFFSET_MITRE_LIMIT
from metro_lines.parser.model import Coord


def haversine_km(a: Coord, b: Coord) -> float:
    """Great-circle distance in kilometres between two (lon, lat) pairs."""
    lon1, lat1 = a
    lon2, lat2 = b
    p1 = math.radians(lat1)
    p2 = math.radians(lat2)
    dp = math.radians(lat2 - lat1)
    dl = math.radians(lon2 - lon1)
    h = math.sin(dp / 2.0) ** 2 + math.cos(p1) * math.cos(p2) * math.sin(dl / 2.0) ** 2
    return 2.0 * EARTH_RADIUS_KM * math.atan2(math.sqrt(h), math.sqrt(1.0 - h))


def bearing(a: Coord, b: Coord) -> float:
    """Initial bearing in degrees from a to b, clockwise from north."""
    lon1, lat1 = map(math.radians, a)
    lon2, lat2 = map(math.radians, b)
    y = math.sin(lon2 - lon1) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(
        lon2 - lon1
    )
    return math.degrees(math.atan2(y, x))


def destination(origin: Coord, distance_km: float, bearing_deg: float) -> Coord:
    """Point reached travelling distance_km from origin along bearing_deg."""
    lon1, lat1 = map(math.radians, origin)
    theta = math.radians(bearing_deg)
    delta = distance_km / EARTH_RADIUS_KM
    lat2 = math.asin(
        math.sin(lat1) * math.cos(delta)
        + math.cos(lat1) * math.sin(delta) * math.cos(theta)
    )
    lon2 = lon1 + math.atan2(
        math.sin(theta) * math.sin(delta) * math.cos(lat1),
        math.cos(delta) - math.sin(lat1) * math.sin(lat2),
    )
    return (math.degrees(lon2), math.degrees(lat2))


def line_length(coords: Sequence[Coord]) -> float:
    """Total great-circle length of a polyline in kilometres."""
    return sum(haversine_km(a, b) for a, b in zip(coords, coords[1:]))


def _along_segment(a: Coord, b: Coord, distance_km: float) -> Coord:
    if distance_km <= 0:
        return a
    return destination(a, distance_km, bearing(a, b))


def slice_along(coords: Sequence[Coord], start: float, stop: float) -> list[Coord]:
    """Return the part of a polyline between two distances along it.

    Both cut points are interpolated on the great circle of the segment
    they fall in; vertices strictly between them are kept.
    """
    sliced: list[Coord] = []
    travelled = 0.0
    for a, b in zip(coords, coords[1:]):
        seg = haversine_km(a, b)
        if not sliced and travelled + seg > start:
            sliced.append(_along_segment(a, b, start - travelled))
        if sliced:
            if travelled + seg >= stop:
                sliced.append(_along_segment(a, b, stop - travelled))
                return sliced
            sliced.append(b)
        travelled += seg
    if len(sliced) < 2:
        return list(coords[-2:])
    return sliced


def km_to_degrees(distance_km: float) -> float:
    """Convert a surface distance to degrees of arc."""
    return math.degrees(distance_km / EARTH_RADIUS_KM)


def _offset_segment(a: Coord, b: Coord, d: float) -> tuple[Coord, Coord]:
    (x1, y1), (x2, y2) = a, b
    length = math.hypot(x2 - x1, y2 - y1)
    ox = d * (y2 - y1) / length
    oy = d * (x1 - x2) / length
    return (x1 + ox, y1 + oy), (x2 + ox, y2 + oy)


def _line_intersection(
    s1: tuple[Coord, Coord], s2: tuple[Coord, Coord]
) -> Coord | None:
    (x1, y1), (x2, y2) = s1
    (x3, y3), (x4, y4) = s2
    dx1, dy1 = x2 - x1, y2 - y1
    dx2, dy2 = x4 - x3, y4 - y3
    denom = dx1 * dy2 - dy1 * dx2
    if abs(denom) <= 1e-12 * math.hypot(dx1, dy1) * math.hypot(dx2, dy2):
        return None
    t = ((x3 - x1) * dy2 - (y3 - y1) * dx2) / denom
    return (x1 + t * dx1, y1 + t * dy1)


def offset_line(coords: Sequence[Coord], distance_km: float) -> list[Coord]:
    """Offset a polyline sideways, positive to the right of travel.

    Every segment is shifted perpendicular to itself and neighbouring
    shifted segments are joined at the intersection of their lines, so
    the result has one vertex per input vertex, collinear ones included.
    Corners sharper than the mitre limit are bevelled to the midpoint of
    the two shifted segment ends. Repeated points are dropped first;
    input that cannot be offset is returned unchanged.
    """
    points = [tuple(p) for p in coords]
    points = [p for i, p in enumerate(points) if i == 0 or p != points[i - 1]]
    if distance_km == 0 or len(points) < 2:
        return list(coords)
    d = km_to_degrees(distance_km)
    segments = [_offset_segment(a, b, d) for a, b in zip(points, points[1:])]

    shifted: list[Coord] = [segments[0][0]]
    for vertex, prev, nxt in zip(points[1:], segments, segments[1:]):
        joint = _line_intersection(prev, nxt)
        if joint is None:
            joint = nxt[0]
        elif math.dist(joint, vertex) > OFFSET_MITRE_LIMIT * abs(d):
            joint = (
                (prev[1][0] + nxt[0][0]) / 2.0,
                (prev[1][1] + nxt[0][1]) / 2.0,
            )
        shifted.append(joint)
    shifted.append(segments[-1][1])
    return shifted
