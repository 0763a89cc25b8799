import math
from typing import Iterable, Sequence, Tuple

import numpy as np
from shapely.geometry import LineString, Point as ShapelyPoint
from shapely.ops import substring

from ..models.route_segments import Point

EARTH_RADIUS_KM = 6371
EARTH_RADIUS_M = EARTH_RADIUS_KM * 1000


def haversine_distance(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Calculate haversine distance between two points in kilometers"""
    lat1_rad = math.radians(lat1)
    lon1_rad = math.radians(lon1)
    lat2_rad = math.radians(lat2)
    lon2_rad = math.radians(lon2)
    dlat = lat2_rad - lat1_rad
    dlon = lon2_rad - lon1_rad
    a = (math.sin(dlat/2)**2 +
         math.cos(lat1_rad) * math.cos(lat2_rad) * math.sin(dlon/2)**2)
    c = 2 * math.asin(math.sqrt(min(1.0, a)))
    return EARTH_RADIUS_KM * c


def vectorized_haversine(lat1, lon1, lat2, lon2):
    """Vectorized haversine distance in kilometers using numpy"""
    lat1, lon1, lat2, lon2 = map(np.radians, [lat1, lon1, lat2, lon2])
    dlat = lat2 - lat1
    dlon = lon2 - lon1
    a = np.sin(dlat/2)**2 + np.cos(lat1) * np.cos(lat2) * np.sin(dlon/2)**2
    c = 2 * np.arcsin(np.sqrt(np.clip(a, 0.0, 1.0)))
    return EARTH_RADIUS_KM * c


def distance_km(a: Point, b: Point) -> float:
    return haversine_distance(a.lat, a.lon, b.lat, b.lon)


def bearing(a: Point, b: Point) -> float:
    """Initial great-circle bearing from a to b, degrees clockwise from north in [0, 360)"""
    lat1, lat2 = math.radians(a.lat), math.radians(b.lat)
    dlon = math.radians(b.lon - a.lon)
    x = math.sin(dlon) * math.cos(lat2)
    y = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(dlon)
    return (math.degrees(math.atan2(x, y)) + 360.0) % 360.0


def angle_difference(a: float, b: float) -> float:
    """Absolute difference between two bearings, normalized to [0, 180]"""
    diff = abs(a - b) % 360.0
    return 360.0 - diff if diff > 180.0 else diff


def polyline_length_m(points: Sequence[Point]) -> float:
    """Geodesic length of a polyline in meters"""
    total = 0.0
    for i in range(len(points) - 1):
        total += distance_km(points[i], points[i + 1])
    return total * 1000


def dedupe_consecutive(points: Iterable[Point]) -> Tuple[Point, ...]:
    """Drop points equal to their predecessor"""
    cleaned = []
    for p in points:
        if not cleaned or p != cleaned[-1]:
            cleaned.append(p)
    return tuple(cleaned)


class ProjectedLine:
    """
    A polyline on a local equirectangular plane (meters) centred on the line.

    Planar projection is accurate to well under a percent at city scale, which
    is all the snapping heuristics need. Offsets reported back to callers are
    re-measured with haversine on the unprojected points.
    """

    def __init__(self, points: Sequence[Point]):
        if len(points) < 2:
            raise ValueError("A line needs at least 2 points")
        self.points = tuple(points)
        self._lat0 = float(np.mean([p.lat for p in self.points]))
        self._lon0 = float(np.mean([p.lon for p in self.points]))
        self._kx = math.radians(1.0) * EARTH_RADIUS_M * math.cos(math.radians(self._lat0))
        self._ky = math.radians(1.0) * EARTH_RADIUS_M
        self.line = LineString([self._to_xy(p) for p in self.points])

    def _to_xy(self, p: Point) -> Tuple[float, float]:
        return ((p.lon - self._lon0) * self._kx, (p.lat - self._lat0) * self._ky)

    def _to_point(self, x: float, y: float) -> Point:
        return Point(self._lon0 + x / self._kx, self._lat0 + y / self._ky)

    @property
    def length(self) -> float:
        """Planar length in meters"""
        return self.line.length

    def project(self, p: Point) -> Tuple[Point, float, float]:
        """Snap p onto the line: (snapped point, along-line meters, offset km)"""
        along = self.line.project(ShapelyPoint(self._to_xy(p)))
        snapped = self.point_at(along)
        return snapped, along, distance_km(p, snapped)

    def point_at(self, along: float) -> Point:
        along = min(max(along, 0.0), self.length)
        hit = self.line.interpolate(along)
        return self._to_point(hit.x, hit.y)

    def slice(self, start: float, end: float) -> Tuple[Point, ...]:
        """Sub-polyline between two along-line positions, in start -> end order"""
        piece = substring(self.line, start, end)
        coords = list(piece.coords)
        if len(coords) == 1:
            coords = coords * 2
        return tuple(self._to_point(x, y) for x, y in coords)
