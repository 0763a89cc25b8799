"""Shared fixtures-by-hand for the itinerary tests: metric offsets around Manila and fake walking services."""

import math

from snaproute.exceptions import WalkingRouteError
from snaproute.models.route_segments import LineFeature, Point, StopFeature, TransitNetwork, WalkingRoute
from snaproute.utils.geo_utils import distance_km

BASE_LON = 121.0
BASE_LAT = 14.6
M_PER_DEG = 6371000 * math.pi / 180


def pt(east_m: float, north_m: float) -> Point:
    """Point offset from the base position by metres east / north"""
    return Point(
        BASE_LON + east_m / (M_PER_DEG * math.cos(math.radians(BASE_LAT))),
        BASE_LAT + north_m / M_PER_DEG,
    )


class FakeWalkingService:
    """Straight-line walking at 1.3 m/s, with optional detour factor and failures"""

    def __init__(self, detour: float = 1.0, fail: bool = False, no_route: bool = False,
                 error: Exception = None):
        self.detour = detour
        self.fail = fail
        self.no_route = no_route
        self.error = error
        self.calls = []

    def walking_route(self, origin, destination):
        self.calls.append((origin, destination))
        if self.error is not None:
            raise self.error
        if self.fail:
            raise WalkingRouteError("service unavailable")
        if self.no_route:
            return None
        meters = distance_km(origin, destination) * 1000 * self.detour
        return WalkingRoute(distance=meters, duration=meters / 1.3, geometry=(origin, destination))


ORIGIN = pt(0, 0)
DESTINATION = pt(0, 5000)

MRT_LINE = LineFeature('MRT', (pt(100, -500), pt(100, 5500)), name='MRT-3',
                       stop_names=('Alpha', 'Bravo', 'Charlie'))
MRT_STOPS = (
    StopFeature('MRT-Stop', pt(100, 10), 'Alpha'),
    StopFeature('MRT-Stop', pt(100, 2500), 'Bravo'),
    StopFeature('MRT-Stop', pt(100, 4900), 'Charlie'),
)
JEEP_LINE = LineFeature('Jeep', (pt(20, -100), pt(20, 5100)), name='Northbound Jeep')


def corridor_network(with_jeep: bool = True) -> TransitNetwork:
    lines = (MRT_LINE, JEEP_LINE) if with_jeep else (MRT_LINE,)
    return TransitNetwork(lines, MRT_STOPS)


def driving_route(duration: float = 1800, points=None) -> dict:
    points = points or (ORIGIN, pt(50, 2500), DESTINATION)
    return {
        'summary': {'durationSeconds': duration},
        'legs': [{'geometry': [p.as_list() for p in points]}],
    }
