import math
from typing import Any, Dict, Optional, Tuple

from ..exceptions import InvalidCoordinatesError, InvalidRouteError
from ..logger import logger
from ..models.route_segments import DRIVING, DrivingRoute, Itinerary, Point, Segment
from ..utils.geo_utils import dedupe_consecutive, polyline_length_m


def _first(data: Dict[str, Any], *keys):
    for key in keys:
        if key in data:
            return data[key]
    return None


def parse_route_geometry(data) -> Tuple[Point, ...]:
    """Extract the leg geometry of a driving route as Points. Raises InvalidRouteError."""
    if isinstance(data, DrivingRoute):
        return data.geometry
    if not isinstance(data, dict):
        raise InvalidRouteError("Driving route must be an object")

    legs = _first(data, 'legs', 'Legs')
    if not isinstance(legs, (list, tuple)) or not legs or not isinstance(legs[0], dict):
        raise InvalidRouteError("Driving route has no legs")
    geometry = _first(legs[0], 'geometry', 'Geometry')
    if isinstance(geometry, dict):
        geometry = _first(geometry, 'coordinates', 'LineString')
    if not isinstance(geometry, (list, tuple)) or len(geometry) < 2:
        raise InvalidRouteError("Driving route geometry needs at least 2 points")
    try:
        return tuple(Point.from_coords(c) for c in geometry)
    except InvalidCoordinatesError as e:
        raise InvalidRouteError(f"Driving route geometry is invalid: {e}") from e


def parse_driving_route(data) -> DrivingRoute:
    """Parse ``{summary: {durationSeconds}, legs: [{geometry: [[lon, lat], ...]}]}``.

    The AWS Location shape (``Summary.DurationSeconds``,
    ``Legs[0].Geometry.LineString``) is accepted too. Raises InvalidRouteError.
    """
    if isinstance(data, DrivingRoute):
        return data
    points = parse_route_geometry(data)

    summary = _first(data, 'summary', 'Summary')
    duration = _first(summary, 'durationSeconds', 'DurationSeconds') if isinstance(summary, dict) else None
    if (not isinstance(duration, (int, float)) or isinstance(duration, bool)
            or not math.isfinite(duration) or duration < 0):
        raise InvalidRouteError("Driving route summary has no duration")
    return DrivingRoute(duration=float(duration), geometry=points)


def build_direct_itinerary(driving_route) -> Optional[Itinerary]:
    """Wrap the driving route as a single Driving segment, or None if it is unusable"""
    try:
        route = parse_driving_route(driving_route)
    except InvalidRouteError as e:
        logger.error(f"build_direct_itinerary: {e}")
        return None

    segment = Segment(
        mode=DRIVING,
        label='Direct Route',
        distance=polyline_length_m(route.geometry),
        duration=route.duration,
        fare=0,
        geometry=route.geometry,
    )
    combined = dedupe_consecutive(route.geometry)
    return Itinerary(
        segments=(segment,),
        label=f"Direct Route (Est. {route.duration / 60:.0f} min)",
        primary_mode=DRIVING,
        geometry=combined if len(combined) >= 2 else None,
    )
