"""
Walking route providers used for first/last-mile connectors.

Every provider exposes ``walking_route(origin, destination)`` returning a
``WalkingRoute`` or None when the provider has no route between the points,
and raising ``WalkingRouteError`` when the call itself fails.
"""

import time
from typing import Optional

import openrouteservice
from openrouteservice import exceptions as ors_exceptions
import polyline
import requests

from ..exceptions import InvalidCoordinatesError, WalkingRouteError
from ..logger import logger
from ..models.route_segments import Point, WalkingRoute

MAPBOX_DIRECTIONS_URL = "https://api.mapbox.com/directions/v5/mapbox/walking/{lon1},{lat1};{lon2},{lat2}"


class OrsWalkingService:
    """OpenRouteService foot-walking directions"""

    def __init__(self, api_key: str, timeout: float = 10, client: Optional[openrouteservice.Client] = None):
        self.client = client or openrouteservice.Client(key=api_key, timeout=timeout)

    def walking_route(self, origin: Point, destination: Point) -> Optional[WalkingRoute]:
        start = time.time()
        try:
            geojson = self.client.directions(
                [origin.as_list(), destination.as_list()],
                profile='foot-walking',
                format='geojson',
            )
        except (ors_exceptions.ApiError,
                ors_exceptions.HTTPError,
                ors_exceptions.Timeout,
                requests.RequestException) as e:
            logger.log_api_call('ors.foot-walking', (time.time() - start) * 1000, False)
            raise WalkingRouteError(f"ORS request failed: {e}") from e
        logger.log_api_call('ors.foot-walking', (time.time() - start) * 1000, True)

        features = (geojson or {}).get('features') or []
        if not features:
            return None
        feature = features[0]
        summary = (feature.get('properties') or {}).get('summary') or {}
        coordinates = (feature.get('geometry') or {}).get('coordinates') or []
        try:
            geometry = tuple(Point.from_coords(c) for c in coordinates)
        except InvalidCoordinatesError as e:
            raise WalkingRouteError(f"ORS returned invalid geometry: {e}") from e
        return WalkingRoute(
            distance=float(summary.get('distance', 0.0)),
            duration=float(summary.get('duration', 0.0)),
            geometry=geometry,
        )


class MapboxWalkingService:
    """Mapbox Directions API, walking profile"""

    def __init__(self, access_token: str, timeout: float = 8, session: Optional[requests.Session] = None):
        self.access_token = access_token
        self.timeout = timeout
        self.session = session or requests.Session()

    def walking_route(self, origin: Point, destination: Point) -> Optional[WalkingRoute]:
        url = MAPBOX_DIRECTIONS_URL.format(lon1=origin.lon, lat1=origin.lat,
                                           lon2=destination.lon, lat2=destination.lat)
        start = time.time()
        try:
            resp = self.session.get(url, params={
                'geometries': 'polyline6',
                'overview': 'full',
                'access_token': self.access_token,
            }, timeout=self.timeout)
            resp.raise_for_status()
            data = resp.json()
        except (requests.RequestException, ValueError) as e:
            logger.log_api_call('mapbox.walking', (time.time() - start) * 1000, False)
            raise WalkingRouteError(f"Mapbox request failed: {e}") from e
        logger.log_api_call('mapbox.walking', (time.time() - start) * 1000, True)

        routes = data.get('routes')
        if not routes:
            return None
        route = routes[0]
        geom = route.get('geometry')
        if not geom:
            return None
        # decode returns (lat, lon)
        coords = polyline.decode(geom, precision=6)
        return WalkingRoute(
            distance=float(route.get('distance', 0.0)),
            duration=float(route.get('duration', 0.0)),
            geometry=tuple(Point(lon, lat) for lat, lon in coords),
        )


def make_walking_service(walking_config: dict):
    """Build the configured provider, or None when it has no credentials"""
    provider = walking_config.get('provider', 'ors')
    timeout = walking_config.get('timeout', 10)
    if provider == 'mapbox':
        token = walking_config.get('mapbox_token')
        return MapboxWalkingService(token, timeout=timeout) if token else None
    if provider == 'ors':
        key = walking_config.get('ors_api_key')
        return OrsWalkingService(key, timeout=timeout) if key else None
    logger.warning(f"Unknown walking provider: {provider}")
    return None
