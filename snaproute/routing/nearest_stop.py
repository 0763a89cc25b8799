import math
from dataclasses import dataclass
from typing import Iterable, Optional

import numpy as np

from ..logger import logger
from ..models.route_segments import LineFeature, Point, StopFeature
from ..utils.geo_utils import vectorized_haversine


@dataclass(frozen=True)
class NearestStop:
    """Result of a nearest-stop scan; stop is None when nothing qualified"""
    stop: Optional[StopFeature]
    distance: float  # km

    @property
    def found(self) -> bool:
        return self.stop is not None


NOT_FOUND = NearestStop(None, math.inf)


def find_nearest_stop(point: Point, features: Iterable, allowed_types: Iterable[str]) -> NearestStop:
    """Return the closest stop whose type is in ``allowed_types``.

    ``features`` may be the network's stops or a mixed list of lines and
    stops; lines are ignored and anything that is not a feature is skipped
    with a warning. Malformed inputs give NOT_FOUND rather than raising.
    Equidistant stops resolve to the first one in iteration order.
    """
    if not isinstance(point, Point):
        logger.warning(f"find_nearest_stop: invalid reference point {point!r}")
        return NOT_FOUND
    if isinstance(allowed_types, str):
        allowed_types = [allowed_types]
    try:
        allowed = set(allowed_types)
        features = list(features)
    except TypeError:
        logger.warning("find_nearest_stop: features or allowed types are not iterable")
        return NOT_FOUND

    candidates = []
    for index, feature in enumerate(features):
        if isinstance(feature, StopFeature):
            if feature.stop_type in allowed:
                candidates.append(feature)
        elif not isinstance(feature, LineFeature):
            logger.warning(f"find_nearest_stop: skipping malformed feature at index {index}: {feature!r}")

    if not candidates:
        return NOT_FOUND

    lats = np.array([s.point.lat for s in candidates])
    lons = np.array([s.point.lon for s in candidates])
    distances = vectorized_haversine(point.lat, point.lon, lats, lons)
    best = int(np.argmin(distances))
    return NearestStop(candidates[best], float(distances[best]))
