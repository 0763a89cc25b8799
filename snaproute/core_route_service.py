"""
Itinerary orchestration: turn one driving route into ranked multimodal options.

One transit attempt per mode group runs on a thread pool alongside the direct
driving fallback. Attempts never affect one another; results are joined in
submission order and ranked only after every attempt has settled.
"""

import time
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional

from .config import config
from .exceptions import InvalidRouteError
from .logger import logger
from .models.route_segments import Itinerary, Point, TransitNetwork
from .routing.direct_route import build_direct_itinerary, parse_route_geometry
from .routing.transit_leg import DEFAULT_MODE_GROUPS, LegResult, ModeGroup, build_transit_itinerary


def _attempt(origin: Point, destination: Point, network: TransitNetwork,
             group: ModeGroup, walking_service) -> LegResult:
    """Run one mode-group attempt, converting unexpected errors into an abandoned result"""
    try:
        result = build_transit_itinerary(origin, destination, network, group, walking_service)
    except Exception as e:
        logger.error(f"Error generating route option for mode {group.label}: {e!r}")
        return LegResult(group, reason=f"unexpected error: {e}")
    if result.ok:
        logger.info(f"{group.label}: {result.itinerary.label}")
    else:
        logger.info(f"{group.label}: abandoned ({result.reason})")
    return result


def rank_itineraries(itineraries: Iterable[Itinerary]) -> List[Itinerary]:
    """Drop repeated labels, then sort by total duration and total fare"""
    unique: List[Itinerary] = []
    seen_labels = set()
    for itinerary in itineraries:
        if itinerary.label in seen_labels:
            logger.debug(f"Skipping duplicate route label: {itinerary.label}")
            continue
        seen_labels.add(itinerary.label)
        unique.append(itinerary)
    return sorted(unique, key=lambda it: (it.total_duration, it.total_fare))


def build_itineraries(driving_route, network: TransitNetwork, walking_service=None,
                      mode_groups: Iterable[ModeGroup] = DEFAULT_MODE_GROUPS,
                      max_workers: Optional[int] = None) -> List[Itinerary]:
    """Build ranked itineraries for the trip described by ``driving_route``.

    Args:
        driving_route: ``{summary: {durationSeconds}, legs: [{geometry}]}``; its
            first and last points are the trip's origin and destination
        network: the transit network, read-only for the whole call
        walking_service: object with ``walking_route(origin, destination)``.
            Without one only the direct driving option is returned.
        mode_groups: groups to attempt, one itinerary each at most
        max_workers: thread pool size, defaults to ``config.max_workers``
    Returns:
        Itineraries sorted by total duration then total fare; may be empty.
    """
    start = time.time()
    try:
        geometry = parse_route_geometry(driving_route)
    except InvalidRouteError as e:
        logger.error(f"build_itineraries: cannot generate routes: {e}")
        return []
    origin, destination = geometry[0], geometry[-1]
    mode_groups = tuple(mode_groups)

    options: List[Itinerary] = []
    if walking_service is None or not mode_groups:
        if walking_service is None:
            logger.warning("No walking route service available; returning the direct route only")
        direct = build_direct_itinerary(driving_route)
    else:
        workers = max(1, min(max_workers or config.max_workers, len(mode_groups) + 1))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            futures = [
                pool.submit(_attempt, origin, destination, network, group, walking_service)
                for group in mode_groups
            ]
            direct_future = pool.submit(build_direct_itinerary, driving_route)
            results = [f.result() for f in futures]
            direct = direct_future.result()
        options.extend(r.itinerary for r in results if r.ok)

    if direct is not None:
        options.append(direct)
    else:
        logger.warning("Could not generate Direct Route option.")

    ranked = rank_itineraries(options)
    logger.log_route_request((origin.lon, origin.lat), (destination.lon, destination.lat),
                             len(ranked), (time.time() - start) * 1000, bool(ranked))
    return ranked
