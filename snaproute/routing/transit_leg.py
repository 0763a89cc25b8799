"""
Single-transit-leg itinerary builder.

An attempt for one mode group is a short pipeline:

    board -> ride -> alight -> final walk -> assemble

Each step returns a new immutable value or an ``Abandoned`` marker carrying
the reason; the first ``Abandoned`` ends the attempt. Nothing here raises for
an unreachable trip.
"""

from dataclasses import dataclass
from typing import Optional, Tuple, Union

from ..exceptions import WalkingRouteError
from ..logger import logger
from ..models.route_segments import (
    BUS, JEEP, LRT1, LRT2, MRT, P2P_BUS, WALK,
    Itinerary, LineFeature, Point, Segment, StopFeature, TransitNetwork,
)
from ..utils.duration_utils import estimate_duration
from ..utils.fare_utils import calculate_fare
from ..utils.geo_utils import dedupe_consecutive
from .line_selector import LineCandidate, select_line
from .nearest_stop import find_nearest_stop

# ------------------------------------------------------
#  Walking tolerances
# ------------------------------------------------------
MAX_WALK_TO_TRANSIT_KM = 1.5
FIRST_WALK_TOLERANCE = 1.1     # service distance may exceed the straight-line limit by 10%
FINAL_WALK_TOLERANCE = 1.5
ALIGHTING_STOP_RADIUS_KM = MAX_WALK_TO_TRANSIT_KM / 2
AREA_NEAR_DESTINATION = "area near destination"


@dataclass(frozen=True)
class ModeGroup:
    """Line types evaluated together as one itinerary attempt.

    ``requires_boarding_stop`` is a capability flag: jeepneys are treated as
    boardable anywhere along their route because the network has no jeepney
    stops, not because the algorithm infers it.
    """
    label: str
    line_types: Tuple[str, ...]
    stop_types: Tuple[str, ...] = ()
    requires_boarding_stop: bool = True


DEFAULT_MODE_GROUPS = (
    ModeGroup('MRT', (MRT,), ('MRT-Stop',)),
    ModeGroup('LRT1', (LRT1,), ('LRT1-Stop',)),
    ModeGroup('LRT2', (LRT2,), ('LRT2-Stop',)),
    ModeGroup('Bus', (BUS, P2P_BUS), ('Bus-Stop', 'P2P-Bus-Stop')),
    ModeGroup('Jeep', (JEEP,), (), requires_boarding_stop=False),
)


@dataclass(frozen=True)
class Abandoned:
    reason: str


@dataclass(frozen=True)
class Boarding:
    position: Point
    stop: Optional[StopFeature]
    segments: Tuple[Segment, ...]


@dataclass(frozen=True)
class Alighting:
    position: Point
    name: Optional[str]
    label: str


@dataclass(frozen=True)
class LegResult:
    """Outcome of one mode-group attempt"""
    group: ModeGroup
    itinerary: Optional[Itinerary] = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.itinerary is not None


def walk_connector(walking_service, start: Point, end: Point, label: str,
                   max_km: float) -> Union[Segment, Abandoned]:
    """Ask the routing service for a walking leg and check it against ``max_km``"""
    try:
        route = walking_service.walking_route(start, end)
    except WalkingRouteError as e:
        return Abandoned(f"walking service failed for '{label}': {e}")
    if route is None:
        return Abandoned(f"no walking route for '{label}'")
    if len(route.geometry) < 2:
        return Abandoned(f"empty walking route for '{label}'")
    if route.distance > max_km * 1000:
        return Abandoned(f"'{label}' is {route.distance / 1000:.2f} km, limit {max_km:.2f} km")
    return Segment(mode=WALK, label=label, distance=route.distance,
                   duration=route.duration, fare=0, geometry=tuple(route.geometry))


def board(origin: Point, network: TransitNetwork, group: ModeGroup,
          walking_service) -> Union[Boarding, Abandoned]:
    if not group.requires_boarding_stop:
        return Boarding(origin, None, ())
    nearest = find_nearest_stop(origin, network.stops, group.stop_types)
    if not nearest.found or nearest.distance > MAX_WALK_TO_TRANSIT_KM:
        return Abandoned(f"no {'/'.join(group.stop_types)} within {MAX_WALK_TO_TRANSIT_KM} km of origin")
    stop = nearest.stop
    walk = walk_connector(walking_service, origin, stop.point, f"Walk to {stop.name}",
                          MAX_WALK_TO_TRANSIT_KM * FIRST_WALK_TOLERANCE)
    if isinstance(walk, Abandoned):
        return walk
    return Boarding(stop.point, stop, (walk,))


def ride(position: Point, destination: Point, network: TransitNetwork,
         group: ModeGroup) -> Union[LineCandidate, Abandoned]:
    candidate = select_line(position, destination, network.lines_of(group.line_types))
    if candidate is None:
        return Abandoned(f"no {'/'.join(group.line_types)} line connects start and end areas")
    return candidate


def _find_named_stop(network: TransitNetwork, name: str, stop_types) -> Optional[StopFeature]:
    for stop in network.stops:
        if stop.name == name and stop.stop_type in stop_types:
            return stop
    return None


def alight(candidate: LineCandidate, network: TransitNetwork, group: ModeGroup) -> Alighting:
    line = candidate.line
    if line.is_point_to_point:
        terminal = line.stop_names[-1] if line.stop_names else None
        stop = _find_named_stop(network, terminal, group.stop_types) if terminal else None
        position = stop.point if stop else line.coordinates[-1]
        return Alighting(position, terminal, terminal or f"{line.label} terminus")

    if group.stop_types:
        nearest = find_nearest_stop(candidate.exit, network.stops, group.stop_types)
        if nearest.found and nearest.distance <= ALIGHTING_STOP_RADIUS_KM:
            return Alighting(nearest.stop.point, nearest.stop.name, nearest.stop.name)
    return Alighting(candidate.exit, None, AREA_NEAR_DESTINATION)


def stop_sequence(line: LineFeature, boarding: Optional[str],
                  alighting: Optional[str]) -> Optional[Tuple[str, ...]]:
    """Authored stop names from boarding to alighting inclusive, in travel order"""
    names = line.stop_names
    if not names or boarding not in names or alighting not in names:
        return None
    i, j = names.index(boarding), names.index(alighting)
    if i <= j:
        return names[i:j + 1]
    return tuple(reversed(names[j:i + 1]))


def transit_segment(candidate: LineCandidate, boarding: Boarding, alighting: Alighting) -> Segment:
    line = candidate.line
    boarding_name = boarding.stop.name if boarding.stop else None
    return Segment(
        mode=line.mode,
        label=f"Take {line.label} from {boarding_name or 'origin'} to {alighting.label}",
        distance=candidate.distance,
        duration=estimate_duration(line.mode, candidate.distance),
        fare=calculate_fare(line.mode, candidate.distance),
        geometry=candidate.geometry,
        stop_sequence=stop_sequence(line, boarding_name, alighting.name),
    )


def combine_geometry(segments) -> Optional[Tuple[Point, ...]]:
    """Concatenate segment geometries; None if fewer than 2 distinct points remain"""
    combined = dedupe_consecutive(p for seg in segments for p in seg.geometry)
    if len(combined) < 2:
        return None
    return combined


def assemble(segments: Tuple[Segment, ...], group: ModeGroup) -> Itinerary:
    geometry = combine_geometry(segments)
    if geometry is None:
        logger.warning(f"Could not build combined geometry for {group.label} option; "
                       f"itinerary will lack map display")
    total_duration = sum(s.duration for s in segments)
    total_fare = sum(s.fare for s in segments)
    return Itinerary(
        segments=segments,
        label=f"Route via {group.label} (Est. {total_duration / 60:.0f} min, ₱{total_fare:.2f})",
        primary_mode=group.label,
        geometry=geometry,
    )


def build_transit_itinerary(origin: Point, destination: Point, network: TransitNetwork,
                            group: ModeGroup, walking_service) -> LegResult:
    """Try to build the itinerary for one mode group"""
    boarding = board(origin, network, group, walking_service)
    if isinstance(boarding, Abandoned):
        return LegResult(group, reason=boarding.reason)

    candidate = ride(boarding.position, destination, network, group)
    if isinstance(candidate, Abandoned):
        return LegResult(group, reason=candidate.reason)
    logger.debug(f"{group.label}: selected {candidate.line.label} ({candidate.distance:.0f} m on line)")

    alighting = alight(candidate, network, group)
    transit = transit_segment(candidate, boarding, alighting)

    final_walk = walk_connector(walking_service, alighting.position, destination, "Walk to destination",
                                MAX_WALK_TO_TRANSIT_KM * FINAL_WALK_TOLERANCE)
    if isinstance(final_walk, Abandoned):
        return LegResult(group, reason=final_walk.reason)

    segments = boarding.segments + (transit, final_walk)
    return LegResult(group, itinerary=assemble(segments, group))
