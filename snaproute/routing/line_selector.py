"""
Line candidate selection: snap the current position and the destination onto
each candidate transit line and keep the shortest leg that actually moves the
traveller towards the destination.
"""

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from ..logger import logger
from ..models.route_segments import ONE_WAY_MODES, RAIL_MODES, LineFeature, Point
from ..utils.geo_utils import (
    ProjectedLine,
    angle_difference,
    bearing,
    distance_km,
    polyline_length_m,
)

# ------------------------------------------------------
#  Snapping thresholds
# ------------------------------------------------------
MAX_DISTANCE_FROM_STOP_TO_LINE_KM = 0.1   # how close a point must be to count as "on" a line
P2P_ENTRY_RADIUS_KM = 2 * MAX_DISTANCE_FROM_STOP_TO_LINE_KM
MIN_LEG_KM = 0.01                         # entry and exit must be > 10 m apart
MIN_PROGRESS_RATIO = 0.1                  # exit must be at least 10% closer to destination
BEARING_SAMPLE_M = 10.0
MAX_BEARING_DIFF_DEG = 80.0
DEGENERATE_SAMPLE_M = 0.1


@dataclass(frozen=True)
class LineCandidate:
    """A line that passed every test, with where to board and alight it"""
    line: LineFeature
    entry: Point
    exit: Point
    entry_along: float  # meters along the line
    exit_along: float
    distance: float     # on-line meters between entry and exit
    geometry: Tuple[Point, ...]


def _local_bearing(projected: ProjectedLine, entry: Point, along: float) -> Optional[float]:
    """Direction of travel along the line at ``along``"""
    ahead = projected.point_at(along + BEARING_SAMPLE_M)
    if distance_km(entry, ahead) * 1000 > DEGENERATE_SAMPLE_M:
        return bearing(entry, ahead)
    behind = projected.point_at(along - BEARING_SAMPLE_M)
    if distance_km(behind, entry) * 1000 > DEGENERATE_SAMPLE_M:
        return bearing(behind, entry)
    return None


def evaluate_line(line: LineFeature, position: Point, destination: Point) -> Optional[LineCandidate]:
    """Run the snapping tests for one line; None if it is rejected"""
    projected = ProjectedLine(line.coordinates)

    if line.is_point_to_point:
        entry, exit_ = line.coordinates[0], line.coordinates[-1]
        if distance_km(position, entry) > P2P_ENTRY_RADIUS_KM:
            return None
        entry_along, exit_along = 0.0, projected.length
    else:
        entry, entry_along, offset = projected.project(position)
        if offset > MAX_DISTANCE_FROM_STOP_TO_LINE_KM:
            return None
        exit_, exit_along, _ = projected.project(destination)

    if distance_km(entry, exit_) <= MIN_LEG_KM:
        return None

    # Progress test
    remaining_via_exit = distance_km(exit_, destination)
    remaining_via_entry = distance_km(entry, destination)
    if not remaining_via_exit < remaining_via_entry * (1.0 - MIN_PROGRESS_RATIO):
        logger.debug(f"Line {line.label}: failed progress check "
                     f"({remaining_via_exit:.3f} km vs {remaining_via_entry:.3f} km)")
        return None

    # Bearing test; rail and P2P run both ways
    if line.mode not in RAIL_MODES and not line.is_point_to_point:
        line_bearing = _local_bearing(projected, entry, entry_along)
        if line_bearing is None:
            return None
        if angle_difference(bearing(entry, destination), line_bearing) > MAX_BEARING_DIFF_DEG:
            logger.debug(f"Line {line.label}: heading away from destination")
            return None

    # Directionality: one-way modes cannot be ridden backwards
    if line.mode in ONE_WAY_MODES and exit_along < entry_along:
        logger.debug(f"Line {line.label}: exit lies behind entry")
        return None

    geometry = projected.slice(entry_along, exit_along)
    return LineCandidate(
        line=line,
        entry=entry,
        exit=exit_,
        entry_along=entry_along,
        exit_along=exit_along,
        distance=polyline_length_m(geometry),
        geometry=geometry,
    )


def select_line(position: Point, destination: Point, lines: Iterable[LineFeature]) -> Optional[LineCandidate]:
    """Pick the qualifying line with the shortest on-line distance.

    Ties keep the first line in iteration order. Returns None when no line
    qualifies.
    """
    best: Optional[LineCandidate] = None
    for line in lines:
        try:
            candidate = evaluate_line(line, position, destination)
        except ValueError as e:
            logger.warning(f"Skipping line {getattr(line, 'label', line)!r}: {e}")
            continue
        if candidate is None:
            continue
        if best is None or candidate.distance < best.distance:
            best = candidate
            logger.debug(f"Candidate selected (provisional): {line.label}, "
                         f"on-line distance {candidate.distance:.0f} m")
    return best
