import math
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

from ..exceptions import InvalidCoordinatesError, InvalidFeatureError

# Canonical mode tags
MRT = 'MRT'
LRT1 = 'LRT1'
LRT2 = 'LRT2'
BUS = 'Bus'
P2P_BUS = 'P2P-Bus'
JEEP = 'Jeep'
WALK = 'Walk'
DRIVING = 'Driving'

LINE_MODES = (MRT, LRT1, LRT2, BUS, P2P_BUS, JEEP)
RAIL_MODES = frozenset({MRT, LRT1, LRT2})
ONE_WAY_MODES = frozenset({BUS, JEEP})
STOP_SUFFIX = '-Stop'


def _is_number(value) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


@dataclass(frozen=True)
class Point:
    """A WGS84 position in decimal degrees"""
    lon: float
    lat: float

    def __post_init__(self):
        if not _is_number(self.lon) or not _is_number(self.lat):
            raise InvalidCoordinatesError(f"Non-numeric coordinates: ({self.lon!r}, {self.lat!r})")
        if not (math.isfinite(self.lon) and math.isfinite(self.lat)):
            raise InvalidCoordinatesError(f"Non-finite coordinates: ({self.lon}, {self.lat})")
        if not (-180 <= self.lon <= 180 and -90 <= self.lat <= 90):
            raise InvalidCoordinatesError(f"Coordinates out of bounds: ({self.lon}, {self.lat})")
        object.__setattr__(self, 'lon', float(self.lon))
        object.__setattr__(self, 'lat', float(self.lat))

    @classmethod
    def from_coords(cls, coords) -> 'Point':
        """Build a Point from a GeoJSON-style [lon, lat] pair"""
        try:
            lon, lat = coords[0], coords[1]
        except (TypeError, IndexError, KeyError):
            raise InvalidCoordinatesError(f"Expected [lon, lat] pair, got {coords!r}")
        return cls(lon, lat)

    def as_list(self) -> List[float]:
        return [self.lon, self.lat]


def _to_polyline(coordinates: Iterable) -> Tuple[Point, ...]:
    points = []
    for coord in coordinates:
        points.append(coord if isinstance(coord, Point) else Point.from_coords(coord))
    return tuple(points)


@dataclass(frozen=True)
class LineFeature:
    """A transit line: mode tag, polyline and optional authored stop order"""
    mode: str
    coordinates: Tuple[Point, ...]
    name: Optional[str] = None
    stop_names: Tuple[str, ...] = ()

    def __post_init__(self):
        if self.mode not in LINE_MODES:
            raise InvalidFeatureError(f"Unknown line mode: {self.mode!r}")
        try:
            coordinates = _to_polyline(self.coordinates)
        except InvalidCoordinatesError as e:
            raise InvalidFeatureError(f"Line {self.name or self.mode}: {e}")
        except TypeError:
            raise InvalidFeatureError(f"Line {self.name or self.mode}: coordinates are not iterable")
        if len(coordinates) < 2:
            raise InvalidFeatureError(f"Line {self.name or self.mode} needs at least 2 points")
        object.__setattr__(self, 'coordinates', coordinates)
        object.__setattr__(self, 'stop_names', tuple(str(s) for s in (self.stop_names or ())))

    @property
    def label(self) -> str:
        return self.name or self.mode

    @property
    def is_point_to_point(self) -> bool:
        return self.mode == P2P_BUS


@dataclass(frozen=True)
class StopFeature:
    """A standalone stop point, e.g. an MRT station"""
    stop_type: str
    point: Point
    name: str

    def __post_init__(self):
        if not isinstance(self.stop_type, str) or not self.stop_type.endswith(STOP_SUFFIX):
            raise InvalidFeatureError(f"Invalid stop type: {self.stop_type!r}")
        if not isinstance(self.point, Point):
            try:
                object.__setattr__(self, 'point', Point.from_coords(self.point))
            except InvalidCoordinatesError as e:
                raise InvalidFeatureError(f"Stop {self.name}: {e}")
        if not self.name:
            raise InvalidFeatureError(f"Stop of type {self.stop_type} has no name")

    @property
    def mode(self) -> str:
        return self.stop_type[:-len(STOP_SUFFIX)]


@dataclass(frozen=True)
class TransitNetwork:
    """Read-only collection of transit lines and stops"""
    lines: Tuple[LineFeature, ...] = ()
    stops: Tuple[StopFeature, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, 'lines', tuple(self.lines))
        object.__setattr__(self, 'stops', tuple(self.stops))

    @classmethod
    def from_features(cls, features: Iterable) -> 'TransitNetwork':
        lines, stops = [], []
        for feature in features:
            if isinstance(feature, LineFeature):
                lines.append(feature)
            elif isinstance(feature, StopFeature):
                stops.append(feature)
            else:
                raise InvalidFeatureError(f"Not a transit feature: {feature!r}")
        return cls(tuple(lines), tuple(stops))

    def lines_of(self, modes: Iterable[str]) -> Tuple[LineFeature, ...]:
        wanted = set(modes)
        return tuple(line for line in self.lines if line.mode in wanted)

    def __len__(self):
        return len(self.lines) + len(self.stops)


@dataclass(frozen=True)
class Segment:
    """One leg of an itinerary"""
    mode: str
    label: str
    distance: float  # meters
    duration: float  # seconds
    fare: float
    geometry: Tuple[Point, ...] = ()
    stop_sequence: Optional[Tuple[str, ...]] = None

    def to_dict(self) -> Dict[str, Any]:
        out = {
            'mode': self.mode,
            'label': self.label,
            'distance': self.distance,
            'duration': self.duration,
            'fare': self.fare,
            'geometry': {
                'type': 'LineString',
                'coordinates': [p.as_list() for p in self.geometry],
            },
        }
        if self.stop_sequence is not None:
            out['stop_sequence'] = list(self.stop_sequence)
        return out


@dataclass(frozen=True)
class Itinerary:
    """Complete itinerary; totals are always derived from its segments"""
    segments: Tuple[Segment, ...]
    label: str
    primary_mode: str
    geometry: Optional[Tuple[Point, ...]] = field(default=None)

    @property
    def total_duration(self) -> float:
        return sum(s.duration for s in self.segments)

    @property
    def total_distance(self) -> float:
        return sum(s.distance for s in self.segments)

    @property
    def total_fare(self) -> float:
        return sum(s.fare for s in self.segments)

    def to_dict(self) -> Dict[str, Any]:
        return {
            'label': self.label,
            'primary_mode': self.primary_mode,
            'segments': [s.to_dict() for s in self.segments],
            'summary_duration': self.total_duration,
            'summary_distance': self.total_distance,
            'total_fare': self.total_fare,
            'geometry': None if self.geometry is None else {
                'type': 'LineString',
                'coordinates': [p.as_list() for p in self.geometry],
            },
        }


@dataclass(frozen=True)
class WalkingRoute:
    """Response of the external walking route service"""
    distance: float  # meters
    duration: float  # seconds
    geometry: Tuple[Point, ...]


@dataclass(frozen=True)
class DrivingRoute:
    """The car route the itineraries are derived from"""
    duration: float  # seconds
    geometry: Tuple[Point, ...]

    @property
    def origin(self) -> Point:
        return self.geometry[0]

    @property
    def destination(self) -> Point:
        return self.geometry[-1]
