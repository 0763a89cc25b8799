import math

import pytest

from snaproute.exceptions import InvalidCoordinatesError, InvalidFeatureError
from snaproute.models.route_segments import (
    Itinerary,
    LineFeature,
    Point,
    Segment,
    StopFeature,
    TransitNetwork,
)

from .helpers import MRT_LINE, MRT_STOPS, pt


@pytest.mark.parametrize("lon,lat", [
    ('121', 14.6), (121.0, None), (math.nan, 14.6), (121.0, math.inf), (181.0, 14.6), (121.0, -91.0), (True, 14.6),
])
def test_point_rejects_bad_coordinates(lon, lat):
    with pytest.raises(InvalidCoordinatesError):
        Point(lon, lat)


def test_point_from_coords():
    assert Point.from_coords([121, 14.6]) == Point(121.0, 14.6)
    assert Point.from_coords((121.0, 14.6, 12.0)).as_list() == [121.0, 14.6]
    with pytest.raises(InvalidCoordinatesError):
        Point.from_coords(None)


def test_line_feature_coerces_coordinates():
    line = LineFeature('Bus', [[121.0, 14.6], [121.0, 14.7]], stop_names=['A', 'B'])
    assert line.coordinates == (Point(121.0, 14.6), Point(121.0, 14.7))
    assert line.stop_names == ('A', 'B')
    assert line.label == 'Bus'
    assert not line.is_point_to_point
    assert LineFeature('P2P-Bus', line.coordinates).is_point_to_point


def test_line_feature_validation():
    with pytest.raises(InvalidFeatureError):
        LineFeature('Ferry', [[121.0, 14.6], [121.0, 14.7]])
    with pytest.raises(InvalidFeatureError):
        LineFeature('Bus', None)


def test_stop_feature_validation():
    assert StopFeature('LRT2-Stop', [121.0, 14.6], 'Recto').mode == 'LRT2'
    with pytest.raises(InvalidFeatureError):
        StopFeature('LRT2', [121.0, 14.6], 'Recto')


def test_network_from_features():
    network = TransitNetwork.from_features((MRT_LINE,) + MRT_STOPS)
    assert len(network) == 4
    assert network.lines_of(['MRT']) == (MRT_LINE,)
    assert network.lines_of(['Jeep']) == ()
    with pytest.raises(InvalidFeatureError):
        TransitNetwork.from_features([MRT_LINE, {'type': 'Feature'}])


def test_itinerary_serialization():
    walk = Segment('Walk', 'Walk to Alpha', 120.0, 90.0, 0, (pt(0, 0), pt(0, 120)))
    ride = Segment('MRT', 'Take MRT-3', 4000.0, 620.0, 16, (pt(0, 120), pt(0, 4120)), ('Alpha', 'Bravo'))
    itinerary = Itinerary((walk, ride), 'Route via MRT (Est. 12 min, ₱16.00)', 'MRT', (pt(0, 0), pt(0, 4120)))
    data = itinerary.to_dict()
    assert data['summary_duration'] == 710.0
    assert data['summary_distance'] == 4120.0
    assert data['total_fare'] == 16
    assert data['geometry']['type'] == 'LineString'
    assert 'stop_sequence' not in data['segments'][0]
    assert data['segments'][1]['stop_sequence'] == ['Alpha', 'Bravo']
    assert data['segments'][1]['geometry']['coordinates'][0] == pt(0, 120).as_list()
