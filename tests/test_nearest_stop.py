import logging
import math

from snaproute.models.route_segments import LineFeature, StopFeature
from snaproute.routing.nearest_stop import NOT_FOUND, find_nearest_stop

from .helpers import MRT_LINE, MRT_STOPS, pt


def test_finds_closest_allowed_stop():
    result = find_nearest_stop(pt(90, 2400), MRT_STOPS, ['MRT-Stop'])
    assert result.found
    assert result.stop.name == 'Bravo'
    assert result.distance * 1000 < 150


def test_equidistant_stops_keep_first_in_order():
    first = StopFeature('Bus-Stop', pt(0, 0), 'First')
    second = StopFeature('Bus-Stop', pt(0, 0), 'Second')
    assert find_nearest_stop(pt(300, 0), [first, second], ['Bus-Stop']).stop is first
    assert find_nearest_stop(pt(300, 0), [second, first], ['Bus-Stop']).stop is second


def test_allowed_types_filter():
    bus = StopFeature('Bus-Stop', pt(0, 5), 'Corner')
    stops = (bus,) + MRT_STOPS
    assert find_nearest_stop(pt(0, 0), stops, ['MRT-Stop']).stop.name == 'Alpha'
    assert find_nearest_stop(pt(0, 0), stops, 'Bus-Stop').stop is bus
    assert find_nearest_stop(pt(0, 0), stops, ['LRT1-Stop']) == NOT_FOUND


def test_lines_are_ignored_and_junk_is_skipped(caplog):
    features = [MRT_LINE, None, "not a feature", {'type': 'Feature'}, MRT_STOPS[1]]
    with caplog.at_level(logging.WARNING):
        result = find_nearest_stop(pt(0, 0), features, ['MRT-Stop'])
    assert result.stop.name == 'Bravo'
    assert sum('malformed feature' in r.getMessage() for r in caplog.records) == 3


def test_malformed_inputs_return_not_found():
    assert find_nearest_stop(None, MRT_STOPS, ['MRT-Stop']) == NOT_FOUND
    assert find_nearest_stop((121.0, 14.6), MRT_STOPS, ['MRT-Stop']) == NOT_FOUND
    assert find_nearest_stop(pt(0, 0), None, ['MRT-Stop']) == NOT_FOUND
    assert find_nearest_stop(pt(0, 0), MRT_STOPS, None) == NOT_FOUND
    assert find_nearest_stop(pt(0, 0), [], ['MRT-Stop']) == NOT_FOUND
    assert not NOT_FOUND.found
    assert math.isinf(NOT_FOUND.distance)


def test_line_feature_is_not_a_stop():
    jeep = LineFeature('Jeep', (pt(0, 0), pt(0, 100)))
    assert find_nearest_stop(pt(0, 0), [jeep], ['Jeep']) == NOT_FOUND
