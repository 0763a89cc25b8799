import json

import pytest

from snaproute.api import clean_nan_values, create_app

from .helpers import FakeWalkingService, corridor_network, driving_route


@pytest.fixture
def client():
    app = create_app(network=corridor_network(), walking_service=FakeWalkingService())
    app.config['TESTING'] = True
    return app.test_client()


def test_health(client):
    resp = client.get('/health')
    assert resp.status_code == 200
    body = resp.get_json()
    assert body['status'] == 'healthy'
    assert body['transit_features'] == 5
    assert body['walking_service'] is True


def test_itineraries(client):
    resp = client.post('/itineraries', json={'route': driving_route(1800)})
    assert resp.status_code == 200
    options = resp.get_json()['itineraries']
    assert [o['primary_mode'] for o in options] == ['MRT', 'Jeep', 'Driving']
    mrt = options[0]
    assert [s['mode'] for s in mrt['segments']] == ['Walk', 'MRT', 'Walk']
    assert mrt['segments'][1]['stop_sequence'] == ['Alpha', 'Bravo', 'Charlie']
    assert mrt['total_fare'] == 16
    assert mrt['geometry']['type'] == 'LineString'


def test_invalid_route_gives_empty_list(client):
    resp = client.post('/itineraries', json={'route': {'legs': []}})
    assert resp.status_code == 200
    assert resp.get_json() == {'itineraries': []}


@pytest.mark.parametrize("payload", [None, {}, {'origin': [121.0, 14.6]}])
def test_missing_route_is_bad_request(client, payload):
    if payload is None:
        resp = client.post('/itineraries', data='not json', content_type='text/plain')
    else:
        resp = client.post('/itineraries', json=payload)
    assert resp.status_code == 400
    assert 'error' in resp.get_json()


def test_clean_nan_values():
    assert clean_nan_values({'a': [1.0, float('nan')], 'b': {'c': float('inf')}}) == {'a': [1.0, None], 'b': {'c': None}}


def test_non_finite_duration_drops_only_the_direct_route(client):
    route = driving_route(1800)
    route['summary']['durationSeconds'] = float('nan')
    body = json.dumps({'route': route})
    resp = client.post('/itineraries', data=body, content_type='application/json')
    assert resp.status_code == 200
    options = resp.get_json()['itineraries']
    assert [o['primary_mode'] for o in options] == ['MRT', 'Jeep']
