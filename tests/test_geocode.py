"""Tests for reverse geocoding."""

from unittest.mock import patch

import requests

from sattrack.services.opencage import UNKNOWN_LOCATION, GeocodeResult, is_water, pick_location

from conftest import make_response

URL = '/api/reverse-geocode/51.5/-0.12'

LONDON = {
    'formatted': 'Westminster, London SW1A 2DX, United Kingdom',
    'components': {'_type': 'road', 'city': 'London', 'country': 'United Kingdom'},
}


def test_pick_location_first_result():
    payload = {'results': [LONDON, {'formatted': 'Somewhere else', 'components': {}}]}

    result = pick_location(payload)

    assert result.location == LONDON['formatted']
    assert result.raw == LONDON


def test_pick_location_no_results():
    result = pick_location({'results': []})

    assert result.location == UNKNOWN_LOCATION
    assert result.raw is None
    assert result.to_dict() == {'location': 'Unknown/Ocean'}


def test_pick_location_ocean_type():
    ocean = {'formatted': 'Atlantic', 'components': {'_type': 'ocean'}}
    result = pick_location({'results': [ocean]})

    assert result.location == 'Unknown/Ocean'
    assert result.raw == ocean


def test_is_water_variants():
    assert is_water({'formatted': 'x', 'components': {'_type': 'water'}})
    assert is_water({'formatted': 'x', 'components': {'ocean': 'Pacific Ocean'}})
    assert is_water({'formatted': 'South Atlantic OCEAN', 'components': {}})
    assert is_water({'formatted': 'Indian ocean', 'components': {'_type': 'body_of_water'}})
    assert not is_water(LONDON)


def test_formatted_ocean_keeps_raw():
    result = {'formatted': 'North Pacific Ocean', 'components': {'_type': 'body_of_water'}}

    picked = pick_location({'results': [result]})

    assert picked.to_dict() == {'location': 'Unknown/Ocean', 'raw': result}


def test_geocode_result_to_dict():
    assert GeocodeResult('Paris').to_dict() == {'location': 'Paris'}
    assert GeocodeResult('Paris', raw={'a': 1}).to_dict() == {'location': 'Paris', 'raw': {'a': 1}}


def test_route_land(client, opencage_client):
    upstream = make_response(payload={'results': [LONDON]})
    with patch.object(opencage_client.session, 'get', return_value=upstream) as mock_get:
        response = client.get(URL)

    assert response.status_code == 200
    assert response.get_json() == {'location': LONDON['formatted'], 'raw': LONDON}

    args, kwargs = mock_get.call_args
    assert args[0] == 'https://api.opencagedata.com/geocode/v1/json'
    assert kwargs['params'] == {'q': '51.5,-0.12', 'key': 'opencage-test-key'}
    assert kwargs['timeout'] == 8


def test_route_mid_atlantic(client, opencage_client):
    upstream = make_response(payload={'results': []})
    with patch.object(opencage_client.session, 'get', return_value=upstream):
        response = client.get('/api/reverse-geocode/0/0')

    assert response.status_code == 200
    assert response.get_json() == {'location': 'Unknown/Ocean'}


def test_route_missing_api_key(client, opencage_client):
    opencage_client.api_key = None

    with patch.object(opencage_client.session, 'get') as mock_get:
        response = client.get(URL)

    assert response.status_code == 500
    assert 'OPENCAGE_API_KEY' in response.get_json()['error']
    mock_get.assert_not_called()


def test_route_upstream_failure_hides_detail(client, opencage_client):
    with patch.object(
        opencage_client.session, 'get',
        side_effect=requests.exceptions.ConnectionError('key=opencage-test-key refused'),
    ):
        response = client.get(URL)

    assert response.status_code == 500
    assert response.get_json() == {'error': 'Failed to fetch location'}


def test_route_upstream_http_error(client, opencage_client):
    with patch.object(opencage_client.session, 'get', return_value=make_response(status_code=402)):
        response = client.get(URL)

    assert response.status_code == 500
    assert response.get_json() == {'error': 'Failed to fetch location'}
