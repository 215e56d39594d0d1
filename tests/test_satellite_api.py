"""Tests for the satellite position proxy endpoint."""

import json
from unittest.mock import patch

import requests

from conftest import N2YO_BODY, make_response

URL = '/api/satellite/25544/41.702/-76.014/0/10'


def test_returns_upstream_body(client, n2yo_client):
    with patch.object(n2yo_client.session, 'get', return_value=make_response(payload=N2YO_BODY)) as mock_get:
        response = client.get(URL)

    assert response.status_code == 200
    data = response.get_json()
    assert len(data['positions']) >= 1
    for sample in data['positions']:
        assert isinstance(sample['satlatitude'], float)
        assert isinstance(sample['satlongitude'], float)
        assert isinstance(sample['sataltitude'], float)

    args, kwargs = mock_get.call_args
    assert args[0] == 'https://api.n2yo.com/rest/v1/satellite/positions/25544/41.702/-76.014/0/10/'
    assert kwargs['params'] == {'apiKey': 'n2yo-test-key'}
    assert kwargs['timeout'] == 8


def test_second_request_within_window_is_cached(client, n2yo_client, clock):
    upstream = make_response(content=b'{"positions": [], "info": {"satid": 25544}}')
    with patch.object(n2yo_client.session, 'get', return_value=upstream) as mock_get:
        first = client.get(URL)
        clock.advance(29)
        second = client.get(URL)

    assert mock_get.call_count == 1
    assert first.data == second.data == b'{"positions": [], "info": {"satid": 25544}}'


def test_request_after_window_refetches(client, n2yo_client, clock, cache):
    with patch.object(n2yo_client.session, 'get', return_value=make_response(payload=N2YO_BODY)) as mock_get:
        client.get(URL)
        first_fetch = cache.get('25544:41.702:-76.014:0:10').fetched_at
        clock.advance(30)
        client.get(URL)

    assert mock_get.call_count == 2
    assert cache.get('25544:41.702:-76.014:0:10').fetched_at == first_fetch + 30


def test_different_parameters_use_different_entries(client, n2yo_client):
    with patch.object(n2yo_client.session, 'get', return_value=make_response(payload=N2YO_BODY)) as mock_get:
        client.get(URL)
        client.get('/api/satellite/25544/41.702/-76.014/0/20')

    assert mock_get.call_count == 2


def test_missing_api_key(client, n2yo_client):
    n2yo_client.api_key = None

    with patch.object(n2yo_client.session, 'get') as mock_get:
        response = client.get(URL)

    assert response.status_code == 500
    assert 'N2YO_API_KEY' in response.get_json()['error']
    mock_get.assert_not_called()


def test_missing_api_key_even_with_cached_entry(client, n2yo_client):
    with patch.object(n2yo_client.session, 'get', return_value=make_response(payload=N2YO_BODY)):
        client.get(URL)

    n2yo_client.api_key = None
    response = client.get(URL)

    assert response.status_code == 500
    assert 'N2YO_API_KEY' in response.get_json()['error']


def test_upstream_timeout_is_generic_500(client, n2yo_client, cache):
    with patch.object(n2yo_client.session, 'get', side_effect=requests.exceptions.Timeout('read timed out')):
        response = client.get(URL)

    assert response.status_code == 500
    assert response.get_json() == {'error': 'Failed to fetch satellite data'}
    assert len(cache) == 0


def test_upstream_http_error_is_generic_500(client, n2yo_client):
    upstream = make_response(status_code=503, content=b'upstream secret detail')
    with patch.object(n2yo_client.session, 'get', return_value=upstream):
        response = client.get(URL)

    assert response.status_code == 500
    assert response.get_json() == {'error': 'Failed to fetch satellite data'}
    assert b'secret' not in response.data


def test_upstream_connection_error(client, n2yo_client):
    with patch.object(n2yo_client.session, 'get', side_effect=requests.exceptions.ConnectionError('refused')):
        response = client.get(URL)

    assert response.status_code == 500
    assert response.get_json()['error'] == 'Failed to fetch satellite data'


def test_non_json_body_is_upstream_error(client, n2yo_client):
    with patch.object(n2yo_client.session, 'get', return_value=make_response(content=b'<html>oops</html>')):
        response = client.get(URL)

    assert response.status_code == 500
    assert response.get_json()['error'] == 'Failed to fetch satellite data'


def test_malformed_numbers_forwarded_as_is(client, n2yo_client):
    with patch.object(n2yo_client.session, 'get', return_value=make_response(payload={'error': 'Invalid'})) as mock_get:
        response = client.get('/api/satellite/abc/north/west/up/10')

    assert response.status_code == 200
    assert mock_get.call_args[0][0].endswith('/satellite/positions/abc/north/west/up/10/')
    assert json.loads(response.data) == {'error': 'Invalid'}
