"""Shared fixtures."""

import json

import pytest
import requests

from sattrack.app import create_app
from sattrack.cache import ResponseCache
from sattrack.services import N2YOClient, OpenCageClient


class FakeClock:
    """Manually advanced time source."""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_response(status_code=200, payload=None, content=None):
    """Build a real requests.Response with the given body."""
    response = requests.Response()
    response.status_code = status_code
    response.url = 'https://upstream.test/'
    if content is None:
        content = json.dumps(payload if payload is not None else {}).encode()
    response._content = content
    response.headers['Content-Type'] = 'application/json'
    return response


N2YO_BODY = {
    'info': {'satname': 'SPACE STATION', 'satid': 25544, 'transactionscount': 1},
    'positions': [
        {'satlatitude': 41.1, 'satlongitude': -75.9, 'sataltitude': 418.2,
         'azimuth': 210.5, 'elevation': 12.3, 'timestamp': 1700000000, 'eclipsed': False},
        {'satlatitude': 41.2, 'satlongitude': -75.8, 'sataltitude': 418.3,
         'azimuth': 210.9, 'elevation': 12.5, 'timestamp': 1700000001, 'eclipsed': False},
    ],
}


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return ResponseCache(ttl_seconds=30, max_entries=500, clock=clock)


@pytest.fixture
def n2yo_client():
    return N2YOClient(api_key='n2yo-test-key')


@pytest.fixture
def opencage_client():
    return OpenCageClient(api_key='opencage-test-key')


@pytest.fixture
def app(n2yo_client, opencage_client, cache):
    app = create_app(
        n2yo_client=n2yo_client,
        opencage_client=opencage_client,
        cache=cache,
    )
    app.config['TESTING'] = True
    return app


@pytest.fixture
def client(app):
    return app.test_client()
