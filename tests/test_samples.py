"""Tests for position samples and map geometry."""

import pytest

from sattrack.tracker.geometry import degree_distance, is_centered
from sattrack.tracker.samples import PositionSample, parse_positions


def test_from_n2yo():
    sample = PositionSample.from_n2yo({
        'satlatitude': 41.5, 'satlongitude': -75.25, 'sataltitude': 419.0,
        'timestamp': 1700000000, 'azimuth': 10.0, 'eclipsed': False,
    })

    assert sample.point == (41.5, -75.25)
    assert sample.altitude_km == 419.0
    assert sample.timestamp == 1700000000
    assert sample.extra == {'azimuth': 10.0, 'eclipsed': False}


@pytest.mark.parametrize('data', [
    {},
    None,
    {'satlatitude': 1.0, 'satlongitude': 2.0, 'sataltitude': 3.0},
    {'satlatitude': '1.0', 'satlongitude': 2.0, 'sataltitude': 3.0, 'timestamp': 1},
    {'satlatitude': True, 'satlongitude': 2.0, 'sataltitude': 3.0, 'timestamp': 1},
])
def test_from_n2yo_rejects_malformed(data):
    assert PositionSample.from_n2yo(data) is None


def test_parse_positions_skips_bad_entries():
    payload = {'positions': [
        {'satlatitude': 1.0, 'satlongitude': 2.0, 'sataltitude': 3.0, 'timestamp': 1},
        {'satlatitude': None},
    ]}

    samples = parse_positions(payload)

    assert len(samples) == 1
    assert parse_positions({}) == []
    assert parse_positions(None) == []


def test_describe_two_decimals():
    sample = PositionSample(41.7019, -76.0149, 418.456, 1)

    assert sample.describe() == [
        'Latitude: 41.70',
        'Longitude: -76.01',
        'Altitude: 418.46 km',
    ]


def test_degree_distance_is_euclidean():
    assert degree_distance((0.0, 0.0), (3.0, 4.0)) == pytest.approx(5.0)


def test_is_centered_threshold():
    assert is_centered((10.0, 10.0), (10.005, 10.005))
    assert not is_centered((10.0, 10.0), (10.02, 10.0))
    assert not is_centered(None, (1.0, 1.0))
    assert not is_centered((1.0, 1.0), None)
