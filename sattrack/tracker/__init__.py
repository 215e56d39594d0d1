"""
Tracker module for SatTrack.

Polls the backend on a fixed interval and keeps what a live map view
needs: the latest samples, the place name under the satellite, a
position log, and whether the view is centered on the satellite.
"""

from sattrack.tracker.client import BackendClient
from sattrack.tracker.poller import SatelliteTracker, LOADING_LOCATION
from sattrack.tracker.samples import PositionSample, parse_positions

__all__ = [
    'BackendClient',
    'SatelliteTracker',
    'LOADING_LOCATION',
    'PositionSample',
    'parse_positions',
]
