"""
External integration services.

Thin clients for the two third-party APIs the backend proxies:
- N2YO (satellite positions)
- OpenCage (reverse geocoding)
"""

from sattrack.services.n2yo import N2YOClient
from sattrack.services.opencage import (
    OpenCageClient,
    GeocodeResult,
    UNKNOWN_LOCATION,
    pick_location,
)

__all__ = [
    'N2YOClient',
    'OpenCageClient',
    'GeocodeResult',
    'UNKNOWN_LOCATION',
    'pick_location',
]
