"""
API module for SatTrack.

Provides REST endpoints for:
- Satellite positions (cached N2YO proxy)
- Reverse geocoding (OpenCage proxy)
- System status
"""

from sattrack.api.satellite import satellite_bp
from sattrack.api.geocode import geocode_bp
from sattrack.api.status import status_bp

__all__ = ['satellite_bp', 'geocode_bp', 'status_bp']
