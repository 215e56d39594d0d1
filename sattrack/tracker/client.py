"""
HTTP client for the SatTrack backend.

The tracker talks to the backend the same way the browser frontend
does: through the two proxy endpoints, never to N2YO/OpenCage directly.
"""

import logging
from typing import Optional

import requests

from sattrack.config import config

logger = logging.getLogger(__name__)


class BackendClient:
    """Calls the position and reverse-geocode proxy endpoints."""

    def __init__(self, base_url: Optional[str] = None, timeout: float = 10):
        self.base_url = (base_url or config.tracker.backend_url).rstrip('/')
        self.timeout = timeout
        self.session = requests.Session()

    def get_positions(self, sat_id, lat, lng, alt, seconds) -> dict:
        """
        Fetch the position proxy.

        Raises:
            requests.RequestException on network errors or non-2xx
            ValueError if the body is not JSON
        """
        url = f'{self.base_url}/api/satellite/{sat_id}/{lat}/{lng}/{alt}/{seconds}'
        logger.debug(f'Polling {url}')

        response = self.session.get(url, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def reverse_geocode(self, lat, lng) -> dict:
        """Fetch the reverse-geocode proxy. Same errors as get_positions()."""
        url = f'{self.base_url}/api/reverse-geocode/{lat}/{lng}'
        logger.debug(f'Geocoding via {url}')

        response = self.session.get(url, timeout=self.timeout)
        response.raise_for_status()
        return response.json()
