"""
N2YO satellite tracking API client.

Wraps the positions endpoint:
    /satellite/positions/{id}/{observer_lat}/{observer_lng}/{observer_alt}/{seconds}/

The response body looks like:
    {
        "info": {"satname": "SPACE STATION", "satid": 25544, ...},
        "positions": [
            {"satlatitude": 41.3, "satlongitude": -75.2, "sataltitude": 418.9,
             "azimuth": 123.4, "elevation": 12.1, "ra": ..., "dec": ...,
             "timestamp": 1700000000, "eclipsed": false},
            ...
        ]
    }

One position per second of the requested window, oldest first. The body
is returned raw; parameters are forwarded untouched and N2YO does the
validating.
"""

import logging
from typing import Optional

import requests

from sattrack.config import config
from sattrack.errors import ConfigurationError, UpstreamError

logger = logging.getLogger(__name__)


class N2YOClient:
    """
    Client for the N2YO REST API.

    Handles:
    - Credential check (fails before any network traffic)
    - GET requests to the positions endpoint with a fixed timeout
    - Collapsing every transport/HTTP failure into UpstreamError
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.api_key = api_key or config.n2yo.api_key
        self.base_url = base_url or config.n2yo.base_url
        self.timeout = timeout or config.n2yo.timeout
        self.session = requests.Session()

        if not self.api_key:
            logger.warning('N2YO API key not configured - position lookups disabled')

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def require_credentials(self) -> None:
        """Raise ConfigurationError if no API key is set."""
        if not self.api_key:
            raise ConfigurationError('N2YO_API_KEY', 'in .env')

    def positions_url(self, sat_id, lat, lng, alt, seconds) -> str:
        return f'{self.base_url}/satellite/positions/{sat_id}/{lat}/{lng}/{alt}/{seconds}/'

    def fetch_positions(self, sat_id, lat, lng, alt, seconds) -> bytes:
        """
        Fetch predicted positions for a satellite.

        Returns:
            Raw JSON response body (bytes), exactly as N2YO sent it.

        Raises:
            ConfigurationError if N2YO_API_KEY is missing
            UpstreamError on timeout, network error, non-2xx or a body
            that is not JSON
        """
        self.require_credentials()

        url = self.positions_url(sat_id, lat, lng, alt, seconds)
        logger.info(f'Fetching positions from N2YO for satellite {sat_id} ({seconds}s)')

        try:
            response = self.session.get(
                url,
                params={'apiKey': self.api_key},
                timeout=self.timeout,
            )
            response.raise_for_status()
            # Parse only to reject non-JSON bodies; the raw bytes are returned
            response.json()

        except requests.exceptions.Timeout as e:
            logger.error('N2YO API timeout')
            raise UpstreamError('N2YO', e) from e
        except requests.exceptions.HTTPError as e:
            logger.error(f'N2YO API error: {e.response.status_code}')
            raise UpstreamError('N2YO', e) from e
        except requests.exceptions.RequestException as e:
            logger.error(f'N2YO request failed: {e}')
            raise UpstreamError('N2YO', e) from e
        except ValueError as e:
            logger.error(f'N2YO returned a non-JSON body: {e}')
            raise UpstreamError('N2YO', e) from e

        return response.content
