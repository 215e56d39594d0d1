"""
OpenCage reverse geocoding - coordinates to a place name.

OpenCage ranks results by relevance, so only the first one is used.
Points over open water come back either with no results at all or
with a result whose components describe a body of water; both map to
the sentinel location UNKNOWN_LOCATION.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import requests

from sattrack.config import config
from sattrack.errors import ConfigurationError, UpstreamError

logger = logging.getLogger(__name__)

UNKNOWN_LOCATION = 'Unknown/Ocean'

_WATER_TYPES = ('ocean', 'water')


@dataclass
class GeocodeResult:
    """Best place name for a point, plus the upstream result it came from."""
    location: str
    raw: Optional[dict] = None

    def to_dict(self) -> dict:
        """Convert to JSON-serializable dict. 'raw' is omitted when absent."""
        result = {'location': self.location}
        if self.raw is not None:
            result['raw'] = self.raw
        return result


def is_water(result: dict) -> bool:
    """True if an OpenCage result describes an ocean or other water body."""
    components = result.get('components') or {}
    formatted = result.get('formatted') or ''

    if components.get('_type') in _WATER_TYPES:
        return True
    if components.get('ocean'):
        return True
    return 'ocean' in formatted.lower()


def pick_location(payload: dict) -> GeocodeResult:
    """
    Reduce an OpenCage response to a single GeocodeResult.

    - No results: sentinel location, no raw payload
    - Water: sentinel location, raw result still attached
    - Otherwise: the formatted address of the first result
    """
    results = (payload or {}).get('results') or []
    if not results:
        return GeocodeResult(location=UNKNOWN_LOCATION)

    first = results[0]
    if is_water(first):
        return GeocodeResult(location=UNKNOWN_LOCATION, raw=first)

    return GeocodeResult(location=first.get('formatted') or UNKNOWN_LOCATION, raw=first)


class OpenCageClient:
    """Client for the OpenCage geocoding API."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        self.api_key = api_key or config.opencage.api_key
        self.base_url = base_url or config.opencage.base_url
        self.timeout = timeout or config.opencage.timeout
        self.session = requests.Session()

        if not self.api_key:
            logger.warning('OpenCage API key not configured - reverse geocoding disabled')

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def reverse(self, lat, lng) -> GeocodeResult:
        """
        Reverse geocode a point.

        Raises:
            ConfigurationError if OPENCAGE_API_KEY is missing
            UpstreamError on any request failure
        """
        if not self.api_key:
            raise ConfigurationError('OPENCAGE_API_KEY')

        logger.debug(f'Reverse geocoding ({lat}, {lng})')

        try:
            response = self.session.get(
                f'{self.base_url}/json',
                params={'q': f'{lat},{lng}', 'key': self.api_key},
                timeout=self.timeout,
            )
            response.raise_for_status()
            data = response.json()

        except requests.exceptions.Timeout as e:
            logger.error('OpenCage API timeout')
            raise UpstreamError('OpenCage', e) from e
        except requests.exceptions.HTTPError as e:
            logger.error(f'OpenCage API error: {e.response.status_code}')
            raise UpstreamError('OpenCage', e) from e
        except requests.exceptions.RequestException as e:
            logger.error(f'OpenCage request failed: {e}')
            raise UpstreamError('OpenCage', e) from e
        except ValueError as e:
            logger.error(f'OpenCage returned a non-JSON body: {e}')
            raise UpstreamError('OpenCage', e) from e

        return pick_location(data)
