"""
Satellite position API endpoint.

Provides:
- GET /api/satellite/<sat_id>/<lat>/<lng>/<alt>/<seconds>
    Predicted positions of a satellite over the next <seconds> seconds as
    seen from observer (<lat>, <lng>, <alt>). The N2YO body is passed
    through unchanged and cached for a short window per parameter set.
"""

import logging

from flask import Blueprint, Response, current_app, jsonify

from sattrack.cache import make_cache_key
from sattrack.errors import ConfigurationError, UpstreamError

logger = logging.getLogger(__name__)

satellite_bp = Blueprint('satellite', __name__, url_prefix='/api/satellite')


@satellite_bp.route('/<sat_id>/<lat>/<lng>/<alt>/<seconds>', methods=['GET'])
def get_positions(sat_id: str, lat: str, lng: str, alt: str, seconds: str):
    """
    Get predicted positions for a satellite.

    Path segments are forwarded as received; N2YO validates them.
    Repeat requests within the cache TTL return the stored body
    byte-for-byte without calling N2YO.
    """
    client = current_app.config['N2YO_CLIENT']
    cache = current_app.config['POSITION_CACHE']

    try:
        client.require_credentials()
        key = make_cache_key(sat_id, lat, lng, alt, seconds)
        body = cache.get_or_fetch(
            key,
            lambda: client.fetch_positions(sat_id, lat, lng, alt, seconds),
        )
    except ConfigurationError as e:
        logger.error(f'Position request rejected: {e}')
        return jsonify({'error': str(e)}), 500
    except UpstreamError as e:
        logger.error(f'backend error: {e}')
        return jsonify({'error': 'Failed to fetch satellite data'}), 500

    return Response(body, mimetype='application/json')
