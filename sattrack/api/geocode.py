"""
Reverse geocoding API endpoint.

Provides:
- GET /api/reverse-geocode/<lat>/<lng>
    {"location": "<place name>", "raw": {...}} or
    {"location": "Unknown/Ocean"} when nothing meaningful is found.
"""

import logging

from flask import Blueprint, current_app, jsonify

from sattrack.errors import ConfigurationError, UpstreamError

logger = logging.getLogger(__name__)

geocode_bp = Blueprint('geocode', __name__, url_prefix='/api/reverse-geocode')


@geocode_bp.route('/<lat>/<lng>', methods=['GET'])
def reverse_geocode(lat: str, lng: str):
    """Best single place name under a point."""
    client = current_app.config['OPENCAGE_CLIENT']

    try:
        result = client.reverse(lat, lng)
    except ConfigurationError as e:
        logger.error(f'Reverse geocode rejected: {e}')
        return jsonify({'error': str(e)}), 500
    except UpstreamError as e:
        logger.error(f'Reverse geocode error: {e}')
        return jsonify({'error': 'Failed to fetch location'}), 500

    return jsonify(result.to_dict())
