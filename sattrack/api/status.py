"""
Status API endpoint.

Provides:
- GET /api/status - cache statistics and upstream configuration
"""

import logging
from datetime import datetime, timezone

from flask import Blueprint, current_app, jsonify

logger = logging.getLogger(__name__)

status_bp = Blueprint('status', __name__, url_prefix='/api/status')


@status_bp.route('', methods=['GET'])
def get_status():
    """
    Get service health and cache information.

    Reports whether each upstream credential is present, never the
    value itself.
    """
    n2yo = current_app.config['N2YO_CLIENT']
    opencage = current_app.config['OPENCAGE_CLIENT']
    cache = current_app.config['POSITION_CACHE']

    configured = n2yo.is_configured and opencage.is_configured

    return jsonify({
        'status': 'healthy' if configured else 'degraded',
        'cache': cache.stats,
        'upstreams': {
            'n2yo_configured': n2yo.is_configured,
            'opencage_configured': opencage.is_configured,
        },
        'timestamp': datetime.now(timezone.utc).isoformat(),
    })
