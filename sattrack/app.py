"""
SatTrack Flask Application.

Main entry point for the backend. Initializes:
- Upstream API clients (N2YO, OpenCage)
- Position response cache
- API routes
- Health probe

Usage:
    python -m sattrack.app

Or with gunicorn:
    gunicorn 'sattrack.app:create_app()'
"""

import logging
from typing import Optional

from flask import Flask, Response, request
from flask_cors import CORS

from sattrack.config import config
from sattrack.api import satellite_bp, geocode_bp, status_bp
from sattrack.cache import ResponseCache
from sattrack.services import N2YOClient, OpenCageClient

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if config.debug else logging.INFO,
    format='%(asctime)s [%(levelname)s] %(name)s: %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S',
)
logger = logging.getLogger(__name__)


def create_app(
    n2yo_client: Optional[N2YOClient] = None,
    opencage_client: Optional[OpenCageClient] = None,
    cache: Optional[ResponseCache] = None,
) -> Flask:
    """
    Application factory for Flask.

    Args:
        n2yo_client: Satellite position client (created from config if None)
        opencage_client: Reverse geocoding client (created from config if None)
        cache: Position response cache (created from config if None)

    Returns:
        Configured Flask application instance.
    """
    app = Flask(__name__)

    # Only the configured frontend origin may call the API
    CORS(app, resources={r'/api/*': {'origins': config.server.cors_origin}})

    app.config['N2YO_CLIENT'] = n2yo_client or N2YOClient()
    app.config['OPENCAGE_CLIENT'] = opencage_client or OpenCageClient()
    app.config['POSITION_CACHE'] = cache or ResponseCache()

    # Register API blueprints
    app.register_blueprint(satellite_bp)
    app.register_blueprint(geocode_bp)
    app.register_blueprint(status_bp)

    @app.before_request
    def log_request():
        logger.info(f'Request: {request.method} {request.full_path.rstrip("?")}')

    @app.route('/test')
    def health():
        """Plain-text health probe."""
        return Response('OK', mimetype='text/plain')

    # -------------------------------------------------------------------------
    # Error handlers
    # -------------------------------------------------------------------------

    @app.errorhandler(404)
    def not_found(e):
        return {'error': 'Not found'}, 404

    @app.errorhandler(500)
    def server_error(e):
        logger.error(f'Server error: {e}')
        return {'error': 'Internal server error'}, 500

    return app


def run_development_server():
    """Run the development server."""
    app = create_app()
    port = config.server.port

    logger.info(f'Backend listening at http://localhost:{port}')
    logger.info(f'CORS origin: {config.server.cors_origin}')

    app.run(
        host='0.0.0.0',
        port=port,
        debug=config.debug,
        threaded=True,
        use_reloader=False,
    )


if __name__ == '__main__':
    run_development_server()
