"""
SatTrack Package.

Satellite tracking demo built with Flask, requests, SQLAlchemy, and NumPy.

Modules:
    api/         REST endpoints (satellite positions, reverse geocoding, status)
    services/    Upstream API clients (N2YO, OpenCage)
    tracker/     Polling client that keeps live map state and a position log
    models/      SQLAlchemy ORM model for the position log
    cache.py     Thread-safe TTL cache for upstream position responses
    errors.py    Configuration and upstream error types
    config.py    Centralized configuration from environment variables
"""

__version__ = '1.0.0'
