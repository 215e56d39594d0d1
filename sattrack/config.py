"""
Configuration management for SatTrack.

Loads settings from environment variables with sensible defaults.
All configuration is centralized here to avoid magic strings scattered
throughout the codebase.
"""

import os
from dataclasses import dataclass
from typing import Optional, Tuple

from dotenv import load_dotenv

load_dotenv()


def _parse_observer(value: str) -> Optional[Tuple[float, float, float]]:
    """Parse 'lat,lng[,alt]' string into tuple, or None if empty/invalid."""
    if not value:
        return None
    try:
        parts = [float(p.strip()) for p in value.split(',')]
    except (ValueError, AttributeError):
        return None
    if len(parts) == 2:
        return (parts[0], parts[1], 0.0)
    if len(parts) == 3:
        return (parts[0], parts[1], parts[2])
    return None


@dataclass(frozen=True)
class N2YOConfig:
    """N2YO satellite tracking API configuration."""
    api_key: Optional[str] = os.getenv('N2YO_API_KEY') or None
    base_url: str = 'https://api.n2yo.com/rest/v1'
    timeout: float = float(os.getenv('UPSTREAM_TIMEOUT_SECONDS', '8'))

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)


@dataclass(frozen=True)
class OpenCageConfig:
    """OpenCage reverse geocoding API configuration."""
    api_key: Optional[str] = os.getenv('OPENCAGE_API_KEY') or None
    base_url: str = 'https://api.opencagedata.com/geocode/v1'
    timeout: float = float(os.getenv('UPSTREAM_TIMEOUT_SECONDS', '8'))

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)


@dataclass(frozen=True)
class CacheConfig:
    """Position response cache settings."""
    ttl_seconds: int = int(os.getenv('CACHE_TTL_SECONDS', '30'))
    max_entries: int = int(os.getenv('CACHE_MAX_ENTRIES', '500'))


@dataclass(frozen=True)
class ServerConfig:
    """HTTP server settings."""
    port: int = int(os.getenv('PORT', '5000'))
    cors_origin: str = os.getenv('CORS_ORIGIN', 'http://localhost:5173')


@dataclass(frozen=True)
class DatabaseConfig:
    """Position log database. In-memory SQLite unless overridden."""
    url: str = os.getenv('DATABASE_URL', 'sqlite://')

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith('sqlite')

    @property
    def is_memory(self) -> bool:
        return self.url in ('sqlite://', 'sqlite:///:memory:')


@dataclass(frozen=True)
class TrackerConfig:
    """Polling tracker settings."""
    backend_url: str = os.getenv('TRACKER_BACKEND_URL', 'http://localhost:5000')
    satellite_id: int = int(os.getenv('TRACKER_SATELLITE_ID', '25544'))  # ISS
    seconds: int = int(os.getenv('TRACKER_SECONDS', '10'))
    poll_interval: float = float(os.getenv('TRACKER_POLL_INTERVAL', '5'))

    # Map is "centered" on the satellite below this distance (degrees)
    center_threshold_deg: float = 0.01
    geocode_workers: int = 2


@dataclass(frozen=True)
class AppConfig:
    """Main application configuration."""
    n2yo: N2YOConfig
    opencage: OpenCageConfig
    cache: CacheConfig
    server: ServerConfig
    database: DatabaseConfig
    tracker: TrackerConfig

    # Observer (lat, lng, alt_m) the tracker asks positions for
    observer: Tuple[float, float, float]

    debug: bool


DEFAULT_OBSERVER = (41.702, -76.014, 0.0)


def load_config() -> AppConfig:
    """Load and validate all configuration."""
    return AppConfig(
        n2yo=N2YOConfig(),
        opencage=OpenCageConfig(),
        cache=CacheConfig(),
        server=ServerConfig(),
        database=DatabaseConfig(),
        tracker=TrackerConfig(),
        observer=_parse_observer(os.getenv('TRACKER_OBSERVER', '')) or DEFAULT_OBSERVER,
        debug=os.getenv('FLASK_DEBUG', '0') == '1',
    )


# Singleton instance
config = load_config()
